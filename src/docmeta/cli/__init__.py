"""Command-line interface for docmeta."""
