"""CLI entry point for docmeta."""

import argparse
import sys
from typing import NoReturn

from .. import __version__
from ..core.config import Config
from ..core.logging import configure_logging
from ..metadata.catalog import load_catalog
from . import commands


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="docmeta",
        description="Inspect document metadata and normalize metadata dates",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a TOML configuration file")
    parser.add_argument("--log-level", help="Log level (default: WARNING)")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging with source locations"
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    show_parser = subparsers.add_parser("show", help="Load a metadata file and print it")
    show_parser.add_argument("file", help="YAML or JSON mapping of names to values")
    show_parser.add_argument(
        "-f",
        "--format",
        choices=["text", "xml", "names"],
        default="text",
        help="Output format (default: text)",
    )

    date_parser = subparsers.add_parser("date", help="Normalize ISO-8601 date strings")
    date_parser.add_argument("dates", nargs="+", help="Date strings to normalize")

    subparsers.add_parser("properties", help="List registered properties")

    return parser


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env_or_file(args.config)
        configure_logging(args.log_level or config.log_level, verbose=args.verbose)

        for path in config.catalog_paths:
            load_catalog(path)

        if args.command == "show":
            status = commands.handle_show(args, config)
        elif args.command == "date":
            status = commands.handle_date(args, config)
        elif args.command == "properties":
            status = commands.handle_properties(args, config)
        else:
            parser.print_help()
            status = 0

        sys.exit(status)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
