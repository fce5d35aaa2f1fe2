"""CLI command handlers."""

import argparse
from pathlib import Path

import yaml
from loguru import logger

from ..core.config import Config
from ..core.exceptions import DocMetaError
from ..metadata import Metadata, get_default_property_registry
from ..metadata.dates import DateNormalizer, load_timezone


def load_metadata_file(path: Path, config: Config) -> Metadata:
    """Load a YAML/JSON mapping of name -> value(s) into a container.

    Args:
        path: File holding a mapping; values are scalars or lists.
        config: Application configuration.

    Returns:
        Populated Metadata container.

    Raises:
        DocMetaError: If the file is not a mapping of scalars and lists.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise DocMetaError(f"{path}: expected a mapping of names to values")

    metadata = Metadata.from_config(config)
    for name, value in data.items():
        values = value if isinstance(value, list) else [value]
        for item in values:
            if isinstance(item, (dict, list)):
                raise DocMetaError(f"{path}: nested value for {name!r} is not supported")
            if item is not None:
                metadata.add(str(name), str(item))

    logger.debug(f"Loaded {metadata.size()} names from {path}")
    return metadata


def handle_show(args: argparse.Namespace, config: Config) -> int:
    """Print the metadata read from a file."""
    metadata = load_metadata_file(Path(args.file), config)

    if args.format == "xml":
        print(str(metadata), end="")
    elif args.format == "names":
        for name in metadata.names():
            print(name)
    else:
        for name, values in metadata.items():
            for value in values:
                print(f"{name}: {value}")
    return 0


def handle_date(args: argparse.Namespace, config: Config) -> int:
    """Print the normalized form of each date argument."""
    normalizer = DateNormalizer(load_timezone(config.dates.default_timezone))
    status = 0
    for text in args.dates:
        parsed = normalizer.parse(text)
        if parsed is None:
            logger.error(f"Unparseable date: {text!r}")
            status = 1
            continue
        print(normalizer.format(parsed))
    return status


def handle_properties(args: argparse.Namespace, config: Config) -> int:
    """List the registered property definitions."""
    for prop in get_default_property_registry().list_properties():
        cardinality = "multi" if prop.multi_value_permitted else "single"
        namespace = prop.qname.namespace_uri or "-"
        print(f"{prop.name}\t{prop.value_type.value}\t{cardinality}\t{namespace}")
    return 0
