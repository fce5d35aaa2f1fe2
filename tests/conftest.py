"""Pytest configuration and fixtures."""

from types import SimpleNamespace

import pytest

from docmeta.metadata import (
    Metadata,
    PropertyRegistry,
    composite,
    external_date,
    external_integer,
    external_real,
    external_text,
    external_text_bag,
)

TEST_NS = "urn:docmeta:test"
LEGACY_NS = "urn:docmeta:test:legacy"


@pytest.fixture
def registry() -> PropertyRegistry:
    """Provide a fresh, empty property registry."""
    return PropertyRegistry()


@pytest.fixture
def metadata(registry: PropertyRegistry) -> Metadata:
    """Provide an empty container bound to the fresh registry."""
    return Metadata(registry=registry)


@pytest.fixture
def props(registry: PropertyRegistry) -> SimpleNamespace:
    """Provide typed test properties registered in the fresh registry."""
    title = external_text("t:title", TEST_NS, registry=registry)
    tags = external_text_bag("t:tags", TEST_NS, registry=registry)
    created = external_date("t:created", TEST_NS, registry=registry)
    legacy_title = external_text("legacy:title", LEGACY_NS, registry=registry)
    legacy_tags = external_text_bag("legacy:tags", LEGACY_NS, registry=registry)
    legacy_created = external_date("legacy:created", LEGACY_NS, registry=registry)

    return SimpleNamespace(
        title=title,
        tags=tags,
        created=created,
        count=external_integer("t:count", TEST_NS, registry=registry),
        ratio=external_real("t:ratio", TEST_NS, registry=registry),
        legacy_title=legacy_title,
        legacy_tags=legacy_tags,
        legacy_created=legacy_created,
        full_title=composite(title, [legacy_title]),
        all_tags=composite(tags, [legacy_tags, legacy_title]),
        all_created=composite(created, [legacy_created]),
    )
