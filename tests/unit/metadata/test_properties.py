"""Tests for property definitions and the property registry."""

import pytest

from docmeta.core.exceptions import PropertyRegistryError, PropertyTypeError
from docmeta.metadata import (
    Property,
    PropertyType,
    QualifiedName,
    ValueType,
    composite,
    external_integer,
    external_text,
    external_text_bag,
    get_default_property_registry,
    internal_boolean,
    internal_date,
    internal_rational,
    internal_real,
    internal_text_bag,
    internal_uri,
)

NS = "urn:docmeta:test"


class TestFactories:
    """Tests for the property factory functions."""

    def test_external_text_defaults(self, registry):
        """Should build a single-valued external SIMPLE text property."""
        prop = external_text("t:title", NS, registry=registry)

        assert prop.name == "t:title"
        assert prop.property_type is PropertyType.SIMPLE
        assert prop.value_type is ValueType.TEXT
        assert not prop.multi_value_permitted
        assert not prop.internal

    def test_bags_are_multi_valued(self, registry):
        """Bag factories should permit multiple values."""
        assert external_text_bag("t:a", NS, registry=registry).multi_value_permitted
        assert internal_text_bag("t:b", NS, registry=registry).multi_value_permitted

    @pytest.mark.parametrize(
        ("factory", "value_type"),
        [
            (internal_real, ValueType.REAL),
            (internal_rational, ValueType.RATIONAL),
            (internal_date, ValueType.DATE),
            (internal_boolean, ValueType.BOOLEAN),
            (internal_uri, ValueType.URI),
        ],
    )
    def test_internal_factories(self, registry, factory, value_type):
        """Internal factories should set the value type and internal flag."""
        prop = factory("t:value", NS, registry=registry)

        assert prop.value_type is value_type
        assert prop.internal

    def test_factory_registers(self, registry):
        """Factories should register the definition by name."""
        prop = external_integer("t:count", NS, registry=registry)

        assert registry.get("t:count") is prop
        assert "t:count" in registry

    def test_factory_uses_given_registry_only(self, registry):
        """A given registry should leave the default registry untouched."""
        external_text("t:isolated-name", NS, registry=registry)

        assert not get_default_property_registry().is_registered("t:isolated-name")

    def test_str_is_name(self, registry):
        """str() of a property should be its name."""
        assert str(external_text("t:title", NS, registry=registry)) == "t:title"


class TestComposite:
    """Tests for composite property construction."""

    def test_composite_shares_primary_identity(self, registry):
        """A composite should copy its primary's name and value type."""
        primary = external_text_bag("t:creator", NS, registry=registry)
        secondary = external_text_bag("legacy:author", "urn:legacy", registry=registry)

        prop = composite(primary, [secondary])

        assert prop.is_composite
        assert prop.name == "t:creator"
        assert prop.value_type is ValueType.TEXT
        assert prop.multi_value_permitted
        assert prop.primary_property is primary
        assert prop.secondaries == (secondary,)

    def test_simple_primary_property_is_self(self, registry):
        """A SIMPLE property should be its own primary property."""
        prop = external_text("t:title", NS, registry=registry)

        assert prop.primary_property is prop

    def test_composite_member_must_be_simple(self, registry):
        """Nesting a composite should raise PropertyTypeError."""
        primary = external_text("t:title", NS, registry=registry)
        inner = composite(primary)

        with pytest.raises(PropertyTypeError) as exc_info:
            composite(primary, [inner])

        assert exc_info.value.expected is PropertyType.SIMPLE
        assert exc_info.value.actual is PropertyType.COMPOSITE

    def test_composite_requires_primary(self):
        """A COMPOSITE definition without a primary is invalid."""
        with pytest.raises(ValueError, match="primary"):
            Property(QualifiedName.parse("t:x", NS), property_type=PropertyType.COMPOSITE)


class TestPropertyRegistry:
    """Tests for PropertyRegistry."""

    def test_register_equal_definition_is_noop(self, registry):
        """Registering an equal definition twice should succeed."""
        first = external_text("t:title", NS, registry=registry)
        second = external_text("t:title", NS, registry=registry)

        assert first == second
        assert len(registry) == 1

    def test_register_conflict_raises(self, registry):
        """A different definition under a taken name should raise."""
        external_text("t:title", NS, registry=registry)

        with pytest.raises(PropertyRegistryError, match="already registered"):
            external_integer("t:title", NS, registry=registry)

    def test_register_override(self, registry):
        """override=True should replace the existing definition."""
        external_text("t:title", NS, registry=registry)
        replacement = Property(QualifiedName.parse("t:title", NS), value_type=ValueType.INTEGER)

        registry.register(replacement, override=True)

        assert registry.get("t:title").value_type is ValueType.INTEGER

    def test_register_composite_rejected(self, registry):
        """Composite definitions cannot be registered."""
        prop = composite(external_text("t:title", NS, registry=registry))

        with pytest.raises(ValueError, match="cannot be registered"):
            registry.register(prop)

    def test_unregister(self, registry):
        """Should remove a definition and report whether it existed."""
        external_text("t:title", NS, registry=registry)

        assert registry.unregister("t:title")
        assert not registry.unregister("t:title")
        assert registry.get("t:title") is None

    def test_list_properties_sorted(self, registry):
        """Should list definitions sorted by name."""
        external_text("t:zeta", NS, registry=registry)
        external_text("t:alpha", NS, registry=registry)

        assert [p.name for p in registry.list_properties()] == ["t:alpha", "t:zeta"]

    def test_empty_registry_is_used(self, registry):
        """An empty registry should not be swapped for the default one."""
        prop = external_text("t:only-here", NS, registry=registry)

        assert registry.list_properties() == [prop]
