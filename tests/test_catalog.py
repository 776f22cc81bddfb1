"""
Tests for the Capability Catalog
================================
"""

import json

import pytest

from marketplace_messages import CapabilityCatalog, CatalogError, CatalogNotFound, PriceElementMissing
from marketplace_messages.context import PRICE_ID_SHORTS
from marketplace_messages.runtime.config import Config

from conftest import CATALOG_ENTRIES


class TestSchemaLookup:
    """Test schema_for()."""

    def test_price_is_filtered_out(self, catalog):
        """The price element never shows up in the schema view."""
        id_shorts = [e.id_short for e in catalog.schema_for("drill")]
        assert id_shorts == ["depth", "material", "cooling"]

    def test_declaration_order_kept(self, catalog):
        """Elements come back in catalog order."""
        semantic_ids = [e.semantic_id for e in catalog.schema_for("drill")]
        assert semantic_ids == ["d1", "d2", "d3"]

    def test_unknown_irdi_raises(self, catalog):
        """An unknown IRDI is an explicit error."""
        with pytest.raises(CatalogNotFound) as exc:
            catalog.schema_for("missing")
        assert exc.value.irdi == "missing"

    def test_not_found_is_a_key_error(self, catalog):
        """CatalogNotFound can be caught as KeyError."""
        with pytest.raises(KeyError):
            catalog.schema_for("missing")

    def test_returned_list_is_a_copy(self, catalog):
        """Changing the returned list doesn't change the catalog."""
        schema = catalog.schema_for("drill")
        schema.clear()
        assert len(catalog.schema_for("drill")) == 3

    def test_bundled_catalog_never_exposes_price(self):
        """No bundled capability leaks its price element."""
        config = Config.default()
        catalog = CapabilityCatalog.from_files(config.catalog.path, config.catalog.operations_path)
        assert len(catalog) > 0
        for irdi in catalog:
            assert all(e.id_short not in PRICE_ID_SHORTS for e in catalog.schema_for(irdi))


class TestPriceElement:
    """Test price_element()."""

    def test_finds_price(self, catalog):
        """The unfiltered price element is returned."""
        price = catalog.price_element("drill")
        assert price.id_short == "preis"
        assert price.semantic_id == "p1"
        assert price.extra == {"modelType": {"name": "Property"}}

    def test_missing_price(self, catalog):
        """A schema without price raises PriceElementMissing."""
        with pytest.raises(PriceElementMissing):
            catalog.price_element("X")

    def test_binding_does_not_touch_catalog(self, catalog):
        """with_value() returns a new element."""
        bound = catalog.price_element("drill").with_value(99.5)
        assert bound.value == 99.5
        assert catalog.price_element("drill").value is None


class TestElement:
    """Test element serialization."""

    def test_to_dict_keeps_extra_keys(self, catalog):
        """Catalog keys we don't model survive binding."""
        data = catalog.price_element("drill").with_value(10).to_dict()
        assert data == {
            "idShort": "preis",
            "modelType": {"name": "Property"},
            "semanticId": "p1",
            "valueType": "decimal",
            "value": 10,
        }

    def test_unbound_has_no_value_key(self, catalog):
        """Unbound elements serialize without a value."""
        assert "value" not in catalog.schema_for("X")[0].to_dict()


class TestLoading:
    """Test loading from JSON files."""

    def test_from_files(self, tmp_path):
        """Catalog and operations load from disk."""
        catalog_file = tmp_path / "eClass.json"
        catalog_file.write_text(json.dumps(CATALOG_ENTRIES))
        operations_file = tmp_path / "operations.json"
        operations_file.write_text(json.dumps(["drilling"]))

        catalog = CapabilityCatalog.from_files(catalog_file, operations_file)

        assert catalog.identifiers() == ["X", "drill"]
        assert catalog.operations() == ["drilling"]
        assert "drill" in catalog

    def test_missing_file(self, tmp_path):
        """A missing catalog file is a CatalogError."""
        with pytest.raises(CatalogError):
            CapabilityCatalog.from_files(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        """Broken JSON is a CatalogError."""
        broken = tmp_path / "eClass.json"
        broken.write_text("{not json")
        with pytest.raises(CatalogError):
            CapabilityCatalog.from_files(broken)

    def test_operations_are_copies(self, catalog):
        """Callers can't change the operations list."""
        catalog.operations().append("extra")
        assert catalog.operations() == [{"id": "drill", "name": "Drilling"}]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
