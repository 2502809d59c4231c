"""
Unit tests for catalog loading.
"""

import json
import logging

import pytest
from decimal import Decimal

from subscription_savings.services.catalog_service import (
    CATALOG_PATH_ENV,
    DEFAULT_CATALOG_PATH,
    CatalogLoadError,
    load_catalog,
    parse_catalog,
    resolve_catalog_path,
)


MINIMAL_CATALOG = {
    "meta": {"lastUpdated": "2024-01-01", "version": "0.1", "totalServices": 1, "categories": ["video"]},
    "categories": {
        "video": {
            "label": "Video",
            "icon": "tv",
            "items": [
                {
                    "name": "Acme TV",
                    "aliases": ["acmetv.com"],
                    "typical_price": 9.99,
                    "savings_options": [
                        {
                            "method": "Annual plan",
                            "new_price": 8.33,
                            "savings_monthly": 1.66,
                            "savings_annual": 19.92,
                            "effort": "easy"
                        }
                    ]
                }
            ]
        }
    }
}


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(MINIMAL_CATALOG), encoding="utf-8")
    return path


class TestLoadCatalog:
    """Test suite for load_catalog."""

    def test_bundled_catalog(self, monkeypatch):
        monkeypatch.delenv(CATALOG_PATH_ENV, raising=False)

        catalog = load_catalog()

        assert catalog.service_count == 12
        assert catalog.meta.total_services == 12
        assert list(catalog.categories) == ["streaming", "music", "phone", "cloud", "fitness", "news"]
        netflix, streaming = catalog.find_by_name("Netflix")
        assert streaming.label == "Streaming"
        assert netflix.typical_price == Decimal("15.49")
        assert netflix.aliases == ["netflix.com", "netflix inc"]

    def test_explicit_path(self, catalog_file):
        catalog = load_catalog(catalog_file)

        item, category = catalog.find_by_name("acme tv")
        assert category.label == "Video"
        assert item.savings_options[0].savings_annual == Decimal("19.92")

    def test_explicit_path_as_string(self, catalog_file):
        assert load_catalog(str(catalog_file)).service_count == 1

    def test_environment_override(self, monkeypatch, catalog_file):
        monkeypatch.setenv(CATALOG_PATH_ENV, str(catalog_file))
        assert load_catalog().service_count == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError, match="not found"):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{\"meta\": ", encoding="utf-8")

        with pytest.raises(CatalogLoadError, match="not valid JSON"):
            load_catalog(path)

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(CatalogLoadError, match="JSON object"):
            load_catalog(path)


class TestParseCatalog:
    """Test suite for parse_catalog."""

    def test_schema_error(self):
        data = {"categories": {"video": {"label": "Video", "items": [{"name": "No price"}]}}}

        with pytest.raises(CatalogLoadError, match="Invalid catalog document"):
            parse_catalog(data)

    def test_unknown_effort_rejected(self):
        data = json.loads(json.dumps(MINIMAL_CATALOG))
        data["categories"]["video"]["items"][0]["savings_options"][0]["effort"] = "trivial"

        with pytest.raises(CatalogLoadError):
            parse_catalog(data)

    def test_meta_is_optional(self):
        catalog = parse_catalog({"categories": MINIMAL_CATALOG["categories"]})

        assert catalog.meta is None
        assert catalog.service_count == 1

    def test_empty_document(self):
        catalog = parse_catalog({})
        assert catalog.is_empty

    def test_service_count_mismatch_warns(self, caplog):
        data = json.loads(json.dumps(MINIMAL_CATALOG))
        data["meta"]["totalServices"] = 5

        with caplog.at_level(logging.WARNING):
            catalog = parse_catalog(data)

        assert catalog.service_count == 1
        assert "declares 5 services" in caplog.text


class TestResolveCatalogPath:
    """Test suite for resolve_catalog_path."""

    def test_explicit_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CATALOG_PATH_ENV, "/elsewhere.json")
        assert resolve_catalog_path(tmp_path / "a.json") == tmp_path / "a.json"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv(CATALOG_PATH_ENV, "/elsewhere.json")
        assert str(resolve_catalog_path()) == "/elsewhere.json"

    def test_default(self, monkeypatch):
        monkeypatch.delenv(CATALOG_PATH_ENV, raising=False)
        assert resolve_catalog_path() == DEFAULT_CATALOG_PATH
