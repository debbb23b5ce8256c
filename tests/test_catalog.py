import pytest

from app import create_app
from app.catalog import Catalog, CatalogEntry, CatalogError, build_catalog


def test_catalog_merges_both_families():
    catalog = build_catalog()
    assert catalog.find("length").type == "unit"
    assert catalog.find("length").unit_count == 9
    assert catalog.find("json-to-yaml").type == "data"
    assert catalog.find("json-to-yaml").unit_count is None
    assert catalog.find("nope") is None
    assert len(list(catalog)) == 13 + 10


def test_catalog_search_covers_names_and_descriptions():
    catalog = build_catalog()
    assert [entry.id for entry in catalog.search("base64")] == ["base64-encode", "base64-decode"]
    assert [entry.id for entry in catalog.search("FUEL ECONOMY")] == ["fuel-consumption"]


def test_catalog_rejects_colliding_ids():
    with pytest.raises(CatalogError):
        Catalog(
            [
                CatalogEntry("length", "Length", "", "unit", 2),
                CatalogEntry("length", "Length text", "", "data"),
            ]
        )


def test_catalog_endpoints():
    client = create_app("TestingConfig").test_client()
    listing = client.get("/api/catalog?q=temperature").get_json()
    assert [entry["id"] for entry in listing["data"]["converters"]] == ["temperature"]

    entry = client.get("/api/catalog/url-decode")
    assert entry.status_code == 200
    assert entry.get_json()["data"]["type"] == "data"

    missing = client.get("/api/catalog/nope")
    assert missing.status_code == 404
    assert missing.get_json()["error"]["code"] == "catalog.not_found"
