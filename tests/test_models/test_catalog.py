"""Tests for catalog parsing and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from hoverreveal.models.catalog import CatalogError, load_catalog, parse_catalog

SAMPLE_CATALOG = Path(__file__).resolve().parents[2] / "samples" / "gear_catalog.json"


def test_parse_items_wrapper_and_bare_list():
    item = {"key": "a", "title": "A", "message": "m", "anchors": [[0.1, 0.2]]}
    assert parse_catalog({"items": [item]}).items[0].key == "a"
    assert parse_catalog([item]).items[0].anchors == [(0.1, 0.2)]


def test_pts_alias():
    catalog = parse_catalog([{"key": "skis", "title": "Skis", "message": "", "pts": [[0.198, 0.546], [0.153, 0.552]]}])
    assert catalog.items[0].anchors == [(0.198, 0.546), (0.153, 0.552)]
    assert catalog.items[0].message == ""


def test_order_preserved_and_lookup():
    catalog = parse_catalog([
        {"key": "b", "title": "B", "message": "", "anchors": [[0, 0]]},
        {"key": "a", "title": "A", "message": "", "anchors": [[1, 1]]},
    ])
    assert [i.key for i in catalog.items] == ["b", "a"]
    assert catalog.get("a").title == "A"
    assert catalog.get("zzz") is None


@pytest.mark.parametrize(
    "items",
    [
        [{"key": "a", "title": "A", "message": "", "anchors": []}],
        [{"key": "a", "title": "A", "message": ""}],
        [{"key": "a", "title": "A", "message": "", "anchors": [[1.5, 0.2]]}],
        [{"key": "a", "title": "A", "message": "", "anchors": [[0.5, -0.1]]}],
        [{"key": "", "title": "A", "message": "", "anchors": [[0.5, 0.5]]}],
        [
            {"key": "a", "title": "A", "message": "", "anchors": [[0.1, 0.1]]},
            {"key": "a", "title": "Again", "message": "", "anchors": [[0.2, 0.2]]},
        ],
    ],
)
def test_invalid_catalogs(items):
    with pytest.raises(CatalogError):
        parse_catalog(items)


def test_load_missing_file(tmp_path):
    with pytest.raises(CatalogError, match="cannot read catalog"):
        load_catalog(tmp_path / "missing.json")


def test_load_bad_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError, match="not valid JSON"):
        load_catalog(path)


def test_load_file(tmp_path):
    path = tmp_path / "c.json"
    path.write_text(json.dumps([{"key": "a", "title": "A", "message": "", "anchors": [[0.5, 0.5]]}]), encoding="utf-8")
    assert len(load_catalog(path).items) == 1


def test_sample_gear_catalog():
    catalog = load_catalog(SAMPLE_CATALOG)
    keys = [i.key for i in catalog.items]
    assert len(keys) == 17
    assert keys[0] == "skis"
    assert len(catalog.get("poles").anchors) == 2


def test_message_is_required():
    with pytest.raises(CatalogError, match="message"):
        parse_catalog([{"key": "a", "title": "A", "anchors": [[0.5, 0.5]]}])
