"""Tests for column filtering and HTML template rendering."""

from __future__ import annotations

import pytest

from core import template_renderer
from core.template_renderer import (
    check_column,
    excluded_column_names,
    generate_html_for_layer,
    included_columns,
)

STYLE = (
    "table.featureInfo, table.featureInfo td, table.featureInfo th { border: 1px solid #ddd; "
    "border-collapse: collapse; margin: 0; padding: 0; font-size: 90%; padding: .2em .1em; } "
    "table.featureInfo th { padding: .2em .2em; font-weight: bold; background: #eee; } "
    "table.featureInfo td { background: #fff; } "
    "table.featureInfo tr.odd td { background: #eee; } "
    "table.featureInfo caption { text-align: left; font-size: 100%; font-weight: bold; padding: .2em .2em; }"
)

PREAMBLE = (
    "<!-- MapServer Template -->\n<html>\n\t<head>\n\t\t<title>GetFeatureInfo output</title>\n"
    "\t</head>\n\t<style type=\"text/css\">" + STYLE + "</style>\n\t<body>\n"
    "\t\t<table class=\"featureInfo\">\n"
)

TRAILER = (
    "\t\t\t</tr>\n\t\t</table>\n\t</body>\n</html>\n"
    "<!-- Generated by PDOK ( https://www.pdok.nl/ ) -->"
)


def test_generate_html_for_layer_exact_output() -> None:
    """Test the rendered document matches the MapServer template byte for byte."""
    expected = (
        PREAMBLE
        + "\t\t\t<caption class=\"featureInfo\">testLayer</caption>\n\t\t\t<tr>\n"
        + "\t\t\t\t<th>testColumn1</th>\n\t\t\t\t<th>testColumn2</th>\n"
        + "\t\t\t</tr>\n\t\t\t<tr>\n"
        + "\t\t\t\t<td>[testColumn1]</td>\n\t\t\t\t<td>[testColumn2]</td>\n"
        + TRAILER
    )
    document = generate_html_for_layer(
        "testLayer", ["testColumn1", "testColumn2", "geom", "shape_len"], ["geo"]
    )
    assert isinstance(document, bytes)
    assert document.decode("utf-8") == expected


def test_generate_html_for_layer_empty_columns() -> None:
    """Test that a layer without attribute columns renders empty rows."""
    expected = (
        PREAMBLE
        + "\t\t\t<caption class=\"featureInfo\">onlyGeometry</caption>\n\t\t\t<tr>\n"
        + "\t\t\t</tr>\n\t\t\t<tr>\n"
        + TRAILER
    )
    document = generate_html_for_layer("onlyGeometry", ["geom", "SHAPE_AREA"], ["geom"])
    assert document.decode("utf-8") == expected


def test_generate_html_for_layer_is_deterministic() -> None:
    """Test that identical input yields identical bytes."""
    args = ("roads", ["fid", "name", "geom"], ["geom"])
    assert generate_html_for_layer(*args) == generate_html_for_layer(*args)


def test_generate_html_for_layer_substitutes_raw_names() -> None:
    """Test that names are not HTML escaped."""
    document = generate_html_for_layer("a&b", ["x<y"], []).decode("utf-8")
    assert "<caption class=\"featureInfo\">a&b</caption>" in document
    assert "<th>x<y</th>" in document
    assert "<td>[x<y]</td>" in document


def test_generate_html_for_layer_non_ascii() -> None:
    """Test that non-ASCII names are encoded as UTF-8."""
    document = generate_html_for_layer("vegbredde", ["bæreevne"], [])
    assert "<th>bæreevne</th>".encode("utf-8") in document


@pytest.mark.parametrize(
    "column", ["geom", "shape_len", "shape_leng", "shape_area", "Shape_Area", "geo", "GEO"]
)
def test_check_column_excluded(column: str) -> None:
    """Test built-in and geometry columns are rejected case-insensitively."""
    assert check_column(column, ["geo"]) is False


@pytest.mark.parametrize("column", ["name", "geometry_type", "shape", "fid"])
def test_check_column_included(column: str) -> None:
    """Test ordinary columns are accepted."""
    assert check_column(column, ["geo"]) is True


def test_excluded_column_names_are_lowercase() -> None:
    """Test the exclusion set contains normalized names."""
    assert excluded_column_names(["The_Geom"]) == frozenset(
        {"geom", "shape_len", "shape_leng", "shape_area", "the_geom"}
    )


def test_included_columns_preserves_order_and_duplicates() -> None:
    """Test filtering keeps order and does not deduplicate."""
    columns = ["b", "GEOM", "a", "wkb_geometry", "b", "Shape_Len"]
    assert included_columns(columns, ["WKB_Geometry"]) == ["b", "a", "b"]


def test_custom_template_name(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that an alternative template in the template directory is used."""
    from jinja2 import Environment, FileSystemLoader

    (tmp_path / "plain.html").write_text(
        "{{ layer }}:{% for column in columns %}{{ column }},{% endfor %}",
        encoding="utf-8",
    )
    monkeypatch.setattr(
        template_renderer,
        "_env",
        Environment(loader=FileSystemLoader(str(tmp_path)), trim_blocks=True),
    )
    document = generate_html_for_layer("l", ["a", "geom", "b"], [], template_name="plain.html")
    assert document == b"l:a,b,"
