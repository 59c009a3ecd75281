"""Pytest configuration and shared GeoPackage fixtures."""

from __future__ import annotations

import logging
import pathlib
import sqlite3
import sys
from typing import Callable, Dict, List, Optional

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import LOGGER_NAME  # noqa: E402


def build_geopackage(
    path: pathlib.Path,
    layers: Dict[str, List[str]],
    geometry_columns: Optional[Dict[str, str]] = None,
    with_contents: bool = True,
    with_geometry_columns: bool = True,
) -> pathlib.Path:
    """Create a minimal GeoPackage with the two registry tables.

    ``layers`` maps table names to their column declarations in order,
    ``geometry_columns`` maps table names to their geometry column.
    """
    conn = sqlite3.connect(path)
    try:
        if with_contents:
            conn.execute(
                "CREATE TABLE gpkg_contents ("
                "table_name TEXT NOT NULL PRIMARY KEY, data_type TEXT NOT NULL)"
            )
        if with_geometry_columns:
            conn.execute(
                "CREATE TABLE gpkg_geometry_columns ("
                "table_name TEXT NOT NULL, column_name TEXT NOT NULL, "
                "geometry_type_name TEXT NOT NULL)"
            )
        for table_name, columns in layers.items():
            quoted = '"' + table_name.replace('"', '""') + '"'
            conn.execute(f"CREATE TABLE {quoted} ({', '.join(columns)})")
            conn.execute(f"INSERT INTO {quoted} DEFAULT VALUES")
            if with_contents:
                conn.execute(
                    "INSERT INTO gpkg_contents VALUES (?, 'features')", (table_name,)
                )
        if with_geometry_columns:
            for table_name, column_name in (geometry_columns or {}).items():
                conn.execute(
                    "INSERT INTO gpkg_geometry_columns VALUES (?, ?, 'GEOMETRY')",
                    (table_name, column_name),
                )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def make_geopackage(tmp_path: pathlib.Path) -> Callable[..., pathlib.Path]:
    """Factory fixture building GeoPackages inside tmp_path."""

    def factory(name: str = "test.gpkg", **kwargs) -> pathlib.Path:
        return build_geopackage(tmp_path / name, **kwargs)

    return factory


@pytest.fixture
def sample_geopackage(make_geopackage) -> pathlib.Path:
    """GeoPackage with two feature layers sharing a geometry column name."""
    return make_geopackage(
        layers={
            "roads": ["fid INTEGER PRIMARY KEY", "geom BLOB", "name TEXT", "Shape_Leng REAL"],
            "parcels": ["fid INTEGER PRIMARY KEY", "name TEXT", "the_geom BLOB", "area REAL", "SHAPE_AREA REAL"],
        },
        geometry_columns={"roads": "geom", "parcels": "the_geom"},
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers installed by setup_logging after each test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
