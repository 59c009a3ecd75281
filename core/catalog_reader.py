"""
Catalog reader module for GeoPackage FeatureInfo Template Generator.

Opens a GeoPackage as a read-only SQLite database and reads its two metadata
registries: the contents table (one row per layer) and the geometry columns
table (one row per geometry-typed column).

Functions:
    open_geopackage: Open a read-only connection to a GeoPackage
    get_layers: Read layer names from gpkg_contents
    get_geometry_columns: Read geometry column names from gpkg_geometry_columns
"""

import sqlite3
from pathlib import Path
from typing import List, Union

from core.errors import EmptyCatalogError, OpenError, SchemaError
from utils.logger import get_logger

logger = get_logger(__name__)

CONTENTS_TABLE = 'gpkg_contents'
GEOMETRY_COLUMNS_TABLE = 'gpkg_geometry_columns'


def open_geopackage(gpkg_path: Union[str, Path]) -> sqlite3.Connection:
    """
    Open a GeoPackage read-only.

    Parameters:
    -----------
    gpkg_path : Union[str, Path]
        Path to a local GeoPackage file

    Returns:
    --------
    sqlite3.Connection
        Connection in query-only mode. The caller closes it.

    Raises:
    -------
    OpenError
        If the file cannot be opened or is not an SQLite database
    """
    logger.info(f"Opening Geopackage: {gpkg_path}")
    uri = f"{Path(gpkg_path).resolve().as_uri()}?mode=ro"

    try:
        conn = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as e:
        raise OpenError(f"Cannot open Geopackage {gpkg_path}: {e}") from e

    try:
        conn.execute("PRAGMA query_only=ON;")
        # Forces SQLite to read the header; fails for non-database files
        conn.execute("PRAGMA schema_version;").fetchone()
    except sqlite3.Error as e:
        conn.close()
        raise OpenError(f"Cannot open Geopackage {gpkg_path}: {e}") from e

    return conn


def _read_distinct_column(
    conn: sqlite3.Connection,
    query: str,
    table_name: str,
    what: str
) -> List[str]:
    try:
        rows = conn.execute(query).fetchall()
    except sqlite3.Error as e:
        raise SchemaError(f"Error with querying Geopackage table {table_name}: {e}") from e

    # Registry order, first occurrence wins
    values = list(dict.fromkeys(row[0] for row in rows))
    if not values:
        raise EmptyCatalogError(table_name, what)
    return values


def get_layers(conn: sqlite3.Connection) -> List[str]:
    """
    Read layer names from the GeoPackage contents registry.

    Returns:
    --------
    List[str]
        Distinct table names in registry (insertion) order

    Raises:
    -------
    SchemaError
        If gpkg_contents is missing or unreadable
    EmptyCatalogError
        If gpkg_contents has no rows
    """
    logger.info("Searching for layers in Geopackage")
    layers = _read_distinct_column(
        conn,
        f"SELECT table_name FROM {CONTENTS_TABLE} ORDER BY rowid",
        CONTENTS_TABLE,
        'layers'
    )
    for layer in layers:
        logger.info(f"  - Layer found: {layer}")
    return layers


def get_geometry_columns(conn: sqlite3.Connection) -> List[str]:
    """
    Read geometry column names from the GeoPackage geometry columns registry.

    The names apply package-wide: a column that holds geometry in any layer
    is left out of every layer's template.

    Raises:
    -------
    SchemaError
        If gpkg_geometry_columns is missing or unreadable
    EmptyCatalogError
        If gpkg_geometry_columns has no rows
    """
    logger.info("Searching for geometry columns in Geopackage")
    columns = _read_distinct_column(
        conn,
        f"SELECT column_name FROM {GEOMETRY_COLUMNS_TABLE} ORDER BY rowid",
        GEOMETRY_COLUMNS_TABLE,
        'geometry columns'
    )
    for column in columns:
        logger.info(f"  - Geometry column found: {column}")
    return columns
