"""
Schema inspection module for GeoPackage FeatureInfo Template Generator.

Functions:
    quote_identifier: Quote an SQL identifier
    get_layer_columns: List a layer's column names in declared order
"""

import sqlite3
from typing import List

from core.errors import SchemaError
from utils.logger import get_logger

logger = get_logger(__name__)


def quote_identifier(name: str) -> str:
    """Quote an SQLite identifier, doubling embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


def get_layer_columns(conn: sqlite3.Connection, layer: str) -> List[str]:
    """
    Read the column names of a layer without fetching any rows.

    Uses the result shape of ``SELECT * FROM <layer>`` so the order matches
    what the map server sees.

    Raises:
    -------
    SchemaError
        If the layer cannot be queried
    """
    logger.info(f"Searching for columns for layer '{layer}' in Geopackage")

    try:
        cursor = conn.execute(f"SELECT * FROM {quote_identifier(layer)} LIMIT 0")
    except sqlite3.Error as e:
        raise SchemaError(f"Error with querying layer '{layer}': {e}") from e

    columns = [description[0] for description in cursor.description]
    cursor.close()

    for column in columns:
        logger.debug(f"  - Column found: {column}")
    return columns
