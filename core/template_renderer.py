"""
Template rendering module for GeoPackage FeatureInfo Template Generator.

Renders one MapServer GetFeatureInfo template per layer: a table with a
caption holding the layer name, a header row with one cell per attribute
column, and a data row with a ``[column]`` placeholder per attribute column.
The map server substitutes the placeholders at request time.

Geometry and area columns are left out of the table.

Functions:
    excluded_column_names: Build the lowercase exclusion set
    check_column: Decide whether a column belongs in the template
    included_columns: Filter a layer's columns, preserving order
    generate_html_for_layer: Render the HTML document for a layer
"""

from pathlib import Path
from typing import FrozenSet, Iterable, List, Sequence

from jinja2 import Environment, FileSystemLoader

from utils.logger import get_logger

logger = get_logger(__name__)

# Template directory path
TEMPLATES_DIR = Path(__file__).parent.parent / 'templates'
DEFAULT_TEMPLATE = 'featureinfo.html'

BUILTIN_EXCLUDED_COLUMNS = ('geom', 'shape_len', 'shape_leng', 'shape_area')

# Block tags sit on their own lines; trim_blocks drops the newline after them
# and the final newline of the file is dropped as well.
_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=False,
    trim_blocks=True,
    keep_trailing_newline=False,
)


def excluded_column_names(geom_columns: Iterable[str]) -> FrozenSet[str]:
    """Return the lowercased built-in exclusions plus the geometry columns."""
    return frozenset(
        name.lower() for name in (*BUILTIN_EXCLUDED_COLUMNS, *geom_columns)
    )


def check_column(column_name: str, geom_columns: Iterable[str]) -> bool:
    """
    Check if a column should be included in the HTML template.

    Matching is case-insensitive, so ``Shape_Area`` is excluded just like
    ``shape_area``.

    Returns:
    --------
    bool
        False for geometry and area columns, True otherwise

    Example:
        >>> check_column('Shape_Area', ['geo'])
        False
        >>> check_column('name', ['geo'])
        True
    """
    return column_name.lower() not in excluded_column_names(geom_columns)


def included_columns(columns: Sequence[str], geom_columns: Iterable[str]) -> List[str]:
    """Return the columns that pass check_column, in their original order."""
    excluded = excluded_column_names(geom_columns)
    return [column for column in columns if column.lower() not in excluded]


def generate_html_for_layer(
    layer: str,
    columns: Sequence[str],
    geom_columns: Iterable[str],
    template_name: str = DEFAULT_TEMPLATE
) -> bytes:
    """
    Generate the GetFeatureInfo HTML document for a layer.

    The layer and column names are substituted verbatim, without HTML
    escaping. Output depends only on the arguments, so identical input
    yields byte-identical documents.

    Parameters:
    -----------
    layer : str
        Layer name, shown in the table caption
    columns : Sequence[str]
        All columns of the layer in storage order
    geom_columns : Iterable[str]
        Geometry column names found anywhere in the GeoPackage
    template_name : str
        Template file inside the templates directory

    Returns:
    --------
    bytes
        UTF-8 encoded HTML document
    """
    logger.info(f"Generate HTML for layer: {layer}")

    visible = included_columns(columns, geom_columns)
    logger.debug(f"  - {len(visible)} of {len(columns)} columns included")

    template = _env.get_template(template_name)
    html = template.render(layer=layer, columns=visible)
    return html.encode('utf-8')
