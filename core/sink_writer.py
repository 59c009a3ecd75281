"""
Output writing module for GeoPackage FeatureInfo Template Generator.

Functions:
    layer_file_name: Derive the output file name for a layer
    write_html_file: Write a rendered template to the output directory
"""

from pathlib import Path
from typing import Union

from core.errors import WriteError
from utils.logger import get_logger

logger = get_logger(__name__)


def layer_file_name(layer: str) -> str:
    """
    Derive ``<layer>.html`` for a layer.

    Path separators are replaced so the file always lands directly in the
    output directory. ``a/b`` and ``a_b`` therefore map to the same file.
    """
    safe_name = layer.replace('/', '_').replace('\\', '_')
    return f'{safe_name}.html'


def write_html_file(layer: str, document: bytes, output_dir: Union[str, Path]) -> Path:
    """
    Write HTML to file.

    Creates the output directory if needed and overwrites any existing file
    with the same name.

    Returns:
    --------
    Path
        Path of the written file

    Raises:
    -------
    WriteError
        On any filesystem failure
    """
    output_dir = Path(output_dir)
    file_path = output_dir / layer_file_name(layer)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        if file_path.exists():
            logger.warning(f"  - Overwriting existing file: {file_path}")
        file_path.write_bytes(document)
    except OSError as e:
        raise WriteError(f"Cannot create html file {file_path}: {e}") from e

    logger.info(f"  - Saved {file_path}")
    return file_path
