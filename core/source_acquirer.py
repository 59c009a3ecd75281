"""
Source acquisition module for GeoPackage FeatureInfo Template Generator.

Makes the input GeoPackage available as a local file. A URL is downloaded
into a temporary file that is removed when the run ends; a local path is
used as-is and never deleted.

Functions:
    check_parameters: Validate that exactly one input source is given
    create_tmp_file: Create a uniquely named temporary file
    download_geopackage: Stream a GeoPackage over HTTP into a file
    open_local_geopackage: Verify a local GeoPackage is readable
    acquire_geopackage: Context manager yielding the local GeoPackage path
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

import requests

from config.config_loader import DEFAULT_SETTINGS
from core.errors import DownloadError, OpenError, AcquireError, UsageError
from utils.logger import get_logger

logger = get_logger(__name__)


def check_parameters(gpkg_url: Optional[str], gpkg_path: Optional[str]) -> None:
    """
    Check that exactly one of gpkg_url and gpkg_path is provided.

    Performs no I/O so that bad invocations fail before anything is touched.

    Raises:
    -------
    UsageError
        If neither or both parameters are given
    """
    if not gpkg_url and not gpkg_path:
        raise UsageError("gpkg-url or gpkg-path is required. Run with -h for help.")
    if gpkg_url and gpkg_path:
        raise UsageError("either gpkg-url or gpkg-path is required, not both. Run with -h for help.")


def create_tmp_file(prefix: str = 'gpkg-', suffix: str = '.gpkg') -> Path:
    """
    Create a uniquely named temporary file in the system temp directory.

    The caller owns the file and is responsible for deleting it.
    """
    try:
        fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix)
        os.close(fd)
    except OSError as e:
        raise AcquireError(f"Cannot create temporary file: {e}") from e

    logger.info(f"Created file: {name}")
    return Path(name)


def download_geopackage(
    url: str,
    target: Path,
    timeout: Optional[float] = None,
    chunk_size: int = 65536
) -> Path:
    """
    Download a GeoPackage and store it in a file.

    Parameters:
    -----------
    url : str
        URL of the GeoPackage
    target : Path
        File the response body is written to (overwritten)
    timeout : Optional[float]
        Request timeout in seconds. None waits indefinitely.
    chunk_size : int
        Bytes per streamed chunk

    Returns:
    --------
    Path
        The target path

    Raises:
    -------
    DownloadError
        On transport errors, a status code other than 200, or a failed write
    """
    logger.info(f"Starting download for: {url}")

    try:
        with requests.get(url, stream=True, timeout=timeout) as response:
            if response.status_code != 200:
                raise DownloadError(
                    f"didn't get a 200 statuscode, instead got {response.status_code}"
                )
            with open(target, 'wb') as f:
                for chunk in response.iter_content(chunk_size=chunk_size):
                    if chunk:
                        f.write(chunk)
    except requests.exceptions.RequestException as e:
        raise DownloadError(f"Download of {url} failed: {e}") from e
    except OSError as e:
        raise DownloadError(f"Cannot write download to {target}: {e}") from e

    logger.info("Geopackage downloaded")
    logger.debug(f"  - {target.stat().st_size} bytes written to {target}")
    return target


def open_local_geopackage(gpkg_path: Union[str, Path]) -> Path:
    """
    Verify that a local GeoPackage exists and can be read.

    Raises:
    -------
    OpenError
        If the file does not exist or is unreadable
    """
    path = Path(gpkg_path)
    try:
        with open(path, 'rb'):
            pass
    except OSError as e:
        raise OpenError(f"Error opening file {gpkg_path}: {e}") from e

    logger.info(f"Using local Geopackage: {path}")
    return path


@contextmanager
def acquire_geopackage(
    gpkg_url: Optional[str] = None,
    gpkg_path: Optional[str] = None,
    settings: Optional[Dict] = None
) -> Iterator[Path]:
    """
    Yield a local path to the GeoPackage given by URL or path.

    A downloaded file is deleted when the context exits, whether the
    body completed or raised. A user-supplied path is never deleted.

    Example:
        >>> with acquire_geopackage(gpkg_path='roads.gpkg') as path:
        ...     conn = open_geopackage(path)
    """
    check_parameters(gpkg_url, gpkg_path)
    settings = {**DEFAULT_SETTINGS, **(settings or {})}

    if gpkg_path:
        yield open_local_geopackage(gpkg_path)
        return

    tmp_file = create_tmp_file(settings['temp_prefix'], settings['temp_suffix'])
    try:
        download_geopackage(
            gpkg_url,
            tmp_file,
            timeout=settings['request_timeout'],
            chunk_size=settings['download_chunk_size']
        )
        yield tmp_file
    finally:
        tmp_file.unlink(missing_ok=True)
        logger.debug(f"Removed temporary file: {tmp_file}")
