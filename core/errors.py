"""
Exceptions for GeoPackage FeatureInfo Template Generator.

Every error raised by the pipeline is fatal: the driver logs it and exits
with a non-zero status. No partial output is salvaged.

Classes:
    GeopackageError: Base class for all pipeline errors
    UsageError: Missing or conflicting input parameters
    AcquireError: The GeoPackage could not be downloaded or opened
    DownloadError: HTTP transport failure or non-200 response
    OpenError: Local file missing, unreadable or not a database
    SchemaError: Catalog or column introspection query failed
    EmptyCatalogError: A catalog registry returned zero rows
    WriteError: Rendered template could not be written
"""


class GeopackageError(Exception):
    """Base exception for GeoPackage template generation errors."""
    pass


class UsageError(GeopackageError):
    """Raised when neither or both of gpkg-url and gpkg-path are supplied."""
    pass


class AcquireError(GeopackageError):
    """Raised when the GeoPackage cannot be made available as a local file."""
    pass


class DownloadError(AcquireError):
    """Raised when downloading the GeoPackage fails."""
    pass


class OpenError(AcquireError):
    """Raised when a local GeoPackage cannot be opened."""
    pass


class SchemaError(GeopackageError):
    """Raised when querying the GeoPackage metadata fails."""
    pass


class EmptyCatalogError(SchemaError):
    """Raised when a GeoPackage registry table has no rows."""

    def __init__(self, table_name: str, what: str):
        self.table_name = table_name
        message = f"No {what} found in {table_name}!"
        super().__init__(message)


class WriteError(GeopackageError):
    """Raised when an HTML template cannot be written to disk."""
    pass
