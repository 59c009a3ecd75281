"""
Core modules for GeoPackage FeatureInfo Template Generator.

This package contains the pipeline stages that turn a GeoPackage into
MapServer GetFeatureInfo HTML templates.

Modules:
    errors: Exception hierarchy for fatal pipeline failures
    source_acquirer: Download or open the input GeoPackage
    catalog_reader: Open the database and read layer/geometry registries
    schema_inspector: List the columns of a layer
    template_renderer: Filter columns and render the HTML template
    sink_writer: Write rendered templates to the output directory
"""

__version__ = '1.0.0'
