"""
HTML templates for GeoPackage FeatureInfo Template Generator.

This package contains Jinja2 templates for the generated documents.

Templates:
    featureinfo.html: MapServer GetFeatureInfo table for one layer
"""

__version__ = '1.0.0'
