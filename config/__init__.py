"""
Configuration package for GeoPackage FeatureInfo Template Generator.

This package contains configuration loading and default settings.

Modules:
    config_loader: Load settings from JSON and merge them with defaults
"""

__version__ = '1.0.0'
