"""
Utility modules for GeoPackage FeatureInfo Template Generator.

Modules:
    logger: Logging configuration and setup
"""

__version__ = '1.0.0'
