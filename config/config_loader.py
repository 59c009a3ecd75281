"""
Configuration loading for GeoPackage FeatureInfo Template Generator.

This module handles loading of the JSON settings file and merging it with
built-in defaults.

Constants:
    PROJECT_ROOT: Root directory of the project
    CONFIG_DIR: Configuration files directory
    OUTPUT_DIR: Default output directory for rendered templates
    LOG_DIR: Default log directory, relative to the working directory
    LOGGER_NAME: Root logger name for the generator

Functions:
    load_config: Load configuration from JSON
    load_settings: Merge configured settings with defaults
"""

import json
from pathlib import Path
from typing import Dict, Optional, Union

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / 'config'
OUTPUT_DIR = Path('output')
LOG_DIR = Path('logs')
LOGGER_NAME = 'gpkg_featureinfo'

CONFIG_FILE_NAME = 'featureinfo_config.json'

DEFAULT_SETTINGS = {
    'output_dir': str(OUTPUT_DIR),
    'temp_prefix': 'gpkg-',
    'temp_suffix': '.gpkg',
    'download_chunk_size': 65536,
    'request_timeout': None,
    'template_name': 'featureinfo.html',
}


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict:
    """
    Load configuration from JSON file.

    Reads featureinfo_config.json (or the given file) and validates basic
    structure.

    Parameters:
    -----------
    config_path : Optional[Union[str, Path]]
        Path to a configuration file. Defaults to CONFIG_DIR/featureinfo_config.json

    Returns:
    --------
    Dict
        Configuration dictionary with a 'settings' key

    Raises:
    -------
    FileNotFoundError
        If configuration file doesn't exist
    json.JSONDecodeError
        If configuration file contains invalid JSON
    KeyError
        If required configuration keys are missing
    """
    if config_path is None:
        config_path = CONFIG_DIR / CONFIG_FILE_NAME
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = json.load(f)

    if 'settings' not in config:
        raise KeyError("Configuration missing required 'settings' key")

    return config


def load_settings(config: Dict = None) -> Dict:
    """
    Load generator settings from configuration.

    Args:
        config: Configuration dictionary (optional, will load if not provided)

    Returns:
        Dictionary with settings

    Defaults:
        - output_dir: 'output'
        - temp_prefix: 'gpkg-'
        - temp_suffix: '.gpkg'
        - download_chunk_size: 65536
        - request_timeout: None (a stalled download blocks indefinitely)
        - template_name: 'featureinfo.html'
    """
    if config is None:
        config = load_config()

    settings = config.get('settings', {})

    # Config values override defaults
    return {**DEFAULT_SETTINGS, **settings}
