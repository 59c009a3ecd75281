#!/usr/bin/env python
"""
GeoPackage FeatureInfo Template Generator
=========================================
Generates MapServer GetFeatureInfo HTML templates from a GeoPackage, one
template per layer, with a header cell and a ``[column]`` placeholder for
every attribute column.

Usage:
    gpkg-featureinfo --gpkg-path ./geopackage.gpkg
    gpkg-featureinfo --gpkg-url https://example.com/geopackage.gpkg --output-dir templates_out

Known limitation: without a configured request_timeout a stalled download
blocks indefinitely.
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence

# Import logging first
from utils.logger import setup_logging, get_logger

from config.config_loader import LOG_DIR, load_config, load_settings
from core.errors import UsageError
from core.source_acquirer import acquire_geopackage, check_parameters
from core.catalog_reader import open_geopackage, get_layers, get_geometry_columns
from core.schema_inspector import get_layer_columns
from core.template_renderer import generate_html_for_layer
from core.sink_writer import write_html_file


def main(
    gpkg_url: Optional[str] = None,
    gpkg_path: Optional[str] = None,
    output_dir: Optional[str] = None,
    log_dir: Optional[Path] = None,
    config_path: Optional[Path] = None
) -> Optional[List[Path]]:
    """
    Main execution workflow for the template generator.

    Workflow Steps:
    1. Validate input parameters (before any I/O)
    2. Setup logging to console and file
    3. Load configuration
    4. Download or open the GeoPackage
    5. Read geometry columns and layers from the catalog
    6. For each layer: read columns, render template, write file

    Any failure aborts the whole run; templates written before the failure
    are left in place.

    Parameters:
    -----------
    gpkg_url : Optional[str]
        URL of a GeoPackage to download
    gpkg_path : Optional[str]
        Path to a local GeoPackage
    output_dir : Optional[str]
        Directory for the HTML files (defaults to the configured output_dir)
    log_dir : Optional[Path]
        Directory for log files (defaults to ./logs)
    config_path : Optional[Path]
        Alternative configuration file

    Returns:
    --------
    Optional[List[Path]]
        Paths of the written templates if successful, None if failed

    Raises:
    -------
    UsageError
        If neither or both of gpkg_url and gpkg_path are given

    Example:
        >>> written = main(gpkg_path='afvalwater.gpkg')
        >>> print(written[0])
        output/afvalwater.html
    """
    check_parameters(gpkg_url, gpkg_path)

    workflow_start_time = time.time()

    try:
        log_file = setup_logging(log_dir)
    except OSError as e:
        # No handlers are attached yet
        print(f"✗ Cannot set up logging in {log_dir or LOG_DIR}: {e}", file=sys.stderr)
        return None
    logger = get_logger(__name__)

    logger.info("=" * 80)
    logger.info("GEOPACKAGE FEATUREINFO TEMPLATE GENERATOR")
    logger.info("=" * 80)
    logger.info(f"Log file: {log_file}")
    logger.info("")

    try:
        settings = load_settings(load_config(config_path))
        if output_dir is None:
            output_dir = settings['output_dir']

        written = []
        with acquire_geopackage(gpkg_url, gpkg_path, settings) as gpkg_file:
            geopackage = open_geopackage(gpkg_file)
            try:
                geom_columns = get_geometry_columns(geopackage)
                layers = get_layers(geopackage)
                logger.info("")

                for layer in layers:
                    columns = get_layer_columns(geopackage, layer)
                    document = generate_html_for_layer(
                        layer, columns, geom_columns,
                        template_name=settings['template_name']
                    )
                    written.append(write_html_file(layer, document, output_dir))
            finally:
                geopackage.close()

        total_execution_time = time.time() - workflow_start_time

        logger.info("")
        logger.info("✓ WORKFLOW COMPLETE")
        logger.info(f"✓ {len(written)} templates written to: {output_dir}")
        logger.info(f"✓ Total execution time: {total_execution_time:.2f} seconds")
        logger.info("")

        return written

    except Exception as e:
        elapsed_time = time.time() - workflow_start_time

        logger.error("")
        logger.error("=" * 80)
        logger.error("✗ WORKFLOW FAILED")
        logger.error("=" * 80)
        logger.error(f"Error: {str(e)}", exc_info=True)
        logger.error(f"Workflow failed after {elapsed_time:.2f} seconds")
        logger.error(f"See log file for details: {log_file}")
        logger.error("=" * 80)
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gpkg-featureinfo',
        description='Generate MapServer GetFeatureInfo HTML templates from a GeoPackage.'
    )
    parser.add_argument(
        '--gpkg-url', '--gpkgurl', dest='gpkg_url', default='',
        help='URL pointing to a geopackage (https://example.com/geopackage.gpkg)'
    )
    parser.add_argument(
        '--gpkg-path', '--gpkgpath', dest='gpkg_path', default='',
        help='Path pointing to a geopackage (./geopackage.gpkg)'
    )
    parser.add_argument(
        '--output-dir', dest='output_dir', default=None,
        help='Directory for the generated HTML files (default: ./output)'
    )
    parser.add_argument(
        '--log-dir', dest='log_dir', type=Path, default=None,
        help='Directory for log files (default: ./logs)'
    )
    return parser


def cli(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        written = main(args.gpkg_url, args.gpkg_path, args.output_dir, args.log_dir)
    except UsageError as e:
        # Exits with status 2 and the usage message
        parser.error(str(e))

    return 0 if written is not None else 1


if __name__ == "__main__":
    sys.exit(cli())
