# -*- coding: utf-8 -*-
"""Layer import command.

Stores a whole GeoJSON / zipped Shapefile as one layer record and writes
the record as JSON.
"""

import argparse
import logging
from pathlib import Path

from laporinfra_lib.constants import CUSTOM_CRS_SELECTION
from laporinfra_lib.constants import WGS84
from laporinfra_lib.enums import BuiltinCRS
from laporinfra_lib.errors import GeoImportException
from laporinfra_lib.io import dumps_json
from laporinfra_lib.io import import_layer
from laporinfra_lib.io import save_json

logger = logging.getLogger(__name__)


def add_crs_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--crs",
        default=None,
        help=(
            f"Source CRS: {', '.join(crs.label for crs in BuiltinCRS)} or "
            f"'{CUSTOM_CRS_SELECTION}' (default: guessed from coordinates)"
        ),
    )
    parser.add_argument(
        "--custom-crs",
        default=None,
        help=f"EPSG code used with --crs {CUSTOM_CRS_SELECTION}",
    )


def layer(args: list[str]) -> int:
    """Entry point for the layer command."""
    parser = argparse.ArgumentParser(
        prog="laporinfra layer",
        description="Import a GeoJSON or zipped Shapefile as a map layer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  laporinfra layer -i jalan.geojson -k jalan -n "Jaringan Jalan"
  laporinfra layer -i irigasi.zip -k irigasi --crs EPSG:32749 -o irigasi.json
  laporinfra layer -i batas.zip --crs custom --custom-crs 23833
  laporinfra layer -i batas.zip --keep-source-crs

Output:
  {"key", "name", "geometry_type", "data": {"featureCollection", "crs"}}

Notes:
  - Coordinates are reprojected to WGS84 unless --keep-source-crs is given
  - A custom EPSG code cannot be reprojected; the layer keeps that CRS tag
  - Only the first layer of a multi-layer archive is imported
""",
    )

    parser.add_argument(
        "-i",
        "--input-file",
        type=Path,
        required=True,
        help="Input .geojson, .json or .zip file",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        type=Path,
        default=None,
        help="Output JSON file path (prints to stdout if not specified)",
    )
    parser.add_argument("-k", "--key", default=None, help="Layer key")
    parser.add_argument("-n", "--name", default=None, help="Layer display name")
    add_crs_arguments(parser)
    parser.add_argument(
        "--keep-source-crs",
        action="store_true",
        help="Store the coordinates in the source CRS",
    )
    parser.add_argument(
        "--minify",
        action="store_true",
        help="Omit indentation for compact output",
    )

    parsed_args = parser.parse_args(args)

    if not parsed_args.input_file.exists():
        logger.error("Error: Input file not found: %s", parsed_args.input_file)
        return 1

    stem = parsed_args.input_file.stem
    try:
        record = import_layer(
            parsed_args.input_file,
            parsed_args.key or stem,
            parsed_args.name or stem,
            crs=parsed_args.crs,
            custom_crs=parsed_args.custom_crs,
            target_crs=None if parsed_args.keep_source_crs else WGS84,
        )
    except GeoImportException as e:
        logger.error("Error: %s", e)  # noqa: TRY400
        return 1

    if parsed_args.output_file is None:
        print(dumps_json(record, minify=parsed_args.minify))  # noqa: T201
    else:
        save_json(record, parsed_args.output_file, minify=parsed_args.minify)
        logger.info(
            "Layer %s (%s) -> %s",
            record.key,
            record.geometry_type,
            parsed_args.output_file,
        )

    return 0
