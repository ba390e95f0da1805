# -*- coding: utf-8 -*-
"""Asset import command.

Flattens every feature of a file into a point asset and writes the
deduplicated asset rows (and optionally the published "assets" layer).
"""

import argparse
import logging
from pathlib import Path

from laporinfra_lib.commands.layer import add_crs_arguments
from laporinfra_lib.errors import GeoImportException
from laporinfra_lib.interface import GeodataImport
from laporinfra_lib.io import dumps_json
from laporinfra_lib.io import save_json
from laporinfra_lib.records.models import FieldMapping

logger = logging.getLogger(__name__)


def assets(args: list[str]) -> int:
    """Entry point for the assets command."""
    parser = argparse.ArgumentParser(
        prog="laporinfra assets",
        description="Import the features of a file as point assets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  laporinfra assets -i jembatan.geojson
  laporinfra assets -i jalan.zip --crs EPSG:32749 --code-field KODE_RUAS
  laporinfra assets -i jalan.zip -o aset.json --layer-output aset_layer.json

Output:
  A JSON list of {"code", "name", "category", "latitude", "longitude",
  "keterangan", "status"} rows, one per unique asset code.

Notes:
  - Lines and polygons become their centroid; their length or area is
    appended to the description
  - Features without coordinates are skipped and reported
  - Codes that occur twice keep the last feature
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
    parser.add_argument(
        "--layer-output",
        type=Path,
        default=None,
        help="Also write the assets as the published point layer",
    )
    add_crs_arguments(parser)

    defaults = FieldMapping()
    parser.add_argument("--code-field", default=defaults.code)
    parser.add_argument("--name-field", default=defaults.name)
    parser.add_argument("--category-field", default=defaults.category)
    parser.add_argument("--description-field", default=defaults.description)
    parser.add_argument(
        "--minify",
        action="store_true",
        help="Omit indentation for compact output",
    )

    parsed_args = parser.parse_args(args)

    if not parsed_args.input_file.exists():
        logger.error("Error: Input file not found: %s", parsed_args.input_file)
        return 1

    mapping = FieldMapping(
        code=parsed_args.code_field,
        name=parsed_args.name_field,
        category=parsed_args.category_field,
        description=parsed_args.description_field,
    )

    job = GeodataImport()
    try:
        job.load_file(parsed_args.input_file)
        job.build_assets(
            crs=parsed_args.crs, custom_crs=parsed_args.custom_crs, mapping=mapping
        )
    except GeoImportException as e:
        logger.error("Error: %s", e)  # noqa: TRY400
        return 1

    for issue in job.issues:
        logger.warning("%s", issue)

    saved: list = []
    published: list = []
    job.save_assets(saved.extend, publish=published.append)

    if parsed_args.output_file is None:
        print(dumps_json(saved, minify=parsed_args.minify))  # noqa: T201
    else:
        save_json(saved, parsed_args.output_file, minify=parsed_args.minify)
        logger.info("%d asset(s) -> %s", len(saved), parsed_args.output_file)

    if parsed_args.layer_output is not None:
        save_json(published[0], parsed_args.layer_output, minify=parsed_args.minify)
        logger.info("Asset layer -> %s", parsed_args.layer_output)

    return 0
