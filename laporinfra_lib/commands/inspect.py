# -*- coding: utf-8 -*-
"""Inspect command: what an import would see, without building records."""

import argparse
import logging
from pathlib import Path

from laporinfra_lib.commands.layer import add_crs_arguments
from laporinfra_lib.enums import BuiltinCRS
from laporinfra_lib.errors import GeoImportException
from laporinfra_lib.interface import GeodataImport

logger = logging.getLogger(__name__)


def inspect(args: list[str]) -> int:
    """Entry point for the inspect command."""
    parser = argparse.ArgumentParser(
        prog="laporinfra inspect",
        description="Show feature count, suggested CRS, fields and a preview",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  laporinfra inspect -i jalan.geojson
  laporinfra inspect -i jalan.zip --crs EPSG:32749 --rows 10
""",
    )

    parser.add_argument(
        "-i",
        "--input-file",
        type=Path,
        required=True,
        help="Input .geojson, .json or .zip file",
    )
    add_crs_arguments(parser)
    parser.add_argument(
        "--rows",
        type=int,
        default=5,
        help="Number of features shown in the preview",
    )

    parsed_args = parser.parse_args(args)

    if not parsed_args.input_file.exists():
        logger.error("Error: Input file not found: %s", parsed_args.input_file)
        return 1

    job = GeodataImport()
    try:
        fc = job.load_file(parsed_args.input_file)
        rows = job.preview(
            crs=parsed_args.crs, custom_crs=parsed_args.custom_crs, n=parsed_args.rows
        )
    except GeoImportException as e:
        logger.error("Error: %s", e)  # noqa: TRY400
        return 1

    types = ", ".join(f"{k}={v}" for k, v in fc.geometry_types().items())
    print(f"File:          {job.source_name}")  # noqa: T201
    print(f"Features:      {len(fc.features)} ({types or 'no geometry'})")  # noqa: T201
    using = job.resolve_crs(parsed_args.crs, parsed_args.custom_crs)
    suggested = BuiltinCRS.describe(job.suggested_crs) if job.suggested_crs else "-"
    print(f"Suggested CRS: {suggested}")  # noqa: T201
    print(f"Using CRS:     {BuiltinCRS.describe(using)}")  # noqa: T201
    print(f"Fields:        {', '.join(job.field_names) or '-'}")  # noqa: T201
    print()  # noqa: T201
    for row in rows:
        print(  # noqa: T201
            f"{row.index:>3}  {row.code:<15} {row.name:<30} {row.category:<10} "
            f"{row.latitude:.6f}, {row.longitude:.6f}"
        )

    return 0
