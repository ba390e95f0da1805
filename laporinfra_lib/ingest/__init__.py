# -*- coding: utf-8 -*-
"""Reading and normalizing uploaded geodata."""

from laporinfra_lib.ingest.fields import extract_field_names
from laporinfra_lib.ingest.normalize import classify_raw
from laporinfra_lib.ingest.normalize import normalize
from laporinfra_lib.ingest.normalize import parse_geodata
from laporinfra_lib.ingest.reader import read_geodata
from laporinfra_lib.ingest.reader import read_geojson
from laporinfra_lib.ingest.reader import read_shapefile_zip

__all__ = [
    "classify_raw",
    "extract_field_names",
    "normalize",
    "parse_geodata",
    "read_geodata",
    "read_geojson",
    "read_shapefile_zip",
]
