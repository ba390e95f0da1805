# -*- coding: utf-8 -*-
"""LaporInfra geodata import library.

Turns uploaded GeoJSON files and zipped Shapefiles into map layers or
point assets, reprojected to WGS84.

Usage:
    # Whole file as a layer
    from laporinfra_lib import import_layer
    layer = import_layer(Path("irigasi.zip"), "irigasi", "Jaringan Irigasi")

    # One asset per feature, with a preview first
    from laporinfra_lib import FieldMapping, GeodataImport
    job = GeodataImport()
    job.load_file(Path("jalan.geojson"))
    for row in job.preview(crs="EPSG:32749"):
        print(row.code, row.latitude, row.longitude)
    assets = job.build_assets(crs="EPSG:32749", mapping=FieldMapping(code="KODE"))
"""

__version__ = "0.1.0"

# Constants
from laporinfra_lib.constants import WGS84

# Enums
from laporinfra_lib.enums import AssetCategory
from laporinfra_lib.enums import AssetStatus
from laporinfra_lib.enums import BuiltinCRS
from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.enums import GeometryType
from laporinfra_lib.enums import ImportStage
from laporinfra_lib.enums import Severity

# Errors
from laporinfra_lib.errors import GeoImportException
from laporinfra_lib.errors import ImportIssue
from laporinfra_lib.errors import NoGeodataError
from laporinfra_lib.errors import NoImportableFeaturesError
from laporinfra_lib.errors import UnsupportedInputError

# Pipeline
from laporinfra_lib.crs import BUILTIN_CRS
from laporinfra_lib.crs import CRSRegistry
from laporinfra_lib.crs import guess_crs
from laporinfra_lib.crs import reproject
from laporinfra_lib.crs import resolve_crs
from laporinfra_lib.geometry import Feature
from laporinfra_lib.geometry import FeatureCollection
from laporinfra_lib.geometry import Measurement
from laporinfra_lib.geometry import centroid
from laporinfra_lib.geometry import measure
from laporinfra_lib.ingest import extract_field_names
from laporinfra_lib.ingest import normalize
from laporinfra_lib.ingest import read_geodata
from laporinfra_lib.interface import GeodataImport
from laporinfra_lib.io import import_assets
from laporinfra_lib.io import import_layer
from laporinfra_lib.io import save_json
from laporinfra_lib.records import AssetRecord
from laporinfra_lib.records import FieldMapping
from laporinfra_lib.records import LayerPayload
from laporinfra_lib.records import LayerRecord
from laporinfra_lib.records import PreviewRow
from laporinfra_lib.records import layer_to_wgs84
from laporinfra_lib.records import preview

__all__ = [
    "BUILTIN_CRS",
    "WGS84",
    "AssetCategory",
    "AssetRecord",
    "AssetStatus",
    "BuiltinCRS",
    "CRSRegistry",
    "ErrorKind",
    "Feature",
    "FeatureCollection",
    "FieldMapping",
    "GeoImportException",
    "GeodataImport",
    "GeometryType",
    "ImportIssue",
    "ImportStage",
    "LayerPayload",
    "LayerRecord",
    "Measurement",
    "NoGeodataError",
    "NoImportableFeaturesError",
    "PreviewRow",
    "Severity",
    "UnsupportedInputError",
    "__version__",
    "centroid",
    "extract_field_names",
    "guess_crs",
    "import_assets",
    "import_layer",
    "layer_to_wgs84",
    "measure",
    "normalize",
    "preview",
    "read_geodata",
    "reproject",
    "resolve_crs",
    "save_json",
]
