# -*- coding: utf-8 -*-
"""Constants used throughout the laporinfra_lib library.

This module centralizes all constant values to ensure consistency
and avoid magic numbers/strings scattered across the codebase.
"""

# -----------------------------------------------------------------------------
# File Encodings
# -----------------------------------------------------------------------------

#: Encoding used for JSON / GeoJSON files
JSON_ENCODING = "utf-8"

#: Default encoding for Shapefile attribute tables (.dbf) without a .cpg
DBF_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# Coordinate Reference Systems
# -----------------------------------------------------------------------------

#: WGS84 geographic degrees, the CRS of every map-facing output
WGS84 = "EPSG:4326"

#: Value of the CRS selector meaning "use the free-text EPSG code"
CUSTOM_CRS_SELECTION = "custom"

#: Absolute easting/northing above which a sample "looks projected"
PROJECTED_MAGNITUDE_THRESHOLD: float = 1000.0

#: Decimal precision for GeoJSON coordinates (WGS84)
GEOJSON_COORDINATE_PRECISION: int = 7

# -----------------------------------------------------------------------------
# Import Pipeline
# -----------------------------------------------------------------------------

#: Number of features inspected when discovering attribute field names
FIELD_SAMPLE_SIZE: int = 50

#: Number of rows shown in the import preview
PREVIEW_ROWS: int = 5

#: Number of rows / columns shown in the raw attribute table preview
ATTRIBUTE_TABLE_ROWS: int = 10
ATTRIBUTE_TABLE_MAX_COLUMNS: int = 40

#: Minimum number of features between two progress reports
PROGRESS_MIN_INTERVAL: int = 20

#: Progress is reported roughly every 1/N of the features
PROGRESS_STEPS: int = 20

#: Number of asset records handed to the asset sink per call
ASSET_BATCH_SIZE: int = 500

#: Layer key under which imported assets are published as a point layer
ASSETS_LAYER_KEY = "assets"
ASSETS_LAYER_NAME = "Assets"

#: Fallback asset name when no name-like property exists
DEFAULT_ASSET_NAME = "Aset"

#: Default layer key / name when the caller does not provide one
DEFAULT_LAYER_KEY = "layer_key"
DEFAULT_LAYER_NAME = "Layer"

# -----------------------------------------------------------------------------
# Measurement
# -----------------------------------------------------------------------------

#: Lengths at or above this many metres are reported in kilometres
METERS_PER_KILOMETER: float = 1000.0

#: Areas at or above this many square metres are reported in hectares
SQUARE_METERS_PER_HECTARE: float = 10_000.0

#: Separator between a base description and a measurement suffix
DESCRIPTION_SEPARATOR = " — "

#: Labels used when appending a measurement to a description
LENGTH_LABEL = "Panjang"
AREA_LABEL = "Luas"

# -----------------------------------------------------------------------------
# Property Fallbacks
# -----------------------------------------------------------------------------

#: Properties consulted, in order, after the mapped field is missing
CODE_FALLBACK_FIELDS: tuple[str, ...] = ("kode", "id")
NAME_FALLBACK_FIELDS: tuple[str, ...] = ("nama", "title")
CATEGORY_FALLBACK_FIELDS: tuple[str, ...] = ("kategori",)
DESCRIPTION_FALLBACK_FIELDS: tuple[str, ...] = ("alamat", "lokasi")

# -----------------------------------------------------------------------------
# User-facing Messages
# -----------------------------------------------------------------------------

MSG_UNSUPPORTED_FORMAT = "Format tidak didukung"
MSG_SHAPEFILE_NOT_ZIPPED = "Shapefile harus dalam .zip berisi .shp, .dbf, dan .prj"
MSG_UNREADABLE_FILE = "Gagal membaca file"
MSG_NO_FEATURE_COLLECTION = "Tidak ada FeatureCollection"
MSG_EMPTY_FEATURE_COLLECTION = "FeatureCollection kosong"
MSG_NO_IMPORTABLE_FEATURES = "Tidak ada fitur yang dapat diimpor"

#: Per-feature issue messages
MSG_GEOMETRY_INVALID = "Geometri tidak valid dan diabaikan"
MSG_FEATURE_UNREADABLE = "Fitur tidak dapat dibaca"
