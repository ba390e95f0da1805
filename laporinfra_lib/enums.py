# -*- coding: utf-8 -*-
"""Enumerations for the geodata import pipeline.

This module contains all enumerations used by laporinfra_lib, including
supported file types, coordinate reference systems, asset categories and
the stages of an import run.
"""

from enum import Enum

from laporinfra_lib.constants import AREA_LABEL
from laporinfra_lib.constants import LENGTH_LABEL
from laporinfra_lib.constants import MSG_EMPTY_FEATURE_COLLECTION
from laporinfra_lib.constants import MSG_NO_FEATURE_COLLECTION
from laporinfra_lib.constants import MSG_NO_IMPORTABLE_FEATURES
from laporinfra_lib.constants import MSG_SHAPEFILE_NOT_ZIPPED
from laporinfra_lib.constants import MSG_UNREADABLE_FILE
from laporinfra_lib.constants import MSG_UNSUPPORTED_FORMAT


class FileExtension(str, Enum):
    """File extensions recognized by the importer (with dot).

    Attributes:
        GEOJSON: GeoJSON file extension
        JSON: Plain JSON file extension (parsed as GeoJSON)
        ZIP: Zipped Shapefile bundle
        SHP: Shapefile geometry part
        SHX: Shapefile index part
        DBF: Shapefile attribute table part
        PRJ: Shapefile projection part
        CPG: Shapefile code page part
    """

    GEOJSON = ".geojson"
    JSON = ".json"
    ZIP = ".zip"
    SHP = ".shp"
    SHX = ".shx"
    DBF = ".dbf"
    PRJ = ".prj"
    CPG = ".cpg"


class InputFormat(str, Enum):
    """Parsing strategy selected from the file extension.

    Attributes:
        GEOJSON: UTF-8 JSON text holding GeoJSON
        SHAPEFILE_ZIP: Zip archive holding one or more Shapefiles
        SHAPEFILE_PART: A bare Shapefile component (rejected)
    """

    GEOJSON = "geojson"
    SHAPEFILE_ZIP = "shapefile_zip"
    SHAPEFILE_PART = "shapefile_part"

    @classmethod
    def from_extension(cls, ext: str) -> "InputFormat | None":
        """Get the input format from a file extension.

        Args:
            ext: File extension (with or without dot, case-insensitive)

        Returns:
            InputFormat or None if not recognized
        """
        ext_lower = "." + ext.lower().lstrip(".")
        mapping = {
            FileExtension.GEOJSON.value: cls.GEOJSON,
            FileExtension.JSON.value: cls.GEOJSON,
            FileExtension.ZIP.value: cls.SHAPEFILE_ZIP,
            FileExtension.SHP.value: cls.SHAPEFILE_PART,
            FileExtension.DBF.value: cls.SHAPEFILE_PART,
            FileExtension.PRJ.value: cls.SHAPEFILE_PART,
        }
        return mapping.get(ext_lower)


class BuiltinCRS(str, Enum):
    """Coordinate reference systems that can actually be transformed.

    Attributes:
        WGS84: Geographic WGS84 (degrees)
        WEB_MERCATOR: Pseudo/Web Mercator (metres)
        UTM_49S: UTM zone 49 south on WGS84 (metres)
    """

    WGS84 = "EPSG:4326"
    WEB_MERCATOR = "EPSG:3857"
    UTM_49S = "EPSG:32749"

    @property
    def label(self) -> str:
        """Human readable label shown in the CRS selector."""
        return {
            BuiltinCRS.WGS84: "EPSG:4326 (WGS84 - derajat)",
            BuiltinCRS.WEB_MERCATOR: "EPSG:3857 (Web Mercator - meter)",
            BuiltinCRS.UTM_49S: "EPSG:32749 (UTM Zona 49S - meter)",
        }[self]

    @classmethod
    def describe(cls, crs_id: str) -> str:
        """Label of a built-in CRS; any other identifier as-is."""
        try:
            return cls(crs_id).label
        except ValueError:
            return crs_id

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


class GeometryType(str, Enum):
    """GeoJSON geometry type tags."""

    POINT = "Point"
    MULTI_POINT = "MultiPoint"
    LINE_STRING = "LineString"
    MULTI_LINE_STRING = "MultiLineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"


class AssetCategory(str, Enum):
    """Infrastructure asset categories.

    Attributes:
        JALAN: Road
        JEMBATAN: Bridge
        IRIGASI: Irrigation
        DRAINASE: Drainage
        SUNGAI: River
        LAINNYA: Anything else
    """

    JALAN = "jalan"
    JEMBATAN = "jembatan"
    IRIGASI = "irigasi"
    DRAINASE = "drainase"
    SUNGAI = "sungai"
    LAINNYA = "lainnya"

    @classmethod
    def normalize(cls, value: object) -> "AssetCategory":
        """Map an arbitrary property value onto a category.

        Matching is case-insensitive and ignores surrounding whitespace.
        Anything unrecognized (including ``None``) maps to ``LAINNYA``.

        Args:
            value: Raw property value

        Returns:
            The matching AssetCategory
        """
        if value is None:
            return cls.LAINNYA
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.LAINNYA


class AssetStatus(str, Enum):
    """Lifecycle status of an asset record."""

    AKTIF = "aktif"


class ImportStage(str, Enum):
    """Stages of an import run, in pipeline order."""

    IDLE = "idle"
    PARSING = "parsing"
    NORMALIZING = "normalizing"
    CRS_SELECTION = "crs_selection"
    REPROJECTING = "reprojecting"
    MAPPING = "mapping"
    MEASURING = "measuring"
    BUILDING_RECORDS = "building_records"
    DONE = "done"
    FAILED = "failed"


class RawShape(str, Enum):
    """Recognized shapes of a parsed geodata blob.

    Attributes:
        FEATURE_COLLECTION: A GeoJSON FeatureCollection
        FEATURE: A single GeoJSON Feature
        LAYER_MAPPING: An object whose values hold FeatureCollections
            (the shape produced by Shapefile-to-GeoJSON conversion)
        UNRECOGNIZED: Anything else
    """

    FEATURE_COLLECTION = "feature_collection"
    FEATURE = "feature"
    LAYER_MAPPING = "layer_mapping"
    UNRECOGNIZED = "unrecognized"

    @property
    def geojson_type(self) -> str | None:
        """The GeoJSON ``type`` member identifying this shape, if any."""
        return {
            RawShape.FEATURE_COLLECTION: "FeatureCollection",
            RawShape.FEATURE: "Feature",
        }.get(self)


class Severity(str, Enum):
    """Severity level for import issues.

    Attributes:
        ERROR: Terminal error, the import was aborted
        WARNING: A single feature was skipped or degraded
    """

    ERROR = "error"
    WARNING = "warning"


class ErrorKind(str, Enum):
    """Distinguishable kinds of import problems."""

    UNSUPPORTED_FORMAT = "unsupported_format"
    SHAPEFILE_NOT_ZIPPED = "shapefile_not_zipped"
    UNREADABLE_FILE = "unreadable_file"
    NO_FEATURE_COLLECTION = "no_feature_collection"
    EMPTY_FEATURE_COLLECTION = "empty_feature_collection"
    NO_IMPORTABLE_FEATURES = "no_importable_features"
    FEATURE_SKIPPED = "feature_skipped"
    GEOMETRY_INVALID = "geometry_invalid"
    REPROJECTION_FAILED = "reprojection_failed"

    @property
    def default_message(self) -> str | None:
        """User-facing message for terminal kinds (None for per-feature kinds)."""
        return {
            ErrorKind.UNSUPPORTED_FORMAT: MSG_UNSUPPORTED_FORMAT,
            ErrorKind.SHAPEFILE_NOT_ZIPPED: MSG_SHAPEFILE_NOT_ZIPPED,
            ErrorKind.UNREADABLE_FILE: MSG_UNREADABLE_FILE,
            ErrorKind.NO_FEATURE_COLLECTION: MSG_NO_FEATURE_COLLECTION,
            ErrorKind.EMPTY_FEATURE_COLLECTION: MSG_EMPTY_FEATURE_COLLECTION,
            ErrorKind.NO_IMPORTABLE_FEATURES: MSG_NO_IMPORTABLE_FEATURES,
        }.get(self)


class MeasurementKind(str, Enum):
    """What a measurement describes."""

    LENGTH = "length"
    AREA = "area"

    @property
    def label(self) -> str:
        """Indonesian label used in asset descriptions."""
        return LENGTH_LABEL if self is MeasurementKind.LENGTH else AREA_LABEL


class MeasurementUnit(str, Enum):
    """Display units for measurements."""

    METER = "m"
    KILOMETER = "km"
    SQUARE_METER = "m²"
    HECTARE = "ha"
