# -*- coding: utf-8 -*-
"""Read uploaded geodata files into raw GeoJSON-like objects.

Supported inputs:
- ``.geojson`` / ``.json``: parsed as-is (any GeoJSON object)
- ``.zip``: every Shapefile in the archive, as a mapping of layer name to
  FeatureCollection (one entry per ``.shp``, even for a single layer)

A Shapefile part uploaded on its own (``.shp``, ``.dbf``, ``.prj``) is
rejected: the geometry and the attributes live in different members.
"""

from __future__ import annotations

import codecs
import io
import logging
import struct
import zipfile
import zlib
from pathlib import Path
from pathlib import PurePosixPath
from typing import Any

import orjson
import shapefile
from pyproj import CRS
from pyproj import Transformer
from pyproj.exceptions import CRSError

from laporinfra_lib.constants import DBF_ENCODING
from laporinfra_lib.constants import WGS84
from laporinfra_lib.crs.transform import transform_feature_collection
from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.enums import FileExtension
from laporinfra_lib.enums import InputFormat
from laporinfra_lib.errors import UnsupportedInputError
from laporinfra_lib.geometry.models import Feature
from laporinfra_lib.geometry.models import FeatureCollection

logger = logging.getLogger(__name__)


def read_geodata(path: Path | str, *, encoding: str = DBF_ENCODING) -> Any:
    """Read a geodata file from disk.

    Args:
        path: Path to a ``.geojson``, ``.json`` or ``.zip`` file
        encoding: Attribute encoding for Shapefiles without a ``.cpg``

    Returns:
        The parsed GeoJSON object, or ``{layer_name: FeatureCollection}``
        for a zipped Shapefile

    Raises:
        UnsupportedInputError: Wrong extension, bare Shapefile part, or a
            file that cannot be parsed
    """
    path = Path(path)

    match InputFormat.from_extension(path.suffix):
        case InputFormat.GEOJSON:
            return read_geojson(path.read_bytes())
        case InputFormat.SHAPEFILE_ZIP:
            return read_shapefile_zip(path.read_bytes(), encoding=encoding)
        case InputFormat.SHAPEFILE_PART:
            raise UnsupportedInputError(kind=ErrorKind.SHAPEFILE_NOT_ZIPPED)
        case _:
            raise UnsupportedInputError(kind=ErrorKind.UNSUPPORTED_FORMAT)


def read_geojson(data: bytes | str) -> Any:
    # GIS exports on Windows often start with a UTF-8 byte order mark
    if isinstance(data, str):
        data = data.removeprefix("\ufeff")
    else:
        data = data.removeprefix(codecs.BOM_UTF8)
    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        logger.warning("Invalid JSON: %s", e)
        raise UnsupportedInputError(kind=ErrorKind.UNREADABLE_FILE) from e


# -----------------------------------------------------------------------------
# Shapefile archives
# -----------------------------------------------------------------------------


def _resolve_encoding(cpg: bytes | None, default: str) -> str:
    """Codec named by a ``.cpg`` member ("UTF-8", "1252", ...)."""
    if not cpg:
        return default
    name = cpg.decode("ascii", errors="ignore").strip()
    if name.isdigit():
        name = f"cp{name}"
    try:
        return codecs.lookup(name).name
    except LookupError:
        logger.warning("Unknown .cpg encoding %r; using %s", name, default)
        return default


def _source_crs(prj: bytes | None) -> CRS | None:
    if not prj:
        return None
    try:
        return CRS.from_wkt(prj.decode("utf-8", errors="ignore"))
    except CRSError as e:
        logger.warning("Ignoring unreadable .prj: %s", e)
        return None


def _shape_geometry(shape: shapefile.Shape, index: int) -> dict[str, Any] | None:
    if shape.shapeType == shapefile.NULL:
        return None
    try:
        return shape.__geo_interface__
    except Exception as e:  # noqa: BLE001
        logger.warning("Shape #%d has no GeoJSON geometry: %s", index + 1, e)
        return None


def _read_layer(
    parts: dict[str, bytes], name: str, encoding: str
) -> FeatureCollection:
    """Read one ``.shp`` (plus its sibling members) into a collection."""
    streams = {
        ext: io.BytesIO(parts[f".{ext}"])
        for ext in ("shp", "shx", "dbf")
        if f".{ext}" in parts
    }
    encoding = _resolve_encoding(parts.get(FileExtension.CPG.value), encoding)

    features: list[Feature] = []
    with shapefile.Reader(
        **streams, encoding=encoding, encodingErrors="replace"
    ) as reader:
        if "dbf" in streams:
            for index, item in enumerate(reader.iterShapeRecords()):
                features.append(
                    Feature(
                        geometry=_shape_geometry(item.shape, index),
                        properties=item.record.as_dict(),
                    )
                )
        else:
            logger.info("Layer %s has no .dbf; features carry no attributes", name)
            for index, shape in enumerate(reader.iterShapes()):
                features.append(Feature(geometry=_shape_geometry(shape, index)))

    fc = FeatureCollection(features=features)

    source = _source_crs(parts.get(FileExtension.PRJ.value))
    target = CRS.from_user_input(WGS84)
    if source is not None and source.to_epsg() != target.to_epsg():
        logger.info("Layer %s: converting from %s to WGS84", name, source.name)
        transformer = Transformer.from_crs(source, target, always_xy=True)
        fc = transform_feature_collection(fc, transformer)

    logger.info("Layer %s: %d feature(s)", name, len(fc.features))
    return fc


def read_shapefile_zip(
    data: bytes, *, encoding: str = DBF_ENCODING
) -> dict[str, FeatureCollection]:
    """Read every Shapefile of a zip archive.

    Args:
        data: Archive content
        encoding: Attribute encoding for layers without a ``.cpg``

    Returns:
        Mapping of layer name (``.shp`` stem) to FeatureCollection, in
        archive order

    Raises:
        UnsupportedInputError: Corrupt archive, or no readable layer
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise UnsupportedInputError(kind=ErrorKind.UNREADABLE_FILE) from e

    # Members grouped by path without extension: {"roads": {".shp": b"..."}}
    groups: dict[str, dict[str, bytes]] = {}
    damaged: set[str] = set()
    with archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            member = PurePosixPath(info.filename)
            if member.name.startswith("."):
                continue
            stem = str(member.with_suffix(""))
            try:
                content = archive.read(info)
            except (zipfile.BadZipFile, zlib.error, EOFError) as e:
                logger.warning("Corrupt archive member %s: %s", info.filename, e)
                damaged.add(stem)
                continue
            groups.setdefault(stem, {})[member.suffix.lower()] = content

    layers: dict[str, FeatureCollection] = {}
    for stem, parts in groups.items():
        if FileExtension.SHP.value not in parts:
            continue
        name = PurePosixPath(stem).name
        if stem in damaged:
            logger.warning("Skipping layer %s: damaged archive member", name)
            continue
        try:
            layers[name] = _read_layer(parts, name, encoding)
        except (shapefile.ShapefileException, struct.error, ValueError) as e:
            logger.warning("Skipping unreadable layer %s: %s", name, e)

    if not layers:
        raise UnsupportedInputError(kind=ErrorKind.UNREADABLE_FILE)
    return layers
