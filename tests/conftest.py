# -*- coding: utf-8 -*-
"""Pytest configuration and fixtures.

Sample collections use real coordinates around Madiun / Ngawi (East Java),
which lie in UTM zone 49S.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path

import orjson
import pytest
import shapefile
from pyproj import CRS
from pyproj import Transformer
from pyproj.enums import WktVersion

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


# =============================================================================
# Coordinates
# =============================================================================

#: (lon, lat) pairs in WGS84 degrees
MADIUN = (111.5236, -7.6298)
NGAWI = (111.4420, -7.4040)
CARUBAN = (111.6540, -7.5480)


def to_utm49s(lon: float, lat: float) -> tuple[float, float]:
    transformer = Transformer.from_crs("EPSG:4326", "EPSG:32749", always_xy=True)
    return transformer.transform(lon, lat)


# =============================================================================
# Raw GeoJSON Fixtures
# =============================================================================


def point_feature(lon, lat, **properties) -> dict:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [lon, lat]},
        "properties": properties,
    }


@pytest.fixture
def points_raw() -> dict:
    """Three WGS84 points with asset-like properties."""
    return {
        "type": "FeatureCollection",
        "features": [
            point_feature(*MADIUN, code="JMB-01", name="Jembatan Madiun", category="jembatan"),
            point_feature(*NGAWI, kode="JLN-02", nama="Jalan Ngawi", kategori="Jalan"),
            point_feature(*CARUBAN, id=3, title="Saluran Caruban", category="kanal"),
        ],
    }


@pytest.fixture
def utm_points_raw() -> dict:
    """The same three points, in UTM 49S metres."""
    return {
        "type": "FeatureCollection",
        "features": [
            point_feature(*to_utm49s(*MADIUN), code="JMB-01", name="Jembatan Madiun"),
            point_feature(*to_utm49s(*NGAWI), code="JLN-02", name="Jalan Ngawi"),
            point_feature(*to_utm49s(*CARUBAN), code="SAL-03", name="Saluran"),
        ],
    }


@pytest.fixture
def mixed_raw() -> dict:
    """One feature of every geometry shape, plus a geometry-less one."""
    return {
        "type": "FeatureCollection",
        "features": [
            point_feature(*MADIUN, code="P-1"),
            {
                "type": "Feature",
                "geometry": {
                    "type": "LineString",
                    "coordinates": [list(MADIUN), list(CARUBAN)],
                },
                "properties": {"code": "L-1", "name": "Ruas Madiun-Caruban"},
            },
            {
                "type": "Feature",
                "geometry": {
                    "type": "MultiPolygon",
                    "coordinates": [
                        [
                            [[111.50, -7.60], [111.51, -7.60], [111.51, -7.61], [111.50, -7.61], [111.50, -7.60]],
                            [[111.502, -7.602], [111.504, -7.602], [111.504, -7.604], [111.502, -7.602]],
                        ],
                        [
                            [[111.60, -7.50], [111.601, -7.50], [111.601, -7.501], [111.60, -7.50]],
                        ],
                    ],
                },
                "properties": {"code": "A-1", "keterangan": "Sawah"},
            },
            {
                "type": "Feature",
                "geometry": {
                    "type": "GeometryCollection",
                    "geometries": [
                        {"type": "Point", "coordinates": list(NGAWI)},
                        {"type": "LineString", "coordinates": [list(NGAWI), list(MADIUN)]},
                    ],
                },
                "properties": {"code": "G-1"},
            },
            {"type": "Feature", "geometry": None, "properties": {"code": "N-1"}},
        ],
    }


@pytest.fixture
def geojson_file(tmp_path: Path, points_raw: dict) -> Path:
    path = tmp_path / "aset.geojson"
    path.write_bytes(orjson.dumps(points_raw))
    return path


@pytest.fixture
def utm_geojson_file(tmp_path: Path, utm_points_raw: dict) -> Path:
    path = tmp_path / "aset_utm.geojson"
    path.write_bytes(orjson.dumps(utm_points_raw))
    return path


# =============================================================================
# Shapefile Fixtures
# =============================================================================


def build_point_shapefile(
    points: list[tuple[float, float]],
    records: list[tuple[str, str]],
    *,
    prj: str | None = None,
    with_dbf: bool = True,
) -> dict[str, bytes]:
    """Write a point Shapefile in memory; returns ``{extension: bytes}``."""
    shp, shx, dbf = io.BytesIO(), io.BytesIO(), io.BytesIO()
    writer = shapefile.Writer(shp=shp, shx=shx, dbf=dbf, shapeType=shapefile.POINT)
    writer.field("code", "C", size=20)
    writer.field("name", "C", size=50)
    for (x, y), record in zip(points, records, strict=True):
        writer.point(x, y)
        writer.record(*record)
    writer.close()

    parts = {".shp": shp.getvalue(), ".shx": shx.getvalue()}
    if with_dbf:
        parts[".dbf"] = dbf.getvalue()
    if prj is not None:
        parts[".prj"] = prj.encode("ascii")
    return parts


def zip_layers(layers: dict[str, dict[str, bytes]]) -> bytes:
    """Zip ``{layer_name: {extension: bytes}}`` into an archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, parts in layers.items():
            for ext, data in parts.items():
                archive.writestr(f"{name}{ext}", data)
    return buffer.getvalue()


@pytest.fixture
def esri_wkt_utm49s() -> str:
    return CRS.from_epsg(32749).to_wkt(WktVersion.WKT1_ESRI)


@pytest.fixture
def shapefile_zip(tmp_path: Path) -> Path:
    """A single WGS84 point layer, without .prj."""
    parts = build_point_shapefile(
        [MADIUN, NGAWI],
        [("JMB-01", "Jembatan Madiun"), ("JLN-02", "Jalan Ngawi")],
    )
    path = tmp_path / "jembatan.zip"
    path.write_bytes(zip_layers({"jembatan": parts}))
    return path


@pytest.fixture
def utm_shapefile_zip(tmp_path: Path, esri_wkt_utm49s: str) -> Path:
    """A point layer stored in UTM 49S, with a .prj saying so."""
    parts = build_point_shapefile(
        [to_utm49s(*MADIUN)],
        [("JMB-01", "Jembatan Madiun")],
        prj=esri_wkt_utm49s,
    )
    path = tmp_path / "jembatan_utm.zip"
    path.write_bytes(zip_layers({"jembatan_utm": parts}))
    return path


@pytest.fixture
def multi_layer_zip(tmp_path: Path) -> Path:
    """Two layers: "jalan" first, "sungai" second."""
    path = tmp_path / "multi.zip"
    path.write_bytes(
        zip_layers(
            {
                "jalan": build_point_shapefile([MADIUN], [("JLN-01", "Jalan")]),
                "sungai": build_point_shapefile([NGAWI], [("SNG-01", "Sungai")]),
            }
        )
    )
    return path
