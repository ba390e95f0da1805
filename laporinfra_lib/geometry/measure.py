# -*- coding: utf-8 -*-
"""Centroids and real-world measurements of WGS84 geometries.

Lengths and areas are geodesic, computed on the WGS84 ellipsoid with
``pyproj.Geod`` over shapely geometries. Centroids are the arithmetic mean
of the vertices, which is what the asset map uses to place a non-point
feature.

Note: both functions expect coordinates in WGS84 degrees (GeoJSON order,
longitude first). Reproject first.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from pydantic import BaseModel
from pydantic import ConfigDict
from pyproj import Geod
from pyproj.exceptions import GeodError
from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import shape
from shapely.geometry.polygon import orient

from laporinfra_lib.constants import METERS_PER_KILOMETER
from laporinfra_lib.constants import SQUARE_METERS_PER_HECTARE
from laporinfra_lib.enums import MeasurementKind
from laporinfra_lib.enums import MeasurementUnit
from laporinfra_lib.geometry.models import LINEAL_TYPES
from laporinfra_lib.geometry.models import POLYGONAL_TYPES
from laporinfra_lib.geometry.models import AnyGeometry
from laporinfra_lib.geometry.models import Point
from laporinfra_lib.geometry.visitor import iter_positions

logger = logging.getLogger(__name__)

WGS84_GEOD = Geod(ellps="WGS84")


class Measurement(BaseModel):
    """A length or an area expressed in its display unit.

    Attributes:
        kind: LENGTH or AREA
        value: Magnitude in ``unit``
        unit: m / km for lengths, m² / ha for areas
    """

    model_config = ConfigDict(frozen=True)

    kind: MeasurementKind
    value: float
    unit: MeasurementUnit

    @classmethod
    def from_meters(cls, meters: float) -> Measurement:
        # Compared after rounding so that "1000 m" is never displayed
        if round(meters) >= METERS_PER_KILOMETER:
            return cls(
                kind=MeasurementKind.LENGTH,
                value=meters / METERS_PER_KILOMETER,
                unit=MeasurementUnit.KILOMETER,
            )
        return cls(
            kind=MeasurementKind.LENGTH, value=meters, unit=MeasurementUnit.METER
        )

    @classmethod
    def from_square_meters(cls, square_meters: float) -> Measurement:
        if round(square_meters) >= SQUARE_METERS_PER_HECTARE:
            return cls(
                kind=MeasurementKind.AREA,
                value=square_meters / SQUARE_METERS_PER_HECTARE,
                unit=MeasurementUnit.HECTARE,
            )
        return cls(
            kind=MeasurementKind.AREA,
            value=square_meters,
            unit=MeasurementUnit.SQUARE_METER,
        )

    @property
    def label(self) -> str:
        """Format as ``"850 m"``, ``"1.25 km"``, ``"420 m²"`` or ``"3.10 ha"``."""
        if self.unit in (MeasurementUnit.METER, MeasurementUnit.SQUARE_METER):
            return f"{self.value:.0f} {self.unit.value}"
        return f"{self.value:.2f} {self.unit.value}"

    @property
    def description(self) -> str:
        """Format as ``"Panjang: 1.25 km"`` / ``"Luas: 3.10 ha"``."""
        return f"{self.kind.label}: {self.label}"

    def __str__(self) -> str:
        return self.label


def centroid(geometry: AnyGeometry | None) -> tuple[float, float] | None:
    """Representative point of a geometry as ``(latitude, longitude)``.

    Note the axis swap: GeoJSON stores ``[lon, lat]``, the result is
    ``(lat, lon)``.

    Args:
        geometry: Any geometry in WGS84 degrees (or None)

    Returns:
        ``(lat, lon)``, or None for a missing geometry, a geometry without
        positions, or non-finite coordinates
    """
    if geometry is None:
        return None

    if isinstance(geometry, Point):
        lon, lat = geometry.coordinates[0], geometry.coordinates[1]
    else:
        positions = iter_positions(geometry)
        if not positions:
            return None
        mean = np.asarray([p[:2] for p in positions], dtype=float).mean(axis=0)
        lon, lat = float(mean[0]), float(mean[1])

    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    return (lat, lon)


def _to_shapely(geometry: AnyGeometry):
    return shape(geometry.model_dump(mode="json"))


def _oriented(polygonal):
    """Exterior rings counter-clockwise, holes clockwise."""
    if isinstance(polygonal, ShapelyMultiPolygon):
        return ShapelyMultiPolygon([orient(p, sign=1.0) for p in polygonal.geoms])
    return orient(polygonal, sign=1.0)


def measure(geometry: AnyGeometry | None) -> Measurement | None:
    """Geodesic length of a line or area of a polygon.

    Points, multipoints, geometry collections and missing geometries have
    no measurement. Failures (single-vertex lines, rings with too few
    vertices, ...) and degenerate geometries measuring zero are reported
    as no measurement so that one bad feature never aborts an import.

    Args:
        geometry: Geometry in WGS84 degrees (or None)

    Returns:
        Measurement or None
    """
    if geometry is None or not isinstance(geometry, LINEAL_TYPES + POLYGONAL_TYPES):
        return None
    if not iter_positions(geometry):
        return None

    try:
        shaped = _to_shapely(geometry)
        lineal = isinstance(geometry, LINEAL_TYPES)
        # Collapsed rings and zero-length lines
        if shaped.is_empty or (shaped.length if lineal else shaped.area) <= 0:
            return None

        if lineal:
            meters = WGS84_GEOD.geometry_length(shaped)
            if not math.isfinite(meters) or meters <= 0:
                return None
            return Measurement.from_meters(meters)

        area, _perimeter = WGS84_GEOD.geometry_area_perimeter(_oriented(shaped))
        area = abs(area)
        if not math.isfinite(area) or area <= 0:
            return None
        return Measurement.from_square_meters(area)

    except (ValueError, TypeError, GEOSException, GeodError) as e:
        logger.debug("Cannot measure %s geometry: %s", geometry.type, e)
        return None
