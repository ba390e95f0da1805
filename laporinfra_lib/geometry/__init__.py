# -*- coding: utf-8 -*-
"""GeoJSON models, the shared coordinate visitor and measurements."""

from laporinfra_lib.geometry.measure import Measurement
from laporinfra_lib.geometry.measure import centroid
from laporinfra_lib.geometry.measure import measure
from laporinfra_lib.geometry.models import AnyGeometry
from laporinfra_lib.geometry.models import Feature
from laporinfra_lib.geometry.models import FeatureCollection
from laporinfra_lib.geometry.models import Geometry
from laporinfra_lib.geometry.models import GeometryCollection
from laporinfra_lib.geometry.models import LineString
from laporinfra_lib.geometry.models import MultiLineString
from laporinfra_lib.geometry.models import MultiPoint
from laporinfra_lib.geometry.models import MultiPolygon
from laporinfra_lib.geometry.models import Point
from laporinfra_lib.geometry.models import Polygon
from laporinfra_lib.geometry.visitor import first_position
from laporinfra_lib.geometry.visitor import iter_positions
from laporinfra_lib.geometry.visitor import map_geometry

__all__ = [
    "AnyGeometry",
    "Feature",
    "FeatureCollection",
    "Geometry",
    "GeometryCollection",
    "LineString",
    "Measurement",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "centroid",
    "first_position",
    "iter_positions",
    "map_geometry",
    "measure",
]
