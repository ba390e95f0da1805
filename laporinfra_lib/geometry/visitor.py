# -*- coding: utf-8 -*-
"""Recursive descent over geometry coordinates.

``map_geometry`` is the one traversal shared by reprojection, centroid
computation and CRS sniffing: it rebuilds a geometry of the same type and
nesting, passing every leaf position through a callback.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from laporinfra_lib.geometry.models import AnyGeometry
from laporinfra_lib.geometry.models import GeometryCollection

PositionFn = Callable[[list[float]], list[float]]


def _map_coordinates(coordinates: Any, depth: int, leaf: PositionFn) -> Any:
    if depth == 0:
        return leaf(coordinates)
    return [_map_coordinates(item, depth - 1, leaf) for item in coordinates]


def map_geometry(geometry: AnyGeometry, leaf: PositionFn) -> AnyGeometry:
    """Return a copy of ``geometry`` with every position mapped by ``leaf``.

    The geometry type and the array nesting (rings, ring lists, child
    geometries) are preserved exactly; only leaf positions change.

    Args:
        geometry: Geometry to walk
        leaf: Called once per position, in document order

    Returns:
        A new geometry of the same type
    """
    if isinstance(geometry, GeometryCollection):
        return GeometryCollection(
            geometries=[map_geometry(child, leaf) for child in geometry.geometries]
        )
    return geometry.model_copy(
        update={
            "coordinates": _map_coordinates(
                geometry.coordinates, geometry.depth, leaf
            )
        }
    )


def iter_positions(geometry: AnyGeometry | None) -> list[list[float]]:
    """Flatten all positions of a geometry, in document order."""
    positions: list[list[float]] = []
    if geometry is None:
        return positions

    def _collect(position: list[float]) -> list[float]:
        positions.append(position)
        return position

    map_geometry(geometry, _collect)
    return positions


def first_position(geometry: AnyGeometry | None) -> list[float] | None:
    positions = iter_positions(geometry)
    return positions[0] if positions else None
