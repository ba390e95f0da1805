# -*- coding: utf-8 -*-
"""Guess the CRS of a collection from coordinate magnitudes.

This is a coarse default for the CRS selector, not a CRS detector:
magnitudes alone cannot tell UTM zones or Web Mercator apart, so any
"metre-like" sample is reported as UTM zone 49S, the projection most
uploads in the service area use. The user can always override it.
"""

from __future__ import annotations

import logging

from laporinfra_lib.constants import PROJECTED_MAGNITUDE_THRESHOLD
from laporinfra_lib.enums import BuiltinCRS
from laporinfra_lib.geometry.models import FeatureCollection
from laporinfra_lib.geometry.visitor import first_position

logger = logging.getLogger(__name__)


def sample_position(fc: FeatureCollection) -> tuple[float, float] | None:
    """First ``(x, y)`` of the first feature whose geometry has one."""
    for feature in fc.features:
        position = first_position(feature.geometry)
        if position is not None:
            return (position[0], position[1])
    return None


def classify_position(x: float, y: float) -> str | None:
    """Apply the magnitude rule to a single sample.

    Returns:
        ``EPSG:4326`` if it fits in degree ranges, ``EPSG:32749`` if both
        components exceed the projected threshold, otherwise None
    """
    if abs(x) <= 180 and abs(y) <= 90:
        return BuiltinCRS.WGS84.value
    if abs(x) > PROJECTED_MAGNITUDE_THRESHOLD and abs(y) > PROJECTED_MAGNITUDE_THRESHOLD:
        return BuiltinCRS.UTM_49S.value
    return None


def guess_crs(fc: FeatureCollection) -> str | None:
    """Suggest a source CRS for a collection.

    Args:
        fc: Normalized feature collection

    Returns:
        Suggested CRS identifier, or None when there is no sample or its
        magnitude is ambiguous
    """
    sample = sample_position(fc)
    if sample is None:
        logger.debug("No coordinate sample available for CRS guess")
        return None

    guess = classify_position(*sample)
    logger.debug("CRS guess from sample %s: %s", sample, guess)
    return guess
