# -*- coding: utf-8 -*-
"""Discover attribute names for the field-mapping dropdowns."""

from __future__ import annotations

from laporinfra_lib.constants import FIELD_SAMPLE_SIZE
from laporinfra_lib.geometry.models import FeatureCollection


def extract_field_names(
    fc: FeatureCollection, sample_size: int = FIELD_SAMPLE_SIZE
) -> list[str]:
    """Property names of the first ``sample_size`` features.

    Names keep the order they are first seen in; a name appearing only
    after the sample is not reported.
    """
    names: dict[str, None] = {}
    for feature in fc.features[: max(sample_size, 0)]:
        for key in feature.properties:
            names.setdefault(key, None)
    return list(names)
