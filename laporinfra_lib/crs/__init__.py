# -*- coding: utf-8 -*-
"""Coordinate reference systems: lookup, guessing and reprojection."""

from laporinfra_lib.crs.guess import guess_crs
from laporinfra_lib.crs.guess import sample_position
from laporinfra_lib.crs.registry import BUILTIN_CRS
from laporinfra_lib.crs.registry import CRSRegistry
from laporinfra_lib.crs.registry import normalize_crs_id
from laporinfra_lib.crs.registry import resolve_crs
from laporinfra_lib.crs.registry import same_crs
from laporinfra_lib.crs.transform import reproject
from laporinfra_lib.crs.transform import transform_feature_collection

__all__ = [
    "BUILTIN_CRS",
    "CRSRegistry",
    "guess_crs",
    "normalize_crs_id",
    "reproject",
    "resolve_crs",
    "same_crs",
    "sample_position",
    "transform_feature_collection",
]
