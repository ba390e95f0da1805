# -*- coding: utf-8 -*-
"""Coerce raw parser output into a single FeatureCollection.

Accepted shapes:
- a FeatureCollection: validated, content unchanged
- a bare Feature: wrapped into a one-feature collection
- a mapping of layer name to FeatureCollection (zipped Shapefiles): the
  first collection in enumeration order, the others are discarded
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.enums import RawShape
from laporinfra_lib.errors import ImportIssue
from laporinfra_lib.errors import NoGeodataError
from laporinfra_lib.geometry.models import FeatureCollection

logger = logging.getLogger(__name__)


def _type_tag(value: Any) -> str | None:
    if isinstance(value, Mapping):
        return value.get("type")
    return getattr(value, "type", None)


def _layers(raw: Mapping[str, Any]) -> list[tuple[str, Any]]:
    return [
        (str(name), value)
        for name, value in raw.items()
        if _type_tag(value) == RawShape.FEATURE_COLLECTION.geojson_type
    ]


def classify_raw(raw: Any) -> RawShape:
    """Name the shape of a raw parser result."""
    tag = _type_tag(raw)
    if tag == RawShape.FEATURE_COLLECTION.geojson_type:
        return RawShape.FEATURE_COLLECTION
    if tag == RawShape.FEATURE.geojson_type:
        return RawShape.FEATURE
    if isinstance(raw, Mapping) and _layers(raw):
        return RawShape.LAYER_MAPPING
    return RawShape.UNRECOGNIZED


def normalize(
    raw: Any, *, issues: list[ImportIssue] | None = None
) -> FeatureCollection | None:
    """Turn a raw parser result into one FeatureCollection.

    Args:
        raw: Parsed GeoJSON, a model, or a ``{layer: FeatureCollection}``
            mapping
        issues: Optional list collecting features whose geometry was lost

    Returns:
        The collection, or None when ``raw`` holds no usable collection
    """
    context = {"issues": issues}
    try:
        match classify_raw(raw):
            case RawShape.FEATURE_COLLECTION:
                return FeatureCollection.model_validate(raw, context=context)

            case RawShape.FEATURE:
                return FeatureCollection.model_validate(
                    {"features": [raw]}, context=context
                )

            case RawShape.LAYER_MAPPING:
                layers = _layers(raw)
                name, first = layers[0]
                if len(layers) > 1:
                    logger.info(
                        "Archive holds %d layers; importing %s, ignoring %s",
                        len(layers),
                        name,
                        ", ".join(other for other, _ in layers[1:]),
                    )
                return FeatureCollection.model_validate(first, context=context)

            case _:
                return None

    except ValidationError as e:
        logger.warning(
            "Input is not a valid GeoJSON object (%d error(s))", e.error_count()
        )
        return None


def parse_geodata(
    raw: Any, *, issues: list[ImportIssue] | None = None
) -> FeatureCollection:
    """Like ``normalize`` but fails loudly.

    Raises:
        NoGeodataError: NO_FEATURE_COLLECTION when nothing usable was found,
            EMPTY_FEATURE_COLLECTION when the collection has no features
    """
    fc = normalize(raw, issues=issues)
    if fc is None:
        raise NoGeodataError(kind=ErrorKind.NO_FEATURE_COLLECTION)
    if fc.is_empty:
        raise NoGeodataError(kind=ErrorKind.EMPTY_FEATURE_COLLECTION)
    return fc
