# -*- coding: utf-8 -*-
"""Read-only projections of a collection for the pre-commit UI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from laporinfra_lib.constants import ATTRIBUTE_TABLE_MAX_COLUMNS
from laporinfra_lib.constants import ATTRIBUTE_TABLE_ROWS
from laporinfra_lib.constants import PREVIEW_ROWS
from laporinfra_lib.constants import PROJECTED_MAGNITUDE_THRESHOLD
from laporinfra_lib.constants import WGS84
from laporinfra_lib.crs.guess import sample_position
from laporinfra_lib.crs.registry import BUILTIN_CRS
from laporinfra_lib.crs.registry import CRSRegistry
from laporinfra_lib.crs.registry import normalize_crs_id
from laporinfra_lib.crs.transform import reproject
from laporinfra_lib.enums import BuiltinCRS
from laporinfra_lib.geometry.measure import centroid
from laporinfra_lib.geometry.models import FeatureCollection
from laporinfra_lib.records.models import FieldMapping
from laporinfra_lib.records.models import LayerPayload
from laporinfra_lib.records.models import PreviewRow

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def preview(
    fc: FeatureCollection,
    crs: str = WGS84,
    mapping: FieldMapping | None = None,
    n: int = PREVIEW_ROWS,
    *,
    registry: CRSRegistry = BUILTIN_CRS,
) -> list[PreviewRow]:
    """Show what the first ``n`` features would become as assets.

    Args:
        fc: Collection in its source CRS
        crs: Source CRS of ``fc``
        mapping: Property names shown as code / name / category
        n: Number of features inspected
        registry: Transformable CRS definitions

    Returns:
        Rows with WGS84 centroids; features without one are omitted, so
        fewer than ``n`` rows may come back
    """
    mapping = mapping or FieldMapping()
    head = FeatureCollection(features=fc.features[: max(n, 0)])
    head = reproject(head, crs, WGS84, registry=registry)

    rows: list[PreviewRow] = []
    for index, feature in enumerate(head.features):
        point = centroid(feature.geometry)
        if point is None:
            continue
        props = feature.properties
        rows.append(
            PreviewRow(
                index=index + 1,
                code=_as_text(props.get(mapping.code) if mapping.code else None),
                name=_as_text(props.get(mapping.name) if mapping.name else None),
                category=_as_text(
                    props.get(mapping.category) if mapping.category else None
                ),
                latitude=point[0],
                longitude=point[1],
            )
        )
    return rows


@dataclass
class AttributeTable:
    """Stringified properties of the first features, column by column."""

    columns: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    truncated: bool = False


def attribute_table(
    fc: FeatureCollection,
    rows: int = ATTRIBUTE_TABLE_ROWS,
    max_columns: int = ATTRIBUTE_TABLE_MAX_COLUMNS,
) -> AttributeTable:
    head = fc.features[: max(rows, 0)]

    columns: list[str] = []
    seen: set[str] = set()
    for feature in head:
        for key in feature.properties:
            if key not in seen:
                seen.add(key)
                columns.append(key)

    truncated = len(columns) > max_columns
    columns = columns[:max_columns]

    return AttributeTable(
        columns=columns,
        rows=[
            [_as_text(feature.properties.get(column)) for column in columns]
            for feature in head
        ],
        truncated=truncated,
    )


# -----------------------------------------------------------------------------
# Stored layers
# -----------------------------------------------------------------------------


def display_crs(payload: LayerPayload, *, registry: CRSRegistry = BUILTIN_CRS) -> str:
    """CRS a stored layer is drawn from.

    Layers saved with an unregistered CRS tag but metre-sized coordinates
    are assumed to be UTM 49S.
    """
    crs = normalize_crs_id(payload.crs)
    if crs in registry:
        return crs

    sample = sample_position(payload.feature_collection)
    if sample is not None and (
        abs(sample[0]) > PROJECTED_MAGNITUDE_THRESHOLD
        or abs(sample[1]) > PROJECTED_MAGNITUDE_THRESHOLD
    ):
        logger.info("Layer tagged %s looks projected; drawing it as UTM 49S", crs)
        return BuiltinCRS.UTM_49S.value
    return crs


def layer_to_wgs84(
    payload: LayerPayload, *, registry: CRSRegistry = BUILTIN_CRS
) -> FeatureCollection:
    """Collection of a stored layer, in WGS84 for display."""
    return reproject(
        payload.feature_collection,
        display_crs(payload, registry=registry),
        WGS84,
        registry=registry,
    )
