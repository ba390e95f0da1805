# -*- coding: utf-8 -*-
"""Turn WGS84 feature collections into layer and asset records.

Asset flattening, per feature:
- code: mapped field, then ``kode`` / ``id``; a generated token if blank
- name: mapped field, then ``nama`` / ``title``, then the code, then "Aset"
- category: mapped field, then ``kategori``; unknown values become ``lainnya``
- description: mapped field, then ``alamat`` / ``lokasi``; lines and polygons
  get their length / area appended
- coordinates: the centroid; features without one are skipped

A skipped feature is reported as an ImportIssue, never as an exception.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Sequence
from typing import TYPE_CHECKING
from typing import Any
from typing import Protocol
from typing import TypeVar

import geojson
from pydantic import ValidationError

from laporinfra_lib.constants import ASSET_BATCH_SIZE
from laporinfra_lib.constants import ASSETS_LAYER_KEY
from laporinfra_lib.constants import ASSETS_LAYER_NAME
from laporinfra_lib.constants import CATEGORY_FALLBACK_FIELDS
from laporinfra_lib.constants import CODE_FALLBACK_FIELDS
from laporinfra_lib.constants import DEFAULT_ASSET_NAME
from laporinfra_lib.constants import DESCRIPTION_FALLBACK_FIELDS
from laporinfra_lib.constants import DESCRIPTION_SEPARATOR
from laporinfra_lib.constants import NAME_FALLBACK_FIELDS
from laporinfra_lib.constants import PROGRESS_MIN_INTERVAL
from laporinfra_lib.constants import PROGRESS_STEPS
from laporinfra_lib.constants import WGS84
from laporinfra_lib.enums import AssetCategory
from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.enums import GeometryType
from laporinfra_lib.enums import Severity
from laporinfra_lib.errors import ImportIssue
from laporinfra_lib.geometry.measure import Measurement
from laporinfra_lib.geometry.measure import centroid
from laporinfra_lib.geometry.measure import measure
from laporinfra_lib.geometry.models import FeatureCollection
from laporinfra_lib.records.models import AssetRecord
from laporinfra_lib.records.models import FieldMapping
from laporinfra_lib.records.models import LayerPayload
from laporinfra_lib.records.models import LayerRecord

if TYPE_CHECKING:
    from laporinfra_lib.geometry.models import Feature

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProgressCallback(Protocol):
    """Protocol for progress callbacks."""

    def __call__(
        self,
        message: str | None = None,
        completed: int | None = None,
        total: int | None = None,
    ) -> None:
        """Report progress."""
        ...


# -----------------------------------------------------------------------------
# Property Helpers
# -----------------------------------------------------------------------------


def _first_present(
    properties: dict[str, Any],
    mapped: str | None,
    fallbacks: Sequence[str],
) -> Any:
    """First non-null value among the mapped field and its fallbacks."""
    for key in (mapped, *fallbacks):
        if key is None:
            continue
        value = properties.get(key)
        if value is not None:
            return value
    return None


def generate_asset_code() -> str:
    """Millisecond timestamp plus a short random suffix."""
    return f"{time.time_ns() // 1_000_000}-{uuid.uuid4().hex[:5]}"


def describe(base: Any, measurement: Measurement | None) -> str | None:
    """Append a measurement to a description.

    >>> describe("Ruas utara", m)   # "Ruas utara — Panjang: 1.25 km"
    >>> describe(None, m)           # "Panjang: 1.25 km"
    """
    text = str(base) if base is not None else None
    if measurement is None:
        return text
    if text:
        return f"{text}{DESCRIPTION_SEPARATOR}{measurement.description}"
    return measurement.description


def progress_interval(total: int) -> int:
    """Features between two progress reports: ~5% but at least 20."""
    return max(PROGRESS_MIN_INTERVAL, total // PROGRESS_STEPS)


# -----------------------------------------------------------------------------
# Asset Records
# -----------------------------------------------------------------------------


def build_asset_record(
    feature: Feature,
    mapping: FieldMapping | None = None,
    *,
    measurement: Measurement | None = None,
    measured: bool = False,
) -> AssetRecord | None:
    """Flatten one WGS84 feature into an asset record.

    Args:
        feature: Feature with WGS84 geometry
        mapping: Property names feeding the asset columns
        measurement: Precomputed measurement of the geometry
        measured: True if ``measurement`` was precomputed (even as None)

    Returns:
        The record, or None if the feature has no usable coordinate
    """
    mapping = mapping or FieldMapping()

    point = centroid(feature.geometry)
    if point is None:
        return None
    latitude, longitude = point

    props = feature.properties

    code = str(_first_present(props, mapping.code, CODE_FALLBACK_FIELDS) or "").strip()

    name_value = _first_present(props, mapping.name, NAME_FALLBACK_FIELDS)
    if name_value is None:
        name_value = code
    name = str(name_value).strip() or DEFAULT_ASSET_NAME

    category = AssetCategory.normalize(
        _first_present(props, mapping.category, CATEGORY_FALLBACK_FIELDS)
    )

    if not measured:
        measurement = measure(feature.geometry)
    description = describe(
        _first_present(props, mapping.description, DESCRIPTION_FALLBACK_FIELDS),
        measurement,
    )

    try:
        return AssetRecord(
            code=code or generate_asset_code(),
            name=name,
            category=category,
            latitude=latitude,
            longitude=longitude,
            description=description,
        )
    except ValidationError:
        # Centroid outside degree ranges: coordinates were never reprojected
        logger.warning(
            "Centroid (%s, %s) is not a WGS84 coordinate", latitude, longitude
        )
        return None


def build_asset_records(
    fc: FeatureCollection,
    mapping: FieldMapping | None = None,
    *,
    measurements: Sequence[Measurement | None] | None = None,
    on_progress: ProgressCallback | None = None,
    issues: list[ImportIssue] | None = None,
) -> list[AssetRecord]:
    """Flatten every feature of a WGS84 collection.

    Args:
        fc: Collection in WGS84 degrees
        mapping: Property names feeding the asset columns
        measurements: Precomputed measurements, aligned with ``fc.features``
        on_progress: Optional progress callback
        issues: Optional list collecting skipped features

    Returns:
        Asset records in feature order (possibly empty)
    """
    mapping = mapping or FieldMapping()
    total = len(fc.features)
    interval = progress_interval(total)
    records: list[AssetRecord] = []

    for index, feature in enumerate(fc.features):
        record = build_asset_record(
            feature,
            mapping,
            measurement=measurements[index] if measurements is not None else None,
            measured=measurements is not None,
        )
        if record is None:
            logger.warning("Skipping feature #%d: no usable coordinate", index + 1)
            if issues is not None:
                issues.append(
                    ImportIssue(
                        severity=Severity.WARNING,
                        kind=ErrorKind.FEATURE_SKIPPED,
                        message="Fitur tidak memiliki koordinat yang valid",
                        feature_index=index,
                    )
                )
        else:
            records.append(record)

        if on_progress and index % interval == 0:
            on_progress(
                message=f"Memproses fitur {index + 1}/{total}…",
                completed=index + 1,
                total=total,
            )

    logger.info("Built %d asset record(s) from %d feature(s)", len(records), total)
    return records


def deduplicate_assets(assets: Iterable[AssetRecord]) -> list[AssetRecord]:
    """Collapse records sharing a code; the last occurrence wins.

    Records with a blank code are dropped. The position of the first
    occurrence is kept.
    """
    by_code: dict[str, AssetRecord] = {}
    for asset in assets:
        key = asset.code.strip()
        if not key:
            continue
        by_code[key] = asset
    return list(by_code.values())


def batched(items: Sequence[T], size: int = ASSET_BATCH_SIZE) -> Iterator[list[T]]:
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


# -----------------------------------------------------------------------------
# Layer Records
# -----------------------------------------------------------------------------


def dominant_geometry_type(fc: FeatureCollection) -> str | None:
    """Most frequent geometry type; ties go to the type seen first."""
    counts = fc.geometry_types()
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def build_layer_record(
    key: str,
    name: str,
    fc: FeatureCollection,
    crs: str = WGS84,
) -> LayerRecord:
    """Wrap a whole collection as a layer; features are not touched."""
    return LayerRecord(
        key=key,
        name=name,
        geometry_type=dominant_geometry_type(fc),
        data=LayerPayload(feature_collection=fc, crs=crs),
    )


def assets_to_layer(assets: Iterable[AssetRecord]) -> LayerRecord:
    """Publish asset records as the shared point layer."""
    collection = geojson.FeatureCollection([asset.to_feature() for asset in assets])
    return LayerRecord(
        key=ASSETS_LAYER_KEY,
        name=ASSETS_LAYER_NAME,
        geometry_type=GeometryType.POINT.value,
        data=LayerPayload(
            feature_collection=FeatureCollection.model_validate(collection),
            crs=WGS84,
        ),
    )
