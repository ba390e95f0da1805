# -*- coding: utf-8 -*-
"""Reproject feature collections between coordinate reference systems.

Transformation policy:
- Same source and target CRS: the input is returned untouched, so no
  floating point churn is introduced.
- Either CRS missing from the registry (a custom EPSG code): the input is
  returned untouched and a warning is logged. Coordinates are never
  projected with a guessed definition.
- A feature whose coordinates cannot be transformed loses its geometry
  (``None``); the rest of the collection is still transformed.
"""

from __future__ import annotations

import logging
import math

from pyproj import Transformer
from pyproj.exceptions import ProjError

from laporinfra_lib.constants import WGS84
from laporinfra_lib.crs.registry import BUILTIN_CRS
from laporinfra_lib.crs.registry import CRSRegistry
from laporinfra_lib.crs.registry import normalize_crs_id
from laporinfra_lib.crs.registry import same_crs
from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.enums import Severity
from laporinfra_lib.errors import ImportIssue
from laporinfra_lib.errors import ReprojectionError
from laporinfra_lib.geometry.models import FeatureCollection
from laporinfra_lib.geometry.visitor import PositionFn
from laporinfra_lib.geometry.visitor import map_geometry

logger = logging.getLogger(__name__)


def _position_transform(transformer: Transformer) -> PositionFn:
    def _transform(position: list[float]) -> list[float]:
        try:
            x, y = transformer.transform(position[0], position[1], errcheck=True)
        except ProjError as e:
            raise ReprojectionError(
                f"Failed to transform ({position[0]}, {position[1]}): {e}"
            ) from e
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ReprojectionError(
                f"Transforming ({position[0]}, {position[1]}) gave no finite result"
            )
        return [float(x), float(y), *position[2:]]

    return _transform


def transform_feature_collection(
    fc: FeatureCollection,
    transformer: Transformer,
    *,
    issues: list[ImportIssue] | None = None,
) -> FeatureCollection:
    """Pass every position of every feature through ``transformer``.

    Args:
        fc: Source collection (not modified)
        transformer: An ``always_xy`` pyproj transformer
        issues: Optional list collecting per-feature failures

    Returns:
        New collection; properties are shallow-copied
    """
    transform = _position_transform(transformer)
    features = []
    for index, feature in enumerate(fc.features):
        geometry = feature.geometry
        if geometry is not None:
            try:
                geometry = map_geometry(geometry, transform)
            except ReprojectionError as e:
                logger.warning("Dropping geometry of feature #%d: %s", index + 1, e)
                if issues is not None:
                    issues.append(
                        ImportIssue(
                            severity=Severity.WARNING,
                            kind=ErrorKind.REPROJECTION_FAILED,
                            message=str(e),
                            feature_index=index,
                        )
                    )
                geometry = None
        features.append(
            feature.model_copy(
                update={"geometry": geometry, "properties": dict(feature.properties)}
            )
        )
    return FeatureCollection(features=features)


def reproject(
    fc: FeatureCollection,
    from_crs: str,
    to_crs: str = WGS84,
    *,
    registry: CRSRegistry = BUILTIN_CRS,
    issues: list[ImportIssue] | None = None,
) -> FeatureCollection:
    """Reproject a collection from one CRS to another.

    Args:
        fc: Source collection
        from_crs: CRS the coordinates are currently in
        to_crs: Target CRS (default WGS84)
        registry: Transformable CRS definitions
        issues: Optional list collecting per-feature failures

    Returns:
        The reprojected collection, or ``fc`` itself when the CRSs are
        identical or not both transformable
    """
    if same_crs(from_crs, to_crs):
        return fc

    if from_crs not in registry or to_crs not in registry:
        logger.warning(
            "CRS %s => %s is not supported; coordinates are left unprojected",
            normalize_crs_id(from_crs),
            normalize_crs_id(to_crs),
        )
        return fc

    logger.info(
        "Reprojecting %d feature(s): %s => %s",
        len(fc.features),
        normalize_crs_id(from_crs),
        normalize_crs_id(to_crs),
    )
    return transform_feature_collection(
        fc, registry.transformer(from_crs, to_crs), issues=issues
    )

