# -*- coding: utf-8 -*-
"""GeoJSON data models.

Uses Pydantic discriminated unions for polymorphic geometry handling.
Every coordinate-bearing geometry declares how deeply its positions are
nested so that a single traversal (see ``geometry.visitor``) can walk all
of them.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Annotated
from typing import Any
from typing import ClassVar
from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Discriminator
from pydantic import Field
from pydantic import Tag
from pydantic import ValidationError
from pydantic import ValidationInfo
from pydantic import field_validator
from pydantic import model_serializer

from laporinfra_lib.constants import MSG_FEATURE_UNREADABLE
from laporinfra_lib.constants import MSG_GEOMETRY_INVALID
from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.enums import GeometryType
from laporinfra_lib.enums import Severity
from laporinfra_lib.errors import ImportIssue

logger = logging.getLogger(__name__)

#: ``[x, y]`` with optional extra ordinates (z, m) carried unchanged
Position = Annotated[list[float], Field(min_length=2)]


# --- Geometry Classes ---
# Each geometry has a `type` field that acts as a discriminator


class Point(BaseModel):
    """A single position."""

    model_config = ConfigDict(extra="ignore")

    depth: ClassVar[int] = 0

    type: Literal["Point"] = "Point"
    coordinates: Position


class MultiPoint(BaseModel):
    model_config = ConfigDict(extra="ignore")

    depth: ClassVar[int] = 1

    type: Literal["MultiPoint"] = "MultiPoint"
    coordinates: list[Position] = Field(default_factory=list)


class LineString(BaseModel):
    model_config = ConfigDict(extra="ignore")

    depth: ClassVar[int] = 1

    type: Literal["LineString"] = "LineString"
    coordinates: list[Position] = Field(default_factory=list)


class MultiLineString(BaseModel):
    model_config = ConfigDict(extra="ignore")

    depth: ClassVar[int] = 2

    type: Literal["MultiLineString"] = "MultiLineString"
    coordinates: list[list[Position]] = Field(default_factory=list)


class Polygon(BaseModel):
    """Exterior ring followed by optional interior rings."""

    model_config = ConfigDict(extra="ignore")

    depth: ClassVar[int] = 2

    type: Literal["Polygon"] = "Polygon"
    coordinates: list[list[Position]] = Field(default_factory=list)


class MultiPolygon(BaseModel):
    model_config = ConfigDict(extra="ignore")

    depth: ClassVar[int] = 3

    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: list[list[list[Position]]] = Field(default_factory=list)


class GeometryCollection(BaseModel):
    """A heterogeneous list of child geometries."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: list[Geometry] = Field(default_factory=list)


# --- Discriminated Union ---


def _get_geometry_type(v: Any) -> str | None:
    """Extract the discriminator value for geometry types.

    Handles both dict input (from JSON) and already-instantiated models.
    An unknown tag makes validation fail for that geometry only.
    """
    if isinstance(v, dict):
        return v.get("type")
    return getattr(v, "type", None)


Geometry = Annotated[
    Annotated[Point, Tag(GeometryType.POINT.value)]
    | Annotated[MultiPoint, Tag(GeometryType.MULTI_POINT.value)]
    | Annotated[LineString, Tag(GeometryType.LINE_STRING.value)]
    | Annotated[MultiLineString, Tag(GeometryType.MULTI_LINE_STRING.value)]
    | Annotated[Polygon, Tag(GeometryType.POLYGON.value)]
    | Annotated[MultiPolygon, Tag(GeometryType.MULTI_POLYGON.value)]
    | Annotated[GeometryCollection, Tag(GeometryType.GEOMETRY_COLLECTION.value)],
    Discriminator(_get_geometry_type),
]

# Type alias for isinstance checks and type hints
AnyGeometry = (
    Point
    | MultiPoint
    | LineString
    | MultiLineString
    | Polygon
    | MultiPolygon
    | GeometryCollection
)

LINEAL_TYPES = (LineString, MultiLineString)
POLYGONAL_TYPES = (Polygon, MultiPolygon)


# --- Features ---


def _raw_geometry(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get("geometry")
    return getattr(item, "geometry", None)


class Feature(BaseModel):
    """A geometry with arbitrary, pass-through attribute properties."""

    model_config = ConfigDict(extra="ignore")

    type: Literal["Feature"] = "Feature"
    id: str | int | float | None = None
    geometry: Geometry | None = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def loose_id(cls, value: Any) -> Any:
        """Ids are strings or numbers; anything else is dropped."""
        if isinstance(value, (str, int, float)):
            return value
        if value is not None:
            logger.debug("Ignoring feature id of type %s", type(value).__name__)
        return None

    @field_validator("properties", mode="before")
    @classmethod
    def null_properties(cls, value: Any) -> Any:
        """GeoJSON allows ``"properties": null``; treat it as empty."""
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            logger.warning(
                "Ignoring feature properties of type %s", type(value).__name__
            )
            return {}
        return value

    @field_validator("geometry", mode="wrap")
    @classmethod
    def lenient_geometry(cls, value: Any, handler: Any) -> Any:
        """Read an unparseable geometry as ``None`` instead of failing.

        A single malformed geometry must not reject the whole collection;
        the feature is kept (layer mode stores it) and asset mode will
        skip it for lack of a coordinate.
        """
        if value is None:
            return None
        try:
            return handler(value)
        except ValidationError as e:
            logger.warning(
                "Ignoring unreadable %s geometry (%d validation error(s))",
                _get_geometry_type(value) or "untyped",
                e.error_count(),
            )
            return None

    @model_serializer(mode="wrap")
    def _drop_null_id(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if data.get("id") is None:
            data.pop("id", None)
        return data


class FeatureCollection(BaseModel):
    """An ordered list of features.

    Serialization is fully automatic via Pydantic:
        geojson_dict = fc.model_dump(mode="json")
        fc = FeatureCollection.model_validate(geojson_dict)
    """

    model_config = ConfigDict(extra="ignore")

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)

    @field_validator("features", mode="before")
    @classmethod
    def lenient_features(cls, value: Any, info: ValidationInfo) -> Any:
        """Validate features one at a time.

        A feature that cannot be read is kept as an empty feature without
        geometry, so indices stay aligned with the source. Each lost
        geometry is reported as a GEOMETRY_INVALID issue when the caller
        passes ``context={"issues": [...]}``.
        """
        if not isinstance(value, list):
            return value

        issues = (info.context or {}).get("issues")
        features = []
        for index, item in enumerate(value):
            if isinstance(item, Feature):
                features.append(item)
                continue

            message = None
            try:
                feature = Feature.model_validate(item)
            except ValidationError as e:
                logger.warning(
                    "Ignoring unreadable feature #%d (%d validation error(s))",
                    index + 1,
                    e.error_count(),
                )
                feature = Feature()
                message = MSG_FEATURE_UNREADABLE
            else:
                if feature.geometry is None and _raw_geometry(item) is not None:
                    message = MSG_GEOMETRY_INVALID

            if message is not None and issues is not None:
                issues.append(
                    ImportIssue(
                        severity=Severity.WARNING,
                        kind=ErrorKind.GEOMETRY_INVALID,
                        message=message,
                        feature_index=index,
                    )
                )
            features.append(feature)
        return features

    @property
    def is_empty(self) -> bool:
        return not self.features

    def geometry_types(self) -> Counter[str]:
        """Count geometry types, in first-seen order."""
        return Counter(
            feature.geometry.type
            for feature in self.features
            if feature.geometry is not None
        )

    def to_geojson(self) -> dict[str, Any]:
        """Return a plain GeoJSON dictionary."""
        return self.model_dump(mode="json")


# Update forward reference
GeometryCollection.model_rebuild()
Feature.model_rebuild()
