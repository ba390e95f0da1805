# -*- coding: utf-8 -*-
"""Output records of an import run.

- AssetRecord: a flattened point asset, one per source feature
- LayerPayload / LayerRecord: a whole feature collection stored as a layer
- FieldMapping: which properties feed the asset columns
- PreviewRow: one line of the pre-commit preview table

Records are dumped with ``model_dump(mode="json", by_alias=True)`` to get
the exact shape the persistence layer stores.
"""

from __future__ import annotations

from typing import Any

import geojson
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic_extra_types.coordinate import Latitude  # noqa: TC002
from pydantic_extra_types.coordinate import Longitude  # noqa: TC002

from laporinfra_lib.constants import GEOJSON_COORDINATE_PRECISION
from laporinfra_lib.constants import WGS84
from laporinfra_lib.enums import AssetCategory
from laporinfra_lib.enums import AssetStatus
from laporinfra_lib.geometry.models import FeatureCollection  # noqa: TC001


class FieldMapping(BaseModel):
    """Property names feeding each asset column.

    Defaults match the column names themselves, so files already using
    them need no mapping. ``None`` means "not mapped": only the built-in
    fallback properties are consulted.
    """

    code: str | None = "code"
    name: str | None = "name"
    category: str | None = "category"
    description: str | None = "keterangan"

    def missing_fields(self, available: list[str]) -> list[str]:
        """Mapped property names that do not occur in ``available``."""
        mapped = (self.code, self.name, self.category, self.description)
        return [f for f in mapped if f is not None and f not in available]


class AssetRecord(BaseModel):
    """A point asset derived from one source feature."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str
    name: str
    category: AssetCategory = AssetCategory.LAINNYA
    latitude: Latitude
    longitude: Longitude
    description: str | None = Field(default=None, alias="keterangan")
    status: AssetStatus = AssetStatus.AKTIF

    def to_feature(self) -> geojson.Feature:
        """Convert to a GeoJSON Point Feature (longitude, latitude)."""
        return geojson.Feature(
            geometry=geojson.Point(
                (self.longitude, self.latitude),
                precision=GEOJSON_COORDINATE_PRECISION,
            ),
            properties={
                "code": self.code,
                "name": self.name,
                "category": self.category.value,
                "status": self.status.value,
                "keterangan": self.description,
            },
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class LayerPayload(BaseModel):
    """The unit stored as a layer: a collection plus the CRS it is in."""

    model_config = ConfigDict(populate_by_name=True)

    feature_collection: FeatureCollection = Field(alias="featureCollection")
    crs: str = WGS84


class LayerRecord(BaseModel):
    """A layer row as handed to the layer sink."""

    key: str
    name: str
    geometry_type: str | None = None
    data: LayerPayload

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class PreviewRow(BaseModel):
    """One preview line; coordinates are always WGS84 degrees."""

    index: int
    code: str = ""
    name: str = ""
    category: str = ""
    latitude: float
    longitude: float
