# -*- coding: utf-8 -*-
"""Layer and asset records built from WGS84 collections."""

from laporinfra_lib.records.builder import assets_to_layer
from laporinfra_lib.records.builder import batched
from laporinfra_lib.records.builder import build_asset_record
from laporinfra_lib.records.builder import build_asset_records
from laporinfra_lib.records.builder import build_layer_record
from laporinfra_lib.records.builder import deduplicate_assets
from laporinfra_lib.records.builder import dominant_geometry_type
from laporinfra_lib.records.models import AssetRecord
from laporinfra_lib.records.models import FieldMapping
from laporinfra_lib.records.models import LayerPayload
from laporinfra_lib.records.models import LayerRecord
from laporinfra_lib.records.models import PreviewRow
from laporinfra_lib.records.preview import AttributeTable
from laporinfra_lib.records.preview import attribute_table
from laporinfra_lib.records.preview import display_crs
from laporinfra_lib.records.preview import layer_to_wgs84
from laporinfra_lib.records.preview import preview

__all__ = [
    "AssetRecord",
    "AttributeTable",
    "FieldMapping",
    "LayerPayload",
    "LayerRecord",
    "PreviewRow",
    "assets_to_layer",
    "attribute_table",
    "batched",
    "build_asset_record",
    "build_asset_records",
    "build_layer_record",
    "deduplicate_assets",
    "display_crs",
    "dominant_geometry_type",
    "layer_to_wgs84",
    "preview",
]
