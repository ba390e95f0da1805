# -*- coding: utf-8 -*-
"""One-call wrappers around GeodataImport.

For interactive imports (preview, CRS confirmation, field mapping) use
GeodataImport directly:

    from laporinfra_lib.interface import GeodataImport

    job = GeodataImport()
    job.load_file(Path("jalan.geojson"))
    rows = job.preview(crs="EPSG:32749")

The functions below run the whole pipeline with fixed choices.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import orjson
from pydantic import BaseModel

from laporinfra_lib.constants import DEFAULT_LAYER_KEY
from laporinfra_lib.constants import DEFAULT_LAYER_NAME
from laporinfra_lib.constants import JSON_ENCODING
from laporinfra_lib.constants import WGS84
from laporinfra_lib.interface import GeodataImport
from laporinfra_lib.interface import ProgressCallback
from laporinfra_lib.records.models import AssetRecord
from laporinfra_lib.records.models import FieldMapping
from laporinfra_lib.records.models import LayerRecord

__all__ = [
    "dumps_json",
    "import_assets",
    "import_layer",
    "save_json",
]


def import_layer(
    path: Path | str,
    key: str = DEFAULT_LAYER_KEY,
    name: str = DEFAULT_LAYER_NAME,
    *,
    crs: str | None = None,
    custom_crs: str | None = None,
    target_crs: str | None = WGS84,
    on_progress: ProgressCallback | None = None,
) -> LayerRecord:
    """Import a file as a layer record.

    Args:
        path: GeoJSON or zipped Shapefile
        key: Layer key
        name: Layer display name
        crs: Source CRS (None: guessed from the coordinates)
        custom_crs: Free-text EPSG code when ``crs="custom"``
        target_crs: CRS to store the layer in
        on_progress: Optional progress callback

    Returns:
        The layer record
    """
    job = GeodataImport(on_progress=on_progress)
    job.load_file(path)
    return job.build_layer(
        key, name, crs=crs, custom_crs=custom_crs, target_crs=target_crs
    )


def import_assets(
    path: Path | str,
    *,
    crs: str | None = None,
    custom_crs: str | None = None,
    mapping: FieldMapping | None = None,
    on_progress: ProgressCallback | None = None,
) -> list[AssetRecord]:
    """Import a file as point asset records.

    Raises:
        NoImportableFeaturesError: If no feature has a usable coordinate
    """
    job = GeodataImport(on_progress=on_progress)
    job.load_file(path)
    return job.build_assets(crs=crs, custom_crs=custom_crs, mapping=mapping)


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True)
    if isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)):
        return [_jsonable(item) for item in obj]
    return obj


def dumps_json(obj: Any, *, minify: bool = False) -> str:
    """Serialize records (or lists of records) to their stored JSON shape."""
    opts = 0 if minify else orjson.OPT_INDENT_2
    return orjson.dumps(_jsonable(obj), option=opts).decode(JSON_ENCODING)


def save_json(obj: Any, path: Path | str, *, minify: bool = False) -> None:
    Path(path).write_text(dumps_json(obj, minify=minify), encoding=JSON_ENCODING)
