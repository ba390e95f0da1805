# -*- coding: utf-8 -*-
"""Stateful driver of one geodata import.

An import walks through these stages (see ``ImportStage``)::

    IDLE -> PARSING -> NORMALIZING -> CRS_SELECTION
         -> REPROJECTING -> [MAPPING -> MEASURING ->] BUILDING_RECORDS -> DONE

and lands in FAILED from any stage on a terminal error. Between
CRS_SELECTION and the build step the caller may show ``preview()`` /
``attribute_table()`` and let the user pick a CRS and a field mapping.

Example:
    job = GeodataImport()
    job.load_file(Path("jalan.zip"))
    print(job.suggested_crs, job.field_names)

    assets = job.build_assets(mapping=FieldMapping(code="KODE_RUAS"))
    job.save_assets(db.upsert_assets, publish=db.upsert_layer)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from typing import Protocol

from laporinfra_lib.constants import ATTRIBUTE_TABLE_MAX_COLUMNS
from laporinfra_lib.constants import ATTRIBUTE_TABLE_ROWS
from laporinfra_lib.constants import DBF_ENCODING
from laporinfra_lib.constants import DEFAULT_LAYER_KEY
from laporinfra_lib.constants import DEFAULT_LAYER_NAME
from laporinfra_lib.constants import FIELD_SAMPLE_SIZE
from laporinfra_lib.constants import PREVIEW_ROWS
from laporinfra_lib.constants import WGS84
from laporinfra_lib.crs.guess import guess_crs
from laporinfra_lib.crs.registry import BUILTIN_CRS
from laporinfra_lib.crs.registry import CRSRegistry
from laporinfra_lib.crs.registry import normalize_crs_id
from laporinfra_lib.crs.registry import resolve_crs
from laporinfra_lib.crs.transform import reproject
from laporinfra_lib.enums import ImportStage
from laporinfra_lib.errors import GeoImportException
from laporinfra_lib.errors import ImportIssue
from laporinfra_lib.errors import NoGeodataError
from laporinfra_lib.errors import NoImportableFeaturesError
from laporinfra_lib.geometry.measure import measure
from laporinfra_lib.geometry.models import FeatureCollection
from laporinfra_lib.ingest.fields import extract_field_names
from laporinfra_lib.ingest.normalize import parse_geodata
from laporinfra_lib.ingest.reader import read_geodata
from laporinfra_lib.records.builder import ProgressCallback
from laporinfra_lib.records.builder import assets_to_layer
from laporinfra_lib.records.builder import batched
from laporinfra_lib.records.builder import build_asset_records
from laporinfra_lib.records.builder import build_layer_record
from laporinfra_lib.records.builder import deduplicate_assets
from laporinfra_lib.records.models import AssetRecord
from laporinfra_lib.records.models import FieldMapping
from laporinfra_lib.records.models import LayerRecord
from laporinfra_lib.records.models import PreviewRow
from laporinfra_lib.records.preview import AttributeTable
from laporinfra_lib.records.preview import attribute_table
from laporinfra_lib.records.preview import preview

logger = logging.getLogger(__name__)

__all__ = [
    "AssetSink",
    "GeodataImport",
    "LayerSink",
    "ProgressCallback",
]


class LayerSink(Protocol):
    """Persists one layer record (upsert by key)."""

    def __call__(self, record: LayerRecord) -> Any: ...


class AssetSink(Protocol):
    """Persists a batch of asset records (upsert by code)."""

    def __call__(self, batch: list[AssetRecord]) -> Any: ...


class GeodataImport:
    """One import run, from uploaded file to records.

    Attributes:
        stage: Current pipeline stage
        source_name: File name (or None for raw input)
        feature_collection: Normalized collection in its source CRS
        suggested_crs: Heuristic CRS guess (or None)
        field_names: Property names found in the first features
        issues: Non-fatal per-feature problems found while loading and
            during the last build
        layer: Result of the last ``build_layer``
        assets: Result of the last ``build_assets``
    """

    def __init__(
        self,
        *,
        registry: CRSRegistry = BUILTIN_CRS,
        on_progress: ProgressCallback | None = None,
        field_sample_size: int = FIELD_SAMPLE_SIZE,
    ) -> None:
        self.registry = registry
        self.on_progress = on_progress
        self.field_sample_size = field_sample_size

        self.stage = ImportStage.IDLE
        self.source_name: str | None = None
        self.feature_collection: FeatureCollection | None = None
        self.suggested_crs: str | None = None
        self.field_names: list[str] = []
        self.issues: list[ImportIssue] = []
        self._load_issues: list[ImportIssue] = []
        self.layer: LayerRecord | None = None
        self.assets: list[AssetRecord] = []

    # -------------------------------------------------------------------------
    # Stage bookkeeping
    # -------------------------------------------------------------------------

    def _enter(self, stage: ImportStage, message: str | None = None) -> None:
        logger.debug("Import stage: %s => %s", self.stage.value, stage.value)
        self.stage = stage
        if self.on_progress and message:
            self.on_progress(message=message)

    def _fail(self, error: GeoImportException) -> GeoImportException:
        logger.error("Import failed during %s: %s", self.stage.value, error)
        self.stage = ImportStage.FAILED
        self.issues.append(error.to_issue())
        return error

    def _require_collection(self) -> FeatureCollection:
        if self.feature_collection is None:
            raise self._fail(NoGeodataError())
        return self.feature_collection

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load_file(
        self, path: Path | str, *, encoding: str = DBF_ENCODING
    ) -> FeatureCollection:
        """Read and normalize an uploaded file.

        Raises:
            UnsupportedInputError: Unsupported, un-zipped or unreadable file
            NoGeodataError: No (or an empty) FeatureCollection in the file
        """
        path = Path(path)
        self._enter(ImportStage.PARSING, f"Membaca {path.name}…")
        try:
            raw = read_geodata(path, encoding=encoding)
        except GeoImportException as e:
            self._fail(e)
            raise
        return self.load_raw(raw, source_name=path.name)

    def load_raw(
        self, raw: Any, *, source_name: str | None = None
    ) -> FeatureCollection:
        """Normalize an already parsed object and suggest a CRS.

        Raises:
            NoGeodataError: No (or an empty) FeatureCollection in ``raw``
        """
        self._enter(ImportStage.NORMALIZING)
        self.source_name = source_name
        self.issues = []
        self._load_issues = []
        self.layer = None
        self.assets = []
        try:
            fc = parse_geodata(raw, issues=self.issues)
        except NoGeodataError as e:
            self.feature_collection = None
            self._fail(e)
            raise

        self._load_issues = list(self.issues)
        self.feature_collection = fc
        self.suggested_crs = guess_crs(fc)
        self.field_names = extract_field_names(fc, self.field_sample_size)

        logger.info(
            "Loaded %d feature(s) from %s (suggested CRS: %s, %d field(s))",
            len(fc.features),
            source_name or "raw input",
            self.suggested_crs,
            len(self.field_names),
        )
        self._enter(
            ImportStage.CRS_SELECTION, f"{len(fc.features)} fitur siap diimpor"
        )
        return fc

    def resolve_crs(
        self, crs: str | None = None, custom_crs: str | None = None
    ) -> str:
        """Source CRS for a selection (explicit choice beats the guess)."""
        return resolve_crs(crs, custom_crs, self.suggested_crs)

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def preview(
        self,
        crs: str | None = None,
        custom_crs: str | None = None,
        mapping: FieldMapping | None = None,
        n: int = PREVIEW_ROWS,
    ) -> list[PreviewRow]:
        return preview(
            self._require_collection(),
            self.resolve_crs(crs, custom_crs),
            mapping,
            n,
            registry=self.registry,
        )

    def attribute_table(
        self,
        rows: int = ATTRIBUTE_TABLE_ROWS,
        max_columns: int = ATTRIBUTE_TABLE_MAX_COLUMNS,
    ) -> AttributeTable:
        return attribute_table(self._require_collection(), rows, max_columns)

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def build_layer(
        self,
        key: str = DEFAULT_LAYER_KEY,
        name: str = DEFAULT_LAYER_NAME,
        crs: str | None = None,
        custom_crs: str | None = None,
        target_crs: str | None = WGS84,
    ) -> LayerRecord:
        """Store the whole collection as one layer.

        Args:
            key: Layer key (upsert key of the layer store)
            name: Display name
            crs: Source CRS selection (None: use the suggestion)
            custom_crs: Free-text EPSG code when ``crs="custom"``
            target_crs: CRS to store in; None keeps the source coordinates

        Returns:
            The layer record. Its CRS tag is the CRS the coordinates are
            actually in: the source CRS when it cannot be transformed.
        """
        fc = self._require_collection()
        source = self.resolve_crs(crs, custom_crs)
        self.issues = list(self._load_issues)

        self._enter(ImportStage.REPROJECTING, "Mengubah proyeksi koordinat…")
        if target_crs is None or not self.registry.can_transform(source, target_crs):
            if target_crs is not None:
                logger.warning(
                    "Storing layer %s in its source CRS %s", key, source
                )
            crs_tag = source
        else:
            fc = reproject(
                fc, source, target_crs, registry=self.registry, issues=self.issues
            )
            crs_tag = normalize_crs_id(target_crs)

        self._enter(ImportStage.BUILDING_RECORDS, "Menyusun layer…")
        self.layer = build_layer_record(key, name, fc, crs_tag)

        logger.info(
            "Layer %s: %d feature(s), dominant type %s, CRS %s",
            key,
            len(fc.features),
            self.layer.geometry_type,
            crs_tag,
        )
        self._enter(ImportStage.DONE, "Selesai")
        return self.layer

    def build_assets(
        self,
        crs: str | None = None,
        custom_crs: str | None = None,
        mapping: FieldMapping | None = None,
    ) -> list[AssetRecord]:
        """Flatten every feature into a point asset.

        Raises:
            NoImportableFeaturesError: No feature produced a record
        """
        fc = self._require_collection()
        mapping = mapping or FieldMapping()
        source = self.resolve_crs(crs, custom_crs)
        self.issues = list(self._load_issues)

        self._enter(ImportStage.REPROJECTING, "Mengubah proyeksi koordinat…")
        fc = reproject(fc, source, WGS84, registry=self.registry, issues=self.issues)

        self._enter(ImportStage.MAPPING)
        if missing := mapping.missing_fields(self.field_names):
            logger.warning("Mapped field(s) not found in data: %s", ", ".join(missing))

        self._enter(ImportStage.MEASURING, "Menghitung panjang dan luas…")
        measurements = [measure(feature.geometry) for feature in fc.features]

        self._enter(ImportStage.BUILDING_RECORDS)
        assets = build_asset_records(
            fc,
            mapping,
            measurements=measurements,
            on_progress=self.on_progress,
            issues=self.issues,
        )
        if not assets:
            raise self._fail(NoImportableFeaturesError())

        self.assets = assets
        self._enter(ImportStage.DONE, f"{len(assets)} aset siap disimpan")
        return assets

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def save_layer(self, sink: LayerSink) -> LayerRecord:
        """Hand the last built layer to ``sink``."""
        if self.layer is None:
            raise RuntimeError("build_layer() must be called before save_layer()")
        sink(self.layer)
        logger.info("Saved layer %s", self.layer.key)
        return self.layer

    def save_assets(
        self, sink: AssetSink, publish: LayerSink | None = None
    ) -> list[AssetRecord]:
        """Upsert the last built assets in batches.

        Records sharing a code are collapsed first (the last one wins).
        When ``publish`` is given, the assets are also published as the
        shared point layer.

        Returns:
            The records actually handed to ``sink``
        """
        if not self.assets:
            raise RuntimeError("build_assets() must be called before save_assets()")

        unique = deduplicate_assets(self.assets)
        if len(unique) < len(self.assets):
            logger.info(
                "Collapsed %d duplicate asset code(s)", len(self.assets) - len(unique)
            )

        saved = 0
        for batch in batched(unique):
            sink(batch)
            saved += len(batch)
            if self.on_progress:
                self.on_progress(
                    message="Menyimpan aset…", completed=saved, total=len(unique)
                )

        if publish is not None:
            publish(assets_to_layer(unique))

        logger.info("Saved %d asset(s)", saved)
        return unique
