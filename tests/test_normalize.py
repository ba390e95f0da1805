# -*- coding: utf-8 -*-
"""Tests for raw geodata normalization."""

import logging

import pytest

from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.enums import RawShape
from laporinfra_lib.enums import Severity
from laporinfra_lib.errors import NoGeodataError
from laporinfra_lib.geometry.models import FeatureCollection
from laporinfra_lib.geometry.models import Point
from laporinfra_lib.ingest.normalize import classify_raw
from laporinfra_lib.ingest.normalize import normalize
from laporinfra_lib.ingest.normalize import parse_geodata


def _fc(*codes: str) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [111.5, -7.6]},
                "properties": {"code": code},
            }
            for code in codes
        ],
    }


class TestClassifyRaw:
    """Tests for naming the shape of raw input."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ({"type": "FeatureCollection", "features": []}, RawShape.FEATURE_COLLECTION),
            ({"type": "Feature", "geometry": None}, RawShape.FEATURE),
            ({"roads": {"type": "FeatureCollection", "features": []}}, RawShape.LAYER_MAPPING),
            ({"type": "Point", "coordinates": [0, 0]}, RawShape.UNRECOGNIZED),
            ({"a": 1, "b": "x"}, RawShape.UNRECOGNIZED),
            ([1, 2, 3], RawShape.UNRECOGNIZED),
            ("FeatureCollection", RawShape.UNRECOGNIZED),
            (None, RawShape.UNRECOGNIZED),
        ],
    )
    def test_classify(self, raw, expected):
        assert classify_raw(raw) == expected

    def test_model_input(self):
        """Already validated models are recognized too."""
        assert classify_raw(FeatureCollection()) == RawShape.FEATURE_COLLECTION


class TestNormalize:
    """Tests for normalize()."""

    def test_feature_collection_unchanged(self, points_raw):
        fc = normalize(points_raw)
        assert fc is not None
        assert fc.to_geojson() == points_raw

    def test_bare_feature_wrapped(self):
        feature = _fc("A")["features"][0]
        fc = normalize(feature)
        assert fc is not None
        assert len(fc.features) == 1
        assert fc.features[0].properties == {"code": "A"}

    def test_layer_mapping_first_wins(self, caplog):
        raw = {"jalan": _fc("J1", "J2"), "sungai": _fc("S1")}
        with caplog.at_level(logging.INFO):
            fc = normalize(raw)
        assert fc is not None
        assert [f.properties["code"] for f in fc.features] == ["J1", "J2"]
        assert "sungai" in caplog.text

    def test_layer_mapping_skips_non_collections(self):
        raw = {"meta": {"version": 2}, "sungai": _fc("S1")}
        fc = normalize(raw)
        assert fc is not None
        assert fc.features[0].properties["code"] == "S1"

    def test_layer_mapping_of_models(self):
        fc_model = FeatureCollection.model_validate(_fc("M1"))
        fc = normalize({"layer": fc_model})
        assert fc is not None
        assert fc.features[0].properties["code"] == "M1"

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            42,
            "text",
            [],
            {},
            {"type": "Polygon", "coordinates": []},
            {"type": "FeatureCollection", "features": "not a list"},
        ],
    )
    def test_unusable_input(self, raw):
        assert normalize(raw) is None

    def test_null_properties(self):
        raw = {"type": "Feature", "geometry": None, "properties": None}
        fc = normalize(raw)
        assert fc is not None
        assert fc.features[0].properties == {}

    def test_unreadable_geometry_becomes_none(self, caplog):
        """One malformed geometry does not reject the collection."""
        raw = _fc("OK", "BAD")
        raw["features"][1]["geometry"] = {"type": "Hexagon", "coordinates": [1]}
        with caplog.at_level(logging.WARNING):
            fc = normalize(raw)
        assert fc is not None
        assert isinstance(fc.features[0].geometry, Point)
        assert fc.features[1].geometry is None
        assert "Hexagon" in caplog.text

    def test_short_position_becomes_none(self):
        raw = _fc("BAD")
        raw["features"][0]["geometry"]["coordinates"] = [111.5]
        fc = normalize(raw)
        assert fc is not None
        assert fc.features[0].geometry is None

    def test_numeric_ids(self):
        raw = _fc("A", "B", "C")
        raw["features"][0]["id"] = 7
        raw["features"][1]["id"] = 1.5
        raw["features"][2]["id"] = {"nested": True}
        fc = normalize(raw)
        assert fc is not None
        assert [f.id for f in fc.features] == [7, 1.5, None]

    @pytest.mark.parametrize("properties", ["teks", [1, 2], 42])
    def test_non_object_properties(self, properties):
        raw = _fc("A", "B")
        raw["features"][1]["properties"] = properties
        fc = normalize(raw)
        assert fc is not None
        assert fc.features[0].properties == {"code": "A"}
        assert fc.features[1].properties == {}

    def test_unreadable_feature_kept_empty(self):
        """A bad feature is neutralised in place; the rest survives."""
        raw = _fc("A", "B")
        raw["features"].insert(1, None)
        raw["features"].append({"type": "Pisang", "geometry": None})
        issues = []
        fc = normalize(raw, issues=issues)
        assert fc is not None
        assert len(fc.features) == 4
        assert fc.features[1].geometry is None
        assert fc.features[1].properties == {}
        assert fc.features[2].properties == {"code": "B"}
        assert [i.feature_index for i in issues] == [1, 3]
        assert {i.kind for i in issues} == {ErrorKind.GEOMETRY_INVALID}
        assert issues[0].message == "Fitur tidak dapat dibaca"

    def test_dropped_geometry_reported(self):
        raw = _fc("OK", "BAD", "NULL")
        raw["features"][1]["geometry"] = {"type": "Hexagon", "coordinates": [1]}
        raw["features"][2]["geometry"] = None
        issues = []
        normalize(raw, issues=issues)
        assert len(issues) == 1
        assert issues[0].kind == ErrorKind.GEOMETRY_INVALID
        assert issues[0].severity == Severity.WARNING
        assert issues[0].feature_index == 1

    def test_bare_feature_reported(self):
        issues = []
        fc = normalize(
            {"type": "Feature", "geometry": {"type": "Point", "coordinates": []}},
            issues=issues,
        )
        assert fc.features[0].geometry is None
        assert [i.feature_index for i in issues] == [0]

    def test_extra_ordinates_kept(self):
        raw = _fc("Z")
        raw["features"][0]["geometry"]["coordinates"] = [111.5, -7.6, 65.0]
        fc = normalize(raw)
        assert fc.features[0].geometry.coordinates == [111.5, -7.6, 65.0]


class TestParseGeodata:
    """Tests for parse_geodata() terminal errors."""

    def test_success(self, points_raw):
        assert len(parse_geodata(points_raw).features) == 3

    def test_no_collection(self):
        with pytest.raises(NoGeodataError) as exc_info:
            parse_geodata({"hello": "world"})
        assert exc_info.value.kind == ErrorKind.NO_FEATURE_COLLECTION

    def test_empty_collection(self):
        with pytest.raises(NoGeodataError) as exc_info:
            parse_geodata({"type": "FeatureCollection", "features": []})
        assert exc_info.value.kind == ErrorKind.EMPTY_FEATURE_COLLECTION
        assert str(exc_info.value) == "FeatureCollection kosong"
