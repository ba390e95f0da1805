# -*- coding: utf-8 -*-
"""Tests for reprojection of feature collections."""

import logging

import pytest

from laporinfra_lib.crs.transform import reproject
from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.geometry.models import FeatureCollection
from laporinfra_lib.geometry.models import GeometryCollection
from laporinfra_lib.geometry.models import MultiPolygon
from laporinfra_lib.geometry.visitor import iter_positions


def _shape(geometry) -> object:
    """Nesting skeleton of a coordinate array (leaf positions replaced)."""
    if isinstance(geometry, GeometryCollection):
        return ("GeometryCollection", [_shape(g) for g in geometry.geometries])

    def _skeleton(value, depth):
        if depth == 0:
            return len(value)
        return [_skeleton(item, depth - 1) for item in value]

    return (geometry.type, _skeleton(geometry.coordinates, geometry.depth))


class TestRoundTrip:
    """WGS84 -> projected -> WGS84 returns the original coordinates."""

    @pytest.mark.parametrize("projected", ["EPSG:32749", "EPSG:3857"])
    def test_round_trip(self, mixed_raw, projected):
        fc = FeatureCollection.model_validate(mixed_raw)
        there = reproject(fc, "EPSG:4326", projected)
        back = reproject(there, projected, "EPSG:4326")

        for original, restored in zip(fc.features, back.features, strict=True):
            before = iter_positions(original.geometry)
            after = iter_positions(restored.geometry)
            assert len(before) == len(after)
            for p, q in zip(before, after, strict=True):
                assert q[0] == pytest.approx(p[0], abs=1e-6)
                assert q[1] == pytest.approx(p[1], abs=1e-6)

    @pytest.mark.parametrize(
        ("source", "other"),
        [
            ("EPSG:32749", "EPSG:3857"),
            ("EPSG:3857", "EPSG:32749"),
            ("EPSG:32749", "EPSG:4326"),
            ("EPSG:3857", "EPSG:4326"),
        ],
    )
    def test_round_trip_from_metres(self, mixed_raw, source, other):
        """Projected coordinates survive a trip through another CRS."""
        start = reproject(FeatureCollection.model_validate(mixed_raw), "EPSG:4326", source)
        back = reproject(reproject(start, source, other), other, source)

        for original, restored in zip(start.features, back.features, strict=True):
            for p, q in zip(
                iter_positions(original.geometry),
                iter_positions(restored.geometry),
                strict=True,
            ):
                assert q[0] == pytest.approx(p[0], abs=1e-3)
                assert q[1] == pytest.approx(p[1], abs=1e-3)

    def test_utm_values(self, utm_points_raw, points_raw):
        fc = FeatureCollection.model_validate(utm_points_raw)
        result = reproject(fc, "EPSG:32749")
        expected = FeatureCollection.model_validate(points_raw)
        for got, want in zip(result.features, expected.features, strict=True):
            assert got.geometry.coordinates == pytest.approx(
                want.geometry.coordinates, abs=1e-6
            )

    def test_projected_magnitudes(self, points_raw):
        fc = FeatureCollection.model_validate(points_raw)
        result = reproject(fc, "EPSG:4326", "EPSG:32749")
        x, y = result.features[0].geometry.coordinates
        assert 500_000 < x < 700_000
        assert 9_000_000 < y < 10_000_000


class TestNoOp:
    """Identical CRSs short-circuit."""

    @pytest.mark.parametrize(
        ("source", "target"),
        [
            ("EPSG:4326", "EPSG:4326"),
            ("4326", "epsg:4326"),
            ("EPSG:32749", "32749"),
            ("EPSG:3857", "epsg:3857"),
        ],
    )
    def test_same_object_returned(self, points_raw, source, target):
        fc = FeatureCollection.model_validate(points_raw)
        assert reproject(fc, source, target) is fc


class TestStructure:
    """Geometry types and nesting survive reprojection."""

    def test_structure_preserved(self, mixed_raw):
        fc = FeatureCollection.model_validate(mixed_raw)
        result = reproject(fc, "EPSG:4326", "EPSG:32749")

        assert len(result.features) == len(fc.features)
        for original, projected in zip(fc.features, result.features, strict=True):
            if original.geometry is None:
                assert projected.geometry is None
                continue
            assert _shape(projected.geometry) == _shape(original.geometry)

        assert isinstance(result.features[2].geometry, MultiPolygon)
        assert len(result.features[2].geometry.coordinates[0]) == 2  # hole kept

    def test_properties_and_ids(self, mixed_raw):
        mixed_raw["features"][0]["id"] = "feat-1"
        fc = FeatureCollection.model_validate(mixed_raw)
        result = reproject(fc, "EPSG:4326", "EPSG:3857")

        assert result.features[0].id == "feat-1"
        for original, projected in zip(fc.features, result.features, strict=True):
            assert projected.properties == original.properties
            assert projected.properties is not original.properties

    def test_input_not_modified(self, points_raw):
        fc = FeatureCollection.model_validate(points_raw)
        before = fc.model_dump()
        reproject(fc, "EPSG:4326", "EPSG:32749")
        assert fc.model_dump() == before

    def test_extra_ordinates_carried(self):
        fc = FeatureCollection.model_validate(
            {
                "type": "FeatureCollection",
                "features": [
                    {
                        "type": "Feature",
                        "geometry": {"type": "Point", "coordinates": [111.5, -7.6, 63.5]},
                        "properties": {},
                    }
                ],
            }
        )
        result = reproject(fc, "EPSG:4326", "EPSG:32749")
        assert result.features[0].geometry.coordinates[2] == 63.5


class TestPassThrough:
    """Unregistered CRSs leave coordinates untouched."""

    def test_custom_source(self, utm_points_raw, caplog):
        fc = FeatureCollection.model_validate(utm_points_raw)
        with caplog.at_level(logging.WARNING):
            result = reproject(fc, "EPSG:23833", "EPSG:4326")
        assert result is fc
        assert "EPSG:23833" in caplog.text

    def test_custom_target(self, points_raw):
        fc = FeatureCollection.model_validate(points_raw)
        assert reproject(fc, "EPSG:4326", "EPSG:23833") is fc


class TestFailures:
    """A feature that cannot be transformed loses only its own geometry."""

    def test_bad_feature_dropped(self, points_raw):
        points_raw["features"][1]["geometry"]["coordinates"] = [111.4, 95.0]
        fc = FeatureCollection.model_validate(points_raw)
        issues = []

        result = reproject(fc, "EPSG:4326", "EPSG:3857", issues=issues)

        assert result.features[0].geometry is not None
        assert result.features[1].geometry is None
        assert result.features[2].geometry is not None
        assert result.features[1].properties == points_raw["features"][1]["properties"]
        assert len(issues) == 1
        assert issues[0].kind == ErrorKind.REPROJECTION_FAILED
        assert issues[0].feature_index == 1
