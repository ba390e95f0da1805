# -*- coding: utf-8 -*-
"""Tests for errors module."""

import dataclasses

import pytest

from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.enums import Severity
from laporinfra_lib.errors import GeoImportException
from laporinfra_lib.errors import ImportIssue
from laporinfra_lib.errors import NoGeodataError
from laporinfra_lib.errors import NoImportableFeaturesError
from laporinfra_lib.errors import UnsupportedInputError


class TestImportIssue:
    """Tests for ImportIssue dataclass (issue record)."""

    def test_creation(self):
        """Test creating an issue."""
        issue = ImportIssue(
            severity=Severity.WARNING,
            kind=ErrorKind.FEATURE_SKIPPED,
            message="Fitur dilewati",
        )
        assert issue.severity == Severity.WARNING
        assert issue.kind == ErrorKind.FEATURE_SKIPPED
        assert issue.feature_index is None

    def test_str(self):
        """Test string representation."""
        issue = ImportIssue(
            severity=Severity.WARNING,
            kind=ErrorKind.REPROJECTION_FAILED,
            message="Gagal",
            feature_index=4,
        )
        assert str(issue) == "warning: Gagal (feature #5)"  # 1-based

    def test_str_without_feature(self):
        issue = ImportIssue(
            severity=Severity.ERROR, kind=ErrorKind.UNREADABLE_FILE, message="x"
        )
        assert str(issue) == "error: x"

    def test_immutable(self):
        """Test that ImportIssue is immutable (frozen)."""
        issue = ImportIssue(
            severity=Severity.ERROR, kind=ErrorKind.UNREADABLE_FILE, message="x"
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            issue.message = "y"


class TestGeoImportException:
    """Tests for the exception hierarchy."""

    def test_default_messages(self):
        """Each terminal kind carries its user-facing message."""
        assert str(UnsupportedInputError()) == "Format tidak didukung"
        assert str(NoGeodataError()) == "Tidak ada FeatureCollection"
        assert str(NoImportableFeaturesError()) == "Tidak ada fitur yang dapat diimpor"

    def test_kind_overrides_default(self):
        error = UnsupportedInputError(kind=ErrorKind.SHAPEFILE_NOT_ZIPPED)
        assert error.kind == ErrorKind.SHAPEFILE_NOT_ZIPPED
        assert ".zip" in error.message

    def test_explicit_message(self):
        error = NoGeodataError("Berkas kosong")
        assert error.kind == ErrorKind.NO_FEATURE_COLLECTION
        assert str(error) == "Berkas kosong"

    def test_per_feature_kind_falls_back_to_value(self):
        error = GeoImportException(kind=ErrorKind.GEOMETRY_INVALID)
        assert error.message == "geometry_invalid"

    def test_to_issue(self):
        issue = NoImportableFeaturesError().to_issue()
        assert issue.severity == Severity.ERROR
        assert issue.kind == ErrorKind.NO_IMPORTABLE_FEATURES
        assert issue.feature_index is None

    def test_hierarchy(self):
        for cls in (UnsupportedInputError, NoGeodataError, NoImportableFeaturesError):
            assert issubclass(cls, GeoImportException)
        with pytest.raises(GeoImportException):
            raise NoGeodataError
