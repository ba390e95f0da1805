# -*- coding: utf-8 -*-
"""Error handling for geodata imports.

This module provides an issue record for non-fatal, per-feature problems
and the exception hierarchy for the terminal conditions that abort an
import run.
"""

from dataclasses import dataclass

from laporinfra_lib.enums import ErrorKind
from laporinfra_lib.enums import Severity


@dataclass(frozen=True)
class ImportIssue:
    """Represents a problem found while importing, with feature context.

    This is a data record for storing issue information, not an exception.
    Use GeoImportException for raising errors.

    Attributes:
        severity: ERROR or WARNING
        kind: What went wrong
        message: Human-readable message
        feature_index: 0-based index of the offending feature (optional)
    """

    severity: Severity
    kind: ErrorKind
    message: str
    feature_index: int | None = None

    def __str__(self) -> str:
        """Format as human-readable issue string."""
        base = f"{self.severity.value}: {self.message}"
        if self.feature_index is not None:
            base += f" (feature #{self.feature_index + 1})"
        return base


class GeoImportException(Exception):  # noqa: N818
    """Base exception for terminal import errors.

    Attributes:
        kind: Which terminal condition was hit
        message: User-displayable message
    """

    default_kind: ErrorKind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(
        self,
        message: str | None = None,
        kind: ErrorKind | None = None,
    ):
        self.kind = kind or self.default_kind
        self.message = message or self.kind.default_message or self.kind.value
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def to_issue(self) -> ImportIssue:
        """Convert exception to an ImportIssue record."""
        return ImportIssue(
            severity=Severity.ERROR,
            kind=self.kind,
            message=self.message,
        )


class UnsupportedInputError(GeoImportException):
    """Raised for a wrong extension, an un-zipped Shapefile part or a file
    that cannot be parsed."""

    default_kind = ErrorKind.UNSUPPORTED_FORMAT


class NoGeodataError(GeoImportException):
    """Raised when no FeatureCollection is found or it has no features."""

    default_kind = ErrorKind.NO_FEATURE_COLLECTION


class NoImportableFeaturesError(GeoImportException):
    """Raised when the file parsed but no feature produced an output record."""

    default_kind = ErrorKind.NO_IMPORTABLE_FEATURES


class ReprojectionError(Exception):
    """Raised when a single geometry cannot be transformed."""
