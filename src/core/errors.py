"""Babylonify exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Per-file failures carry the reason code reported in run summaries.
"""

from __future__ import annotations

from typing import Literal

FailureReason = Literal["schema-error", "io-error", "detection-error"]


class BabylonifyError(Exception):
    """Base exception for all babylonify failures."""


class BabylonifyConfigError(BabylonifyError):
    """Raised for invalid runtime configuration."""


class BabylonifyResolutionError(BabylonifyError):
    """Raised when a language token matches no supported language."""


class BabylonifyFileError(BabylonifyError):
    """Base for failures that are fatal to one file only."""

    reason: FailureReason = "io-error"


class BabylonifySchemaError(BabylonifyFileError):
    """Raised when the text column is missing or not string-typed."""

    reason: FailureReason = "schema-error"


class BabylonifyIoError(BabylonifyFileError):
    """Raised for open, read, write, and finalize failures."""

    reason: FailureReason = "io-error"


class BabylonifyDetectionError(BabylonifyFileError):
    """Raised when the language detector fails on an input value."""

    reason: FailureReason = "detection-error"
