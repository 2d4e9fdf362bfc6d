"""Public SDK surface for babylonify.

This module provides a stable import path for library users.
It re-exports the filtering entry points and typed option models.
"""

from __future__ import annotations

from core.config import BabylonifyConfig
from core.constants import PACKAGE_VERSION
from core.errors import (
    BabylonifyConfigError,
    BabylonifyDetectionError,
    BabylonifyError,
    BabylonifyFileError,
    BabylonifyIoError,
    BabylonifyResolutionError,
    BabylonifySchemaError,
)
from core.types import FileOutcome, FilterOptions, RunReport
from ingest.directory_runner import filter_directory
from ingest.pipeline import filter_file
from transforms.language_resolution import resolve_language
from transforms.text_cleaning import clean_text

__version__ = PACKAGE_VERSION

__all__ = [
    "BabylonifyConfig",
    "BabylonifyConfigError",
    "BabylonifyDetectionError",
    "BabylonifyError",
    "BabylonifyFileError",
    "BabylonifyIoError",
    "BabylonifyResolutionError",
    "BabylonifySchemaError",
    "FileOutcome",
    "FilterOptions",
    "RunReport",
    "clean_text",
    "filter_directory",
    "filter_file",
    "resolve_language",
]
