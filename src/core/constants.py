"""Core constants used across babylonify modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

DEFAULT_TEXT_COLUMN = "transcription"
DEFAULT_TARGET_LANGUAGE = "uk"
DEFAULT_BATCH_SIZE = 8192
PARQUET_EXTENSION = ".parquet"
PARQUET_COMPRESSION = "zstd"
PARTIAL_FILE_SUFFIX = ".partial"
CLEANING_DROPPED_CHARACTERS = frozenset("@#%&*()")
ENV_BATCH_SIZE = "BABYLONIFY_BATCH_SIZE"
ENV_WORKERS = "BABYLONIFY_WORKERS"
ENV_PRELOAD_MODELS = "BABYLONIFY_PRELOAD_MODELS"
ENV_DETECTOR_LANGUAGES = "BABYLONIFY_DETECTOR_LANGUAGES"
PACKAGE_VERSION = "0.1.0"
