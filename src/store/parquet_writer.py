"""Streaming Parquet writer.

This module writes filtered batches to a hidden partial file next to the
destination and renames it into place once the file is finalized.
A discarded writer leaves nothing behind at the destination.
"""

from __future__ import annotations

import os
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from core.constants import PARQUET_COMPRESSION, PARTIAL_FILE_SUFFIX
from core.errors import BabylonifyIoError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class ParquetBatchWriter:
    """Zstandard-compressed Parquet writer owned by one pipeline."""

    def __init__(self, destination_path: Path, schema: pa.Schema) -> None:
        """Create the partial output file.

        Args:
            destination_path: Final output path.
            schema: Schema every written table must match.

        Raises:
            BabylonifyIoError: If the partial file cannot be created.
        """
        self._destination_path = destination_path
        self._partial_path = partial_path_for(destination_path)
        try:
            self._writer = pq.ParquetWriter(
                str(self._partial_path),
                schema,
                compression=PARQUET_COMPRESSION,
            )
        except (OSError, pa.ArrowException) as error:
            raise BabylonifyIoError(
                f"Cannot create output {destination_path}: {error}. "
                "Check that the parent directory exists and is writable."
            ) from error
        self._closed = False

    def write(self, table: pa.Table) -> None:
        """Append one filtered table to the output.

        Raises:
            BabylonifyIoError: If the write fails.
        """
        try:
            self._writer.write_table(table)
        except (OSError, pa.ArrowException) as error:
            raise BabylonifyIoError(
                f"Failed to write rows to {self._destination_path}: {error}. "
                "Check available disk space."
            ) from error

    def finalize(self) -> None:
        """Write the footer and move the file onto the destination path.

        Raises:
            BabylonifyIoError: If closing or renaming fails.
        """
        try:
            self._writer.close()
            self._closed = True
            os.replace(self._partial_path, self._destination_path)
        except (OSError, pa.ArrowException) as error:
            raise BabylonifyIoError(
                f"Failed to finalize output {self._destination_path}: {error}."
            ) from error

    def discard(self) -> None:
        """Close the writer and delete the partial file."""
        if not self._closed:
            self._closed = True
            try:
                self._writer.close()
            except (OSError, pa.ArrowException) as error:
                _LOGGER.warning(
                    "partial_writer_close_failed",
                    destination=str(self._destination_path),
                    error=str(error),
                )
        self._partial_path.unlink(missing_ok=True)


def partial_path_for(destination_path: Path) -> Path:
    """Return the hidden in-progress path used for a destination."""
    return destination_path.with_name(f".{destination_path.name}{PARTIAL_FILE_SUFFIX}")
