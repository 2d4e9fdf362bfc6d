"""Parquet source reader.

This module opens a Parquet file, validates the designated text column,
and yields record batches lazily so files never load whole into memory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator

import pyarrow as pa
import pyarrow.parquet as pq

from core.errors import BabylonifyIoError, BabylonifySchemaError


@dataclass(frozen=True)
class ParquetSource:
    """Opened Parquet source with a validated text column.

    Attributes:
        path: Source file path.
        schema: Arrow schema of the file.
        column_index: Position of the text column in the schema.
    """

    path: Path
    schema: pa.Schema
    column_index: int
    _handle: BinaryIO
    _parquet_file: pq.ParquetFile

    def iter_batches(self, batch_size: int) -> Iterator[pa.RecordBatch]:
        """Yield record batches in file order.

        Args:
            batch_size: Maximum rows per batch.

        Yields:
            Record batches sharing the source schema.

        Raises:
            BabylonifyIoError: If a batch cannot be read or decoded.
        """
        batches = self._parquet_file.iter_batches(batch_size=batch_size)
        while True:
            try:
                batch = next(batches)
            except StopIteration:
                return
            except (OSError, pa.ArrowException) as error:
                raise BabylonifyIoError(
                    f"Failed to read a batch from {self.path}: {error}. "
                    "The file may be truncated or corrupt."
                ) from error
            yield batch

    def close(self) -> None:
        """Release the underlying file handle."""
        self._handle.close()


def open_parquet_source(source_path: Path, column_name: str) -> ParquetSource:
    """Open a Parquet file and validate its text column.

    Args:
        source_path: Input Parquet file.
        column_name: Designated text column.

    Returns:
        Opened source ready for batched reading.

    Raises:
        BabylonifyIoError: If the file is missing or not valid Parquet.
        BabylonifySchemaError: If the column is missing or not string-typed.
    """
    try:
        handle = source_path.open("rb")
    except OSError as error:
        raise BabylonifyIoError(
            f"Failed to open {source_path}: {error.strerror or error}. "
            "Provide an existing, readable Parquet file."
        ) from error
    try:
        parquet_file = pq.ParquetFile(handle)
        schema = parquet_file.schema_arrow
        column_index = _find_text_column(source_path, schema, column_name)
    except (OSError, pa.ArrowException) as error:
        handle.close()
        raise BabylonifyIoError(
            f"Failed to read Parquet metadata from {source_path}: {error}. "
            "Check that the file is a valid Parquet file."
        ) from error
    except BabylonifySchemaError:
        handle.close()
        raise
    return ParquetSource(
        path=source_path,
        schema=schema,
        column_index=column_index,
        _handle=handle,
        _parquet_file=parquet_file,
    )


def _find_text_column(source_path: Path, schema: pa.Schema, column_name: str) -> int:
    """Locate the text column and check it holds strings.

    Args:
        source_path: Source path for error context.
        schema: Arrow schema to inspect.
        column_name: Designated text column.

    Returns:
        Column position in the schema.

    Raises:
        BabylonifySchemaError: If the column is missing, duplicated, or not text.
    """
    column_index = schema.get_field_index(column_name)
    if column_index < 0:
        available = ", ".join(schema.names)
        raise BabylonifySchemaError(
            f"Column '{column_name}' not found (or not unique) in {source_path}. "
            f"Available columns: {available}."
        )
    column_type = schema.field(column_index).type
    if not (pa.types.is_string(column_type) or pa.types.is_large_string(column_type)):
        raise BabylonifySchemaError(
            f"Column '{column_name}' in {source_path} is {column_type}, not a string column. "
            "Pick a text column with --column."
        )
    return column_index
