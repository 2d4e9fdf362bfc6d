"""Shared Parquet fixture helpers for tests."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Sequence

import pyarrow as pa
import pyarrow.parquet as pq

SAMPLE_TRANSCRIPTIONS: tuple[str | None, ...] = (
    "Привіт світ!",
    "Hello, world!",
    "Привіт, Україно! 😊 123",
    None,
    "",
)


def write_text_parquet(
    path: Path,
    texts: Sequence[str | None] = SAMPLE_TRANSCRIPTIONS,
    column_name: str = "transcription",
) -> Path:
    """Write a Parquet file with an ``id`` column and one text column.

    Args:
        path: Output file path.
        texts: Text values, ``None`` for nulls.
        column_name: Name of the text column.

    Returns:
        The written path.
    """
    table = pa.table(
        {
            "id": pa.array(range(len(texts)), type=pa.int32()),
            column_name: pa.array(list(texts), type=pa.string()),
        }
    )
    pq.write_table(table, path, compression="zstd")
    return path


def read_column(path: Path, column_name: str) -> list[object]:
    """Read one column of a Parquet file as Python values."""
    return pq.read_table(path).column(column_name).to_pylist()


def write_invalid_utf8_parquet(path: Path, column_name: str = "transcription") -> Path:
    """Write a Parquet file whose text column holds bytes that are not UTF-8.

    Args:
        path: Output file path.
        column_name: Name of the text column.

    Returns:
        The written path.
    """
    payload = b"\xff\xfe bad"
    offsets = struct.pack("<2i", 0, len(payload))
    texts = pa.Array.from_buffers(
        pa.string(), 1, [None, pa.py_buffer(offsets), pa.py_buffer(payload)]
    )
    table = pa.table({"id": pa.array([0], type=pa.int32()), column_name: texts})
    pq.write_table(table, path, compression="zstd")
    return path
