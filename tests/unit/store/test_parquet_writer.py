"""Unit tests for the streaming Parquet writer."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from core.errors import BabylonifyIoError
from store.parquet_writer import ParquetBatchWriter, partial_path_for

_SCHEMA = pa.schema([("id", pa.int32()), ("transcription", pa.string())])


def _table(ids: list[int]) -> pa.Table:
    return pa.table(
        {
            "id": pa.array(ids, type=pa.int32()),
            "transcription": pa.array([f"row {index}" for index in ids], type=pa.string()),
        }
    )


def test_finalize_publishes_zstd_file(tmp_path: Path) -> None:
    """Finalized output appears at the destination, zstd-compressed."""
    destination = tmp_path / "out.parquet"
    writer = ParquetBatchWriter(destination, _SCHEMA)
    writer.write(_table([0, 1]))
    writer.write(_table([2]))

    assert not destination.exists()
    writer.finalize()

    metadata = pq.ParquetFile(destination).metadata
    assert pq.read_table(destination).column("id").to_pylist() == [0, 1, 2]
    assert metadata.row_group(0).column(0).compression == "ZSTD"
    assert not partial_path_for(destination).exists()


def test_discard_removes_partial_file(tmp_path: Path) -> None:
    """Discarded writers leave neither partial nor final files."""
    destination = tmp_path / "out.parquet"
    writer = ParquetBatchWriter(destination, _SCHEMA)
    writer.write(_table([0]))

    writer.discard()

    assert not destination.exists()
    assert not partial_path_for(destination).exists()


def test_writer_raises_for_missing_parent_directory(tmp_path: Path) -> None:
    """Creating output in a missing directory is an io error."""
    with pytest.raises(BabylonifyIoError):
        ParquetBatchWriter(tmp_path / "missing" / "out.parquet", _SCHEMA)


def test_partial_path_is_hidden_sibling(tmp_path: Path) -> None:
    """Partial files live next to the destination as dotfiles."""
    assert partial_path_for(tmp_path / "out.parquet") == tmp_path / ".out.parquet.partial"
