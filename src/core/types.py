"""Shared typed models.

This module defines immutable data models used by the reader, the
filtering pipeline, the directory runner, and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from core.constants import DEFAULT_TARGET_LANGUAGE, DEFAULT_TEXT_COLUMN
from core.errors import FailureReason

PipelineState = Literal["opening", "streaming", "closing", "done", "failed"]
FileStatus = Literal["done", "failed"]
RunStatus = Literal["success", "partial", "failed"]


@dataclass(frozen=True)
class FilterOptions:
    """Options for one filtering run.

    Attributes:
        column_name: Designated text column.
        language: Target language token, resolved once per run.
        keep_empty: Keep rows whose text is null or empty.
        clean: Clean text before detection and in the output.
        worker_count: Optional worker pool size override.
        batch_size: Optional rows-per-batch override.
    """

    column_name: str = DEFAULT_TEXT_COLUMN
    language: str = DEFAULT_TARGET_LANGUAGE
    keep_empty: bool = False
    clean: bool = False
    worker_count: int | None = None
    batch_size: int | None = None


@dataclass(frozen=True)
class RowDecision:
    """Keep/drop decision for one text value.

    Attributes:
        keep: Whether the row is retained.
        output_text: Value to emit in the text column when retained.
    """

    keep: bool
    output_text: str | None


@dataclass(frozen=True)
class FileTask:
    """One source file and its destination."""

    source_path: Path
    destination_path: Path


@dataclass(frozen=True)
class FileOutcome:
    """Result of filtering one file.

    Attributes:
        source_path: Input Parquet path.
        destination_path: Output Parquet path.
        status: ``done`` or ``failed``.
        rows_read: Rows pulled from the source.
        rows_kept: Rows written to the destination.
        failure_reason: Failure kind when status is ``failed``.
        error_message: Human-readable failure message.
    """

    source_path: Path
    destination_path: Path
    status: FileStatus
    rows_read: int = 0
    rows_kept: int = 0
    failure_reason: FailureReason | None = None
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether the file reached the done state."""
        return self.status == "done"


@dataclass(frozen=True)
class RunReport:
    """Per-file outcomes of a directory run, in discovery order."""

    outcomes: tuple[FileOutcome, ...]

    @property
    def processed(self) -> int:
        """Number of files attempted."""
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        """Number of files that completed."""
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        """Number of files that failed."""
        return self.processed - self.succeeded

    @property
    def status(self) -> RunStatus:
        """Overall status: failed when nothing completed."""
        if self.succeeded == 0:
            return "failed"
        if self.failed:
            return "partial"
        return "success"
