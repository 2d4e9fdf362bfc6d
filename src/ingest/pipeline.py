"""Batch filtering pipeline for one Parquet file.

This module coordinates batched reads, parallel row classification,
mask-based row selection, and streamed compressed writes. Rows are
classified in contiguous chunks on a shared worker pool and gathered
back by chunk index, so output order always matches input order.
"""

from __future__ import annotations

import math
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Sequence

import pyarrow as pa
from lingua import Language

from core.config import BabylonifyConfig, resolve_worker_count
from core.errors import (
    BabylonifyConfigError,
    BabylonifyFileError,
    BabylonifyIoError,
)
from core.logging_config import get_logger
from core.types import FileOutcome, FileTask, FilterOptions, PipelineState, RowDecision
from ingest.parquet_reader import ParquetSource, open_parquet_source
from store.parquet_writer import ParquetBatchWriter
from transforms.language_detection import build_detector
from transforms.language_resolution import resolve_language
from transforms.row_classification import RowClassifier

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class FilterContext:
    """Run-wide state shared read-only by every file pipeline.

    Attributes:
        classifier: Row classifier bound to the resolved target language.
        executor: Worker pool used for row classification.
        worker_count: Size of the worker pool.
        column_name: Designated text column.
        batch_size: Rows pulled from the reader per batch.
    """

    classifier: RowClassifier
    executor: ThreadPoolExecutor
    worker_count: int
    column_name: str
    batch_size: int


@contextmanager
def open_filter_context(
    target: Language,
    options: FilterOptions,
    config: BabylonifyConfig,
) -> Iterator[FilterContext]:
    """Build the detector and worker pool for one run.

    Args:
        target: Resolved target language.
        options: Run options.
        config: Runtime configuration.

    Yields:
        Shared filter context; the pool shuts down on exit.

    Raises:
        BabylonifyConfigError: If worker count or batch size is invalid.
    """
    worker_count = resolve_worker_count(options.worker_count, config)
    batch_size = options.batch_size if options.batch_size is not None else config.batch_size
    if batch_size < 1:
        raise BabylonifyConfigError(
            f"Invalid batch size: expected a positive integer, got {batch_size}."
        )
    classifier = RowClassifier(
        detector=build_detector(config, target),
        target=target,
        clean_enabled=options.clean,
        keep_empty=options.keep_empty,
    )
    with ThreadPoolExecutor(
        max_workers=worker_count, thread_name_prefix="babylonify"
    ) as executor:
        yield FilterContext(
            classifier=classifier,
            executor=executor,
            worker_count=worker_count,
            column_name=options.column_name,
            batch_size=batch_size,
        )


class BatchPipeline:
    """Read, classify, select, and write loop for one file.

    States move ``opening -> streaming -> closing -> done``; any failure
    moves to ``failed`` and discards the partial output.
    """

    def __init__(self, task: FileTask, context: FilterContext) -> None:
        self._task = task
        self._context = context
        self._state: PipelineState = "opening"
        self._batch_index = 0
        self._rows_read = 0
        self._rows_kept = 0

    @property
    def state(self) -> PipelineState:
        """Current pipeline state."""
        return self._state

    def run(self) -> FileOutcome:
        """Filter the source file into the destination file.

        Returns:
            Outcome with row counts for the completed file.

        Raises:
            BabylonifySchemaError: If the text column is missing or not text.
            BabylonifyIoError: If reading, decoding, or writing fails.
            BabylonifyDetectionError: If the detector fails on a value.
        """
        _LOGGER.info(
            "file_filter_started",
            source=str(self._task.source_path),
            destination=str(self._task.destination_path),
        )
        source: ParquetSource | None = None
        writer: ParquetBatchWriter | None = None
        try:
            _ensure_destination_is_file(self._task.destination_path)
            source = open_parquet_source(self._task.source_path, self._context.column_name)
            writer = ParquetBatchWriter(self._task.destination_path, source.schema)
            self._state = "streaming"
            for batch in source.iter_batches(self._context.batch_size):
                self._write_filtered_batch(writer, batch, source.column_index)
                self._batch_index += 1
            self._state = "closing"
            writer.finalize()
        except BabylonifyFileError as error:
            self._fail(writer, error)
            raise
        except (ValueError, pa.ArrowException, OSError) as error:
            wrapped = BabylonifyIoError(
                f"Failed to filter {self._task.source_path}: {error}. "
                "Check that the file is valid Parquet with UTF-8 text."
            )
            self._fail(writer, wrapped)
            raise wrapped from error
        except Exception as error:
            self._fail(writer, error)
            raise
        finally:
            if source is not None:
                source.close()
        self._state = "done"
        _LOGGER.info(
            "file_filter_completed",
            source=str(self._task.source_path),
            destination=str(self._task.destination_path),
            batches=self._batch_index,
            rows_read=self._rows_read,
            rows_kept=self._rows_kept,
        )
        return FileOutcome(
            source_path=self._task.source_path,
            destination_path=self._task.destination_path,
            status="done",
            rows_read=self._rows_read,
            rows_kept=self._rows_kept,
        )

    def _write_filtered_batch(
        self,
        writer: ParquetBatchWriter,
        batch: pa.RecordBatch,
        column_index: int,
    ) -> None:
        self._rows_read += batch.num_rows
        filtered = self._filter_batch(batch, column_index)
        if filtered.num_rows == 0:
            return
        writer.write(filtered)
        self._rows_kept += filtered.num_rows

    def _filter_batch(self, batch: pa.RecordBatch, column_index: int) -> pa.Table:
        """Apply the selection mask and substitute cleaned values."""
        decisions = self._classify_values(batch.column(column_index).to_pylist())
        mask = pa.array([decision.keep for decision in decisions], type=pa.bool_())
        table = pa.Table.from_batches([batch])
        filtered = table.filter(mask)
        if not self._context.classifier.clean_enabled:
            return filtered
        text_field = table.schema.field(column_index)
        cleaned_values = [decision.output_text for decision in decisions if decision.keep]
        return filtered.set_column(
            column_index,
            text_field,
            pa.array(cleaned_values, type=text_field.type),
        )

    def _classify_values(self, values: list[str | None]) -> list[RowDecision]:
        """Scatter row chunks to the pool and gather them in index order."""
        chunks = split_into_chunks(values, self._context.worker_count)
        futures: dict[Future[list[RowDecision]], int] = {
            self._context.executor.submit(self._context.classifier.classify_many, chunk): index
            for index, chunk in enumerate(chunks)
        }
        gathered: list[list[RowDecision]] = [[] for _ in chunks]
        try:
            for future in as_completed(futures):
                gathered[futures[future]] = future.result()
        except Exception:
            for future in futures:
                future.cancel()
            raise
        return [decision for chunk_decisions in gathered for decision in chunk_decisions]

    def _fail(self, writer: ParquetBatchWriter | None, error: Exception) -> None:
        self._state = "failed"
        if writer is not None:
            writer.discard()
        _LOGGER.error(
            "file_filter_failed",
            source=str(self._task.source_path),
            reason=getattr(error, "reason", "error"),
            batch_index=self._batch_index,
            message=str(error),
        )


def filter_file(
    source_path: str | Path,
    destination_path: str | Path,
    options: FilterOptions,
    config: BabylonifyConfig | None = None,
) -> FileOutcome:
    """Filter one Parquet file by detected language.

    Args:
        source_path: Input Parquet file.
        destination_path: Output Parquet file.
        options: Run options.
        config: Optional runtime configuration.

    Returns:
        Outcome with row counts.

    Raises:
        BabylonifyResolutionError: If the language token is unknown.
        BabylonifyFileError: If the file fails to filter.
    """
    runtime_config = config or BabylonifyConfig.from_env()
    target = resolve_language(options.language)
    task = FileTask(
        source_path=Path(source_path).expanduser(),
        destination_path=Path(destination_path).expanduser(),
    )
    with open_filter_context(target, options, runtime_config) as context:
        return BatchPipeline(task, context).run()


def split_into_chunks(values: Sequence[str | None], chunk_count: int) -> list[Sequence[str | None]]:
    """Split values into at most ``chunk_count`` contiguous slices.

    Args:
        values: Column values of one batch.
        chunk_count: Desired number of slices, usually the worker count.

    Returns:
        Non-empty contiguous slices covering ``values`` in order.
    """
    if not values:
        return []
    chunk_size = math.ceil(len(values) / max(chunk_count, 1))
    return [values[start : start + chunk_size] for start in range(0, len(values), chunk_size)]


def _ensure_destination_is_file(destination_path: Path) -> None:
    """Reject destinations that point at an existing directory."""
    if destination_path.is_dir():
        raise BabylonifyIoError(
            f"Output path {destination_path} points to a directory. "
            "Provide a file path instead."
        )
