"""Directory mode for the filtering pipeline.

This module mirrors a flat directory of Parquet files into an output
directory. Files run one after another on a shared worker pool and
detector; a failing file is recorded in the report and the run moves on.
"""

from __future__ import annotations

from pathlib import Path

from core.config import BabylonifyConfig
from core.constants import PARQUET_EXTENSION
from core.errors import BabylonifyConfigError, BabylonifyFileError, BabylonifyIoError
from core.logging_config import get_logger
from core.types import FileOutcome, FileTask, FilterOptions, RunReport
from ingest.pipeline import BatchPipeline, FilterContext, open_filter_context
from transforms.language_resolution import resolve_language

_LOGGER = get_logger(__name__)


def filter_directory(
    source_dir: str | Path,
    destination_dir: str | Path,
    options: FilterOptions,
    config: BabylonifyConfig | None = None,
) -> RunReport:
    """Filter every Parquet file directly under a directory.

    Args:
        source_dir: Directory holding input Parquet files.
        destination_dir: Directory receiving outputs with the same names.
        options: Run options shared by every file.
        config: Optional runtime configuration.

    Returns:
        Per-file outcomes in discovery order.

    Raises:
        BabylonifyResolutionError: If the language token is unknown.
        BabylonifyConfigError: If the destination is not a directory.
        BabylonifyIoError: If the source directory cannot be listed.
    """
    runtime_config = config or BabylonifyConfig.from_env()
    target = resolve_language(options.language)
    source_root = Path(source_dir).expanduser()
    destination_root = Path(destination_dir).expanduser()
    _prepare_destination_dir(destination_root)
    tasks = discover_file_tasks(source_root, destination_root)
    if not tasks:
        _LOGGER.warning("no_parquet_files_found", source_dir=str(source_root))
        return RunReport(outcomes=())
    outcomes: list[FileOutcome] = []
    with open_filter_context(target, options, runtime_config) as context:
        for task in tasks:
            outcomes.append(_run_file_task(task, context))
    report = RunReport(outcomes=tuple(outcomes))
    _LOGGER.info(
        "directory_filter_completed",
        source_dir=str(source_root),
        destination_dir=str(destination_root),
        processed=report.processed,
        succeeded=report.succeeded,
        failed=report.failed,
        status=report.status,
    )
    return report


def discover_file_tasks(source_dir: Path, destination_dir: Path) -> list[FileTask]:
    """List Parquet files directly under ``source_dir`` with mirrored outputs.

    Args:
        source_dir: Directory to scan; subdirectories are not entered.
        destination_dir: Directory receiving outputs.

    Returns:
        Tasks sorted by source path.

    Raises:
        BabylonifyIoError: If the source directory cannot be listed.
    """
    try:
        entries = sorted(source_dir.iterdir())
    except OSError as error:
        raise BabylonifyIoError(
            f"Failed to read input directory {source_dir}: {error.strerror or error}. "
            "Provide an existing directory with --input-dir."
        ) from error
    return [
        FileTask(source_path=entry, destination_path=destination_dir / entry.name)
        for entry in entries
        if entry.is_file() and _is_parquet_file(entry)
    ]


def _run_file_task(task: FileTask, context: FilterContext) -> FileOutcome:
    """Run one file and capture a file-level failure as an outcome."""
    try:
        return BatchPipeline(task, context).run()
    except BabylonifyFileError as error:
        return FileOutcome(
            source_path=task.source_path,
            destination_path=task.destination_path,
            status="failed",
            failure_reason=error.reason,
            error_message=str(error),
        )


def _prepare_destination_dir(destination_dir: Path) -> None:
    """Create the output directory, rejecting non-directory paths."""
    if destination_dir.exists() and not destination_dir.is_dir():
        raise BabylonifyConfigError(
            f"Output path {destination_dir} must be a directory when --input-dir is used."
        )
    try:
        destination_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise BabylonifyIoError(
            f"Failed to create output directory at {destination_dir}: "
            f"{error.strerror or error}."
        ) from error


def _is_parquet_file(path: Path) -> bool:
    """Return whether a file has a Parquet extension, ignoring case."""
    return path.suffix.lower() == PARQUET_EXTENSION
