"""babylonify CLI entry points.

This module maps argparse options onto the single-file and directory
filtering entry points and turns outcomes into exit codes.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from core.config import BabylonifyConfig
from core.constants import DEFAULT_TARGET_LANGUAGE, DEFAULT_TEXT_COLUMN, PACKAGE_VERSION
from core.errors import (
    BabylonifyConfigError,
    BabylonifyError,
    BabylonifyFileError,
    BabylonifyResolutionError,
)
from core.types import FileOutcome, FilterOptions
from ingest.directory_runner import filter_directory
from ingest.pipeline import filter_file
from transforms.language_resolution import resolve_language


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="babylonify",
        description="Filter Parquet rows by detected language (+ optional cleaning)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {PACKAGE_VERSION}")
    source_group = parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("-i", "--input", help="Input Parquet file path")
    source_group.add_argument("--input-dir", help="Input directory with Parquet files")
    parser.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output Parquet file path (or directory when --input-dir is used)",
    )
    parser.add_argument(
        "-c",
        "--column",
        default=DEFAULT_TEXT_COLUMN,
        help=f"Text column name (default: {DEFAULT_TEXT_COLUMN})",
    )
    parser.add_argument(
        "-l",
        "--lang",
        default=DEFAULT_TARGET_LANGUAGE,
        help="Target language (ISO 639-1 or name: uk, en, ru, Ukrainian, etc.)",
    )
    parser.add_argument("--threads", type=int, help="Worker thread count (default: all CPUs)")
    parser.add_argument(
        "--keep-empty",
        action="store_true",
        help="Keep rows whose text is null or empty",
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Clean text: keep only letters, punctuation, and single spaces",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        help="Rows per read batch (default: BABYLONIFY_BATCH_SIZE or 8192)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the babylonify CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    options = FilterOptions(
        column_name=args.column,
        language=args.lang,
        keep_empty=args.keep_empty,
        clean=args.clean,
        worker_count=args.threads,
        batch_size=args.batch_size,
    )
    try:
        config = BabylonifyConfig.from_env()
        if args.input_dir:
            return _run_directory_command(args, options, config)
        return _run_file_command(args, options, config)
    except BabylonifyError as error:
        print(f"error={_error_kind(error)} message={error}", file=sys.stderr)
        return 1


def _run_file_command(
    args: argparse.Namespace,
    options: FilterOptions,
    config: BabylonifyConfig,
) -> int:
    """Handle single-file mode.

    Args:
        args: Parsed CLI args.
        options: Filter options.
        config: Runtime configuration.

    Returns:
        Exit code.
    """
    target = resolve_language(options.language)
    outcome = filter_file(args.input, args.output, options, config)
    print(
        f"filtered rows_read={outcome.rows_read} rows_kept={outcome.rows_kept} "
        f"lang={target.name} cleaned={options.clean} "
        f"source={outcome.source_path} destination={outcome.destination_path}"
    )
    return 0


def _run_directory_command(
    args: argparse.Namespace,
    options: FilterOptions,
    config: BabylonifyConfig,
) -> int:
    """Handle directory mode.

    Args:
        args: Parsed CLI args.
        options: Filter options.
        config: Runtime configuration.

    Returns:
        Exit code, non-zero only when no file completed.
    """
    report = filter_directory(args.input_dir, args.output, options, config)
    if report.processed == 0:
        print(
            f"error=no-input-files message=No Parquet files found in {args.input_dir}",
            file=sys.stderr,
        )
        return 1
    for outcome in report.outcomes:
        print(_format_outcome(outcome))
    print(
        f"summary processed={report.processed} "
        f"succeeded={report.succeeded} failed={report.failed}"
    )
    return 1 if report.status == "failed" else 0


def _format_outcome(outcome: FileOutcome) -> str:
    """Render one directory-mode outcome line."""
    if outcome.succeeded:
        return (
            f"done source={outcome.source_path} destination={outcome.destination_path} "
            f"rows_read={outcome.rows_read} rows_kept={outcome.rows_kept}"
        )
    return (
        f"failed source={outcome.source_path} reason={outcome.failure_reason} "
        f"message={outcome.error_message}"
    )


def _error_kind(error: BabylonifyError) -> str:
    """Map a domain error onto its user-facing kind."""
    if isinstance(error, BabylonifyFileError):
        return error.reason
    if isinstance(error, BabylonifyResolutionError):
        return "unknown-language"
    if isinstance(error, BabylonifyConfigError):
        return "config-error"
    return "error"
