"""Runtime configuration model for babylonify.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_BATCH_SIZE,
    ENV_BATCH_SIZE,
    ENV_DETECTOR_LANGUAGES,
    ENV_PRELOAD_MODELS,
    ENV_WORKERS,
)
from core.errors import BabylonifyConfigError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class BabylonifyConfig:
    """Validated runtime configuration.

    Attributes:
        batch_size: Rows pulled from the reader per batch.
        worker_count: Default worker pool size, ``None`` for all CPUs.
        preload_models: Whether detector models load eagerly at startup.
        detector_languages: Optional language tokens restricting detection.
    """

    batch_size: int = DEFAULT_BATCH_SIZE
    worker_count: int | None = None
    preload_models: bool = True
    detector_languages: tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> "BabylonifyConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            BabylonifyConfigError: If environment values are invalid.
        """
        batch_size = _parse_positive_int(
            ENV_BATCH_SIZE, os.getenv(ENV_BATCH_SIZE, str(DEFAULT_BATCH_SIZE))
        )
        workers_value = os.getenv(ENV_WORKERS)
        worker_count = (
            _parse_positive_int(ENV_WORKERS, workers_value) if workers_value else None
        )
        preload_models = _parse_bool(ENV_PRELOAD_MODELS, os.getenv(ENV_PRELOAD_MODELS, "true"))
        detector_languages = _parse_token_list(os.getenv(ENV_DETECTOR_LANGUAGES, ""))
        return cls(
            batch_size=batch_size,
            worker_count=worker_count,
            preload_models=preload_models,
            detector_languages=detector_languages,
        )


def resolve_worker_count(requested: int | None, config: BabylonifyConfig) -> int:
    """Pick the worker pool size for a run.

    Args:
        requested: Explicit worker count, e.g. from ``--threads``.
        config: Runtime configuration with the environment default.

    Returns:
        Positive worker count, falling back to hardware concurrency.

    Raises:
        BabylonifyConfigError: If an explicit count is not positive.
    """
    count = requested if requested is not None else config.worker_count
    if count is None:
        return os.cpu_count() or 1
    if count < 1:
        raise BabylonifyConfigError(
            f"Invalid worker count: expected a positive integer, got {count}. "
            "Pass --threads 1 or higher."
        )
    return count


def _parse_positive_int(name: str, raw_value: str) -> int:
    """Parse a positive integer environment value.

    Args:
        name: Environment variable name for error context.
        raw_value: Raw string from environment.

    Returns:
        Parsed integer.

    Raises:
        BabylonifyConfigError: If value is not a positive integer.
    """
    try:
        value = int(raw_value)
    except ValueError as error:
        raise BabylonifyConfigError(
            f"Invalid {name} value: expected integer, got '{raw_value}'. "
            f"Set {name} to a positive numeric value."
        ) from error
    if value < 1:
        raise BabylonifyConfigError(
            f"Invalid {name} value: expected a positive integer, got {value}."
        )
    return value


def _parse_bool(name: str, raw_value: str) -> bool:
    """Parse a boolean flag environment value."""
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise BabylonifyConfigError(
        f"Invalid {name} value: expected true/false, got '{raw_value}'."
    )


def _parse_token_list(raw_value: str) -> tuple[str, ...]:
    """Split a comma-separated token list, dropping blanks."""
    return tuple(token.strip() for token in raw_value.split(",") if token.strip())
