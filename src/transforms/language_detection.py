"""Language detection transform.

This module builds the lingua detector shared by all workers of a run
and wraps detector calls so failures surface as domain errors.
"""

from __future__ import annotations

from typing import Protocol

from lingua import Language, LanguageDetectorBuilder

from core.config import BabylonifyConfig
from core.errors import BabylonifyConfigError, BabylonifyDetectionError
from core.logging_config import get_logger
from transforms.language_resolution import resolve_language

_LOGGER = get_logger(__name__)


class LanguageDetector(Protocol):
    """Detector capability consumed by row classification."""

    def detect_language_of(self, text: str) -> Language | None:
        """Return the most likely language, or ``None`` if undetermined."""


def build_detector(config: BabylonifyConfig, target: Language) -> LanguageDetector:
    """Build a detector for one run.

    Args:
        config: Runtime configuration with model loading options.
        target: Resolved target language, required in restricted sets.

    Returns:
        A lingua detector, safe to share across worker threads.

    Raises:
        BabylonifyConfigError: If the restricted language set is invalid.
    """
    languages = _restricted_languages(config, target)
    if languages:
        builder = LanguageDetectorBuilder.from_languages(*languages)
    else:
        builder = LanguageDetectorBuilder.from_all_languages()
    if config.preload_models:
        builder = builder.with_preloaded_language_models()
    detector = builder.build()
    _LOGGER.info(
        "detector_ready",
        languages=len(languages) or len(Language.all()),
        preloaded=config.preload_models,
    )
    return detector


def detect_language(detector: LanguageDetector, text: str) -> Language | None:
    """Detect the language of one text sample.

    Args:
        detector: Shared detector instance.
        text: Non-empty text to classify.

    Returns:
        Detected language, or ``None`` when undetermined.

    Raises:
        BabylonifyDetectionError: If the detector call fails.
    """
    try:
        return detector.detect_language_of(text)
    except Exception as error:
        raise BabylonifyDetectionError(
            f"Language detection failed for value {text[:40]!r}: {error}."
        ) from error


def _restricted_languages(config: BabylonifyConfig, target: Language) -> list[Language]:
    """Resolve configured detector languages, empty when unrestricted."""
    if not config.detector_languages:
        return []
    languages = sorted(
        {resolve_language(token) for token in config.detector_languages},
        key=lambda language: language.name,
    )
    if target not in languages:
        raise BabylonifyConfigError(
            f"Target language {target.name} is not in BABYLONIFY_DETECTOR_LANGUAGES. "
            "Add it to the list or unset the variable."
        )
    if len(languages) < 2:
        raise BabylonifyConfigError(
            "BABYLONIFY_DETECTOR_LANGUAGES must name at least two languages."
        )
    return languages
