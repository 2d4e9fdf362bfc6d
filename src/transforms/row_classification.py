"""Per-row keep/drop classification.

This module decides whether one text value stays in the output and which
value is emitted for it. It holds no mutable state, so one classifier is
shared by every worker thread of a run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from lingua import Language

from core.types import RowDecision
from transforms.language_detection import LanguageDetector, detect_language
from transforms.text_cleaning import clean_text


def classify_row(
    text: str | None,
    target: Language,
    clean_enabled: bool,
    keep_empty: bool,
    detector: LanguageDetector,
) -> RowDecision:
    """Decide keep/drop for one text value.

    Null and empty values skip detection and follow ``keep_empty``. So do
    values that cleaning reduces to an empty string.

    Args:
        text: Text column value, ``None`` for null.
        target: Resolved target language.
        clean_enabled: Whether to clean before detecting and emitting.
        keep_empty: Whether null/empty values are retained.
        detector: Shared language detector.

    Returns:
        Keep decision and the value to emit for the row.

    Raises:
        BabylonifyDetectionError: If the detector call fails.
    """
    if not text:
        return RowDecision(keep=keep_empty, output_text=text)
    candidate = clean_text(text) if clean_enabled else text
    if not candidate:
        return RowDecision(keep=keep_empty, output_text=candidate)
    detected = detect_language(detector, candidate)
    return RowDecision(keep=detected == target, output_text=candidate)


@dataclass(frozen=True)
class RowClassifier:
    """Classifier bound to one run's target language and flags."""

    detector: LanguageDetector
    target: Language
    clean_enabled: bool = False
    keep_empty: bool = False

    def classify(self, text: str | None) -> RowDecision:
        """Classify one text value with the bound settings."""
        return classify_row(text, self.target, self.clean_enabled, self.keep_empty, self.detector)

    def classify_many(self, texts: Sequence[str | None]) -> list[RowDecision]:
        """Classify a contiguous slice of values, preserving order."""
        return [self.classify(text) for text in texts]
