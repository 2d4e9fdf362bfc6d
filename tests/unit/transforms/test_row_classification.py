"""Unit tests for per-row classification."""

from __future__ import annotations

import pytest
from lingua import Language

from core.errors import BabylonifyDetectionError
from core.types import RowDecision
from tests.detector_stubs import FAILING_MARKER, ScriptDetector
from transforms.row_classification import RowClassifier, classify_row


@pytest.mark.parametrize("text", [None, ""])
def test_classify_row_keeps_empty_without_detection(text: str | None) -> None:
    """Null and empty values bypass detection when keep_empty is set."""
    detector = ScriptDetector()

    decision = classify_row(text, Language.UKRAINIAN, True, True, detector)

    assert decision == RowDecision(keep=True, output_text=text)
    assert detector.calls == []


@pytest.mark.parametrize("text", [None, ""])
def test_classify_row_drops_empty_by_default(text: str | None) -> None:
    """Null and empty values are dropped without keep_empty."""
    decision = classify_row(text, Language.UKRAINIAN, False, False, ScriptDetector())

    assert decision.keep is False


def test_classify_row_keeps_matching_language() -> None:
    """Rows in the target language are kept with raw text."""
    decision = classify_row("Привіт світ", Language.UKRAINIAN, False, False, ScriptDetector())

    assert decision == RowDecision(keep=True, output_text="Привіт світ")


def test_classify_row_drops_other_language() -> None:
    """Rows in another language are dropped."""
    decision = classify_row("Hello world", Language.UKRAINIAN, False, False, ScriptDetector())

    assert decision.keep is False


def test_classify_row_drops_undetermined_text() -> None:
    """Undetermined detection never matches the target."""
    decision = classify_row("   ", Language.UKRAINIAN, False, False, ScriptDetector())

    assert decision.keep is False


def test_classify_row_detects_on_cleaned_text() -> None:
    """With cleaning on, detection and output use the cleaned value."""
    detector = ScriptDetector()

    decision = classify_row("Привіт, Україно! 😊 123", Language.UKRAINIAN, True, False, detector)

    assert decision == RowDecision(keep=True, output_text="Привіт, Україно!")
    assert detector.calls == ["Привіт, Україно!"]


def test_classify_row_treats_cleaned_to_empty_as_empty() -> None:
    """Values that clean to nothing follow the keep_empty policy."""
    detector = ScriptDetector()

    kept = classify_row("123 😊", Language.UKRAINIAN, True, True, detector)
    dropped = classify_row("123 😊", Language.UKRAINIAN, True, False, detector)

    assert kept == RowDecision(keep=True, output_text="")
    assert dropped.keep is False
    assert detector.calls == []


def test_classify_row_wraps_detector_failures() -> None:
    """Detector exceptions surface as detection errors."""
    with pytest.raises(BabylonifyDetectionError):
        classify_row(f"text {FAILING_MARKER}", Language.ENGLISH, False, False, ScriptDetector())


def test_row_classifier_classify_many_preserves_order() -> None:
    """Bound classifier returns one decision per value in input order."""
    classifier = RowClassifier(detector=ScriptDetector(), target=Language.ENGLISH)

    decisions = classifier.classify_many(["Hello", "Привіт", None, "World"])

    assert [decision.keep for decision in decisions] == [True, False, False, True]
