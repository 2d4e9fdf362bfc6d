"""Transcript text cleaning transform.

Keeps letters, punctuation, and single spaces; drops digits, symbols,
emoji, marks, and control characters code point by code point.
"""

from __future__ import annotations

import unicodedata

from core.constants import CLEANING_DROPPED_CHARACTERS


def clean_text(text: str | None) -> str | None:
    """Strip non-letter, non-punctuation characters and normalize spaces.

    Text is NFC-normalized first so decomposed letters keep their accents
    instead of losing the combining mark.

    Args:
        text: Raw text value, or ``None`` for a null cell.

    Returns:
        Cleaned text; ``None`` passes through unchanged.
    """
    if text is None:
        return None
    spaced = " ".join(unicodedata.normalize("NFC", text).split())
    kept = "".join(character for character in spaced if _is_kept_character(character))
    return unicodedata.normalize("NFC", " ".join(kept.split()))


def _is_kept_character(character: str) -> bool:
    """Return whether a code point survives cleaning."""
    if character == " ":
        return True
    if character in CLEANING_DROPPED_CHARACTERS:
        return False
    return unicodedata.category(character)[0] in ("L", "P")
