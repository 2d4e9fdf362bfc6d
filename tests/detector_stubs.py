"""Deterministic detector stand-ins for unit tests."""

from __future__ import annotations

import threading

from lingua import Language

_UKRAINIAN_LETTERS = set("іїєґІЇЄҐ")
FAILING_MARKER = "💥"


class ScriptDetector:
    """Guess a language from the script of the text.

    Ukrainian-only letters map to Ukrainian, other Cyrillic to Russian,
    Latin letters to English. Text without letters is undetermined.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.calls: list[str] = []

    def detect_language_of(self, text: str) -> Language | None:
        with self._lock:
            self.calls.append(text)
        if FAILING_MARKER in text:
            raise RuntimeError("detector exploded")
        if any(character in _UKRAINIAN_LETTERS for character in text):
            return Language.UKRAINIAN
        if any("Ѐ" <= character <= "ӿ" for character in text):
            return Language.RUSSIAN
        if any(character.isascii() and character.isalpha() for character in text):
            return Language.ENGLISH
        return None
