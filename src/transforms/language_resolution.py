"""Language token resolution.

This module maps user-facing language tokens (ISO codes, English names,
localized names) onto the detector's language enumeration.
"""

from __future__ import annotations

from lingua import Language

from core.errors import BabylonifyResolutionError

_LANGUAGE_ALIASES: dict[str, Language] = {
    "uk": Language.UKRAINIAN,
    "ukr": Language.UKRAINIAN,
    "ukrainian": Language.UKRAINIAN,
    "українська": Language.UKRAINIAN,
    "en": Language.ENGLISH,
    "eng": Language.ENGLISH,
    "english": Language.ENGLISH,
    "ru": Language.RUSSIAN,
    "rus": Language.RUSSIAN,
    "russian": Language.RUSSIAN,
    "русский": Language.RUSSIAN,
    "pl": Language.POLISH,
    "polish": Language.POLISH,
    "de": Language.GERMAN,
    "german": Language.GERMAN,
    "fr": Language.FRENCH,
    "french": Language.FRENCH,
    "es": Language.SPANISH,
    "spanish": Language.SPANISH,
}


def resolve_language(token: str) -> Language:
    """Resolve a language token to a detector language.

    Matching is case-insensitive and ignores surrounding whitespace. The
    curated alias table wins, then the detector's English language names,
    then ISO 639-1 and ISO 639-3 codes of every supported language.

    Args:
        token: ISO code, English name, or localized alias.

    Returns:
        Matching detector language.

    Raises:
        BabylonifyResolutionError: If the token matches no language.
    """
    normalized = token.strip().lower()
    alias_match = _LANGUAGE_ALIASES.get(normalized)
    if alias_match is not None:
        return alias_match
    for language in _sorted_languages():
        if language.name.lower() == normalized:
            return language
    for language in _sorted_languages():
        if normalized in _iso_codes(language):
            return language
    raise BabylonifyResolutionError(
        f"Unknown language: '{normalized}'. "
        "Use an ISO 639-1/639-3 code or an English language name, e.g. uk or Ukrainian."
    )


def _sorted_languages() -> list[Language]:
    """Return detector languages in a stable order."""
    return sorted(Language.all(), key=lambda language: language.name)


def _iso_codes(language: Language) -> tuple[str, str]:
    """Return lowercase ISO 639-1 and 639-3 codes for a language."""
    return (
        language.iso_code_639_1.name.lower(),
        language.iso_code_639_3.name.lower(),
    )
