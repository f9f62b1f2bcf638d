"""Target languages offered by the language selector."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Language:
    """A selectable target language."""

    code: str
    name: str


SUPPORTED_LANGUAGES: List[Language] = [
    Language("es", "Spanish"),
    Language("fr", "French"),
    Language("de", "German"),
    Language("it", "Italian"),
    Language("pt", "Portuguese"),
    Language("ru", "Russian"),
    Language("zh", "Chinese"),
    Language("ja", "Japanese"),
    Language("ar", "Arabic"),
]

LANGUAGE_CODES = frozenset(lang.code for lang in SUPPORTED_LANGUAGES)


def get_language(code: str) -> Optional[Language]:
    """Look up a supported language by code (case-insensitive)."""
    code = (code or "").strip().lower()
    for lang in SUPPORTED_LANGUAGES:
        if lang.code == code:
            return lang
    return None
