"""Per-user session state for the translator page."""

from .translator_session import TranslatorSession

__all__ = [
    "TranslatorSession",
]
