"""
FallbackTranslator - tries translation providers in order until one succeeds.
"""
from functools import partial
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

import aiohttp

from image_translator.config import Config, config
from image_translator.translators.availability import ProviderAvailability
from image_translator.translators.base import (
    AllProvidersFailedError,
    NoProvidersAvailableError,
    TranslationProvider,
    TranslationResult,
)
from image_translator.translators.registry import build_providers, provider_ids
from image_translator.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

NO_PROVIDERS_MESSAGE = "No translation providers available"
ALL_FAILED_MESSAGE = "All translation providers failed"


async def first_success(attempts: Iterable[Callable[[], Awaitable[T]]]) -> T:
    """
    Await attempts one at a time and return the first result.

    Attempts after the first success are never started.

    Raises:
        AllProvidersFailedError: If every attempt raised
    """
    for attempt in attempts:
        try:
            return await attempt()
        except Exception as e:
            logger.debug("Attempt failed, trying next", error=str(e))
    raise AllProvidersFailedError(ALL_FAILED_MESSAGE)


class FallbackTranslator:
    """Orchestrates fallback between the session's translation providers."""

    def __init__(
        self,
        providers: Sequence[TranslationProvider],
        availability: ProviderAvailability,
        honor_preferred: bool = True
    ):
        """
        Initialize FallbackTranslator.

        Args:
            providers: Providers in fallback order
            availability: Session availability store shared with the providers
            honor_preferred: Start at the caller's preferred provider when given
        """
        self._providers = list(providers)
        self._availability = availability
        self.honor_preferred = honor_preferred

    @classmethod
    def create(
        cls,
        http: aiohttp.ClientSession,
        settings: Config = config
    ) -> "FallbackTranslator":
        """Build a translator with a fresh availability store (a new session)."""
        availability = ProviderAvailability(provider_ids())
        providers = build_providers(http, availability, settings)
        return cls(providers, availability, settings.HONOR_PREFERRED_PROVIDER)

    @property
    def availability(self) -> ProviderAvailability:
        return self._availability

    @property
    def providers(self) -> List[TranslationProvider]:
        return list(self._providers)

    def attempt_order(self, preferred: Optional[str] = None) -> List[TranslationProvider]:
        """
        Providers to try for the next call.

        Only providers still marked available are included, in registry
        order. When preferences are honored and the preferred provider is
        available it is moved to the front.
        """
        available = [p for p in self._providers if self._availability.is_available(p.id)]

        if self.honor_preferred and preferred:
            head = [p for p in available if p.id == preferred]
            if head:
                available = head + [p for p in available if p.id != preferred]

        return available

    async def translate_with_fallback(
        self,
        text: str,
        target_language: str,
        preferred: Optional[str] = None
    ) -> TranslationResult:
        """
        Translate text with the first provider that succeeds.

        Providers are attempted strictly one after another. A failing
        provider demotes itself for the rest of the session.

        Args:
            text: Text to translate
            target_language: Target language code
            preferred: Provider id selected by the user

        Returns:
            TranslationResult from the first successful provider

        Raises:
            NoProvidersAvailableError: If every provider is already demoted
            AllProvidersFailedError: If every attempted provider failed
        """
        order = self.attempt_order(preferred)

        if not order:
            logger.error("No translation providers available")
            raise NoProvidersAvailableError(NO_PROVIDERS_MESSAGE)

        logger.info(
            "Starting translation",
            providers=[p.id for p in order],
            target_language=target_language,
            text_length=len(text),
            preferred=preferred
        )

        try:
            return await first_success(
                partial(provider.translate, text, target_language)
                for provider in order
            )
        except AllProvidersFailedError:
            logger.error(
                "All translation providers failed",
                providers=[p.id for p in order]
            )
            raise

    def provider_statuses(self) -> List[Dict]:
        """Provider list with availability, for the provider selector."""
        return [
            {
                "id": p.info.id,
                "name": p.info.name,
                "free": p.info.free,
                "available": self._availability.is_available(p.id),
            }
            for p in self._providers
        ]
