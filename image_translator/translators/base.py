"""
Base abstractions for translation providers.

Every external translation service is wrapped in a TranslationProvider
subclass that knows how to build its request and parse its response.
The base class owns the shared behaviour: timing, logging, turning any
failure into a TranslationProviderError and demoting the provider in the
session's availability store.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp

from image_translator.config import Config, config
from image_translator.translators.availability import ProviderAvailability
from image_translator.utils.logger import get_logger

logger = get_logger(__name__)


# ============================================================================
# Data Classes
# ============================================================================


@dataclass(frozen=True)
class ProviderInfo:
    """
    Static description of a translation provider.

    Attributes:
        id: Stable identifier used in settings and availability flags
        name: Human readable name shown in the provider selector
        free: Whether the service can be used without a paid key
    """

    id: str
    name: str
    free: bool


@dataclass(frozen=True)
class TranslationRequest:
    """Text and target language for a single translation attempt."""

    text: str
    target_language: str


@dataclass(frozen=True)
class TranslationResult:
    """
    Successful translation.

    Attributes:
        text: Translated text
        provider_id: Provider that produced the translation
        latency_ms: Time taken by the winning attempt in milliseconds
    """

    text: str
    provider_id: str
    latency_ms: float = 0.0


# ============================================================================
# Exceptions
# ============================================================================


class TranslationError(Exception):
    """Base exception for all translation errors."""

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        self.provider = provider
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with provider name if available."""
        if self.provider:
            return f"[{self.provider}] {super().__str__()}"
        return super().__str__()


class TranslationProviderError(TranslationError):
    """A single provider attempt failed (network, status, response shape)."""


class NoProvidersAvailableError(TranslationError):
    """Every provider has been demoted for this session."""


class AllProvidersFailedError(TranslationError):
    """Every attempted provider failed."""


# ============================================================================
# Abstract Base Class
# ============================================================================


class TranslationProvider(ABC):
    """
    Abstract base class for translation providers.

    Subclasses set ``info`` and implement ``_send`` (one HTTP request,
    returning the decoded JSON payload) and ``_parse`` (pull the translated
    string out of the provider's response envelope).
    """

    info: ProviderInfo

    def __init__(
        self,
        http: aiohttp.ClientSession,
        availability: ProviderAvailability,
        settings: Config = config
    ) -> None:
        self._http = http
        self._availability = availability
        self._settings = settings

    @property
    def id(self) -> str:
        return self.info.id

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def is_available(self) -> bool:
        """Whether this provider is still enabled for the session."""
        return self._availability.is_available(self.id)

    @abstractmethod
    async def _send(self, request: TranslationRequest) -> Any:
        """
        Send the provider-specific request.

        Returns:
            Decoded JSON payload of the response
        """
        pass

    @abstractmethod
    def _parse(self, payload: Any) -> str:
        """
        Extract the translated text from a response payload.

        Raising KeyError, IndexError, TypeError or AttributeError is
        expected when the payload does not have the provider's shape.
        """
        pass

    async def translate(self, text: str, target_language: str) -> TranslationResult:
        """
        Translate text with this provider.

        On any failure the provider is marked unavailable for the rest of
        the session and the error is re-raised. No retry happens here.

        Args:
            text: Text to translate
            target_language: Target language code (e.g. "es")

        Returns:
            TranslationResult: Translated text and timing

        Raises:
            TranslationProviderError: If the request or parsing fails
        """
        request = TranslationRequest(text=text, target_language=target_language)
        start_time = time.perf_counter()

        try:
            payload = await self._send(request)
            try:
                translated = self._parse(payload)
            except (KeyError, IndexError, TypeError, AttributeError) as e:
                raise TranslationProviderError(
                    f"Unexpected response shape: {type(e).__name__}: {e}",
                    provider=self.id
                ) from e

            if not isinstance(translated, str):
                raise TranslationProviderError(
                    f"Unexpected response shape: translated text is {type(translated).__name__}",
                    provider=self.id
                )

        except Exception as e:
            latency_ms = (time.perf_counter() - start_time) * 1000
            self._availability.mark_unavailable(self.id)
            logger.warning(
                "Translation provider failed",
                provider=self.id,
                latency_ms=round(latency_ms, 2),
                error=str(e),
                error_type=type(e).__name__
            )
            if isinstance(e, TranslationProviderError):
                raise
            raise TranslationProviderError(
                f"Translation request failed: {e}",
                provider=self.id
            ) from e

        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Translation provider succeeded",
            provider=self.id,
            target_language=target_language,
            original_length=len(text),
            translated_length=len(translated),
            latency_ms=round(latency_ms, 2)
        )
        return TranslationResult(
            text=translated,
            provider_id=self.id,
            latency_ms=latency_ms
        )

    # ------------------------------------------------------------------
    # Helpers for subclasses
    # ------------------------------------------------------------------

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Perform one HTTP request and decode the JSON body.

        Non-2xx statuses raise aiohttp.ClientResponseError.
        """
        async with self._http.request(method, url, **kwargs) as response:
            response.raise_for_status()
            return await response.json(content_type=None)

    def _require(self, value: Optional[str], setting: str) -> str:
        """Return a configured credential or fail the attempt."""
        if not value:
            raise TranslationProviderError(f"{setting} is not configured", provider=self.id)
        return value
