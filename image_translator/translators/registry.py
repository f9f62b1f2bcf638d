"""
Fixed, ordered registry of translation providers.

Order of PROVIDER_REGISTRY is the fallback order. There is no runtime
registration and no reordering by latency or quality.
"""

from typing import List, Optional, Tuple, Type

import aiohttp

from image_translator.config import Config, config
from image_translator.translators.availability import ProviderAvailability
from image_translator.translators.base import ProviderInfo, TranslationProvider
from image_translator.translators.providers import (
    AzureTranslatorProvider,
    DeepLProvider,
    GoogleTranslateProvider,
    LibreTranslateProvider,
    MyMemoryProvider,
)

PROVIDER_REGISTRY: Tuple[Type[TranslationProvider], ...] = (
    LibreTranslateProvider,
    MyMemoryProvider,
    GoogleTranslateProvider,
    AzureTranslatorProvider,
    DeepLProvider,
)


def provider_infos() -> List[ProviderInfo]:
    """Static descriptions of all providers, in fallback order."""
    return [provider_class.info for provider_class in PROVIDER_REGISTRY]


def provider_ids() -> List[str]:
    return [info.id for info in provider_infos()]


def get_provider_info(provider_id: str) -> Optional[ProviderInfo]:
    """Look up a provider description by id (case-insensitive)."""
    provider_id = (provider_id or "").strip().lower()
    for info in provider_infos():
        if info.id == provider_id:
            return info
    return None


def build_providers(
    http: aiohttp.ClientSession,
    availability: ProviderAvailability,
    settings: Config = config
) -> List[TranslationProvider]:
    """
    Instantiate every registered provider for one session.

    Args:
        http: Shared aiohttp client session used for outbound requests
        availability: The session's availability store
        settings: Configuration with endpoints and credentials

    Returns:
        Provider instances in fallback order
    """
    return [
        provider_class(http, availability, settings)
        for provider_class in PROVIDER_REGISTRY
    ]
