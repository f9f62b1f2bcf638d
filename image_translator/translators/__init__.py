"""
Translation services package.

Public API:
    - FallbackTranslator: tries providers in registry order until one succeeds
    - ProviderAvailability: session-scoped availability flags
    - TranslationProvider: base class for provider adapters
    - PROVIDER_REGISTRY: the fixed, ordered provider list
"""

from image_translator.translators.availability import ProviderAvailability
from image_translator.translators.base import (
    AllProvidersFailedError,
    NoProvidersAvailableError,
    ProviderInfo,
    TranslationError,
    TranslationProvider,
    TranslationProviderError,
    TranslationRequest,
    TranslationResult,
)
from image_translator.translators.fallback import FallbackTranslator, first_success
from image_translator.translators.registry import (
    PROVIDER_REGISTRY,
    build_providers,
    get_provider_info,
    provider_infos,
)

__all__ = [
    'FallbackTranslator',
    'first_success',
    'ProviderAvailability',
    'ProviderInfo',
    'TranslationProvider',
    'TranslationRequest',
    'TranslationResult',
    'TranslationError',
    'TranslationProviderError',
    'NoProvidersAvailableError',
    'AllProvidersFailedError',
    'PROVIDER_REGISTRY',
    'build_providers',
    'get_provider_info',
    'provider_infos',
]
