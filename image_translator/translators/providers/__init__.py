"""Translation provider implementations, one module per external service."""

from image_translator.translators.providers.azure import AzureTranslatorProvider
from image_translator.translators.providers.deepl import DeepLProvider
from image_translator.translators.providers.google import GoogleTranslateProvider
from image_translator.translators.providers.libretranslate import LibreTranslateProvider
from image_translator.translators.providers.mymemory import MyMemoryProvider

__all__ = [
    'LibreTranslateProvider',
    'MyMemoryProvider',
    'GoogleTranslateProvider',
    'AzureTranslatorProvider',
    'DeepLProvider',
]
