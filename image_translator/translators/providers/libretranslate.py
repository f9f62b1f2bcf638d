"""LibreTranslate provider (free, auto-detected source language)."""

from typing import Any

from image_translator.translators.base import (
    ProviderInfo,
    TranslationProvider,
    TranslationRequest,
)


class LibreTranslateProvider(TranslationProvider):
    """POST JSON {q, source, target}; reply is {"translatedText": ...}."""

    info = ProviderInfo(id="libretranslate", name="LibreTranslate", free=True)

    async def _send(self, request: TranslationRequest) -> Any:
        body = {
            "q": request.text,
            "source": "auto",
            "target": request.target_language,
        }
        if self._settings.LIBRETRANSLATE_API_KEY:
            body["api_key"] = self._settings.LIBRETRANSLATE_API_KEY

        return await self._request_json(
            "POST", self._settings.LIBRETRANSLATE_URL, json=body
        )

    def _parse(self, payload: Any) -> str:
        return payload["translatedText"]
