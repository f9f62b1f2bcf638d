"""Google Cloud Translation (v2 REST) provider."""

from typing import Any

from image_translator.translators.base import (
    ProviderInfo,
    TranslationProvider,
    TranslationRequest,
)


class GoogleTranslateProvider(TranslationProvider):
    """POST JSON {q, target, key}; reply is {"data": {"translations": [{"translatedText": ...}]}}."""

    info = ProviderInfo(id="google", name="Google Cloud", free=False)

    async def _send(self, request: TranslationRequest) -> Any:
        key = self._require(self._settings.GOOGLE_TRANSLATE_API_KEY, "GOOGLE_TRANSLATE_API_KEY")
        body = {
            "q": request.text,
            "target": request.target_language,
            "key": key,
        }
        return await self._request_json(
            "POST", self._settings.GOOGLE_TRANSLATE_URL, json=body
        )

    def _parse(self, payload: Any) -> str:
        return payload["data"]["translations"][0]["translatedText"]
