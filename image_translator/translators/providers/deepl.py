"""DeepL provider (form-encoded API)."""

from typing import Any

from image_translator.translators.base import (
    ProviderInfo,
    TranslationProvider,
    TranslationRequest,
)


class DeepLProvider(TranslationProvider):
    """POST form {text, target_lang}; reply is {"translations": [{"text": ...}]}."""

    info = ProviderInfo(id="deepl", name="DeepL", free=False)

    async def _send(self, request: TranslationRequest) -> Any:
        key = self._require(self._settings.DEEPL_API_KEY, "DEEPL_API_KEY")
        # DeepL expects upper-case language codes (ES, FR, ...)
        form = {
            "text": request.text,
            "target_lang": request.target_language.upper(),
        }
        return await self._request_json(
            "POST",
            self._settings.DEEPL_URL,
            data=form,
            headers={"Authorization": f"DeepL-Auth-Key {key}"},
        )

    def _parse(self, payload: Any) -> str:
        return payload["translations"][0]["text"]
