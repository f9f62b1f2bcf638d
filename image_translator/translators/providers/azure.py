"""Microsoft Azure Translator (v3) provider."""

from typing import Any

from image_translator.translators.base import (
    ProviderInfo,
    TranslationProvider,
    TranslationRequest,
)

AZURE_API_VERSION = "3.0"


class AzureTranslatorProvider(TranslationProvider):
    """
    POST JSON [{"Text": ...}] with api-version and target in the query string.

    Authentication uses the subscription key and region headers. The reply
    is a list with one entry per input text:
    [{"translations": [{"text": ..., "to": ...}]}]
    """

    info = ProviderInfo(id="azure", name="Microsoft Azure", free=False)

    async def _send(self, request: TranslationRequest) -> Any:
        key = self._require(self._settings.AZURE_TRANSLATOR_KEY, "AZURE_TRANSLATOR_KEY")
        headers = {"Ocp-Apim-Subscription-Key": key}
        if self._settings.AZURE_TRANSLATOR_REGION:
            headers["Ocp-Apim-Subscription-Region"] = self._settings.AZURE_TRANSLATOR_REGION

        return await self._request_json(
            "POST",
            self._settings.AZURE_TRANSLATOR_URL,
            json=[{"Text": request.text}],
            params={"api-version": AZURE_API_VERSION, "to": request.target_language},
            headers=headers,
        )

    def _parse(self, payload: Any) -> str:
        return payload[0]["translations"][0]["text"]
