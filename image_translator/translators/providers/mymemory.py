"""MyMemory provider (free, query-string API)."""

from typing import Any

from image_translator.translators.base import (
    ProviderInfo,
    TranslationProvider,
    TranslationProviderError,
    TranslationRequest,
)

# MyMemory answers HTTP 200 and reports errors in the payload
INVALID_LANGUAGE_PAIR_STATUS = 403


class MyMemoryProvider(TranslationProvider):
    """GET ?q=...&langpair=src|dst; reply is {"responseData": {"translatedText": ...}}."""

    info = ProviderInfo(id="mymemory", name="MyMemory", free=True)

    async def _send(self, request: TranslationRequest) -> Any:
        source = self._settings.MYMEMORY_SOURCE_LANGUAGE
        params = {
            "q": request.text,
            "langpair": f"{source}|{request.target_language}",
        }
        return await self._request_json(
            "GET", self._settings.MYMEMORY_URL, params=params
        )

    def _parse(self, payload: Any) -> str:
        status = payload.get("responseStatus")
        if _as_int(status) == INVALID_LANGUAGE_PAIR_STATUS:
            raise TranslationProviderError(
                f"Invalid language pair: {payload.get('responseDetails') or status}",
                provider=self.id
            )
        return payload["responseData"]["translatedText"]


def _as_int(value: Any):
    """responseStatus arrives as int or numeric string."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
