"""Shared fakes for translator, OCR and HTTP tests."""

import struct
import zlib
from io import BytesIO
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import aiohttp
import pytest
from PIL import Image

from image_translator.config import Config
from image_translator.ocr.base import OCRError, TextRecognizer
from image_translator.translators.availability import ProviderAvailability
from image_translator.translators.base import ProviderInfo, TranslationProvider
from image_translator.translators.fallback import FallbackTranslator


# ============================================================================
# HTTP fakes
# ============================================================================


class FakeResponse:
    """Stands in for aiohttp.ClientResponse inside ``async with``."""

    def __init__(self, payload: Any = None, status: int = 200, exc: Optional[Exception] = None):
        self.payload = payload
        self.status = status
        self.exc = exc

    async def __aenter__(self):
        if self.exc is not None:
            raise self.exc
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=MagicMock(),
                history=(),
                status=self.status,
                message="error",
            )

    async def json(self, **kwargs):
        return self.payload


class FakeHttpSession:
    """Records requests and answers each with the configured FakeResponse."""

    def __init__(self, response: Optional[FakeResponse] = None):
        self.response = response or FakeResponse({})
        self.calls: List[Dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.response


# ============================================================================
# Provider and OCR fakes
# ============================================================================


class FakeProvider(TranslationProvider):
    """Provider that succeeds with a fixed text or fails, without HTTP."""

    def __init__(
        self,
        provider_id: str,
        availability: ProviderAvailability,
        result: Optional[str] = None,
        error: Optional[Exception] = None,
    ):
        super().__init__(http=None, availability=availability, settings=Config())
        self.info = ProviderInfo(id=provider_id, name=provider_id.upper(), free=True)
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    async def _send(self, request):
        self.calls.append((request.text, request.target_language))
        if self.error is not None:
            raise self.error
        return {"text": self.result}

    def _parse(self, payload):
        return payload["text"]


class FakeRecognizer(TextRecognizer):
    """OCR engine returning fixed text or raising OCRError."""

    def __init__(self, text: str = "hello world", fail: bool = False):
        self.text = text
        self.fail = fail
        self.calls = 0

    @property
    def name(self) -> str:
        return "fake"

    async def recognize(self, image_data, on_progress=None):
        self.calls += 1
        if on_progress:
            on_progress(0)
        if self.fail:
            raise OCRError("cannot read", engine=self.name)
        if on_progress:
            on_progress(100)
        return self.text


PROVIDER_IDS = ["a", "b", "c", "d", "e"]


def make_translator(outcomes: Dict[str, Optional[str]], honor_preferred: bool = True):
    """
    Build a FallbackTranslator over fake providers a..e.

    Args:
        outcomes: provider id -> translated text, or None for a failing provider
    """
    availability = ProviderAvailability(PROVIDER_IDS)
    providers = [
        FakeProvider(
            pid,
            availability,
            result=outcomes.get(pid),
            error=None if outcomes.get(pid) is not None else RuntimeError(f"{pid} down"),
        )
        for pid in PROVIDER_IDS
    ]
    translator = FallbackTranslator(providers, availability, honor_preferred=honor_preferred)
    return translator, {p.id: p for p in providers}


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def png_bytes() -> bytes:
    """A small valid PNG image."""
    buffer = BytesIO()
    Image.new("RGB", (32, 16), color=(255, 255, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


@pytest.fixture
def oversized_png_bytes() -> bytes:
    """A tiny PNG whose header declares 20000x20000 pixels."""
    header = struct.pack(">IIBBBBB", 20000, 20000, 8, 0, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b""))
        + _png_chunk(b"IEND", b"")
    )


@pytest.fixture
def settings() -> Config:
    """Config with every provider key set."""
    return Config(
        LIBRETRANSLATE_URL="https://libre.test/translate",
        MYMEMORY_URL="https://mymemory.test/get",
        GOOGLE_TRANSLATE_URL="https://google.test/v2",
        GOOGLE_TRANSLATE_API_KEY="google-key",
        AZURE_TRANSLATOR_URL="https://azure.test/translate",
        AZURE_TRANSLATOR_KEY="azure-key",
        AZURE_TRANSLATOR_REGION="westeurope",
        DEEPL_URL="https://deepl.test/v2/translate",
        DEEPL_API_KEY="deepl-key",
    )
