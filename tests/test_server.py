"""Tests for the aiohttp application."""

import asyncio

import aiohttp
import pytest
from aiohttp import test_utils

from conftest import FakeRecognizer, make_translator
from image_translator.api.server import SESSION_COOKIE, create_app
from image_translator.config import Config
from image_translator.state.translator_session import (
    MSG_ALL_FAILED,
    MSG_NO_TEXT,
    MSG_NOT_AN_IMAGE,
    MSG_UNKNOWN_LANGUAGE,
)


def build_app(outcomes=None, recognizer=None, settings=None):
    outcomes = outcomes if outcomes is not None else {"a": "hola"}
    return create_app(
        settings=settings or Config(),
        recognizer=recognizer or FakeRecognizer("hello"),
        translator_factory=lambda app: make_translator(outcomes)[0],
    )


def image_form(data: bytes, content_type: str = "image/png", filename: str = "photo.png"):
    form = aiohttp.FormData()
    form.add_field("image", data, filename=filename, content_type=content_type)
    return form


class BlockingRecognizer(FakeRecognizer):
    """Recognizer that stops after decoding until released."""

    def __init__(self):
        super().__init__("slow text")
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def recognize(self, image_data, on_progress=None):
        on_progress(0)
        on_progress(10)
        self.started.set()
        await self.release.wait()
        on_progress(100)
        return self.text


class TestHealthAndStatic:
    """Tests for /, /health and /api/languages."""

    @pytest.mark.asyncio
    async def test_health(self):
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.get("/health")
            body = await response.json()

        assert response.status == 200
        assert body["status"] == "ok"
        assert body["environment"] == "production"
        assert "uptime_seconds" in body

    @pytest.mark.asyncio
    async def test_index_sets_session_cookie(self):
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.get("/")
            html = await response.text()

        assert response.status == 200
        assert "Image Text Translator" in html
        assert SESSION_COOKIE in response.cookies

    @pytest.mark.asyncio
    async def test_languages(self):
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.get("/api/languages")
            body = await response.json()

        assert [lang["code"] for lang in body] == ["es", "fr", "de", "it", "pt", "ru", "zh", "ja", "ar"]


class TestUploadExtractTranslate:
    """End-to-end flow through the JSON API."""

    @pytest.mark.asyncio
    async def test_full_flow(self, png_bytes):
        """Upload, extract and translate in one session."""
        async with test_utils.TestClient(test_utils.TestServer(build_app({"a": "hola"}))) as client:
            await client.get("/")

            response = await client.post("/api/image", data=image_form(png_bytes))
            assert response.status == 200
            assert (await response.json())["has_image"] is True

            response = await client.post("/api/extract")
            assert response.status == 200
            assert (await response.json())["extracted_text"] == "hello"

            response = await client.post("/api/translate")
            body = await response.json()

        assert response.status == 200
        assert body["translated_text"] == "hola"
        assert body["translated_by"] == "a"
        assert body["error"] == ""

    @pytest.mark.asyncio
    async def test_non_image_upload_rejected(self):
        """A text file is rejected with the inline message."""
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.post(
                "/api/image",
                data=image_form(b"hello", content_type="text/plain", filename="notes.txt"),
            )
            body = await response.json()

        assert response.status == 400
        assert body["error"] == MSG_NOT_AN_IMAGE
        assert body["has_image"] is False
        assert body["extracted_text"] == ""
        assert body["translated_text"] == ""

    @pytest.mark.asyncio
    async def test_oversized_dimensions_rejected(self, oversized_png_bytes):
        """A PNG declaring too many pixels answers 400, not 500."""
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.post("/api/image", data=image_form(oversized_png_bytes))
            body = await response.json()

        assert response.status == 400
        assert body["error"] == MSG_NOT_AN_IMAGE
        assert body["has_image"] is False

    @pytest.mark.asyncio
    async def test_missing_upload_field(self):
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.post("/api/image", data={"other": "x"})
            body = await response.json()

        assert response.status == 400
        assert body["error"] == MSG_NOT_AN_IMAGE

    @pytest.mark.asyncio
    async def test_translate_without_text(self):
        """Translating before extraction is a validation error."""
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.post("/api/translate")
            body = await response.json()

        assert response.status == 400
        assert body["error"] == MSG_NO_TEXT

    @pytest.mark.asyncio
    async def test_all_providers_failed(self, png_bytes):
        """Exhausted providers answer 502 with the generic message."""
        async with test_utils.TestClient(test_utils.TestServer(build_app({}))) as client:
            await client.post("/api/image", data=image_form(png_bytes))
            await client.post("/api/extract")
            response = await client.post("/api/translate")
            body = await response.json()

        assert response.status == 502
        assert body["error"] == MSG_ALL_FAILED
        assert all(p["available"] is False for p in body["providers"])

    @pytest.mark.asyncio
    async def test_clear(self, png_bytes):
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            await client.post("/api/image", data=image_form(png_bytes))
            await client.post("/api/extract")
            response = await client.post("/api/clear")
            body = await response.json()

        assert body["has_image"] is False
        assert body["extracted_text"] == ""


class TestSessionLifetime:
    """Availability lasts for a session; a page load starts a new one."""

    @pytest.mark.asyncio
    async def test_reload_resets_availability(self, png_bytes):
        async with test_utils.TestClient(test_utils.TestServer(build_app({"a": None, "b": "hola"}))) as client:
            await client.get("/")
            await client.post("/api/image", data=image_form(png_bytes))
            await client.post("/api/extract")
            await client.post("/api/translate")

            providers = await (await client.get("/api/providers")).json()
            assert {p["id"]: p["available"] for p in providers}["a"] is False

            await client.get("/")
            providers = await (await client.get("/api/providers")).json()

        assert all(p["available"] for p in providers)


class TestSettings:
    """Tests for /api/settings."""

    @pytest.mark.asyncio
    async def test_update_language_and_provider(self):
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.post(
                "/api/settings",
                json={"target_language": "fr", "preferred_provider": "deepl"},
            )
            body = await response.json()

        assert response.status == 200
        assert body["target_language"] == "fr"
        assert body["preferred_provider"] == "deepl"

    @pytest.mark.asyncio
    async def test_invalid_language(self):
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.post("/api/settings", json={"target_language": "xx"})
            body = await response.json()

        assert response.status == 400
        assert body["error"] == MSG_UNKNOWN_LANGUAGE

    @pytest.mark.asyncio
    async def test_body_must_be_object(self):
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            response = await client.post("/api/settings", json=["fr"])

        assert response.status == 400


class TestDefaultTranslator:
    """Without an injected factory the registry providers are used."""

    @pytest.mark.asyncio
    async def test_registry_providers_listed(self):
        app = create_app(settings=Config(), recognizer=FakeRecognizer())
        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            providers = await (await client.get("/api/providers")).json()

        assert [p["id"] for p in providers] == [
            "libretranslate", "mymemory", "google", "azure", "deepl"
        ]
        assert all(p["available"] for p in providers)


class TestExtractProgress:
    """Progress is readable from /api/state while OCR runs."""

    @pytest.mark.asyncio
    async def test_state_shows_progress_during_extract(self, png_bytes):
        recognizer = BlockingRecognizer()
        async with test_utils.TestClient(test_utils.TestServer(build_app(recognizer=recognizer))) as client:
            await client.get("/")
            await client.post("/api/image", data=image_form(png_bytes))

            async def extract():
                response = await client.post("/api/extract")
                return response.status, await response.json()

            pending = asyncio.ensure_future(extract())
            await asyncio.wait_for(recognizer.started.wait(), timeout=5)

            during = await (await client.get("/api/state")).json()
            recognizer.release.set()
            status, after = await asyncio.wait_for(pending, timeout=5)

        assert during["busy"] is True
        assert during["progress"] == 10
        assert status == 200
        assert after["busy"] is False
        assert after["progress"] == 100
        assert after["extracted_text"] == "slow text"

    @pytest.mark.asyncio
    async def test_page_polls_state_while_extracting(self):
        async with test_utils.TestClient(test_utils.TestServer(build_app())) as client:
            html = await (await client.get("/")).text()

        assert "setInterval(pollProgress" in html
        assert "clearInterval(timer)" in html
        assert "failed();" in html
