"""
HTTP server for the translator page and its JSON API.

Routes:
    GET  /                page (starts a fresh session)
    GET  /health          health check
    GET  /api/languages   supported target languages
    GET  /api/providers   providers with session availability
    GET  /api/state       session snapshot
    POST /api/image       multipart upload, field "image"
    POST /api/extract     run OCR
    POST /api/translate   translate with provider fallback
    POST /api/clear       drop image and texts
    POST /api/settings    JSON {target_language?, preferred_provider?}
"""

import time
from typing import Callable, Optional

import aiohttp
from aiohttp import web

from image_translator.api.page import INDEX_HTML
from image_translator.api.sessions import SessionStore
from image_translator.config import Config, config
from image_translator.languages import SUPPORTED_LANGUAGES
from image_translator.ocr.base import TextRecognizer
from image_translator.ocr.tesseract import TesseractRecognizer
from image_translator.state.translator_session import SERVICE_ERRORS, TranslatorSession
from image_translator.translators.fallback import FallbackTranslator
from image_translator.utils.logger import get_logger

logger = get_logger(__name__)

SESSION_COOKIE = "translator_session"
UPLOAD_FIELD = "image"
# Room for multipart framing on top of the image itself
UPLOAD_OVERHEAD_BYTES = 64 * 1024

TranslatorFactory = Callable[[web.Application], FallbackTranslator]

SETTINGS_KEY = web.AppKey("settings", Config)
HTTP_SESSION_KEY = web.AppKey("http_session", aiohttp.ClientSession)
STORE_KEY = web.AppKey("store", SessionStore)
STARTED_AT_KEY = web.AppKey("started_at", float)

# Server state
_runner: Optional[web.AppRunner] = None
_site: Optional[web.TCPSite] = None


# ============================================================================
# Helpers
# ============================================================================


def _session_for(request: web.Request) -> TranslatorSession:
    store = request.app[STORE_KEY]
    return store.get_or_create(request.cookies.get(SESSION_COOKIE))


def _set_cookie(response: web.StreamResponse, session: TranslatorSession) -> None:
    response.set_cookie(SESSION_COOKIE, session.session_id, httponly=True, samesite="Lax")


def _state_response(session: TranslatorSession, ok: bool = True) -> web.Response:
    """Session snapshot; failed actions answer 400 (input) or 502 (service)."""
    if ok:
        status = 200
    elif session.error in SERVICE_ERRORS:
        status = 502
    else:
        status = 400
    response = web.json_response(session.snapshot(), status=status)
    _set_cookie(response, session)
    return response


def _default_translator_factory(app: web.Application) -> FallbackTranslator:
    return FallbackTranslator.create(app[HTTP_SESSION_KEY], app[SETTINGS_KEY])


# ============================================================================
# Handlers
# ============================================================================


async def index_handler(request: web.Request) -> web.Response:
    """Serve the page. Every page load is a new session."""
    session = request.app[STORE_KEY].create()
    response = web.Response(text=INDEX_HTML, content_type="text/html")
    _set_cookie(response, session)
    return response


async def health_handler(request: web.Request) -> web.Response:
    """Handle health check requests."""
    started_at = request.app[STARTED_AT_KEY]
    status = {
        "status": "ok",
        "uptime_seconds": int(time.time() - started_at) if started_at else 0,
        "environment": request.app[SETTINGS_KEY].ENVIRONMENT,
        "sessions": len(request.app[STORE_KEY]),
    }
    return web.json_response(status)


async def languages_handler(request: web.Request) -> web.Response:
    return web.json_response(
        [{"code": lang.code, "name": lang.name} for lang in SUPPORTED_LANGUAGES]
    )


async def providers_handler(request: web.Request) -> web.Response:
    session = _session_for(request)
    response = web.json_response(session.translator.provider_statuses())
    _set_cookie(response, session)
    return response


async def state_handler(request: web.Request) -> web.Response:
    return _state_response(_session_for(request))


async def image_handler(request: web.Request) -> web.Response:
    session = _session_for(request)

    try:
        form = await request.post()
    except web.HTTPRequestEntityTooLarge as e:
        session.reject_upload(f"upload too large: {e.text}")
        return _state_response(session, ok=False)

    field = form.get(UPLOAD_FIELD)
    if not isinstance(field, web.FileField):
        session.reject_upload(f"missing file field '{UPLOAD_FIELD}'")
        return _state_response(session, ok=False)

    ok = session.load_image(field.file.read(), content_type=field.content_type)
    return _state_response(session, ok=ok)


async def extract_handler(request: web.Request) -> web.Response:
    session = _session_for(request)
    ok = await session.extract_text()
    return _state_response(session, ok=ok)


async def translate_handler(request: web.Request) -> web.Response:
    session = _session_for(request)
    ok = await session.translate()
    return _state_response(session, ok=ok)


async def clear_handler(request: web.Request) -> web.Response:
    session = _session_for(request)
    session.clear()
    return _state_response(session)


async def settings_handler(request: web.Request) -> web.Response:
    session = _session_for(request)

    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return web.json_response({"error": "Expected a JSON object"}, status=400)

    ok = True
    if "target_language" in body:
        ok = session.set_target_language(str(body["target_language"])) and ok
    if "preferred_provider" in body:
        provider = body["preferred_provider"]
        ok = session.set_preferred_provider(str(provider) if provider else None) and ok
    if ok:
        session.error = ""
    return _state_response(session, ok=ok)


# ============================================================================
# Application
# ============================================================================


def create_app(
    settings: Config = config,
    recognizer: Optional[TextRecognizer] = None,
    translator_factory: Optional[TranslatorFactory] = None
) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        settings: Configuration
        recognizer: OCR engine shared by all sessions (default: Tesseract)
        translator_factory: Builds a FallbackTranslator for each new session

    Returns:
        web.Application ready to run
    """
    app = web.Application(client_max_size=settings.max_image_bytes + UPLOAD_OVERHEAD_BYTES)
    app[SETTINGS_KEY] = settings
    app[STARTED_AT_KEY] = time.time()

    recognizer = recognizer or TesseractRecognizer(settings)
    translator_factory = translator_factory or _default_translator_factory

    def session_factory(session_id: str) -> TranslatorSession:
        return TranslatorSession(session_id, translator_factory(app), recognizer, settings)

    app[STORE_KEY] = SessionStore(
        session_factory,
        ttl_seconds=settings.SESSION_TTL_SECONDS,
        max_sessions=settings.MAX_SESSIONS
    )

    async def http_session_ctx(app: web.Application):
        client_kwargs = {}
        if settings.HTTP_TIMEOUT_SEC:
            client_kwargs["timeout"] = aiohttp.ClientTimeout(total=settings.HTTP_TIMEOUT_SEC)
        app[HTTP_SESSION_KEY] = aiohttp.ClientSession(**client_kwargs)
        logger.debug("HTTP client session opened")
        yield
        await app[HTTP_SESSION_KEY].close()
        logger.debug("HTTP client session closed")

    app.cleanup_ctx.append(http_session_ctx)

    app.router.add_get("/", index_handler)
    app.router.add_get("/health", health_handler)
    app.router.add_get("/api/languages", languages_handler)
    app.router.add_get("/api/providers", providers_handler)
    app.router.add_get("/api/state", state_handler)
    app.router.add_post("/api/image", image_handler)
    app.router.add_post("/api/extract", extract_handler)
    app.router.add_post("/api/translate", translate_handler)
    app.router.add_post("/api/clear", clear_handler)
    app.router.add_post("/api/settings", settings_handler)

    return app


async def start_server(settings: Config = config) -> web.Application:
    """Start the HTTP server."""
    global _runner, _site

    app = create_app(settings)

    _runner = web.AppRunner(app)
    await _runner.setup()

    _site = web.TCPSite(_runner, settings.API_HOST, settings.API_PORT)
    await _site.start()

    logger.info("Server started", host=settings.API_HOST, port=settings.API_PORT)
    return app


async def stop_server() -> None:
    """Stop the HTTP server."""
    global _runner, _site

    if _runner:
        await _runner.cleanup()
        _runner = None
        _site = None
        logger.info("Server stopped")
