"""Per-user state behind the translator page.

A TranslatorSession holds what the page shows (image, extracted text,
translated text, selections, error banner) and implements each user action.
Every failure ends in an error message and an idle session; nothing raises
out of an action.
"""

import time
from typing import Any, Dict, Optional

from image_translator.config import Config, config
from image_translator.languages import SUPPORTED_LANGUAGES, get_language
from image_translator.ocr.base import OCRError, TextRecognizer
from image_translator.translators.base import (
    AllProvidersFailedError,
    NoProvidersAvailableError,
)
from image_translator.translators.fallback import FallbackTranslator
from image_translator.translators.registry import get_provider_info
from image_translator.utils.logger import get_logger
from image_translator.utils.security import ImageValidationError, validate_image_bytes

logger = get_logger(__name__)

# User-facing messages
MSG_NOT_AN_IMAGE = "Please upload an image file."
MSG_NO_IMAGE = "Please upload an image first."
MSG_EXTRACTION_FAILED = "Error extracting text. Please try another image."
MSG_NO_TEXT = "No text to translate. Please extract text first."
MSG_NO_PROVIDERS = "All translation services are currently unavailable. Please try again later."
MSG_ALL_FAILED = "Translation failed with all available services. Please try again later."
MSG_UNKNOWN_LANGUAGE = "Please choose a supported language."
MSG_UNKNOWN_PROVIDER = "Please choose a supported translation service."
MSG_BUSY = "Please wait for the current operation to finish."

# Failures of external services, as opposed to invalid user input
SERVICE_ERRORS = frozenset({MSG_EXTRACTION_FAILED, MSG_NO_PROVIDERS, MSG_ALL_FAILED})


class TranslatorSession:
    """State and actions for one browser session."""

    def __init__(
        self,
        session_id: str,
        translator: FallbackTranslator,
        recognizer: TextRecognizer,
        settings: Config = config
    ) -> None:
        self.session_id = session_id
        self._translator = translator
        self._recognizer = recognizer
        self._settings = settings

        self.image: Optional[bytes] = None
        self.image_format: Optional[str] = None
        self.extracted_text: str = ""
        self.translated_text: str = ""
        self.translated_by: Optional[str] = None
        self.target_language: str = settings.DEFAULT_TARGET_LANGUAGE
        self.preferred_provider: Optional[str] = None
        self.error: str = ""
        self.busy: bool = False
        self.progress: int = 0

        self.created_at = time.time()
        self.last_seen = self.created_at

    @property
    def translator(self) -> FallbackTranslator:
        return self._translator

    def touch(self) -> None:
        self.last_seen = time.time()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def load_image(self, data: bytes, content_type: Optional[str] = None) -> bool:
        """
        Accept an uploaded or captured image.

        A rejected upload leaves the previous image and texts untouched
        and sets the error banner.

        Returns:
            True if the image was accepted
        """
        self.error = ""
        try:
            image_format = validate_image_bytes(
                data,
                content_type=content_type,
                max_bytes=self._settings.max_image_bytes
            )
        except ImageValidationError as e:
            logger.info("Upload rejected", session=self.session_id, reason=str(e))
            self.error = MSG_NOT_AN_IMAGE
            return False

        self.image = data
        self.image_format = image_format
        self.extracted_text = ""
        self.translated_text = ""
        self.translated_by = None
        self.progress = 0
        logger.info(
            "Image loaded",
            session=self.session_id,
            image_format=image_format,
            size=len(data)
        )
        return True

    def reject_upload(self, reason: str) -> None:
        """Record an upload that never reached validation (missing field, too large)."""
        logger.info("Upload rejected", session=self.session_id, reason=reason)
        self.error = MSG_NOT_AN_IMAGE

    async def extract_text(self) -> bool:
        """
        Run OCR on the current image.

        Returns:
            True if text was extracted (possibly empty)
        """
        if self.busy:
            self.error = MSG_BUSY
            return False
        if not self.image:
            self.error = MSG_NO_IMAGE
            return False

        self.busy = True
        self.error = ""
        self.progress = 0
        try:
            text = await self._recognizer.recognize(self.image, on_progress=self._set_progress)
        except OCRError as e:
            logger.warning(
                "Text extraction failed",
                session=self.session_id,
                error=str(e)
            )
            self.error = MSG_EXTRACTION_FAILED
            return False
        finally:
            self.busy = False

        self.extracted_text = text
        logger.info("Text extracted", session=self.session_id, text_length=len(text))
        return True

    async def translate(self) -> bool:
        """
        Translate the extracted text with provider fallback.

        Blank text is rejected before any network call.

        Returns:
            True if a translation was produced
        """
        if self.busy:
            self.error = MSG_BUSY
            return False
        if not self.extracted_text.strip():
            self.error = MSG_NO_TEXT
            return False

        self.busy = True
        self.error = ""
        self.translated_text = ""
        self.translated_by = None
        try:
            result = await self._translator.translate_with_fallback(
                self.extracted_text,
                self.target_language,
                preferred=self.preferred_provider
            )
        except NoProvidersAvailableError:
            self.error = MSG_NO_PROVIDERS
            return False
        except AllProvidersFailedError:
            self.error = MSG_ALL_FAILED
            return False
        finally:
            self.busy = False

        self.translated_text = result.text
        self.translated_by = result.provider_id
        return True

    def set_target_language(self, code: str) -> bool:
        language = get_language(code)
        if language is None:
            self.error = MSG_UNKNOWN_LANGUAGE
            return False
        self.target_language = language.code
        return True

    def set_preferred_provider(self, provider_id: Optional[str]) -> bool:
        """Select a provider; None or empty clears the selection."""
        if not provider_id:
            self.preferred_provider = None
            return True
        info = get_provider_info(provider_id)
        if info is None:
            self.error = MSG_UNKNOWN_PROVIDER
            return False
        self.preferred_provider = info.id
        return True

    def clear(self) -> None:
        """Drop the image and texts. Provider availability is kept."""
        self.image = None
        self.image_format = None
        self.extracted_text = ""
        self.translated_text = ""
        self.translated_by = None
        self.error = ""
        self.progress = 0

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        """JSON-friendly view of the session for the page."""
        return {
            "has_image": self.image is not None,
            "image_format": self.image_format,
            "extracted_text": self.extracted_text,
            "translated_text": self.translated_text,
            "translated_by": self.translated_by,
            "target_language": self.target_language,
            "preferred_provider": self.preferred_provider,
            "error": self.error,
            "busy": self.busy,
            "progress": self.progress,
            "languages": [
                {"code": lang.code, "name": lang.name} for lang in SUPPORTED_LANGUAGES
            ],
            "providers": self._translator.provider_statuses(),
        }

    def _set_progress(self, percent: int) -> None:
        self.progress = max(0, min(100, int(percent)))
