"""Tesseract OCR via pytesseract."""

import asyncio
from io import BytesIO
from typing import Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

from image_translator.config import Config, config
from image_translator.ocr.base import OCRError, ProgressCallback, TextRecognizer
from image_translator.utils.logger import get_logger

logger = get_logger(__name__)

# Progress checkpoints reported around the blocking engine call
PROGRESS_STARTED = 0
PROGRESS_IMAGE_LOADED = 10
PROGRESS_DONE = 100


class TesseractRecognizer(TextRecognizer):
    """
    Recognize text with the Tesseract engine.

    The language hint, page segmentation mode and character whitelist come
    from configuration. Decoding and the engine call block, so both run in
    worker threads; progress callbacks fire on the event loop.
    """

    def __init__(self, settings: Config = config) -> None:
        self._languages = settings.OCR_LANGUAGES
        self._engine_config = settings.tesseract_config
        if settings.TESSERACT_CMD:
            pytesseract.pytesseract.tesseract_cmd = settings.TESSERACT_CMD

    @property
    def name(self) -> str:
        return "tesseract"

    def _load_image(self, image_data: bytes) -> Image.Image:
        try:
            with Image.open(BytesIO(image_data)) as image:
                image.load()
                if image.mode not in ("RGB", "L"):
                    return image.convert("RGB")
                return image.copy()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            raise OCRError(f"Cannot read image: {e}", engine=self.name) from e

    def _run_engine(self, image: Image.Image) -> str:
        try:
            return pytesseract.image_to_string(
                image,
                lang=self._languages,
                config=self._engine_config
            )
        except pytesseract.TesseractNotFoundError as e:
            raise OCRError("Tesseract executable not found", engine=self.name) from e
        except pytesseract.TesseractError as e:
            raise OCRError(f"Recognition failed: {e}", engine=self.name) from e

    async def recognize(
        self,
        image_data: bytes,
        on_progress: Optional[ProgressCallback] = None
    ) -> str:
        logger.debug(
            "Starting OCR",
            engine=self.name,
            languages=self._languages,
            image_size=len(image_data)
        )
        _report(on_progress, PROGRESS_STARTED)

        image = await asyncio.to_thread(self._load_image, image_data)
        _report(on_progress, PROGRESS_IMAGE_LOADED)

        text = await asyncio.to_thread(self._run_engine, image)
        text = text.strip()

        _report(on_progress, PROGRESS_DONE)
        logger.info("OCR complete", engine=self.name, text_length=len(text))
        return text


def _report(on_progress: Optional[ProgressCallback], percent: int) -> None:
    if on_progress is not None:
        on_progress(percent)
