"""OCR services package."""

from image_translator.ocr.base import OCRError, ProgressCallback, TextRecognizer
from image_translator.ocr.tesseract import TesseractRecognizer

__all__ = [
    'OCRError',
    'ProgressCallback',
    'TextRecognizer',
    'TesseractRecognizer',
]
