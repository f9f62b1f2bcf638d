"""Image Text Translator: OCR an image and translate the text through fallback providers."""

__version__ = "0.1.0"
