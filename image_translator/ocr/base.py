"""
Base abstractions for text recognition.

The recognizer is an opaque collaborator: image bytes in, one string out.
Confidence scores and bounding boxes are not exposed.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

# Receives completion percentage 0..100
ProgressCallback = Callable[[int], None]


class OCRError(Exception):
    """Raised when an image cannot be recognized."""

    def __init__(self, message: str, engine: Optional[str] = None) -> None:
        self.engine = engine
        super().__init__(message)

    def __str__(self) -> str:
        if self.engine:
            return f"[{self.engine}] {super().__str__()}"
        return super().__str__()


class TextRecognizer(ABC):
    """Abstract base class for OCR engines."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Engine name, e.g. "tesseract"."""
        pass

    @abstractmethod
    async def recognize(
        self,
        image_data: bytes,
        on_progress: Optional[ProgressCallback] = None
    ) -> str:
        """
        Recognize all text in an encoded image.

        Args:
            image_data: Encoded bitmap (PNG, JPEG, ...)
            on_progress: Optional callback receiving completion percentages

        Returns:
            str: Recognized text (may be empty)

        Raises:
            OCRError: If the image cannot be processed
        """
        pass
