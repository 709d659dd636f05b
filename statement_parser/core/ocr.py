"""
Tesseract OCR for pages without a text layer.
"""
import logging

import pytesseract
from PIL import Image

from .errors import OcrError

logger = logging.getLogger(__name__)


class TesseractOcr:
    """Recognizes page images with pytesseract."""

    def __init__(self, language: str = "eng"):
        self.language = language

    def recognize(self, image: Image.Image, page_index: int = 0) -> str:
        try:
            text = pytesseract.image_to_string(image, lang=self.language)
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, OSError) as e:
            raise OcrError(page_index, f"OCR failed: {e}") from e

        logger.info(f"OCR extracted {len(text)} characters from page {page_index + 1}")
        return text
