"""
PDF access: positioned words via pdfplumber and page images via PyMuPDF.
"""
import io
import re
import threading
from pathlib import Path
from typing import List, Union
import logging

import fitz  # PyMuPDF
import pdfplumber
from PIL import Image

from .errors import DocumentError, RenderError, TextLayerError
from ..models.schema import TextToken

logger = logging.getLogger(__name__)

LIGATURES = {
    'ﬁ': 'fi',
    'ﬂ': 'fl',
    'ﬀ': 'ff',
    'ﬃ': 'ffi',
    'ﬄ': 'ffl',
    'ﬆ': 'st',
    'ﬅ': 'st'
}


def normalize_token_text(text: str) -> str:
    """Replace ligatures and collapse whitespace inside a word."""
    for ligature, replacement in LIGATURES.items():
        text = text.replace(ligature, replacement)
    return re.sub(r'\s+', ' ', text).strip()


class PdfDocument:
    """
    An opened statement PDF.

    The raw bytes are read once. Each thread opens its own pdfplumber and
    PyMuPDF handles on them the first time it touches a page and reuses them
    afterwards; `close()` (or leaving a `with` block) closes every handle.
    """

    def __init__(self, source: Union[Path, str, bytes]):
        if isinstance(source, (bytes, bytearray)):
            self.name = "<bytes>"
            self._content = bytes(source)
        else:
            path = Path(source)
            self.name = path.name
            try:
                self._content = path.read_bytes()
            except OSError as e:
                raise DocumentError(f"Cannot read {path}: {e}") from e

        self._local = threading.local()
        self._handles = []
        self._lock = threading.Lock()

        try:
            self.page_count = len(self._plumber().pages)
        except Exception as e:
            self.close()
            raise DocumentError(f"Cannot open {self.name} as a PDF: {e}") from e

        logger.info(f"Loaded {self.name} with {self.page_count} pages")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _open(self, attr: str, opener):
        handle = getattr(self._local, attr, None)
        if handle is None:
            handle = opener()
            setattr(self._local, attr, handle)
            with self._lock:
                self._handles.append(handle)
        return handle

    def _plumber(self):
        return self._open("plumber", lambda: pdfplumber.open(io.BytesIO(self._content)))

    def _fitz(self):
        return self._open("fitz", lambda: fitz.open(stream=self._content, filetype="pdf"))

    def close(self):
        """Close the handles opened by every thread."""
        with self._lock:
            handles, self._handles = self._handles, []
            self._local = threading.local()
        for handle in handles:
            handle.close()

    def tokens(self, page_index: int) -> List[TextToken]:
        """
        Positioned words of one page; empty when the page has no text layer.

        `y` is measured from the page bottom so larger values are higher up.
        """
        try:
            page = self._plumber().pages[page_index]
            words_data = page.extract_words(
                x_tolerance=1,
                y_tolerance=2,
                keep_blank_chars=False,
                use_text_flow=True
            )
            height = float(page.height)
            page.flush_cache()
        except Exception as e:
            raise TextLayerError(page_index, f"text layer extraction failed: {e}") from e

        tokens = []
        for word_data in words_data:
            text = normalize_token_text(word_data.get('text', ''))
            if text:
                tokens.append(TextToken(
                    text=text,
                    x=float(word_data.get('x0', 0)),
                    y=height - float(word_data.get('bottom', 0)),
                ))

        logger.debug(f"Page {page_index + 1}: {len(tokens)} words extracted")
        return tokens

    def render(self, page_index: int, zoom: float = 2.0) -> Image.Image:
        """Render one page to an RGB image for OCR."""
        try:
            pix = self._fitz()[page_index].get_pixmap(matrix=fitz.Matrix(zoom, zoom))
            return Image.frombytes("RGB", [pix.width, pix.height], pix.samples)
        except Exception as e:
            raise RenderError(page_index, f"page render failed: {e}") from e
