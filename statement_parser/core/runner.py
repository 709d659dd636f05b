"""
End-to-end extraction orchestration.
"""
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Union
import logging

from .assembler import PageResult, TableAssembler
from .classifier import classify_segments
from .errors import PageError
from .header import extract_header
from .lines import PageSource, PlainText, PositionedTokens, resolve_page
from .loader import PdfDocument
from .ocr import TesseractOcr
from .config import RuntimeSettings
from .segmenter import segment_lines
from ..models.schema import ExtractionOptions, ExtractionResult

logger = logging.getLogger(__name__)


class StatementParser:
    """Runs the page pipeline over a document and assembles the table."""

    def __init__(self, options: Optional[ExtractionOptions] = None,
                 settings: Optional[RuntimeSettings] = None, ocr=None):
        self.options = options or ExtractionOptions()
        self.settings = settings or RuntimeSettings()
        self.ocr = ocr or TesseractOcr(self.settings.ocr_language)

    def parse(self, document: PdfDocument, cancel=None) -> ExtractionResult:
        """
        Extract the transaction table from every page of a document.

        Args:
            document: Opened document (anything with page_count, tokens() and render())
            cancel: Optional object with is_set(); checked before each page starts

        Returns:
            ExtractionResult with rows in page order and per-page diagnostics
        """
        assembler = TableAssembler()
        indices = range(document.page_count)
        workers = min(self.settings.max_workers, max(1, document.page_count))

        if workers == 1:
            for index in indices:
                assembler.add(self._process_page(document, index, cancel))
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(self._process_page, document, index, cancel)
                    for index in indices
                ]
                for future in as_completed(futures):
                    assembler.add(future.result())

        return assembler.build()

    def parse_text(self, text: str) -> ExtractionResult:
        """Extract a table from plain statement text (e.g. saved OCR output)."""
        assembler = TableAssembler()
        assembler.add(self.extract_page(0, PlainText(text), origin="text"))
        return assembler.build()

    def _process_page(self, document: PdfDocument, index: int, cancel=None) -> PageResult:
        if cancel is not None and cancel.is_set():
            logger.info(f"Cancelled before page {index + 1}")
            return PageResult(index=index, error_kind="cancelled",
                              error_message="Conversion cancelled before this page started")

        try:
            source, origin = self._page_source(document, index)
        except PageError as e:
            return PageResult(index=index, error_kind=e.kind, error_message=e.message)

        return self.extract_page(index, source, origin)

    def _page_source(self, document: PdfDocument, index: int):
        if not self.options.force_ocr:
            tokens = document.tokens(index)
            if tokens:
                return PositionedTokens(tokens), "text"
            logger.info(f"Page {index + 1} has no text layer, falling back to OCR")

        image = document.render(index, self.settings.render_zoom)
        text = self.ocr.recognize(image, index)
        return PlainText(text), "ocr"

    def extract_page(self, index: int, source: PageSource, origin: str = "text") -> PageResult:
        """Run lines, header, segments and classification for one page."""
        page = resolve_page(source, self.settings.line_tolerance, self.settings.header_line_count)
        header = extract_header(page.header_text)
        segments = segment_lines(page.lines, self.options.merge_multiline_particulars)
        rows = classify_segments(segments)

        logger.info(f"Page {index + 1} ({origin}): {len(page.lines)} lines, "
                    f"{len(segments)} segments, {len(rows)} rows")
        return PageResult(index=index, header=header, rows=tuple(rows), source=origin)


def parse_statement(pdf_path: Union[Path, str, bytes],
                    options: Optional[ExtractionOptions] = None,
                    settings: Optional[RuntimeSettings] = None,
                    cancel=None) -> ExtractionResult:
    """
    Extract the transaction table from a statement PDF.

    Raises:
        DocumentError: the file cannot be opened as a PDF
    """
    parser = StatementParser(options, settings)
    with PdfDocument(pdf_path) as document:
        return parser.parse(document, cancel)


def parse_text(text: str, options: Optional[ExtractionOptions] = None,
               settings: Optional[RuntimeSettings] = None) -> ExtractionResult:
    """Extract the transaction table from plain statement text."""
    return StatementParser(options, settings).parse_text(text)
