"""
Exception types raised by the extraction pipeline.
"""


class StatementError(Exception):
    """Base class for extraction errors."""


class DocumentError(StatementError):
    """The source cannot be opened or decoded as a document. Aborts the conversion."""


class ConfigError(StatementError):
    """A settings file is missing, unreadable or invalid."""


class PageError(StatementError):
    """A single page could not be processed. The page is skipped."""

    kind = "page_failed"

    def __init__(self, page_index: int, message: str):
        super().__init__(f"Page {page_index + 1}: {message}")
        self.page_index = page_index
        self.message = message


class TextLayerError(PageError):
    kind = "text_layer_failed"


class RenderError(PageError):
    kind = "render_failed"


class OcrError(PageError):
    kind = "ocr_failed"
