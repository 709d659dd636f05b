"""
Bank Statement Table Extractor

Turns bank statement PDFs (text layer or scanned pages via OCR) into a
normalized transaction table: header fields, a fixed column template and one
row per transaction line.
"""

__version__ = "1.0.0"
__author__ = "Statement Parser Team"

from .core.runner import StatementParser, parse_statement, parse_text
from .core.errors import DocumentError, PageError, StatementError
from .models.schema import (
    COLUMN_TEMPLATE, ExtractionOptions, ExtractionResult, PageDiagnostic, TextToken, TransactionRow
)

__all__ = [
    "StatementParser",
    "parse_statement",
    "parse_text",
    "DocumentError",
    "PageError",
    "StatementError",
    "COLUMN_TEMPLATE",
    "ExtractionOptions",
    "ExtractionResult",
    "PageDiagnostic",
    "TextToken",
    "TransactionRow"
]
