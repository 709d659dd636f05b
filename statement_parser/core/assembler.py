"""
Merges per-page extraction output into one document table.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging

from .header import merge_header
from ..models.schema import (
    COLUMN_TEMPLATE, ExtractionResult, PageDiagnostic, TransactionRow
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageResult:
    """Output of one page task. `index` is 0-based."""
    index: int
    header: Dict[str, str] = field(default_factory=dict)
    rows: Tuple[TransactionRow, ...] = ()
    source: str = "text"
    error_kind: Optional[str] = None
    error_message: str = ""

    @property
    def failed(self) -> bool:
        return self.error_kind is not None


class TableAssembler:
    """
    Single serialization point for a document's pages.

    Page results may arrive in any order; `build` restores page order before
    merging header fields and appending rows, so the output does not depend
    on worker scheduling.
    """

    def __init__(self):
        self._pages: Dict[int, PageResult] = {}
        self.columns: Optional[Tuple[str, ...]] = None

    def add(self, page: PageResult):
        if page.index in self._pages:
            raise ValueError(f"Page {page.index + 1} added twice")
        self._pages[page.index] = page

    def build(self) -> ExtractionResult:
        header: Dict[str, str] = {}
        rows: List[TransactionRow] = []
        diagnostics: List[PageDiagnostic] = []

        for index in sorted(self._pages):
            page = self._pages[index]
            page_no = index + 1

            if page.failed:
                logger.warning(f"Page {page_no} skipped ({page.error_kind}): {page.error_message}")
                diagnostics.append(PageDiagnostic(
                    page=page_no, kind=page.error_kind, message=page.error_message
                ))
                continue

            header = merge_header(header, page.header)

            if not page.rows:
                diagnostics.append(PageDiagnostic(
                    page=page_no, kind="no_transactions",
                    message=f"No transaction lines found ({page.source})"
                ))
                continue

            if self.columns is None:
                self.columns = COLUMN_TEMPLATE
                logger.debug(f"Column template locked on page {page_no}")

            rows.extend(page.rows)

        columns = self.columns or COLUMN_TEMPLATE
        logger.info(f"Assembled {len(rows)} rows from {len(self._pages)} pages")

        return ExtractionResult(
            header=header,
            columns=columns,
            rows=rows,
            diagnostics=diagnostics,
        )
