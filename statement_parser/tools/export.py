"""
CSV and Excel writers for extraction results.
"""
import csv
from pathlib import Path
from typing import List
import logging

from openpyxl import Workbook
from openpyxl.styles import Font

from ..models.schema import ExtractionResult

logger = logging.getLogger(__name__)

SHEET_TITLE = "Transactions"


def sheet_rows(result: ExtractionResult, source_name: str) -> List[List[str]]:
    """
    Lay out a result as sheet rows.

    The layout is: the source file name, one row per header field, a blank
    row, the column names, then one row per transaction.
    """
    output: List[List[str]] = [["Source PDF", source_name]]
    for key, value in result.header.items():
        if value:
            output.append([key, value])
    output.append([])
    output.append(list(result.columns))
    output.extend(row.as_list() for row in result.rows)
    return output


def write_csv(result: ExtractionResult, path: Path, source_name: str) -> Path:
    """Write a result as CSV."""
    path = Path(path)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerows(sheet_rows(result, source_name))
    logger.info(f"Wrote {len(result.rows)} rows to {path}")
    return path


def write_xlsx(result: ExtractionResult, path: Path, source_name: str) -> Path:
    """Write a result as a single-sheet Excel workbook."""
    path = Path(path)
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    rows = sheet_rows(result, source_name)
    columns_row = len(rows) - len(result.rows)
    for row in rows:
        ws.append(row)

    for cell in ws[columns_row]:
        cell.font = Font(bold=True)

    wb.save(path)
    logger.info(f"Wrote {len(result.rows)} rows to {path}")
    return path


WRITERS = {
    "csv": write_csv,
    "xlsx": write_xlsx,
}
