"""
Splits page lines into date-anchored transaction segments.
"""
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging

logger = logging.getLogger(__name__)

DATE_RE = re.compile(r'^(\d{1,2}[-/]\d{1,2}[-/]\d{2,4})')
MIN_LINE_LENGTH = 10


@dataclass(frozen=True)
class Segment:
    """A transaction candidate: its date and the text after it."""
    date: str
    remainder: str


def match_transaction_start(line: str) -> Optional[Segment]:
    """
    Return a segment when the line opens a transaction.

    The trimmed line must be at least ten characters long and begin with a
    day/month/year date separated by '-' or '/'.
    """
    trimmed = line.strip()
    if len(trimmed) < MIN_LINE_LENGTH:
        return None

    match = DATE_RE.match(trimmed)
    if not match:
        return None

    date = match.group(1)
    return Segment(date=date, remainder=trimmed[match.end():].strip())


def segment_lines(lines: Sequence[str], merge_multiline: bool = False) -> List[Segment]:
    """
    Build transaction segments from ordered lines.

    Args:
        lines: Page lines, top to bottom
        merge_multiline: Append continuation lines found between two
            transactions to the earlier transaction's text

    Returns:
        Segments in line order
    """
    segments: List[Segment] = []
    pending: List[str] = []

    for line in lines:
        segment = match_transaction_start(line)
        if segment is None:
            if segments and merge_multiline:
                continuation = re.sub(r'\s+', ' ', line).strip()
                if continuation:
                    pending.append(continuation)
            continue

        if pending:
            previous = segments[-1]
            segments[-1] = Segment(
                date=previous.date,
                remainder=' '.join([previous.remainder] + pending).strip(),
            )
            pending = []

        segments.append(segment)

    if pending:
        logger.debug(f"Dropped {len(pending)} trailing lines after the last transaction")

    logger.debug(f"Segmented {len(lines)} lines into {len(segments)} transactions")
    return segments
