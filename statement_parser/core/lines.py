"""
Line reconstruction from positioned tokens or plain OCR text.
"""
from dataclasses import dataclass
from typing import List, Sequence, Union
import logging

from ..models.schema import TextToken

logger = logging.getLogger(__name__)

LINE_TOLERANCE = 2.0
HEADER_LINE_COUNT = 10


@dataclass(frozen=True)
class PositionedTokens:
    """Page content from a text layer."""
    tokens: Sequence[TextToken]


@dataclass(frozen=True)
class PlainText:
    """Page content recognized by OCR."""
    text: str


PageSource = Union[PositionedTokens, PlainText]


@dataclass(frozen=True)
class PageLines:
    """Ordered page lines plus the text the header extractor should scan."""
    lines: List[str]
    header_text: str


def reconstruct_lines(tokens: Sequence[TextToken], tolerance: float = LINE_TOLERANCE) -> List[str]:
    """
    Group positioned tokens into visual lines, top to bottom.

    Args:
        tokens: Tokens from one page
        tolerance: Maximum vertical delta between neighbouring tokens of a line

    Returns:
        Line strings with tokens joined left to right by single spaces
    """
    visible = [token for token in tokens if token.text.strip()]
    if not visible:
        return []

    ordered = sorted(visible, key=lambda t: (-t.y, t.x))

    groups: List[List[TextToken]] = []
    current: List[TextToken] = []
    last_y = None

    for token in ordered:
        if last_y is None or abs(token.y - last_y) < tolerance:
            current.append(token)
        else:
            groups.append(current)
            current = [token]
        last_y = token.y

    if current:
        groups.append(current)

    lines = []
    for group in groups:
        group.sort(key=lambda t: t.x)
        lines.append(' '.join(token.text.strip() for token in group))

    logger.debug(f"Grouped {len(visible)} tokens into {len(lines)} lines")
    return lines


def split_text_lines(text: str) -> List[str]:
    """Non-blank lines of an OCR text blob."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def resolve_page(source: PageSource, tolerance: float = LINE_TOLERANCE,
                 header_line_count: int = HEADER_LINE_COUNT) -> PageLines:
    """
    Turn either input mode into the lines used downstream.

    Positioned tokens are grouped into lines and only the top of the page is
    scanned for header fields; OCR text is split on newlines and scanned whole.
    """
    if isinstance(source, PositionedTokens):
        lines = reconstruct_lines(source.tokens, tolerance)
        return PageLines(lines=lines, header_text=' '.join(lines[:header_line_count]))

    if isinstance(source, PlainText):
        return PageLines(lines=split_text_lines(source.text), header_text=source.text)

    raise TypeError(f"Unsupported page source: {type(source).__name__}")
