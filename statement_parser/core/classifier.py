"""
Column classification: turns a segment's text into reference, description
and debit/credit/balance cells.

Amounts are kept as the exact strings found on the page. Which amount lands
in which column is decided by a small ordered rule table keyed on how many
amounts a line carries; the first matching rule applies.
"""
import re
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple
import logging

from .segmenter import Segment
from ..models.schema import TransactionRow

logger = logging.getLogger(__name__)

AMOUNT_RE = re.compile(r'\b\d{1,3}(?:,\d{3})*(?:\.\d{2})?\b')
REFERENCE_RE = re.compile(r'\b(\d{6,})\b')
CREDIT_KEYWORDS = ("salary", "credit", "deposit", "interest")


class ColumnAssignment(NamedTuple):
    debit: str = ""
    credit: str = ""
    balance: str = ""


class Rule(NamedTuple):
    name: str
    applies: Callable[[int], bool]
    assign: Callable[[Sequence[str], str], Optional[ColumnAssignment]]


def has_credit_keyword(description: str) -> bool:
    lowered = description.lower()
    return any(keyword in lowered for keyword in CREDIT_KEYWORDS)


def _single_amount(amounts: Sequence[str], description: str) -> ColumnAssignment:
    if has_credit_keyword(description):
        return ColumnAssignment(credit=amounts[0])
    return ColumnAssignment(debit=amounts[0])


# Count rules for two or more amounts take priority over credit keywords:
# a salary line printed with its running balance still reads debit, balance.
RULES: Tuple[Rule, ...] = (
    Rule("no_amounts", lambda n: n == 0, lambda a, d: None),
    Rule("single_amount", lambda n: n == 1, _single_amount),
    Rule("amount_and_balance", lambda n: n == 2,
         lambda a, d: ColumnAssignment(debit=a[0], balance=a[1])),
    Rule("debit_credit_balance", lambda n: n == 3,
         lambda a, d: ColumnAssignment(debit=a[0], credit=a[1], balance=a[2])),
    Rule("first_and_last", lambda n: n > 3,
         lambda a, d: ColumnAssignment(debit=a[0], balance=a[-1])),
)


def assign_columns(amounts: Sequence[str], description: str) -> Optional[ColumnAssignment]:
    """
    Map extracted amounts to debit/credit/balance.

    Returns:
        The assignment, or None when the line carries no amount
    """
    for rule in RULES:
        if rule.applies(len(amounts)):
            return rule.assign(amounts, description)
    return None


def extract_amounts(text: str) -> Tuple[List[str], str]:
    """
    Find amount tokens and strip them from the text.

    Returns:
        (amounts in order of appearance, text with each amount removed once)
    """
    amounts = AMOUNT_RE.findall(text)
    remaining = text
    for amount in amounts:
        remaining = re.sub(r'\b' + re.escape(amount) + r'\b', '', remaining, count=1)
    return amounts, remaining


def extract_reference(description: str, amounts: Sequence[str]) -> Tuple[str, str]:
    """
    Pull a cheque/reference number (six or more digits) out of the description.

    Returns:
        (reference or "", description without it)
    """
    match = REFERENCE_RE.search(description)
    if not match or match.group(1) in amounts:
        return "", description

    reference = match.group(1)
    return reference, description[:match.start(1)] + description[match.end(1):]


def normalize_description(text: str) -> str:
    return re.sub(r'\s+', ' ', text).strip()


def classify_segment(segment: Segment) -> Optional[TransactionRow]:
    """
    Classify one segment into a transaction row.

    Returns:
        The row, or None when the segment carries no amount or lacks a description
    """
    amounts, raw_description = extract_amounts(segment.remainder)
    reference, raw_description = extract_reference(raw_description, amounts)
    description = normalize_description(raw_description)

    assignment = assign_columns(amounts, description)
    if assignment is None:
        logger.debug(f"No amounts on {segment.date} line, skipping: {segment.remainder!r}")
        return None

    if not description or not (assignment.debit or assignment.credit):
        logger.debug(f"Incomplete row on {segment.date}, skipping: {segment.remainder!r}")
        return None

    return TransactionRow(
        date=segment.date,
        reference=reference,
        description=description,
        **assignment._asdict()
    )


def classify_segments(segments: Sequence[Segment]) -> List[TransactionRow]:
    """Classify segments in order, keeping only accepted rows."""
    rows = []
    for segment in segments:
        row = classify_segment(segment)
        if row is not None:
            rows.append(row)
    return rows

