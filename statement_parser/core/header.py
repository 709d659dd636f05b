"""
Document header field detection (account number, IFSC, holder, branch, bank).
"""
import re
from typing import Dict, Mapping
import logging

logger = logging.getLogger(__name__)


ACCOUNT_PATTERNS = [
    re.compile(r'(?i:Account\s*(?:No\.?|Number|#|:)\s*[:\-\s]*)([\w\-]{5,30})'),
    re.compile(r'(?i:A/C\s*No\.?[:\s]*)([\w\-]{5,30})'),
]
IFSC_PATTERN = re.compile(r'\b[A-Z]{4}0[A-Z0-9]{6}\b')
HOLDER_PATTERN = re.compile(r'(?i:Account\s*Holder|Customer|Name)[:\s\-]*([A-Z][a-zA-Z.\s]{2,50})')
BRANCH_PATTERN = re.compile(r'(?i:Branch)[:\s\-]*([A-Za-z0-9.,\-\s]{2,40})')
BANK_PATTERN = re.compile(r'[A-Z][A-Z\s&]{3,30}Bank|Bank of (?:[A-Z]{2,}(?: [A-Z]{2,})*|[A-Z][a-z]+)')


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space."""
    return re.sub(r'\s+', ' ', text or '')


def _first_group(patterns, text: str):
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(1).strip()
    return None


def extract_header(text: str) -> Dict[str, str]:
    """
    Scan statement text for header fields.

    Every field is matched independently and the first match wins.

    Args:
        text: Top-of-page text, or a whole OCR blob

    Returns:
        Mapping with any subset of Account, IFSC, Holder, Branch and Bank
    """
    txt = normalize_whitespace(text)
    header: Dict[str, str] = {}

    account = _first_group(ACCOUNT_PATTERNS, txt)
    if account:
        header['Account'] = account

    ifsc = IFSC_PATTERN.search(txt)
    if ifsc:
        header['IFSC'] = ifsc.group(0)

    holder = _first_group([HOLDER_PATTERN], txt)
    if holder:
        header['Holder'] = holder

    branch = _first_group([BRANCH_PATTERN], txt)
    if branch:
        header['Branch'] = branch

    bank = BANK_PATTERN.search(txt)
    if bank:
        header['Bank'] = bank.group(0).strip()

    if header:
        logger.debug(f"Header fields found: {sorted(header)}")
    return header


def merge_header(accumulated: Mapping[str, str], page_header: Mapping[str, str]) -> Dict[str, str]:
    """Merge a later page's fields without replacing ones already present."""
    merged = dict(accumulated)
    for key, value in page_header.items():
        if key not in merged and value:
            merged[key] = value
    return merged
