"""
Noise Filtering Module.

OCR output of a till receipt or printed invoice carries lines that are
never part of the invoice structure: separators, page markers, marketing
boilerplate, URLs, phone numbers and tax registration numbers.

The filter is advisory. Party-name extraction works on the cleaned lines,
while date, tax and total extraction still scan every line.
"""

import re
from typing import Iterable, List, Pattern, Sequence

from ledger_ocr.utils.logger import get_logger

logger = get_logger(__name__)

# Lines shorter than this are always noise
MIN_LINE_LENGTH = 3

NOISE_PATTERNS: Sequence[Pattern] = (
    re.compile(r'^[\W_]+$'),                                   # symbols only
    re.compile(r'^page\s*\d+', re.IGNORECASE),
    re.compile(r'^thank\s*you', re.IGNORECASE),
    re.compile(r'^visit\s+us', re.IGNORECASE),
    re.compile(r'^(?:www\.|https?:)', re.IGNORECASE),
    re.compile(r'^\+\d{1,3}[\s\-]?\d'),                        # +91 98xxx...
    re.compile(r'^(?:ph|phone|tel|mob(?:ile)?)\b\.?', re.IGNORECASE),
    re.compile(r'^(?:GSTIN|PAN)\b', re.IGNORECASE),
    re.compile(r'^[A-Z0-9]{15}$'),                             # GST number
)

# Lines that can never be an item row
ITEM_NOISE_PATTERNS: Sequence[Pattern] = (
    re.compile(r'^[\W_]+$'),
    re.compile(r'^(?:invoice|bill|receipt|tax invoice)', re.IGNORECASE),
    re.compile(r'^(?:date|time|tel|ph|mob|email|address)', re.IGNORECASE),
    re.compile(r'^(?:gstin|pan|cin|fssai)', re.IGNORECASE),
    re.compile(r'^(?:thank you|visit|call|order)', re.IGNORECASE),
    re.compile(r'^[A-Z0-9]{15,}$'),
)


def is_noise(line: str) -> bool:
    """
    Check whether a line is noise for header extraction.

    Example:
        >>> is_noise("www.abctraders.in")
        True
        >>> is_noise("ABC Traders")
        False
    """
    line = (line or '').strip()
    if len(line) < MIN_LINE_LENGTH:
        return True
    return any(pattern.search(line) for pattern in NOISE_PATTERNS)


def is_item_noise(line: str) -> bool:
    """Check whether a line is structurally unable to be an item row."""
    line = (line or '').strip()
    return any(pattern.search(line) for pattern in ITEM_NOISE_PATTERNS)


def filter_noise(lines: Iterable[str]) -> List[str]:
    """Return the lines that are not noise, preserving order."""
    lines = list(lines)
    clean = [line for line in lines if not is_noise(line)]
    logger.debug(f"Noise filter kept {len(clean)}/{len(lines)} lines")
    return clean
