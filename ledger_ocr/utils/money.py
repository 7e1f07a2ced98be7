"""
Money Utilities Module.

Shared numeric helpers for everything that touches currency:

    - round2: round to cents (half away from zero)
    - parse_amount: permissive amount parsing, zero on failure
    - parse_number: the same parsing without rounding, for quantities
    - find_amounts: every numeric token on a line of OCR text

All currency arithmetic in the package goes through round2 so that no
stored or displayed figure is left as a raw floating-point value.
"""

import math
import numbers
import re
from typing import Any, List

from ledger_ocr.utils.logger import get_logger

logger = get_logger(__name__)

# Number with optional thousands separators and decimals, e.g. 1,234.50
AMOUNT_PATTERN = r'\d+(?:,\d+)*(?:\.\d+)?'

CURRENCY_SYMBOLS = ['₹', '$', '€', '£', '¥', '₽', '฿', '₫', '₴', '₦']
CURRENCY_CODES = ['INR', 'USD', 'EUR', 'GBP', 'JPY', 'CAD', 'AUD', 'CNY', 'RUB', 'Rs']

# Beyond this magnitude a float cannot hold whole cents
_MAX_CENT_PRECISION = 2 ** 53 / 100

_AMOUNT_RE = re.compile(AMOUNT_PATTERN)
_LEADING_NUMBER_RE = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)')
_CURRENCY_CODE_RE = re.compile(
    r'\b(?:' + '|'.join(CURRENCY_CODES) + r')\.?(?![A-Za-z])',
    re.IGNORECASE
)


def round2(value: float) -> float:
    """
    Round a currency value to two decimal places.

    Uses round-half-away-from-zero on ``value * 100``, then divides by 100.
    Applying it twice gives the same result as applying it once.

    Example:
        >>> round2(1.234)
        1.23
        >>> round2(-0.125)
        -0.13
    """
    if not math.isfinite(value) or abs(value) >= _MAX_CENT_PRECISION:
        return value

    scaled = value * 100
    cents = math.floor(abs(scaled) + 0.5)
    if cents == 0:
        return 0.0
    result = cents / 100
    return -result if scaled < 0 else result


def to_number(token: str) -> float:
    """Convert a matched AMOUNT_PATTERN token (e.g. '1,234.50') to float."""
    return float(token.replace(',', ''))


def find_amounts(text: str) -> List[float]:
    """
    Find every numeric token in a piece of text.

    Example:
        >>> find_amounts("Total: Rs 1,180 (incl. 18% tax Rs 180)")
        [1180.0, 18.0, 180.0]
    """
    return [to_number(token) for token in _AMOUNT_RE.findall(text or '')]


def parse_number(value: Any) -> float:
    """
    Parse a plain number (such as a quantity) from a number or a string.

    Accepts the same input as parse_amount but keeps full precision, so
    ``"0.125"`` kg stays 0.125. Unparseable input yields 0.

    Example:
        >>> parse_number("0.125")
        0.125
        >>> parse_number("Rs. 1,250.555")
        1250.555
    """
    if value is None:
        return 0

    if isinstance(value, numbers.Real):
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return value

    cleaned = str(value)
    for symbol in CURRENCY_SYMBOLS:
        cleaned = cleaned.replace(symbol, '')
    cleaned = _CURRENCY_CODE_RE.sub('', cleaned)
    cleaned = re.sub(r'[,\s]', '', cleaned)

    match = _LEADING_NUMBER_RE.match(cleaned)
    if not match:
        logger.debug(f"Could not parse number: {value!r}")
        return 0

    try:
        parsed = float(match.group(0))
    except ValueError:
        return 0

    return parsed if math.isfinite(parsed) else 0


def parse_amount(value: Any) -> float:
    """
    Parse an amount from a number or a string.

    Numbers are returned unchanged (non-finite numbers become 0). Strings
    are stripped of currency symbols and codes, thousands separators and
    whitespace; the leading numeric part is parsed and rounded to cents.
    Unparseable input yields 0, never an error.

    Example:
        >>> parse_amount("₹ 1,234.50")
        1234.5
        >>> parse_amount("garbage")
        0
        >>> parse_amount(42)
        42
    """
    if value is None or isinstance(value, numbers.Real):
        return parse_number(value)
    return round2(parse_number(value))
