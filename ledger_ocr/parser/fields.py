"""
Header and Summary Field Extraction.

Regex-driven extraction of the non-item fields of an invoice:
    - Party (supplier or customer) name
    - Invoice date, normalized to YYYY-MM-DD
    - Tax percentage, tax amount and subtotal
    - Grand total

Author: ML Engineering Team
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import List, Sequence

from dateutil import parser as date_parser

from ledger_ocr.utils.logger import get_logger
from ledger_ocr.utils.money import AMOUNT_PATTERN, find_amounts, round2, to_number

logger = get_logger(__name__)

COMPANY_KEYWORDS_RE = re.compile(
    r'\b(?:limited|ltd|pvt|inc|corp|co|store|shop|mart|traders|enterprises?)\b',
    re.IGNORECASE
)
# Runs like 15/03/2024 or 9876543210 are dates or phone numbers
NUMERIC_RUN_RE = re.compile(r'[\d/\-.]{8,}')

DATE_PATTERNS = [
    ('labelled', re.compile(
        r'(?:date|dated)[:\s]*(\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4})(?!\d)', re.IGNORECASE
    )),
    ('numeric', re.compile(r'(?<!\d)(\d{1,2}[/\-.]\d{1,2}[/\-.]\d{2,4})(?!\d)')),
    ('textual', re.compile(r'(?<!\d)(\d{1,2}[-/][A-Za-z]{3,9}[-/]\d{2,4})(?!\d)')),
]
DATE_SEPARATOR_RE = re.compile(r'[/\-.]')
MONTH_NAMES = date_parser.parserinfo()

TAX_PERCENT_RE = re.compile(
    r'\b(?:GST|Tax|VAT)[:\s]*(?:@\s*)?(\d+(?:\.\d+)?)\s*%', re.IGNORECASE
)
TAX_AMOUNT_RE = re.compile(
    r'\b(?:CGST|SGST|IGST|Tax)\b\s*(?:@\s*)?(?:\d+(?:\.\d+)?\s*%\s*)?[:\s]*'
    rf'(?:Rs\.?|₹)?\s*({AMOUNT_PATTERN})(?![\d.,]|\s*%)',
    re.IGNORECASE
)
SUBTOTAL_RE = re.compile(
    r'(?:Sub\s*-?\s*Total|Total\s+Before\s+Tax)[:\s]*(?:Rs\.?|₹)?\s*'
    rf'({AMOUNT_PATTERN})',
    re.IGNORECASE
)

TOTAL_KEYWORDS = [
    'total', 'grand total', 'net total', 'amount payable', 'balance due', 'total amount'
]
SUBTOTAL_PHRASE_RE = re.compile(r'sub\s*-?\s*total|total\s+before\s+tax', re.IGNORECASE)
# A total keyword with its amount already given, as in "Total 1,180 (incl. tax ...)"
TOTAL_THEN_NUMBER_RE = re.compile(r'total\b.*?\d', re.IGNORECASE)


@dataclass
class TaxInfo:
    """Tax figures found on an invoice."""
    tax_percent: float = 0
    tax: float = 0
    subtotal: float = 0


def _is_title_case(line: str) -> bool:
    words = [word for word in line.split() if word[:1].isalpha()]
    return bool(words) and all(word[0].isupper() for word in words)


def _is_all_caps(line: str) -> bool:
    return any(ch.isalpha() for ch in line) and line == line.upper()


def extract_party_name(
    clean_lines: Sequence[str],
    scan_lines: int = 5,
    fallback_lines: int = 3,
    fallback_min_length: int = 5
) -> str:
    """
    Extract the party (supplier/customer) name from noise-filtered lines.

    The party name is usually printed first. Within the first ``scan_lines``
    lines, the first line carrying a company keyword or looking like a
    proper name (Title Case or ALL CAPS, more than 4 characters) wins.
    Lines starting with a digit or holding a long numeric run are skipped.

    Args:
        clean_lines: Lines with noise removed
        scan_lines: Number of leading lines to scan
        fallback_lines: Number of leading lines for the fallback
        fallback_min_length: Fallback lines must be longer than this

    Returns:
        Party name, or '' when nothing plausible was found

    Example:
        >>> extract_party_name(["ABC Traders", "Rice 10 50 500"])
        'ABC Traders'
    """
    for line in clean_lines[:scan_lines]:
        if line[:1].isdigit() or NUMERIC_RUN_RE.search(line):
            continue

        if COMPANY_KEYWORDS_RE.search(line):
            logger.debug(f"Party name by keyword: {line!r}")
            return line

        if len(line) > 4 and (_is_title_case(line) or _is_all_caps(line)):
            logger.debug(f"Party name by letter case: {line!r}")
            return line

    for line in clean_lines[:fallback_lines]:
        if len(line) > fallback_min_length:
            logger.debug(f"Party name by fallback: {line!r}")
            return line

    return ''


def _month_number(token: str) -> int:
    if token.isdigit():
        return int(token)
    # "Jan", "january", "Sept" and similar; weekday names are not months
    month = MONTH_NAMES.month(token)
    if month is None:
        raise ValueError(f"Unknown month: {token!r}")
    return month


def normalize_date(raw: str, today: date) -> str:
    """
    Normalize a day-month-year date string to ``YYYY-MM-DD``.

    The three parts are read as day, month, year. A 2-digit year is taken
    as 20YY. Impossible dates and other year widths fall back to ``today``.

    Example:
        >>> normalize_date("15/03/2024", date(2026, 1, 1))
        '2024-03-15'
        >>> normalize_date("5-Jan-24", date(2026, 1, 1))
        '2024-01-05'
    """
    parts = DATE_SEPARATOR_RE.split(raw.strip())
    if len(parts) == 3:
        day, month, year = parts
        if len(year) in (2, 4) and year.isdigit():
            if len(year) == 2:
                year = '20' + year
            try:
                return date(int(year), _month_number(month), int(day)).isoformat()
            except (ValueError, OverflowError) as e:
                logger.debug(f"Invalid date {raw!r}: {e}")

    logger.warning(f"Could not normalize date {raw!r}, using today's date")
    return today.isoformat()


def extract_date(lines: Sequence[str], today: date) -> str:
    """
    Find the invoice date.

    Lines are scanned top-down. On each line the patterns are tried in
    order (labelled numeric, bare numeric, textual month); the first match
    ends the scan.

    Returns:
        ISO date string, or '' when no line holds a date
    """
    for line in lines:
        for name, pattern in DATE_PATTERNS:
            match = pattern.search(line)
            if match:
                logger.debug(f"Date matched by '{name}' pattern: {match.group(1)!r}")
                return normalize_date(match.group(1), today)
    return ''


def _tax_amounts(line: str) -> List[float]:
    """Tax amounts on one line; 'Total Tax: 180' counts, 'Total 1,180 (incl. tax 180)' does not."""
    if SUBTOTAL_PHRASE_RE.search(line):
        return []

    amounts = []
    for match in TAX_AMOUNT_RE.finditer(line):
        if TOTAL_THEN_NUMBER_RE.search(line[:match.start()]):
            continue
        amounts.append(to_number(match.group(1)))
    return amounts


def extract_tax_info(lines: Sequence[str]) -> TaxInfo:
    """
    Extract tax percentage, tax amount and subtotal.

    The last percentage and the last subtotal win. Tax amounts from
    CGST/SGST/IGST/Tax labels are summed on any line, except subtotal lines
    and a tax breakdown that follows an already stated total. Percentages
    are never read as amounts.

    Example:
        >>> extract_tax_info(["GST @18%", "CGST 90", "SGST 90"])
        TaxInfo(tax_percent=18.0, tax=180.0, subtotal=0)
    """
    info = TaxInfo()
    tax = 0.0

    for line in lines:
        percent = TAX_PERCENT_RE.findall(line)
        if percent:
            info.tax_percent = float(percent[-1])

        tax += sum(_tax_amounts(line))

        subtotal = SUBTOTAL_RE.findall(line)
        if subtotal:
            info.subtotal = to_number(subtotal[-1])

    info.tax = round2(tax)
    return info


def extract_total(
    lines: Sequence[str],
    tail_lines: int = 5,
    tail_min_amount: float = 10
) -> float:
    """
    Extract the grand total.

    Scans bottom-up for a total-family line that is not a subtotal and
    takes the largest number on it. Without such a line, the largest
    number above ``tail_min_amount`` in the last ``tail_lines`` lines is
    used.

    Returns:
        Total amount, 0 when nothing was found
    """
    for line in reversed(lines):
        lower = line.lower()
        if not any(keyword in lower for keyword in TOTAL_KEYWORDS):
            continue
        if SUBTOTAL_PHRASE_RE.search(line):
            continue

        amounts = find_amounts(line)
        if amounts and max(amounts) > 0:
            logger.debug(f"Total from line {line!r}")
            return max(amounts)

    tail = [
        amount
        for line in lines[-tail_lines:] if tail_lines > 0
        for amount in find_amounts(line)
        if amount > tail_min_amount
    ]
    if tail:
        logger.debug(f"Total from tail heuristic: {max(tail)}")
        return max(tail)

    return 0
