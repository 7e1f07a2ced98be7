"""
Line-Item Extraction Strategies.

Each strategy is a pure function ``(line) -> LineItem | None``. The parser
runs them as an ordered chain and commits to the first strategy that
yields at least one item, applying that single strategy to every candidate
line of the invoice. Strategies are never interleaved line by line.

Order:
    1. table        "Rice 10 50 500"
    2. qty_x_rate   "Sugar 2 x 45 = 90"
    3. single_price "Delivery charge 40"
"""

import re
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ledger_ocr.models.invoice import LineItem
from ledger_ocr.utils.logger import get_logger
from ledger_ocr.utils.money import AMOUNT_PATTERN, round2, to_number
from .noise import is_item_noise

logger = get_logger(__name__)

DEFAULT_MAX_RATE = 1_000_000
DEFAULT_MAX_SINGLE_PRICE = 100_000
DEFAULT_MAX_NAME_LENGTH = 100
DEFAULT_HEADER_ROW_MAX_LENGTH = 20

QUANTITY_PATTERN = r'\d+(?:\.\d+)?'

TABLE_RE = re.compile(
    rf'^(.+?)\s+({QUANTITY_PATTERN})\s+({AMOUNT_PATTERN})\s+({AMOUNT_PATTERN})$'
)
QTY_RATE_RE = re.compile(
    rf'^(.+?)\s+({QUANTITY_PATTERN})\s*[xX×]\s*({AMOUNT_PATTERN})'
    rf'(?:\s*=?\s*({AMOUNT_PATTERN}))?\s*$'
)
SINGLE_PRICE_RE = re.compile(
    rf'^(.+?)\s+(?:Rs\.?|₹)?\s*({AMOUNT_PATTERN})$'
)
SUMMARY_LINE_RE = re.compile(r'total|tax|discount|subtotal|paid|balance', re.IGNORECASE)

# Header and summary rows of an item table
HEADER_KEYWORDS = [
    'item', 'description', 'qty', 'quantity', 'rate', 'price', 'amount',
    'total', 'subtotal', 'grand total', 'net total', 'tax', 'gst', 'cgst', 'sgst',
    'discount', 'balance', 'paid', 'invoice', 'bill', 'receipt'
]

SECTION_START_RE = re.compile(r'item|description|particulars', re.IGNORECASE)
SECTION_END_RE = re.compile(r'sub\s*total|total|amount', re.IGNORECASE)
DIGIT_RE = re.compile(r'\d')


@dataclass(frozen=True)
class ItemStrategy:
    """A named line-item extraction strategy."""
    name: str
    extract: Callable[[str], Optional[LineItem]]

    def apply(self, lines: Iterable[str]) -> List[LineItem]:
        items = []
        for line in lines:
            item = self.extract(line)
            if item is not None:
                items.append(item)
        return items


def table_row(line: str, max_rate: float = DEFAULT_MAX_RATE) -> Optional[LineItem]:
    """
    Parse a ``name qty rate amount`` table row.

    Rejects empty names, non-positive quantity or rate, and rates at or
    above ``max_rate`` (usually a misread invoice or phone number).

    Example:
        >>> table_row("Rice 10 50 500")
        LineItem(name='Rice', quantity=10.0, rate=50.0, line_amount=500.0)
    """
    match = TABLE_RE.match(line.strip())
    if not match:
        return None

    name = match.group(1).strip()
    quantity = float(match.group(2))
    rate = to_number(match.group(3))
    amount = to_number(match.group(4))

    if not name or quantity <= 0 or rate <= 0 or rate >= max_rate:
        return None

    return LineItem(name, quantity, rate, amount or round2(quantity * rate))


def qty_x_rate(line: str) -> Optional[LineItem]:
    """
    Parse a ``name qty x rate [=] [amount]`` row.

    The amount is optional; when missing it is computed from quantity and
    rate. The claimed amount is otherwise kept as-is for the reconciler.
    """
    match = QTY_RATE_RE.match(line.strip())
    if not match:
        return None

    name = match.group(1).strip()
    quantity = float(match.group(2))
    rate = to_number(match.group(3))

    if not name or quantity <= 0 or rate <= 0:
        return None

    if match.group(4) is not None:
        amount = to_number(match.group(4))
    else:
        amount = round2(quantity * rate)

    return LineItem(name, quantity, rate, amount)


def single_price(
    line: str,
    max_price: float = DEFAULT_MAX_SINGLE_PRICE,
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH
) -> Optional[LineItem]:
    """Parse a ``name amount`` row as one unit at that price."""
    line = line.strip()
    if SUMMARY_LINE_RE.search(line):
        return None

    match = SINGLE_PRICE_RE.match(line)
    if not match:
        return None

    name = match.group(1).strip()
    amount = to_number(match.group(2))

    if not (2 < len(name) < max_name_length) or not (0 < amount < max_price):
        return None

    return LineItem(name, 1, amount, amount)


def build_strategies(
    max_rate: float = DEFAULT_MAX_RATE,
    max_single_price: float = DEFAULT_MAX_SINGLE_PRICE,
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH
) -> List[ItemStrategy]:
    """Build the ordered strategy chain with the given sanity bounds."""
    return [
        ItemStrategy('table', partial(table_row, max_rate=max_rate)),
        ItemStrategy('qty_x_rate', qty_x_rate),
        ItemStrategy(
            'single_price',
            partial(single_price, max_price=max_single_price, max_name_length=max_name_length)
        ),
    ]


def is_header_or_total_row(line: str, max_length: int = DEFAULT_HEADER_ROW_MAX_LENGTH) -> bool:
    """
    Check whether a line is a table header or a summary row.

    A keyword marks the line when it is the whole line, or when it appears
    in a line shorter than ``max_length``. Longer lines that merely contain
    a keyword are still considered item candidates.
    """
    lower = line.strip().lower()
    return any(
        lower == keyword or (keyword in lower and len(line.strip()) < max_length)
        for keyword in HEADER_KEYWORDS
    )


def item_section(lines: Sequence[str]) -> List[str]:
    """
    Limit lines to the item section of the invoice.

    When a table header (item/description/particulars) is present, the
    section ends at the first later line mentioning a total or amount.
    Without a header every line is kept.
    """
    lines = list(lines)
    end = len(lines)

    for index, line in enumerate(lines):
        if SECTION_START_RE.search(line):
            for later in range(index + 1, len(lines)):
                if SECTION_END_RE.search(lines[later]):
                    end = later
                    break
            break

    return lines[:end]


def candidate_lines(
    lines: Sequence[str],
    header_row_max_length: int = DEFAULT_HEADER_ROW_MAX_LENGTH
) -> List[str]:
    """Lines of the item section that could hold an item row."""
    return [
        line for line in item_section(lines)
        if DIGIT_RE.search(line)
        and not is_item_noise(line)
        and not is_header_or_total_row(line, header_row_max_length)
    ]


def select_strategy(
    lines: Sequence[str],
    strategies: Sequence[ItemStrategy]
) -> Tuple[Optional[str], List[LineItem]]:
    """
    Run strategies in order and commit to the first with any hits.

    Returns:
        Tuple of (strategy name or None, extracted items).
    """
    for strategy in strategies:
        items = strategy.apply(lines)
        if items:
            logger.debug(f"Item strategy '{strategy.name}' matched {len(items)} line(s)")
            return strategy.name, items

    logger.debug("No item strategy matched")
    return None, []
