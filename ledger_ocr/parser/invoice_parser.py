"""
Invoice Parser Module.

Turns recognized OCR text into a best-effort ParsedInvoice. Extraction is
heuristic and runs in independent passes over the text lines:

    1. Noise filtering (used for party name only)
    2. Party name and date
    3. Line items via the ordered strategy chain
    4. Tax, subtotal and total

The parser never raises. When nothing can be extracted it returns an empty
ParsedInvoice and lets the caller decide how to present it.

Author: ML Engineering Team
"""

from datetime import date
from typing import Callable, Iterable, Optional, Union

from config import get_config
from ledger_ocr.models.invoice import LineItem, ParsedInvoice
from ledger_ocr.models.recognized_text import RecognizedText
from ledger_ocr.utils.logger import get_logger
from ledger_ocr.utils.money import round2
from .fields import extract_date, extract_party_name, extract_tax_info, extract_total
from .noise import filter_noise
from .strategies import build_strategies, candidate_lines, select_strategy

logger = get_logger(__name__)

ParserInput = Union[RecognizedText, str, Iterable[str], None]


class InvoiceParser:
    """
    Heuristic invoice field extractor.

    Thresholds are read from the ``parser`` section of the configuration.
    The instance holds no per-invoice state and can be shared.

    Attributes:
        clock: Callable returning today's date, used for date fallback
        strategies: Ordered line-item strategies

    Example:
        >>> parser = InvoiceParser()
        >>> parsed = parser.parse_text("ABC Traders\\n15/03/2024\\nRice 10 50 500\\nTotal 500")
        >>> parsed.party_name, parsed.total
        ('ABC Traders', 500.0)
    """

    def __init__(self, clock: Optional[Callable[[], date]] = None) -> None:
        """
        Initialize the parser.

        Args:
            clock: Returns the current date. Defaults to date.today.
        """
        self.clock = clock or date.today

        self.party_scan_lines = get_config("parser.party.scan_lines", 5)
        self.party_fallback_lines = get_config("parser.party.fallback_lines", 3)
        self.party_fallback_min_length = get_config("parser.party.fallback_min_length", 5)

        self.header_row_max_length = get_config("parser.items.header_row_max_length", 20)
        self.placeholder_name = get_config("parser.items.placeholder_name", "Invoice Item")

        self.total_tail_lines = get_config("parser.total.tail_lines", 5)
        self.total_tail_min_amount = get_config("parser.total.tail_min_amount", 10)

        self.strategies = build_strategies(
            max_rate=get_config("parser.items.max_rate", 1_000_000),
            max_single_price=get_config("parser.items.max_single_price", 100_000),
            max_name_length=get_config("parser.items.max_name_length", 100)
        )

        logger.debug(
            f"InvoiceParser initialized with strategies: "
            f"{[strategy.name for strategy in self.strategies]}"
        )

    @staticmethod
    def _to_recognized(recognized: ParserInput) -> RecognizedText:
        if isinstance(recognized, RecognizedText):
            return recognized
        if recognized is None:
            return RecognizedText()
        if isinstance(recognized, str):
            return RecognizedText.from_text(recognized)
        return RecognizedText.from_lines(recognized)

    def parse_invoice(self, recognized: ParserInput) -> ParsedInvoice:
        """
        Extract invoice fields from recognized text.

        Args:
            recognized: RecognizedText, or a raw text blob, or a list of lines

        Returns:
            ParsedInvoice with every field that could be found. Fields
            extracted before an unexpected failure are kept.
        """
        parsed = ParsedInvoice()

        try:
            recognized = self._to_recognized(recognized)
            parsed.raw_text = recognized.text
            parsed.confidence = recognized.confidence

            lines = list(recognized.lines)
            if not lines:
                logger.info("No text lines to parse")
                return parsed

            clean_lines = filter_noise(lines)

            parsed.party_name = extract_party_name(
                clean_lines,
                scan_lines=self.party_scan_lines,
                fallback_lines=self.party_fallback_lines,
                fallback_min_length=self.party_fallback_min_length
            )
            parsed.date = extract_date(lines, self.clock())

            strategy, items = select_strategy(
                candidate_lines(lines, self.header_row_max_length),
                self.strategies
            )
            parsed.items = items

            tax_info = extract_tax_info(lines)
            parsed.tax_percent = tax_info.tax_percent
            parsed.tax = tax_info.tax
            parsed.subtotal = tax_info.subtotal

            parsed.total = extract_total(
                lines,
                tail_lines=self.total_tail_lines,
                tail_min_amount=self.total_tail_min_amount
            )

            if not parsed.items and parsed.total > 0:
                logger.debug("No line items found, adding placeholder item for the total")
                parsed.items = [
                    LineItem(self.placeholder_name, 1, parsed.total, parsed.total)
                ]
            elif parsed.items and parsed.total == 0:
                parsed.total = round2(sum(item.line_amount for item in parsed.items))

            logger.info(
                f"Parsed invoice: party={parsed.party_name!r}, date={parsed.date!r}, "
                f"items={len(parsed.items)} (strategy={strategy}), total={parsed.total}"
            )

        except Exception as e:
            logger.exception(f"Invoice parsing failed, returning partial result: {e}")

        return parsed

    def parse_text(self, text: Optional[str], confidence: float = 0.0) -> ParsedInvoice:
        """Parse a raw OCR text blob."""
        return self.parse_invoice(RecognizedText.from_text(text, confidence))
