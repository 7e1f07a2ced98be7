"""
Transaction Reconciler Module.

Verifies and auto-corrects the arithmetic of a candidate transaction:
    - quantity * rate against each claimed line amount
    - the sum of line amounts against the claimed total
    - bill + cash against a sale total

Quantity * rate is treated as ground truth; claimed amounts are treated as
possibly misread observations. Input is never rejected: every check yields
a corrected value plus an audit trail.

Author: ML Engineering Team
"""

from typing import Any, Iterable, List, Union

from ledger_ocr.models.invoice import (
    CorrectionRecord,
    LineItem,
    ParsedInvoice,
    ReconciledInvoice,
    ReconciledLineItem,
)
from ledger_ocr.utils.logger import get_logger
from ledger_ocr.utils.money import parse_amount, round2
from .results import (
    BillCashSplitValidation,
    LineItemValidation,
    TotalValidation,
    TransactionValidation,
)

logger = get_logger(__name__)

ItemInput = Union[LineItem, dict]


class TransactionReconciler:
    """
    Arithmetic validator and auto-corrector for invoice transactions.

    All comparisons use a fixed tolerance of one cent (inclusive). The
    reconciler is stateless apart from the tolerance and can be shared.

    Example:
        >>> reconciler = TransactionReconciler()
        >>> result = reconciler.validate_transaction([LineItem("Rice", 10, 50, 550)], 550)
        >>> result.validation_summary
        '1 line item(s) corrected, Total amount corrected'
    """

    TOLERANCE = 0.01
    # Absorbs binary floating-point noise in differences such as 500.01 - 500
    EPSILON = 1e-9

    SUMMARY_ALL_CORRECT = "All calculations are correct"

    def __init__(self) -> None:
        self.tolerance = self.TOLERANCE

    def _within_tolerance(self, difference: float) -> bool:
        return difference <= self.tolerance + self.EPSILON

    @staticmethod
    def _as_line_item(item: ItemInput) -> LineItem:
        if isinstance(item, LineItem):
            return item
        if isinstance(item, dict):
            return LineItem.from_dict(item)
        logger.warning(f"Ignoring unrecognized line item: {item!r}")
        return LineItem()

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def validate_line_item(self, item: ItemInput) -> LineItemValidation:
        """
        Check a single line item.

        Args:
            item: LineItem (or dict with name/quantity/rate/line_amount)

        Returns:
            LineItemValidation with calculated = round2(quantity * rate)
        """
        item = self._as_line_item(item)
        calculated = round2(item.quantity * item.rate)
        difference = abs(calculated - item.line_amount)
        is_valid = self._within_tolerance(difference)

        return LineItemValidation(
            is_valid=is_valid,
            calculated_amount=calculated,
            original_amount=item.line_amount,
            difference=round2(difference),
            was_auto_corrected=not is_valid
        )

    def validate_line_items(self, items: Iterable[ItemInput]) -> List[ReconciledLineItem]:
        """
        Check every line item and attach the audit fields.

        Input items are not modified. Quantity and rate are carried over
        unchanged; line_amount keeps the claimed value and corrected_amount
        holds the calculated one.
        """
        reconciled = []
        for item in items or []:
            item = self._as_line_item(item)
            validation = self.validate_line_item(item)
            reconciled.append(ReconciledLineItem(
                name=item.name,
                quantity=item.quantity,
                rate=item.rate,
                line_amount=item.line_amount,
                corrected_amount=validation.calculated_amount,
                original_amount=validation.original_amount,
                was_auto_corrected=validation.was_auto_corrected,
                is_valid=validation.is_valid
            ))
        return reconciled

    def validate_total(self, items: Iterable[ItemInput], claimed_total: Any) -> TotalValidation:
        """
        Check the claimed total against the sum of line amounts.

        Reconciled items contribute their corrected amount, plain line
        items their claimed amount.
        """
        claimed_total = parse_amount(claimed_total)
        calculated = round2(sum(
            item.corrected_amount if isinstance(item, ReconciledLineItem) else item.line_amount
            for item in (self._as_line_item(item) for item in items or [])
        ))
        difference = abs(calculated - claimed_total)
        is_valid = self._within_tolerance(difference)

        return TotalValidation(
            is_valid=is_valid,
            calculated_total=calculated,
            original_total=claimed_total,
            difference=round2(difference),
            was_auto_corrected=not is_valid
        )

    def validate_transaction(
        self,
        items: Iterable[ItemInput],
        total: Any
    ) -> TransactionValidation:
        """
        Validate line items and total together.

        Args:
            items: Line items as extracted or edited
            total: Claimed total

        Returns:
            TransactionValidation with corrected items and total, counts of
            corrections and a human-readable summary.
        """
        reconciled = self.validate_line_items(items)
        total_validation = self.validate_total(reconciled, total)

        item_corrections = sum(1 for item in reconciled if item.was_auto_corrected)
        corrections = CorrectionRecord(
            line_item_corrections=item_corrections,
            total_corrected=total_validation.was_auto_corrected,
            total_corrections=item_corrections + (1 if total_validation.was_auto_corrected else 0)
        )

        result = TransactionValidation(
            items=reconciled,
            total=total_validation.calculated_total,
            original_total=total_validation.original_total,
            total_was_corrected=total_validation.was_auto_corrected,
            corrections=corrections,
            is_fully_valid=all(item.is_valid for item in reconciled) and total_validation.is_valid,
            validation_summary=self.generate_validation_summary(reconciled, total_validation)
        )

        logger.debug(
            f"Validated transaction: {len(reconciled)} items, "
            f"{corrections.total_corrections} correction(s)"
        )
        return result

    def generate_validation_summary(
        self,
        items: List[ReconciledLineItem],
        total_validation: TotalValidation
    ) -> str:
        messages = []

        corrected = sum(1 for item in items if item.was_auto_corrected)
        if corrected > 0:
            messages.append(f"{corrected} line item(s) corrected")

        if total_validation.was_auto_corrected:
            messages.append("Total amount corrected")

        if not messages:
            return self.SUMMARY_ALL_CORRECT

        return ', '.join(messages)

    def reconcile(self, parsed: ParsedInvoice) -> ReconciledInvoice:
        """
        Reconcile a parsed invoice.

        Header fields are carried over. When no subtotal was extracted it
        is derived as corrected total minus tax.

        Args:
            parsed: Parser output

        Returns:
            ReconciledInvoice ready for review
        """
        validation = self.validate_transaction(parsed.items, parsed.total)
        tax = parse_amount(parsed.tax)
        subtotal = parse_amount(parsed.subtotal) or round2(validation.total - tax)

        reconciled = ReconciledInvoice(
            party_name=parsed.party_name,
            date=parsed.date,
            items=validation.items,
            subtotal=subtotal,
            tax=tax,
            tax_percent=parse_amount(parsed.tax_percent),
            total=validation.total,
            original_total=validation.original_total,
            total_was_corrected=validation.total_was_corrected,
            corrections=validation.corrections,
            is_fully_valid=validation.is_fully_valid,
            validation_summary=validation.validation_summary,
            raw_text=parsed.raw_text,
            confidence=parsed.confidence
        )

        logger.info(f"Reconciled invoice: {reconciled.validation_summary}")
        return reconciled

    def validate_bill_cash_split(
        self,
        bill_amount: Any,
        cash_amount: Any,
        total: Any
    ) -> BillCashSplitValidation:
        """
        Check that the billed and cash-collected parts of a sale add up.

        Example:
            >>> TransactionReconciler().validate_bill_cash_split(300, 150, 500).difference
            50.0
        """
        total = parse_amount(total)
        split_sum = round2(parse_amount(bill_amount) + parse_amount(cash_amount))
        difference = abs(split_sum - total)
        is_valid = self._within_tolerance(difference)

        return BillCashSplitValidation(
            is_valid=is_valid,
            sum=split_sum,
            total=total,
            difference=round2(difference),
            was_auto_corrected=not is_valid
        )

    # =========================================================================
    # CALCULATOR HELPERS
    # =========================================================================

    @staticmethod
    def parse_amount(value: Any) -> float:
        """Permissive amount parsing; see ledger_ocr.utils.money.parse_amount."""
        return parse_amount(value)

    @staticmethod
    def round2(value: float) -> float:
        return round2(value)

    def calculate_subtotal(self, items: Iterable[ItemInput]) -> float:
        """Sum of corrected amounts, falling back to claimed line amounts."""
        total = 0.0
        for item in items or []:
            item = self._as_line_item(item)
            if isinstance(item, ReconciledLineItem):
                total += item.corrected_amount
            else:
                total += item.line_amount
        return round2(total)

    @staticmethod
    def calculate_tax(subtotal: Any, tax_rate: Any) -> float:
        return round2(parse_amount(subtotal) * parse_amount(tax_rate) / 100)

    @staticmethod
    def calculate_discount(subtotal: Any, discount: Any, discount_type: str = 'amount') -> float:
        """
        Discount as an absolute amount.

        Args:
            subtotal: Amount the discount applies to
            discount: Discount value
            discount_type: 'amount' or 'percentage'
        """
        if discount_type == 'percentage':
            return round2(parse_amount(subtotal) * parse_amount(discount) / 100)
        return round2(parse_amount(discount))

    @staticmethod
    def calculate_grand_total(subtotal: Any, tax: Any = 0, discount: Any = 0) -> float:
        return round2(parse_amount(subtotal) + parse_amount(tax) - parse_amount(discount))

    @staticmethod
    def is_valid_number(value: Any) -> bool:
        """True when the value parses to a non-negative amount."""
        return parse_amount(value) >= 0

    @staticmethod
    def difference_percentage(original: Any, corrected: Any) -> float:
        """Percentage change from original to corrected; 0 when original is 0."""
        original = parse_amount(original)
        if original == 0:
            return 0
        return round2((parse_amount(corrected) - original) / original * 100)
