"""
Invoice Review Editor.

Human review of a reconciled invoice is modelled as a pure reducer:

    apply_edit(state, change) -> new state

Every change returns a new ReconciledInvoice with dependent fields
recomputed (line amount from quantity * rate, subtotal and total from the
line amounts, tax from the tax percentage) and reconciliation re-run.
The parser is never re-run; each edit is linear in the number of items.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Union

from ledger_ocr.models.invoice import (
    CorrectionRecord,
    LineItem,
    ReconciledInvoice,
    ReconciledLineItem,
)
from ledger_ocr.reconciler import TransactionReconciler
from ledger_ocr.utils.logger import get_logger
from ledger_ocr.utils.money import parse_amount, parse_number, round2

logger = get_logger(__name__)

ITEM_FIELDS = ('name', 'quantity', 'rate', 'line_amount')
INVOICE_FIELDS = ('party_name', 'date', 'tax', 'tax_percent', 'notes')


@dataclass(frozen=True)
class ItemFieldChange:
    """Set one field of the line item at ``index``."""
    index: int
    field: str
    value: Any


@dataclass(frozen=True)
class AddItem:
    """Append a new line item."""
    name: str = ''
    quantity: Any = 1
    rate: Any = 0


@dataclass(frozen=True)
class RemoveItem:
    """Remove the line item at ``index``."""
    index: int


@dataclass(frozen=True)
class InvoiceFieldChange:
    """Set one header field of the invoice."""
    field: str
    value: Any


Change = Union[ItemFieldChange, AddItem, RemoveItem, InvoiceFieldChange]


@dataclass
class ConfirmedInvoice:
    """
    A reviewed invoice, ready to be handed over to the ledger.

    Items carry their final (reconciled) amounts and have non-blank names.
    """
    party_name: str = ''
    date: str = ''
    items: List[LineItem] = field(default_factory=list)
    subtotal: float = 0
    tax: float = 0
    tax_percent: float = 0
    total: float = 0
    original_total: float = 0
    total_was_corrected: bool = False
    corrections: CorrectionRecord = field(default_factory=CorrectionRecord)
    validation_summary: str = ''
    notes: str = ''
    raw_text: str = ''
    confidence: float = 0

    @property
    def ocr_data(self) -> Dict[str, Any]:
        return {'raw_text': self.raw_text, 'confidence': self.confidence}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'party_name': self.party_name,
            'date': self.date,
            'items': [item.to_dict() for item in self.items],
            'subtotal': self.subtotal,
            'tax': self.tax,
            'tax_percent': self.tax_percent,
            'total': self.total,
            'original_total': self.original_total,
            'total_was_corrected': self.total_was_corrected,
            'corrections': self.corrections.to_dict(),
            'validation_summary': self.validation_summary,
            'notes': self.notes,
            'ocr_data': self.ocr_data
        }


class InvoiceEditor:
    """
    Pure reducer over ReconciledInvoice review states.

    The editor never mutates the state it is given. Changes that refer to
    a missing item or an unknown field return the state unchanged.

    Example:
        >>> editor = InvoiceEditor()
        >>> state = editor.apply_edit(state, ItemFieldChange(0, 'quantity', 12))
        >>> state.items[0].line_amount
        600.0
    """

    def __init__(self, reconciler: Optional[TransactionReconciler] = None) -> None:
        self.reconciler = reconciler or TransactionReconciler()

    @staticmethod
    def _working_items(state: ReconciledInvoice) -> List[LineItem]:
        items = []
        for item in state.items:
            if isinstance(item, ReconciledLineItem):
                items.append(item.to_line_item(use_corrected=True))
            else:
                items.append(LineItem(item.name, item.quantity, item.rate, item.line_amount))
        return items

    def apply_edit(self, state: ReconciledInvoice, change: Change) -> ReconciledInvoice:
        """
        Apply one change and return the recomputed state.

        Args:
            state: Current review state
            change: ItemFieldChange, AddItem, RemoveItem or InvoiceFieldChange

        Returns:
            New ReconciledInvoice, or ``state`` itself if the change was invalid
        """
        items = self._working_items(state)
        header = {
            'party_name': state.party_name,
            'date': state.date,
            'tax': state.tax,
            'tax_percent': state.tax_percent,
            'notes': state.notes
        }

        if isinstance(change, ItemFieldChange):
            if not 0 <= change.index < len(items) or change.field not in ITEM_FIELDS:
                logger.warning(f"Ignoring invalid item edit: {change}")
                return state

            item = items[change.index]
            if change.field == 'name':
                item.name = '' if change.value is None else str(change.value).strip()
            elif change.field == 'line_amount':
                item.line_amount = parse_amount(change.value)
            else:
                if change.field == 'quantity':
                    item.quantity = parse_number(change.value)
                else:
                    item.rate = parse_amount(change.value)
                item.line_amount = round2(item.quantity * item.rate)

        elif isinstance(change, AddItem):
            quantity = parse_number(change.quantity)
            rate = parse_amount(change.rate)
            items.append(LineItem(change.name, quantity, rate, round2(quantity * rate)))

        elif isinstance(change, RemoveItem):
            if not 0 <= change.index < len(items):
                logger.warning(f"Ignoring removal of missing item: {change}")
                return state
            del items[change.index]

        elif isinstance(change, InvoiceFieldChange):
            if change.field not in INVOICE_FIELDS:
                logger.warning(f"Ignoring edit of unknown invoice field: {change}")
                return state

            if change.field in ('tax', 'tax_percent'):
                header[change.field] = parse_amount(change.value)
            else:
                header[change.field] = '' if change.value is None else str(change.value).strip()

        else:
            logger.warning(f"Ignoring unsupported change: {change!r}")
            return state

        return self._recompute(state, items, header)

    def _recompute(
        self,
        state: ReconciledInvoice,
        items: List[LineItem],
        header: Dict[str, Any]
    ) -> ReconciledInvoice:
        claimed_total = round2(sum(item.line_amount for item in items))
        validation = self.reconciler.validate_transaction(items, claimed_total)

        subtotal = validation.total
        tax = header['tax']
        if header['tax_percent'] > 0:
            tax = self.reconciler.calculate_tax(subtotal, header['tax_percent'])

        return replace(
            state,
            party_name=header['party_name'],
            date=header['date'],
            notes=header['notes'],
            items=validation.items,
            subtotal=subtotal,
            tax=tax,
            tax_percent=header['tax_percent'],
            total=validation.total,
            original_total=validation.original_total,
            total_was_corrected=validation.total_was_corrected,
            corrections=validation.corrections,
            is_fully_valid=validation.is_fully_valid,
            validation_summary=validation.validation_summary
        )

    def confirm(self, state: ReconciledInvoice) -> ConfirmedInvoice:
        """
        Finish review.

        Items with a blank name are dropped and the remaining items are
        reconciled one final time.

        Returns:
            ConfirmedInvoice with committed amounts
        """
        items = [item for item in self._working_items(state) if item.name]

        dropped = len(state.items) - len(items)
        if dropped:
            logger.info(f"Dropped {dropped} item(s) with a blank name on confirmation")

        header = {
            'party_name': state.party_name,
            'date': state.date,
            'tax': state.tax,
            'tax_percent': state.tax_percent,
            'notes': state.notes
        }
        final = self._recompute(state, items, header)

        return ConfirmedInvoice(
            party_name=final.party_name,
            date=final.date,
            items=[item.to_line_item(use_corrected=True) for item in final.items],
            subtotal=final.subtotal,
            tax=final.tax,
            tax_percent=final.tax_percent,
            total=final.total,
            original_total=state.original_total,
            total_was_corrected=state.total_was_corrected,
            corrections=state.corrections,
            validation_summary=state.validation_summary,
            notes=final.notes,
            raw_text=state.raw_text,
            confidence=state.confidence
        )
