"""
Ledger Hand-off Payloads.

After confirmation, the surrounding ledger application records the
transaction, posts one stock movement per line item and updates the
party's balance. This module builds those payloads as plain data; it
performs no I/O.

    Purchase: stock IN per item, vendor balance +total (payable)
    Sale:     stock OUT per item, customer balance +bill amount (receivable)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ledger_ocr.reconciler import TransactionReconciler
from ledger_ocr.utils.logger import get_logger
from ledger_ocr.utils.money import parse_amount, round2
from .editor import ConfirmedInvoice

logger = get_logger(__name__)

STOCK_IN = 'IN'
STOCK_OUT = 'OUT'


@dataclass
class StockMovement:
    """One stock movement for a confirmed line item."""
    item_name: str
    movement_type: str
    quantity: float
    reference: str
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'item_name': self.item_name,
            'type': self.movement_type,
            'quantity': self.quantity,
            'reference': self.reference,
            'date': self.date
        }


@dataclass
class LedgerHandoff:
    """
    Everything the ledger needs to post a confirmed invoice.

    Attributes:
        kind: 'purchase' or 'sale'
        record: Transaction record to store
        stock_movements: One movement per line item
        party_id: Party whose balance changes
        balance_delta: Amount added to the party's payable/receivable balance
        message: Short status message for the user
    """
    kind: str
    record: Dict[str, Any]
    stock_movements: List[StockMovement] = field(default_factory=list)
    party_id: Optional[str] = None
    balance_delta: float = 0
    message: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'record': self.record,
            'stock_movements': [movement.to_dict() for movement in self.stock_movements],
            'party_id': self.party_id,
            'balance_delta': self.balance_delta,
            'message': self.message
        }


def _base_record(confirmed: ConfirmedInvoice) -> Dict[str, Any]:
    return {
        'date': confirmed.date,
        'items': [item.to_dict() for item in confirmed.items],
        'subtotal': confirmed.subtotal,
        'tax': confirmed.tax,
        'tax_percent': confirmed.tax_percent,
        'total': confirmed.total,
        'original_total': confirmed.original_total,
        'total_was_corrected': confirmed.total_was_corrected,
        'corrections': confirmed.corrections.to_dict(),
        'ocr_data': confirmed.ocr_data,
        'notes': confirmed.notes
    }


def _movements(confirmed: ConfirmedInvoice, movement_type: str, reference: str) -> List[StockMovement]:
    return [
        StockMovement(
            item_name=item.name,
            movement_type=movement_type,
            quantity=item.quantity,
            reference=reference,
            date=confirmed.date
        )
        for item in confirmed.items
    ]


def _status_message(kind: str, confirmed: ConfirmedInvoice) -> str:
    suffix = ' with corrections' if confirmed.corrections.total_corrections > 0 else ''
    return f"{kind.capitalize()} created successfully{suffix}"


def build_purchase_handoff(
    confirmed: ConfirmedInvoice,
    party_id: Optional[str] = None,
    reference: str = ''
) -> LedgerHandoff:
    """
    Build the hand-off for a vendor purchase.

    Args:
        confirmed: Confirmed invoice
        party_id: Vendor identifier
        reference: Purchase identifier used in stock movement references

    Returns:
        LedgerHandoff with one IN movement per item
    """
    record = _base_record(confirmed)
    record.update({'vendor_id': party_id, 'vendor_name': confirmed.party_name})

    handoff = LedgerHandoff(
        kind='purchase',
        record=record,
        stock_movements=_movements(confirmed, STOCK_IN, f"Purchase {reference}".strip()),
        party_id=party_id,
        balance_delta=confirmed.total,
        message=_status_message('purchase', confirmed)
    )
    logger.info(f"Built purchase hand-off: {len(handoff.stock_movements)} movement(s), total {confirmed.total}")
    return handoff


def build_sale_handoff(
    confirmed: ConfirmedInvoice,
    party_id: Optional[str] = None,
    reference: str = '',
    bill_amount: Any = 0,
    cash_amount: Any = 0,
    reconciler: Optional[TransactionReconciler] = None
) -> LedgerHandoff:
    """
    Build the hand-off for a customer sale.

    The total is split between the billed part (added to the customer's
    receivable) and the cash collected. With no split given the whole
    total is billed. A split that does not add up to the total is scaled
    proportionally onto it.

    Args:
        confirmed: Confirmed invoice
        party_id: Customer identifier
        reference: Sale identifier used in stock movement references
        bill_amount: Amount billed to the customer's account
        cash_amount: Amount collected in cash
        reconciler: Reconciler used to validate the split

    Returns:
        LedgerHandoff with one OUT movement per item
    """
    reconciler = reconciler or TransactionReconciler()
    bill = parse_amount(bill_amount)
    cash = parse_amount(cash_amount)
    if not bill and not cash:
        bill = confirmed.total

    split = reconciler.validate_bill_cash_split(bill, cash, confirmed.total)
    if split.was_auto_corrected and bill + cash > 0:
        ratio = bill / (bill + cash)
        bill = round2(confirmed.total * ratio)
        cash = round2(confirmed.total * (1 - ratio))
        logger.info(f"Bill/cash split corrected to {bill} + {cash}")

    record = _base_record(confirmed)
    record.update({
        'customer_id': party_id,
        'customer_name': confirmed.party_name,
        'bill_amount': bill,
        'cash_amount': cash,
        'split_was_corrected': split.was_auto_corrected
    })

    handoff = LedgerHandoff(
        kind='sale',
        record=record,
        stock_movements=_movements(confirmed, STOCK_OUT, f"Sale {reference}".strip()),
        party_id=party_id,
        balance_delta=bill,
        message=_status_message('sale', confirmed)
    )
    logger.info(f"Built sale hand-off: {len(handoff.stock_movements)} movement(s), billed {bill}")
    return handoff
