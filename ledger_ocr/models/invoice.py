"""
Invoice Data Classes.

This module defines the structures that flow through the engine:

    LineItem -> ParsedInvoice (parser output)
    ReconciledLineItem, CorrectionRecord -> ReconciledInvoice (reconciler output)

Money fields are ingested through parse_amount and quantities through
parse_number (no rounding to cents), so values coming from OCR text or
form input ("₹ 1,234.50", "", None) never raise.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ledger_ocr.utils.money import parse_amount, parse_number, round2


@dataclass
class LineItem:
    """
    One invoice row.

    Attributes:
        name: Item description
        quantity: Number of units
        rate: Unit price
        line_amount: Claimed extended amount (expected quantity * rate)

    Example:
        >>> LineItem("Rice", "10", "50", "500").line_amount
        500.0
    """
    name: str = ''
    quantity: float = 0
    rate: float = 0
    line_amount: float = 0

    def __post_init__(self):
        self.name = '' if self.name is None else str(self.name).strip()
        self.quantity = parse_number(self.quantity)
        self.rate = parse_amount(self.rate)
        self.line_amount = parse_amount(self.line_amount)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'quantity': self.quantity,
            'rate': self.rate,
            'line_amount': self.line_amount
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LineItem':
        """Accepts snake_case keys as well as the UI's camelCase lineAmount."""
        return cls(
            name=data.get('name', ''),
            quantity=data.get('quantity', 0),
            rate=data.get('rate', 0),
            line_amount=data.get('line_amount', data.get('lineAmount', 0))
        )


@dataclass
class ReconciledLineItem(LineItem):
    """
    A line item after reconciliation.

    corrected_amount is always round2(quantity * rate); original_amount
    keeps the claimed line_amount for the audit trail.
    """
    corrected_amount: float = 0
    original_amount: float = 0
    was_auto_corrected: bool = False
    is_valid: bool = True

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            'corrected_amount': self.corrected_amount,
            'original_amount': self.original_amount,
            'was_auto_corrected': self.was_auto_corrected,
            'is_valid': self.is_valid
        })
        return data

    def to_line_item(self, use_corrected: bool = True) -> LineItem:
        """Drop the audit fields, optionally committing the corrected amount."""
        amount = self.corrected_amount if use_corrected else self.line_amount
        return LineItem(self.name, self.quantity, self.rate, amount)


@dataclass
class ParsedInvoice:
    """
    Best-effort structure extracted from OCR text.

    Absent fields keep their zero value. A zero total together with no
    items means extraction failed, not a genuine zero-value invoice.
    """
    party_name: str = ''
    date: str = ''
    items: List[LineItem] = field(default_factory=list)
    subtotal: float = 0
    tax: float = 0
    tax_percent: float = 0
    total: float = 0
    raw_text: str = ''
    confidence: float = 0

    @property
    def is_empty(self) -> bool:
        """True when neither items nor a total were found."""
        return not self.items and not self.total

    @property
    def items_total(self) -> float:
        return round2(sum(item.line_amount for item in self.items))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'party_name': self.party_name,
            'date': self.date,
            'items': [item.to_dict() for item in self.items],
            'subtotal': self.subtotal,
            'tax': self.tax,
            'tax_percent': self.tax_percent,
            'total': self.total,
            'raw_text': self.raw_text,
            'confidence': self.confidence
        }

    def __repr__(self) -> str:
        return (
            f"ParsedInvoice(party={self.party_name!r}, date={self.date!r}, "
            f"items={len(self.items)}, total={self.total})"
        )


@dataclass
class CorrectionRecord:
    """Counts of auto-corrected fields in one reconciliation pass."""
    line_item_corrections: int = 0
    total_corrected: bool = False
    total_corrections: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'line_item_corrections': self.line_item_corrections,
            'total_corrected': self.total_corrected,
            'total_corrections': self.total_corrections
        }


@dataclass
class ReconciledInvoice:
    """
    Verified, corrected invoice ready for human review.

    Attributes:
        items: Reconciled line items with per-item audit flags
        total: Calculated total (sum of corrected line amounts)
        original_total: Total as claimed before reconciliation
        total_was_corrected: Whether the claimed total was replaced
        corrections: Correction counts
        is_fully_valid: All items and the total were within tolerance
        validation_summary: Human-readable summary of corrections
    """
    party_name: str = ''
    date: str = ''
    items: List[ReconciledLineItem] = field(default_factory=list)
    subtotal: float = 0
    tax: float = 0
    tax_percent: float = 0
    total: float = 0
    original_total: float = 0
    total_was_corrected: bool = False
    corrections: CorrectionRecord = field(default_factory=CorrectionRecord)
    is_fully_valid: bool = True
    validation_summary: str = ''
    raw_text: str = ''
    confidence: float = 0
    notes: str = ''

    @property
    def corrected_item_count(self) -> int:
        return sum(1 for item in self.items if item.was_auto_corrected)

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
            'is_fully_valid': self.is_fully_valid,
            'validation_summary': self.validation_summary,
            'raw_text': self.raw_text,
            'confidence': self.confidence,
            'notes': self.notes
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def __repr__(self) -> str:
        return (
            f"ReconciledInvoice(party={self.party_name!r}, items={len(self.items)}, "
            f"total={self.total}, valid={self.is_fully_valid})"
        )
