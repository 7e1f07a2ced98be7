"""
Validation Result Data Classes.

Structured outcomes of the reconciler checks. Each result carries the
calculated value, the original (claimed) value, the absolute difference
and whether the calculated value replaced the claimed one.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ledger_ocr.models.invoice import CorrectionRecord, ReconciledLineItem


@dataclass
class LineItemValidation:
    """Outcome of checking quantity * rate against a claimed line amount."""
    is_valid: bool
    calculated_amount: float
    original_amount: float
    difference: float
    was_auto_corrected: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'calculated_amount': self.calculated_amount,
            'original_amount': self.original_amount,
            'difference': self.difference,
            'was_auto_corrected': self.was_auto_corrected
        }


@dataclass
class TotalValidation:
    """Outcome of checking the sum of line amounts against a claimed total."""
    is_valid: bool
    calculated_total: float
    original_total: float
    difference: float
    was_auto_corrected: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'calculated_total': self.calculated_total,
            'original_total': self.original_total,
            'difference': self.difference,
            'was_auto_corrected': self.was_auto_corrected
        }


@dataclass
class TransactionValidation:
    """
    Outcome of a full transaction check.

    Attributes:
        items: Reconciled line items
        total: Calculated total, always used downstream
        original_total: Claimed total
        total_was_corrected: Whether the claimed total was off
        corrections: Correction counts
        is_fully_valid: Every item and the total were within tolerance
        validation_summary: e.g. "1 line item(s) corrected, Total amount corrected"
    """
    items: List[ReconciledLineItem] = field(default_factory=list)
    total: float = 0
    original_total: float = 0
    total_was_corrected: bool = False
    corrections: CorrectionRecord = field(default_factory=CorrectionRecord)
    is_fully_valid: bool = True
    validation_summary: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': [item.to_dict() for item in self.items],
            'total': self.total,
            'original_total': self.original_total,
            'total_was_corrected': self.total_was_corrected,
            'corrections': self.corrections.to_dict(),
            'is_fully_valid': self.is_fully_valid,
            'validation_summary': self.validation_summary
        }


@dataclass
class BillCashSplitValidation:
    """Outcome of checking bill + cash against a sale total."""
    is_valid: bool
    sum: float
    total: float
    difference: float
    was_auto_corrected: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'sum': self.sum,
            'total': self.total,
            'difference': self.difference,
            'was_auto_corrected': self.was_auto_corrected
        }
