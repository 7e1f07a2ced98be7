"""
Reconciler Module.

Arithmetic verification and auto-correction of parsed transactions.
"""

from .reconciler import TransactionReconciler
from .results import (
    LineItemValidation,
    TotalValidation,
    TransactionValidation,
    BillCashSplitValidation,
)

__all__ = [
    'TransactionReconciler',
    'LineItemValidation',
    'TotalValidation',
    'TransactionValidation',
    'BillCashSplitValidation',
]
