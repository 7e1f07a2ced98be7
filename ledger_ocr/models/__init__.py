"""
Data Models for the Ledger OCR Engine.

    - RecognizedText / RecognizedWord: parser input from the OCR capability
    - LineItem / ParsedInvoice: parser output
    - ReconciledLineItem / CorrectionRecord / ReconciledInvoice: reconciler output
"""

from .recognized_text import RecognizedText, RecognizedWord
from .invoice import (
    LineItem,
    ParsedInvoice,
    ReconciledLineItem,
    CorrectionRecord,
    ReconciledInvoice,
)

__all__ = [
    'RecognizedText',
    'RecognizedWord',
    'LineItem',
    'ParsedInvoice',
    'ReconciledLineItem',
    'CorrectionRecord',
    'ReconciledInvoice',
]
