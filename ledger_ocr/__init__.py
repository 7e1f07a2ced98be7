"""
Ledger OCR - Invoice Extraction and Reconciliation Engine.

This package turns the recognized text of a scanned or photographed invoice
into a corrected, review-ready transaction for a small business ledger.

Modules:
    - ocr_engine: OCR capability boundary (image to text lines)
    - parser: Heuristic extraction of party, date, items, tax and total
    - reconciler: Arithmetic verification and auto-correction
    - review: Edit reducer, confirmation and ledger hand-off payloads
    - pipeline: Composition of the steps above
    - output_handler: JSON and Excel export

Architecture:
    Image → OCR → Parser → Reconciler → Review → Hand-off
                                 ↓
                               Export
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'models',
    'ocr_engine',
    'parser',
    'reconciler',
    'review',
    'pipeline',
    'output_handler',
    'utils'
]
