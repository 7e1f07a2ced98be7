"""
Invoice Parser Package.

Heuristic extraction of party, date, line items, tax and total from
recognized OCR text.
"""

from .invoice_parser import InvoiceParser
from .noise import filter_noise, is_noise, is_item_noise
from .strategies import ItemStrategy, build_strategies, select_strategy
from .fields import (
    TaxInfo,
    extract_party_name,
    extract_date,
    normalize_date,
    extract_tax_info,
    extract_total,
)

__all__ = [
    'InvoiceParser',
    'filter_noise',
    'is_noise',
    'is_item_noise',
    'ItemStrategy',
    'build_strategies',
    'select_strategy',
    'TaxInfo',
    'extract_party_name',
    'extract_date',
    'normalize_date',
    'extract_tax_info',
    'extract_total',
]
