"""
Output Handler Module for the Ledger OCR Engine.

This module provides functionality for:
    - JSON export of reconciled invoices
    - Excel workbook generation (summary and line items)

Author: ML Engineering Team
"""

from .handler import OutputHandler
from .excel_exporter import ExcelExporter

__all__ = ['OutputHandler', 'ExcelExporter']
