"""
Review Module.

Human review of reconciled invoices and the hand-off of confirmed
invoices to the ledger.
"""

from .editor import (
    InvoiceEditor,
    ConfirmedInvoice,
    ItemFieldChange,
    AddItem,
    RemoveItem,
    InvoiceFieldChange,
)
from .handoff import (
    LedgerHandoff,
    StockMovement,
    build_purchase_handoff,
    build_sale_handoff,
)

__all__ = [
    'InvoiceEditor',
    'ConfirmedInvoice',
    'ItemFieldChange',
    'AddItem',
    'RemoveItem',
    'InvoiceFieldChange',
    'LedgerHandoff',
    'StockMovement',
    'build_purchase_handoff',
    'build_sale_handoff',
]
