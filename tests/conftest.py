"""Shared fixtures for the ledger OCR tests."""

from datetime import date

import pytest

from ledger_ocr.parser import InvoiceParser
from ledger_ocr.reconciler import TransactionReconciler

TODAY = date(2026, 10, 19)


@pytest.fixture
def clock():
    """Fixed clock so date fallbacks are deterministic."""
    return lambda: TODAY


@pytest.fixture
def parser(clock):
    return InvoiceParser(clock=clock)


@pytest.fixture
def reconciler():
    return TransactionReconciler()


@pytest.fixture
def abc_traders_lines():
    """A clean single-item invoice."""
    return ["ABC Traders", "15/03/2024", "Rice 10 50 500", "Total 500"]
