"""Tests for the review editor."""

import pytest

from ledger_ocr.models import LineItem, ParsedInvoice
from ledger_ocr.review import (
    AddItem,
    InvoiceEditor,
    InvoiceFieldChange,
    ItemFieldChange,
    RemoveItem,
)


@pytest.fixture
def editor(reconciler):
    return InvoiceEditor(reconciler)


@pytest.fixture
def state(reconciler):
    """Reconciled two-item invoice totalling 700."""
    parsed = ParsedInvoice(
        party_name="ABC Traders",
        date="2024-03-15",
        items=[LineItem("Rice", 10, 50, 500), LineItem("Dal", 2, 100, 200)],
        total=700
    )
    return reconciler.reconcile(parsed)


class TestItemEdits:
    """Tests for line item changes."""

    def test_quantity_recomputes_amounts(self, editor, state):
        edited = editor.apply_edit(state, ItemFieldChange(0, 'quantity', 12))

        assert edited.items[0].line_amount == 600
        assert edited.total == 800
        assert edited.subtotal == 800
        assert edited.is_fully_valid

    def test_original_state_unchanged(self, editor, state):
        editor.apply_edit(state, ItemFieldChange(0, 'quantity', 12))

        assert state.items[0].quantity == 10
        assert state.total == 700

    def test_line_amount_edit_is_reconciled(self, editor, state):
        edited = editor.apply_edit(state, ItemFieldChange(1, 'line_amount', 250))

        assert edited.items[1].line_amount == 250
        assert edited.items[1].corrected_amount == 200
        assert edited.total == 700
        assert edited.validation_summary == "1 line item(s) corrected, Total amount corrected"

    def test_rename(self, editor, state):
        edited = editor.apply_edit(state, ItemFieldChange(1, 'name', '  Toor Dal '))
        assert edited.items[1].name == "Toor Dal"

    def test_add_item(self, editor, state):
        edited = editor.apply_edit(state, AddItem("Sugar", 2, 45))

        assert len(edited.items) == 3
        assert edited.items[2].line_amount == 90
        assert edited.total == 790

    def test_fractional_quantity_keeps_full_precision(self, editor, state):
        edited = editor.apply_edit(state, ItemFieldChange(0, 'quantity', "0.125"))

        assert edited.items[0].quantity == 0.125
        assert edited.items[0].line_amount == 6.25
        assert edited.total == 206.25

    def test_add_item_with_fractional_quantity(self, editor, state):
        edited = editor.apply_edit(state, AddItem("Saffron", "0.125", "800"))

        assert edited.items[2].quantity == 0.125
        assert edited.items[2].line_amount == 100
        assert edited.total == 800

    def test_remove_item(self, editor, state):
        edited = editor.apply_edit(state, RemoveItem(0))

        assert [item.name for item in edited.items] == ["Dal"]
        assert edited.total == 200

    @pytest.mark.parametrize("change", [
        ItemFieldChange(5, 'quantity', 1),
        ItemFieldChange(0, 'colour', 'red'),
        RemoveItem(-1),
        InvoiceFieldChange('total', 1000),
    ])
    def test_invalid_change_returns_same_state(self, editor, state, change):
        assert editor.apply_edit(state, change) is state


class TestInvoiceEdits:
    """Tests for header field changes."""

    def test_tax_percent_recomputes_tax(self, editor, state):
        edited = editor.apply_edit(state, InvoiceFieldChange('tax_percent', 18))

        assert edited.tax_percent == 18
        assert edited.tax == 126.0

    def test_party_name(self, editor, state):
        edited = editor.apply_edit(state, InvoiceFieldChange('party_name', 'Metro Mart'))

        assert edited.party_name == "Metro Mart"
        assert edited.items == state.items


class TestConfirm:
    """Tests for confirming a reviewed invoice."""

    def test_blank_items_dropped(self, editor, state):
        edited = editor.apply_edit(state, AddItem())
        confirmed = editor.confirm(edited)

        assert [item.name for item in confirmed.items] == ["Rice", "Dal"]
        assert confirmed.total == 700

    def test_corrected_amounts_committed(self, editor, reconciler):
        state = reconciler.reconcile(
            ParsedInvoice(items=[LineItem("Rice", 10, 50, 550)], total=550)
        )
        confirmed = editor.confirm(state)

        assert confirmed.items == [LineItem("Rice", 10, 50, 500)]
        assert confirmed.total == 500
        assert confirmed.original_total == 550
        assert confirmed.corrections.total_corrections == 2

    def test_to_dict_carries_ocr_data(self, editor, state):
        data = editor.confirm(state).to_dict()

        assert data['party_name'] == "ABC Traders"
        assert set(data['ocr_data']) == {'raw_text', 'confidence'}
