"""Tests for ledger hand-off payloads."""

import pytest

from ledger_ocr.models import LineItem
from ledger_ocr.review import ConfirmedInvoice, build_purchase_handoff, build_sale_handoff


@pytest.fixture
def confirmed():
    return ConfirmedInvoice(
        party_name="ABC Traders",
        date="2024-03-15",
        items=[LineItem("Rice", 10, 50, 500), LineItem("Dal", 2, 100, 200)],
        subtotal=700,
        total=700,
        original_total=700
    )


class TestPurchaseHandoff:
    """Tests for build_purchase_handoff."""

    def test_stock_in_per_item(self, confirmed):
        handoff = build_purchase_handoff(confirmed, party_id="V-7", reference="P-1")

        assert handoff.kind == 'purchase'
        assert [m.movement_type for m in handoff.stock_movements] == ['IN', 'IN']
        assert handoff.stock_movements[0].reference == "Purchase P-1"
        assert handoff.stock_movements[1].quantity == 2
        assert handoff.stock_movements[0].date == "2024-03-15"

    def test_vendor_balance(self, confirmed):
        handoff = build_purchase_handoff(confirmed, party_id="V-7", reference="P-1")

        assert handoff.party_id == "V-7"
        assert handoff.balance_delta == 700
        assert handoff.record['vendor_name'] == "ABC Traders"
        assert handoff.message == "Purchase created successfully"

    def test_to_dict(self, confirmed):
        data = build_purchase_handoff(confirmed).to_dict()

        assert data['stock_movements'][0]['type'] == 'IN'
        assert data['record']['total'] == 700


class TestSaleHandoff:
    """Tests for build_sale_handoff."""

    def test_whole_total_billed_by_default(self, confirmed):
        handoff = build_sale_handoff(confirmed, party_id="C-3", reference="S-9")

        assert handoff.record['bill_amount'] == 700
        assert handoff.record['cash_amount'] == 0
        assert not handoff.record['split_was_corrected']
        assert handoff.balance_delta == 700
        assert handoff.stock_movements[0].movement_type == 'OUT'
        assert handoff.stock_movements[0].reference == "Sale S-9"

    def test_valid_split_kept(self, confirmed):
        handoff = build_sale_handoff(confirmed, "C-3", "S-9", bill_amount=500, cash_amount=200)

        assert handoff.record['bill_amount'] == 500
        assert handoff.record['cash_amount'] == 200
        assert handoff.balance_delta == 500

    def test_invalid_split_rescaled(self, confirmed):
        handoff = build_sale_handoff(confirmed, "C-3", "S-9", bill_amount=300, cash_amount=150)

        assert handoff.record['bill_amount'] == 466.67
        assert handoff.record['cash_amount'] == 233.33
        assert handoff.record['split_was_corrected']

    def test_message_mentions_corrections(self, confirmed):
        confirmed.corrections.total_corrections = 2

        assert build_sale_handoff(confirmed).message == "Sale created successfully with corrections"
