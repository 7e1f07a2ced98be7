"""Tests for the transaction reconciler."""

import pytest

from ledger_ocr.models import LineItem, ParsedInvoice, ReconciledLineItem


class TestValidateLineItem:
    """Tests for per-line arithmetic checks."""

    def test_correct_line(self, reconciler):
        result = reconciler.validate_line_item(LineItem("Rice", 10, 50, 500))

        assert result.is_valid
        assert result.calculated_amount == 500
        assert result.difference == 0
        assert not result.was_auto_corrected

    def test_typo_corrected(self, reconciler):
        result = reconciler.validate_line_item(LineItem("Rice", 10, 50, 550))

        assert not result.is_valid
        assert result.calculated_amount == 500
        assert result.original_amount == 550
        assert result.difference == 50
        assert result.was_auto_corrected

    @pytest.mark.parametrize("item,valid", [
        (LineItem("Pen", 1, 10, 10.01), True),
        (LineItem("Pen", 1, 10, 10.011), False),
        (LineItem("Clip", 3, 0.1, 0.31), True),
    ])
    def test_tolerance_is_inclusive(self, reconciler, item, valid):
        assert reconciler.validate_line_item(item).is_valid is valid

    def test_dict_input(self, reconciler):
        result = reconciler.validate_line_item(
            {"name": "Rice", "quantity": "10", "rate": "50", "lineAmount": "550"}
        )

        assert result.calculated_amount == 500
        assert result.was_auto_corrected

    def test_fractional_string_quantity_not_rounded(self, reconciler):
        item = LineItem("Saffron", "0.125", "800", "100")
        result = reconciler.validate_line_item(item)

        assert item.quantity == 0.125
        assert result.calculated_amount == 100
        assert result.is_valid


class TestValidateTransaction:
    """Tests for full transaction validation."""

    def test_typo_scenario(self, reconciler):
        result = reconciler.validate_transaction([LineItem("Rice", 10, 50, 550)], 550)

        assert result.total == 500
        assert result.original_total == 550
        assert result.total_was_corrected
        assert result.corrections.line_item_corrections == 1
        assert result.corrections.total_corrected
        assert result.corrections.total_corrections == 2
        assert not result.is_fully_valid
        assert result.validation_summary == "1 line item(s) corrected, Total amount corrected"

    def test_only_item_wrong(self, reconciler):
        result = reconciler.validate_transaction([LineItem("Rice", 10, 50, 550)], 500)

        assert not result.total_was_corrected
        assert result.validation_summary == "1 line item(s) corrected"

    def test_only_total_wrong(self, reconciler):
        result = reconciler.validate_transaction([LineItem("Rice", 10, 50, 500)], 600)

        assert result.total == 500
        assert result.corrections.total_corrections == 1
        assert result.validation_summary == "Total amount corrected"

    def test_all_correct(self, reconciler):
        result = reconciler.validate_transaction(
            [LineItem("Rice", 10, 50, 500), LineItem("Dal", 2, 100, 200)], "₹ 700"
        )

        assert result.is_fully_valid
        assert result.validation_summary == "All calculations are correct"

    def test_empty_transaction(self, reconciler):
        result = reconciler.validate_transaction([], 0)

        assert result.items == []
        assert result.total == 0
        assert result.validation_summary == "All calculations are correct"

    def test_reconciling_twice_is_stable(self, reconciler):
        first = reconciler.validate_transaction([LineItem("Rice", 10, 50, 550)], 550)
        second = reconciler.validate_transaction(
            [item.to_line_item() for item in first.items], first.total
        )

        assert second.total == first.total
        assert second.corrections.total_corrections == 0
        assert second.is_fully_valid

    def test_input_not_modified(self, reconciler):
        item = LineItem("Rice", 10, 50, 550)
        reconciler.validate_transaction([item], 550)

        assert item.line_amount == 550
        assert not isinstance(item, ReconciledLineItem)


class TestReconcile:
    """Tests for reconciling a parsed invoice."""

    def test_header_fields_carried(self, reconciler):
        parsed = ParsedInvoice(
            party_name="ABC Traders",
            date="2024-03-15",
            items=[LineItem("Rice", 10, 50, 550)],
            total=550,
            raw_text="raw",
            confidence=90
        )
        reconciled = reconciler.reconcile(parsed)

        assert reconciled.party_name == "ABC Traders"
        assert reconciled.date == "2024-03-15"
        assert reconciled.total == 500
        assert reconciled.items[0].corrected_amount == 500
        assert reconciled.items[0].line_amount == 550
        assert reconciled.raw_text == "raw"
        assert reconciled.confidence == 90

    def test_subtotal_derived_from_total_and_tax(self, reconciler):
        parsed = ParsedInvoice(items=[LineItem("Rice", 10, 50, 500)], tax=90, total=590)

        assert reconciler.reconcile(parsed).subtotal == 410

    def test_extracted_subtotal_kept(self, reconciler):
        parsed = ParsedInvoice(items=[LineItem("Rice", 10, 50, 500)], subtotal=500, total=500)

        assert reconciler.reconcile(parsed).subtotal == 500


class TestBillCashSplit:
    """Tests for bill/cash split validation."""

    def test_mismatch(self, reconciler):
        result = reconciler.validate_bill_cash_split(300, 150, 500)

        assert not result.is_valid
        assert result.sum == 450.0
        assert result.difference == 50.0
        assert result.was_auto_corrected

    def test_match(self, reconciler):
        assert reconciler.validate_bill_cash_split("300", "200", 500).is_valid


class TestCalculatorHelpers:
    """Tests for the calculator helpers."""

    def test_subtotal_prefers_corrected_amounts(self, reconciler):
        items = reconciler.validate_line_items([LineItem("Rice", 10, 50, 550)])

        assert reconciler.calculate_subtotal(items) == 500
        assert reconciler.calculate_subtotal([LineItem("Rice", 10, 50, 550)]) == 550

    def test_tax_discount_and_grand_total(self, reconciler):
        assert reconciler.calculate_tax(1000, 18) == 180
        assert reconciler.calculate_discount(200, 10, 'percentage') == 20
        assert reconciler.calculate_discount(200, 15) == 15
        assert reconciler.calculate_grand_total(1000, 180, 50) == 1130

    def test_number_checks(self, reconciler):
        assert reconciler.is_valid_number("12.5")
        assert not reconciler.is_valid_number("-5")
        assert reconciler.difference_percentage(200, 250) == 25.0
        assert reconciler.difference_percentage(0, 250) == 0
