"""Tests for line-item extraction strategies."""

import pytest

from ledger_ocr.models import LineItem
from ledger_ocr.parser.strategies import (
    build_strategies,
    candidate_lines,
    is_header_or_total_row,
    item_section,
    qty_x_rate,
    select_strategy,
    single_price,
    table_row,
)


class TestTableRow:
    """Tests for the name/qty/rate/amount strategy."""

    def test_simple_row(self):
        assert table_row("Rice 10 50 500") == LineItem("Rice", 10, 50, 500)

    def test_multi_word_name_and_thousands(self):
        item = table_row("Basmati Rice 2 1,250.00 2,500.00")

        assert item.name == "Basmati Rice"
        assert item.quantity == 2
        assert item.rate == 1250
        assert item.line_amount == 2500

    def test_zero_amount_computed(self):
        assert table_row("Rice 10 50 0").line_amount == 500

    @pytest.mark.parametrize("line", [
        "Widget 0 50 0",
        "Widget 2 0 0",
        "Phone 1 1000000 1000000",
        "Rice 10 50",
    ])
    def test_rejected_rows(self, line):
        assert table_row(line) is None

    def test_custom_rate_bound(self):
        assert table_row("Laptop 1 60000 60000", max_rate=50000) is None


class TestQtyXRate:
    """Tests for the qty x rate strategy."""

    def test_with_amount(self):
        assert qty_x_rate("Sugar 2 x 45 = 90") == LineItem("Sugar", 2, 45, 90)

    def test_missing_amount_computed(self):
        item = qty_x_rate("Oil 3 × 120")

        assert item.quantity == 3
        assert item.rate == 120
        assert item.line_amount == 360

    def test_claimed_amount_kept(self):
        assert qty_x_rate("Sugar 2 X 45 100").line_amount == 100

    def test_no_multiplier(self):
        assert qty_x_rate("Rice 10 50 500") is None


class TestSinglePrice:
    """Tests for the name/price strategy."""

    def test_name_and_price(self):
        assert single_price("Delivery charge 40") == LineItem("Delivery charge", 1, 40, 40)

    def test_currency_prefix(self):
        assert single_price("Tea Rs. 25") == LineItem("Tea", 1, 25, 25)

    @pytest.mark.parametrize("line", [
        "Total 500",
        "Discount 50",
        "Balance 20",
        "Ab 40",
        "Pen 150000",
    ])
    def test_rejected_lines(self, line):
        assert single_price(line) is None


class TestItemSection:
    """Tests for candidate line selection."""

    @pytest.fixture
    def table_lines(self):
        return [
            "ABC Traders",
            "Item Qty Rate Amount",
            "Rice 10 50 500",
            "Dal 2 100 200",
            "Subtotal 700",
            "Tax 5% 35",
        ]

    def test_header_and_total_rows(self):
        assert is_header_or_total_row("Total")
        assert is_header_or_total_row("Total 500")
        assert is_header_or_total_row("Qty Rate")
        assert not is_header_or_total_row("Basmati Rice Total Pack 2 100 200")

    def test_section_ends_after_header(self, table_lines):
        assert item_section(table_lines) == table_lines[:4]

    def test_no_header_keeps_all_lines(self):
        lines = ["Rice 10 50 500", "Total 500"]
        assert item_section(lines) == lines

    def test_candidates(self, table_lines):
        assert candidate_lines(table_lines) == ["Rice 10 50 500", "Dal 2 100 200"]


class TestSelectStrategy:
    """Tests for ordered strategy selection."""

    @pytest.fixture
    def strategies(self):
        return build_strategies()

    def test_strategy_order(self, strategies):
        assert [s.name for s in strategies] == ['table', 'qty_x_rate', 'single_price']

    def test_first_matching_strategy_wins(self, strategies):
        name, items = select_strategy(["Rice 10 50 500", "Sugar 2 x 45 = 90"], strategies)

        assert name == 'table'
        assert items == [LineItem("Rice", 10, 50, 500)]

    def test_falls_through_to_qty_x_rate(self, strategies):
        name, items = select_strategy(["Sugar 2 x 45 = 90", "Oil 3 x 120"], strategies)

        assert name == 'qty_x_rate'
        assert len(items) == 2

    def test_nothing_matches(self, strategies):
        assert select_strategy(["Hello world"], strategies) == (None, [])
