"""Tests for currency rounding and amount parsing."""

import math

import pytest

from ledger_ocr.utils.money import find_amounts, parse_amount, parse_number, round2


class TestRound2:
    """Tests for round2."""

    def test_rounds_to_cents(self):
        assert round2(1.234) == 1.23
        assert round2(1.236) == 1.24

    def test_half_rounds_away_from_zero(self):
        assert round2(0.125) == 0.13
        assert round2(-0.125) == -0.13

    def test_tiny_values_round_to_zero(self):
        assert round2(0.004) == 0.0
        assert round2(-0.001) == 0.0

    @pytest.mark.parametrize("value", [0, 1.234, -5.678, 2.5, 123.455, 1000000.555, 0.1 + 0.2])
    def test_idempotent(self, value):
        once = round2(value)
        assert round2(once) == once

    def test_non_finite_unchanged(self):
        assert math.isinf(round2(float('inf')))


class TestParseAmount:
    """Tests for parse_amount."""

    def test_rupee_symbol_and_thousands(self):
        assert parse_amount("₹ 1,234.50") == 1234.50

    def test_garbage_is_zero(self):
        assert parse_amount("garbage") == 0

    def test_numbers_returned_as_is(self):
        assert parse_amount(42) == 42
        assert parse_amount(12.345) == 12.345

    def test_none_and_empty(self):
        assert parse_amount(None) == 0
        assert parse_amount("") == 0

    def test_currency_codes(self):
        assert parse_amount("Rs. 500") == 500
        assert parse_amount("Rs500") == 500
        assert parse_amount("INR 1,000") == 1000
        assert parse_amount("$ 99.90") == 99.9

    def test_negative_and_trailing_text(self):
        assert parse_amount("-45.5") == -45.5
        assert parse_amount("12abc") == 12

    def test_nan_is_zero(self):
        assert parse_amount(float('nan')) == 0


class TestParseNumber:
    """Tests for parse_number."""

    def test_no_rounding_to_cents(self):
        assert parse_number("0.125") == 0.125
        assert parse_number("Rs. 1,250.555") == 1250.555

    def test_amount_rounds_where_number_does_not(self):
        assert parse_amount("0.125") == 0.13
        assert parse_number("0.125") == 0.125

    def test_garbage_none_and_nan_are_zero(self):
        assert parse_number("garbage") == 0
        assert parse_number(None) == 0
        assert parse_number(float('nan')) == 0


class TestFindAmounts:
    """Tests for find_amounts."""

    def test_all_numbers_on_line(self):
        assert find_amounts("Total: Rs 1,180 (incl. 18% tax Rs 180)") == [1180.0, 18.0, 180.0]

    def test_no_numbers(self):
        assert find_amounts("Thank you") == []
        assert find_amounts(None) == []
