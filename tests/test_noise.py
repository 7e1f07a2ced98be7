"""Tests for OCR noise filtering."""

import pytest

from ledger_ocr.parser.noise import filter_noise, is_item_noise, is_noise


class TestIsNoise:
    """Tests for header noise detection."""

    @pytest.mark.parametrize("line", [
        "www.abctraders.in",
        "https://abctraders.in",
        "Thank you for shopping",
        "Visit us again",
        "Page 2",
        "-----------",
        "+91 98765 43210",
        "Ph: 9876543210",
        "GSTIN: 29ABCDE1234F1Z5",
        "29ABCDE1234F1Z5",
        "ab",
    ])
    def test_noise_lines(self, line):
        assert is_noise(line)

    @pytest.mark.parametrize("line", [
        "ABC Traders",
        "Rice 10 50 500",
        "Phenyl 2 50 100",
        "Total 500",
    ])
    def test_content_lines(self, line):
        assert not is_noise(line)

    def test_filter_preserves_order(self):
        lines = ["ABC Traders", "www.abc.in", "15/03/2024", "***", "Total 500"]
        assert filter_noise(lines) == ["ABC Traders", "15/03/2024", "Total 500"]


class TestIsItemNoise:
    """Tests for item-row noise detection."""

    @pytest.mark.parametrize("line", [
        "Invoice No 123",
        "Date: 15/03/2024",
        "GSTIN 29ABCDE1234F1Z5",
        "FSSAI 12345678901234",
        "Call 9876543210",
    ])
    def test_item_noise(self, line):
        assert is_item_noise(line)

    def test_item_row_is_not_noise(self):
        assert not is_item_noise("Rice 10 50 500")
