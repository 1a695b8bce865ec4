# tests/test_amount_words.py
"""
Tests for amount_words.py: Indian-English amount in words for invoices.
"""

import random
from decimal import Decimal

import pytest

from app.domain.services.amount_words import (
    InvalidAmount,
    amount_to_words,
    convert_below_thousand,
    round_to_paise,
    to_amount,
)


# ---------------------------------------------------------------------------
# Indian grouping
# ---------------------------------------------------------------------------

class TestIndianGrouping:
    """Crore / lakh / thousand / hundreds decomposition."""

    def test_contract_value(self):
        assert amount_to_words(17835660) == (
            "Rupees One Crore Seventy Eight Lakh Thirty Five Thousand Six Hundred Sixty Only"
        )

    def test_one_lakh(self):
        assert amount_to_words(100000) == "Rupees One Lakh Only"

    def test_one_crore(self):
        assert amount_to_words(10000000) == "Rupees One Crore Only"

    def test_eleven_lakh(self):
        assert amount_to_words(1100000) == "Rupees Eleven Lakh Only"

    def test_largest_two_digit_crore(self):
        assert amount_to_words(999999999) == (
            "Rupees Ninety Nine Crore Ninety Nine Lakh Ninety Nine Thousand "
            "Nine Hundred Ninety Nine Only"
        )

    def test_hundred_crore(self):
        assert amount_to_words(1000000000) == "Rupees One Hundred Crore Only"

    def test_crore_count_uses_lakh_grouping(self):
        # 1,50,000 crore
        assert amount_to_words(1500000000000) == "Rupees One Lakh Fifty Thousand Crore Only"

    def test_small_numbers(self):
        assert amount_to_words(15) == "Rupees Fifteen Only"
        assert amount_to_words(101) == "Rupees One Hundred One Only"
        assert amount_to_words(1010) == "Rupees One Thousand Ten Only"
        assert amount_to_words(90) == "Rupees Ninety Only"

    @pytest.mark.parametrize("n", range(1, 100))
    def test_below_hundred_has_no_magnitude_words(self, n):
        words = amount_to_words(n)
        assert words.startswith("Rupees ")
        assert words.endswith(" Only")
        for magnitude in ("Hundred", "Thousand", "Lakh", "Crore"):
            assert magnitude not in words


# ---------------------------------------------------------------------------
# Paise and rounding
# ---------------------------------------------------------------------------

class TestPaise:
    """Fractional amounts are rounded half-up to the paise."""

    def test_rupees_and_paise(self):
        assert amount_to_words(Decimal("1234.50")) == (
            "Rupees One Thousand Two Hundred Thirty Four and Fifty Paise Only"
        )

    def test_zero(self):
        assert amount_to_words(0) == "Zero Rupees Only"

    def test_paise_only(self):
        assert amount_to_words("0.50") == "Fifty Paise Only"

    def test_half_paise_rounds_up(self):
        assert amount_to_words(1234.505) == (
            "Rupees One Thousand Two Hundred Thirty Four and Fifty One Paise Only"
        )

    def test_below_half_paise_rounds_down(self):
        assert amount_to_words("1234.504").endswith("and Fifty Paise Only")

    def test_rounds_to_zero(self):
        assert amount_to_words("0.004") == "Zero Rupees Only"

    def test_rounds_into_next_rupee(self):
        assert amount_to_words("0.999") == "Rupees One Only"

    def test_round_to_paise(self):
        assert round_to_paise("10.005") == Decimal("10.01")
        assert round_to_paise(7) == Decimal("7.00")

    def test_sub_paise_noise_is_ignored(self):
        rng = random.Random(20250331)
        for _ in range(500):
            exact = Decimal(rng.randint(1, 10**9)) / 100
            noise = Decimal(rng.randint(-1000, 1000)) / Decimal(10**6)
            assert amount_to_words(str(exact + noise)) == amount_to_words(str(exact))


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

class TestInvalidAmounts:
    """Anything that is not a finite, non-negative number is rejected."""

    @pytest.mark.parametrize("value", [-1, "-0.01", Decimal("-5")])
    def test_negative(self, value):
        with pytest.raises(InvalidAmount):
            amount_to_words(value)

    @pytest.mark.parametrize("value", ["abc", "", "1,00,000", None, True, [100]])
    def test_non_numeric(self, value):
        with pytest.raises(InvalidAmount):
            amount_to_words(value)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), "Infinity"])
    def test_non_finite(self, value):
        with pytest.raises(InvalidAmount):
            amount_to_words(value)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            to_amount("twelve")

    def test_numeric_string_accepted(self):
        assert to_amount(" 250.75 ") == Decimal("250.75")


# ---------------------------------------------------------------------------
# convert_below_thousand
# ---------------------------------------------------------------------------

class TestConvertBelowThousand:

    def test_zero_is_empty(self):
        assert convert_below_thousand(0) == ""

    def test_teens(self):
        assert convert_below_thousand(13) == "Thirteen"

    def test_max(self):
        assert convert_below_thousand(999) == "Nine Hundred Ninety Nine"

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            convert_below_thousand(1000)
        with pytest.raises(ValueError):
            convert_below_thousand(-1)
