"""Tests for fee and conversion arithmetic."""

import pytest

from tokenswap.errors import (
    ArithmeticOverflowError,
    InvalidAmountError,
    InvalidPercentageError,
    InvalidRateError,
)
from tokenswap.swap import fee_math
from tokenswap.swap.fee_math import PCT_SCALE, UINT256_MAX

TEN_PERCENT = 10 * 10**8


class TestApplyFee:
    """Tests for apply_fee and fee_for."""

    def test_scale_is_one_hundred_percent(self):
        assert PCT_SCALE == 100 * 10**8

    def test_zero_fee_keeps_amount(self):
        assert fee_math.apply_fee(300, 0) == 300

    def test_full_fee_keeps_nothing(self):
        assert fee_math.apply_fee(300, PCT_SCALE) == 0

    def test_ten_percent(self):
        assert fee_math.fee_for(300, TEN_PERCENT) == 30
        assert fee_math.apply_fee(300, TEN_PERCENT) == 270

    def test_fee_rounds_down(self):
        """10% of 15 is 1.5, the fee is 1 and the caller keeps 14."""
        assert fee_math.fee_for(15, TEN_PERCENT) == 1
        assert fee_math.apply_fee(15, TEN_PERCENT) == 14

    def test_tiny_fee_on_tiny_amount_is_zero(self):
        assert fee_math.fee_for(9, 1) == 0

    def test_fee_on_max_amount_does_not_overflow(self):
        """The intermediate product is wider than 256 bits."""
        assert fee_math.apply_fee(UINT256_MAX, PCT_SCALE) == 0
        assert fee_math.fee_for(UINT256_MAX, TEN_PERCENT) == UINT256_MAX * TEN_PERCENT // PCT_SCALE

    def test_rejects_percentage_above_scale(self):
        with pytest.raises(InvalidPercentageError):
            fee_math.apply_fee(100, PCT_SCALE + 1)

    def test_rejects_negative_percentage(self):
        with pytest.raises(InvalidPercentageError):
            fee_math.apply_fee(100, -1)


class TestConversion:
    """Tests for rate conversion."""

    def test_a_to_b_divides(self):
        assert fee_math.convert_a_to_b(300, 3) == 100

    def test_a_to_b_truncates_remainder(self):
        assert fee_math.convert_a_to_b(301, 3) == 100
        assert fee_math.convert_a_to_b(2, 3) == 0

    def test_b_to_a_multiplies(self):
        assert fee_math.convert_b_to_a(100, 3) == 300

    def test_b_to_a_overflow(self):
        with pytest.raises(ArithmeticOverflowError):
            fee_math.convert_b_to_a(UINT256_MAX // 2 + 1, 2)

    def test_b_to_a_at_limit(self):
        assert fee_math.convert_b_to_a(UINT256_MAX // 3, 3) == (UINT256_MAX // 3) * 3

    def test_zero_rate_rejected(self):
        with pytest.raises(InvalidRateError):
            fee_math.convert_a_to_b(100, 0)

    def test_negative_rate_rejected(self):
        with pytest.raises(InvalidRateError):
            fee_math.convert_b_to_a(100, -3)


class TestValidateAmount:
    """Tests for amount validation."""

    def test_negative_amount(self):
        with pytest.raises(InvalidAmountError):
            fee_math.validate_amount(-1)

    def test_float_amount(self):
        with pytest.raises(InvalidAmountError):
            fee_math.validate_amount(1.5)

    def test_bool_amount(self):
        with pytest.raises(InvalidAmountError):
            fee_math.validate_amount(True)

    def test_amount_above_256_bits(self):
        with pytest.raises(ArithmeticOverflowError):
            fee_math.validate_amount(UINT256_MAX + 1)

    def test_zero_is_a_valid_amount(self):
        assert fee_math.validate_amount(0) == 0


@pytest.mark.parametrize("fee_percent", [0, 1, TEN_PERCENT, 333_333_333, 90 * 10**8, PCT_SCALE])
@pytest.mark.parametrize("amount", [1, 7, 300, 10**18 + 1, 300 * 10**18])
@pytest.mark.parametrize("rate", [1, 3, 7])
def test_conversion_matches_floor_formula(amount, fee_percent, rate):
    """net = amount - floor(amount * fee / scale), then floor divide or multiply by rate."""
    net = amount - amount * fee_percent // PCT_SCALE

    assert fee_math.convert_a_to_b(fee_math.apply_fee(amount, fee_percent), rate) == net // rate
    assert fee_math.convert_b_to_a(fee_math.apply_fee(amount, fee_percent), rate) == net * rate
