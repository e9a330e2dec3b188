"""Fixed-point fee and conversion arithmetic.

All amounts are integers in the smallest indivisible unit of their token.
Percentages are integers scaled so that ``PCT_SCALE`` is 100%:

    10 * 10**8   -> 10%
    PCT_SCALE    -> 100%

Divisions always floor. Whatever falls below one unit is forfeited.
"""

from tokenswap.errors import (
    ArithmeticOverflowError,
    InvalidAmountError,
    InvalidPercentageError,
    InvalidRateError,
)

PCT_SCALE = 100 * 10**8

# Amounts and rates must fit an unsigned 256-bit word.
UINT256_MAX = 2**256 - 1

# Width of the intermediate used for amount * percentage.
UINT512_MAX = 2**512 - 1


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_amount(amount: int) -> int:
    """Check an amount is an unsigned integer that fits 256 bits."""
    if not _is_int(amount) or amount < 0:
        raise InvalidAmountError(f"Amount must be a non-negative integer, got {amount!r}")
    if amount > UINT256_MAX:
        raise ArithmeticOverflowError(f"Amount {amount} exceeds 256-bit range")
    return amount


def validate_percentage(value: int, name: str = "fee_percent") -> int:
    """Check a fee percentage lies in [0, PCT_SCALE]."""
    if not _is_int(value) or value < 0 or value > PCT_SCALE:
        raise InvalidPercentageError(name, value, PCT_SCALE)
    return value


def validate_rate(rate: int) -> int:
    """Check the exchange rate is a strictly positive 256-bit integer."""
    if not _is_int(rate) or rate <= 0:
        raise InvalidRateError(f"Rate must be a positive integer, got {rate!r}")
    if rate > UINT256_MAX:
        raise ArithmeticOverflowError(f"Rate {rate} exceeds 256-bit range")
    return rate


def fee_for(amount: int, fee_percent: int) -> int:
    """Return the part of ``amount`` withheld as fee, rounded down."""
    validate_amount(amount)
    validate_percentage(fee_percent)

    product = amount * fee_percent
    if product > UINT512_MAX:
        raise ArithmeticOverflowError(
            f"Fee computation {amount} * {fee_percent} exceeds 512-bit range"
        )
    return product // PCT_SCALE


def apply_fee(amount: int, fee_percent: int) -> int:
    """Return ``amount`` minus its fee."""
    return amount - fee_for(amount, fee_percent)


def convert_a_to_b(amount: int, rate: int) -> int:
    """Convert token A units to token B units, truncating."""
    validate_amount(amount)
    validate_rate(rate)
    return amount // rate


def convert_b_to_a(amount: int, rate: int) -> int:
    """Convert token B units to token A units exactly."""
    validate_amount(amount)
    validate_rate(rate)

    converted = amount * rate
    if converted > UINT256_MAX:
        raise ArithmeticOverflowError(
            f"Conversion {amount} * {rate} exceeds 256-bit range"
        )
    return converted
