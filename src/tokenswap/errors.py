"""Error taxonomy shared by the swap engine and the token ledgers.

Every failure a caller can branch on has its own class and a stable ``code``
string, which the API layer returns verbatim.
"""

from typing import Optional


class SwapError(Exception):
    """Base class for all swap and ledger failures."""

    code = "swap_error"


class InvalidAmountError(SwapError):
    """Raised for a zero, negative or non-integer amount."""

    code = "invalid_amount"


class InvalidPercentageError(SwapError):
    """Raised when a fee percentage falls outside [0, PCT_SCALE]."""

    code = "invalid_percentage"

    def __init__(self, name: str, value: int, scale: int):
        self.name = name
        self.value = value
        self.scale = scale
        super().__init__(
            f"{name} must be between 0 and {scale} (100%), got {value}"
        )


class InvalidRateError(SwapError):
    """Raised when the exchange rate is not a positive integer."""

    code = "invalid_rate"


class UnauthorizedError(SwapError):
    """Raised when the caller lacks a required capability."""

    code = "unauthorized"

    def __init__(self, account: str, capability: str):
        self.account = account
        self.capability = capability
        super().__init__(f"Account {account} is missing capability {capability}")


class InsufficientBalanceError(SwapError):
    """Raised by a ledger when an account cannot cover a debit."""

    code = "insufficient_balance"

    def __init__(self, token: str, account: str, available: int, required: int):
        self.token = token
        self.account = account
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient balance: {account} has {available} {token}, need {required}"
        )


class InsufficientAllowanceError(SwapError):
    """Raised by a ledger when a spender's allowance cannot cover a debit."""

    code = "insufficient_allowance"

    def __init__(self, token: str, owner: str, spender: str, available: int, required: int):
        self.token = token
        self.owner = owner
        self.spender = spender
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient allowance: {owner} approved {available} {token} "
            f"to {spender}, need {required}"
        )


class ArithmeticOverflowError(SwapError):
    """Raised when a computation leaves the representable integer range."""

    code = "arithmetic_overflow"


class MintNotPermittedError(SwapError):
    """Raised when the crediting ledger refuses to mint."""

    code = "mint_not_permitted"

    def __init__(self, token: str, minter: str):
        self.token = token
        self.minter = minter
        super().__init__(f"Account {minter} is not allowed to mint {token}")


class UnknownTokenError(SwapError):
    """Raised when a token symbol is not registered in the ledger."""

    code = "unknown_token"

    def __init__(self, symbol: str, detail: Optional[str] = None):
        self.symbol = symbol
        super().__init__(detail or f"Token {symbol} is not registered")
