"""Token ledger and capability contracts."""

from pydantic import BaseModel, Field


class TokenInfo(BaseModel):
    """A registered token."""

    symbol: str
    name: str
    settlement: str = Field(..., description="custody or mint_burn")
    total_supply: int


class BalanceResponse(BaseModel):
    """Balance of one account in one token."""

    token: str
    account: str
    balance: int


class AllowanceResponse(BaseModel):
    """Remaining allowance of a spender over an owner."""

    token: str
    owner: str
    spender: str
    allowance: int


class ApproveRequest(BaseModel):
    """Set the allowance of ``spender`` over the calling account."""

    spender: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)


class MintRequest(BaseModel):
    """Mint new tokens to ``account``. Caller must hold MINTER:<symbol>."""

    account: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)


class CapabilityRequest(BaseModel):
    """Grant or revoke a capability."""

    account: str = Field(..., min_length=1)
    capability: str = Field(..., min_length=1)


class CapabilityMembers(BaseModel):
    """Accounts holding a capability."""

    capability: str
    accounts: list[str]


class CapabilityChange(BaseModel):
    """Outcome of a grant or revoke."""

    success: bool
    account: str
    capability: str
    message: str
