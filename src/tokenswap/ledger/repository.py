"""Repositories for token ledger and capability operations."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tokenswap.errors import (
    ArithmeticOverflowError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    MintNotPermittedError,
    UnknownTokenError,
)
from tokenswap.ledger.models import (
    CapabilityGrant,
    SettlementMode,
    Token,
    TokenAllowance,
    TokenBalance,
)
from tokenswap.swap.access import minter_capability
from tokenswap.swap.fee_math import UINT256_MAX, validate_amount
from tokenswap.swap.interfaces import CapabilityStore, TokenLedger


class TokenRepository:
    """Registry of the tokens the ledger knows about."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, symbol: str) -> Optional[Token]:
        """Get a token by symbol."""
        stmt = select(Token).where(Token.symbol == symbol.upper())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def require(self, symbol: str) -> Token:
        """Get a token by symbol. Raises UnknownTokenError if missing."""
        token = await self.get(symbol)
        if token is None:
            raise UnknownTokenError(symbol.upper())
        return token

    async def list_all(self) -> list[Token]:
        """Get all registered tokens."""
        stmt = select(Token).order_by(Token.symbol)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def register(
        self,
        symbol: str,
        name: str,
        settlement: SettlementMode = SettlementMode.CUSTODY,
    ) -> Token:
        """Register a token, or return the existing one with its settlement updated."""
        token = await self.get(symbol)
        if token is None:
            token = Token(
                symbol=symbol.upper(), name=name, settlement=settlement.value, total_supply=0
            )
            self.session.add(token)
        else:
            token.settlement = settlement.value
        await self.session.flush()
        return token


class CapabilityRepository(CapabilityStore):
    """Capability membership: which accounts hold which capability."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get(self, account: str, capability: str) -> Optional[CapabilityGrant]:
        stmt = select(CapabilityGrant).where(
            CapabilityGrant.account == account,
            CapabilityGrant.capability == capability.upper(),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def has(self, account: str, capability: str) -> bool:
        """Check whether ``account`` holds ``capability``."""
        return await self._get(account, capability) is not None

    async def grant(self, account: str, capability: str) -> CapabilityGrant:
        """Grant a capability. Granting twice is a no-op."""
        grant = await self._get(account, capability)
        if grant is None:
            grant = CapabilityGrant(account=account, capability=capability.upper())
            self.session.add(grant)
            await self.session.flush()
        return grant

    async def revoke(self, account: str, capability: str) -> bool:
        """Revoke a capability. Returns False if it was not held."""
        grant = await self._get(account, capability)
        if grant is None:
            return False
        await self.session.delete(grant)
        await self.session.flush()
        return True

    async def members(self, capability: str) -> list[str]:
        """Get all accounts holding a capability."""
        stmt = (
            select(CapabilityGrant.account)
            .where(CapabilityGrant.capability == capability.upper())
            .order_by(CapabilityGrant.account)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class TokenLedgerRepository(TokenLedger):
    """Balances and allowances of a single token.

    ``operator`` is the account acting on behalf of the swap engine: it holds
    custodied funds and, for mint/burn tokens, the minter capability.
    ``debit`` and ``credit`` pick the movement from the token's settlement
    mode.
    """

    def __init__(self, session: AsyncSession, symbol: str, operator: str):
        self.session = session
        self.symbol = symbol.upper()
        self.operator = operator
        self._token: Optional[Token] = None

    async def token(self) -> Token:
        if self._token is None:
            self._token = await TokenRepository(self.session).require(self.symbol)
        return self._token

    # Balances

    async def _get_balance(self, account: str) -> Optional[TokenBalance]:
        stmt = select(TokenBalance).where(
            TokenBalance.token == self.symbol, TokenBalance.account == account
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def _get_or_create_balance(self, account: str) -> TokenBalance:
        balance = await self._get_balance(account)
        if balance is None:
            balance = TokenBalance(token=self.symbol, account=account, amount=0)
            self.session.add(balance)
            await self.session.flush()
        return balance

    async def balance_of(self, account: str) -> int:
        """Get the balance of ``account``, zero if it never held the token."""
        await self.token()
        balance = await self._get_balance(account)
        return balance.amount if balance else 0

    async def total_supply(self) -> int:
        token = await self.token()
        return token.total_supply

    async def _increase(self, account: str, amount: int) -> TokenBalance:
        balance = await self._get_or_create_balance(account)
        if balance.amount + amount > UINT256_MAX:
            raise ArithmeticOverflowError(f"Balance of {account} in {self.symbol} would overflow")
        balance.amount = balance.amount + amount
        return balance

    async def _decrease(self, account: str, amount: int) -> TokenBalance:
        balance = await self._get_or_create_balance(account)
        if balance.amount < amount:
            raise InsufficientBalanceError(self.symbol, account, balance.amount, amount)
        balance.amount = balance.amount - amount
        return balance

    # Allowances

    async def _get_allowance(self, owner: str, spender: str) -> Optional[TokenAllowance]:
        stmt = select(TokenAllowance).where(
            TokenAllowance.token == self.symbol,
            TokenAllowance.owner == owner,
            TokenAllowance.spender == spender,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def allowance(self, owner: str, spender: str) -> int:
        """Get how much ``spender`` may still move out of ``owner``'s balance."""
        await self.token()
        allowance = await self._get_allowance(owner, spender)
        return allowance.amount if allowance else 0

    async def approve(self, owner: str, spender: str, amount: int) -> TokenAllowance:
        """Set (not add to) the allowance of ``spender`` over ``owner``."""
        validate_amount(amount)
        await self.token()

        allowance = await self._get_allowance(owner, spender)
        if allowance is None:
            allowance = TokenAllowance(token=self.symbol, owner=owner, spender=spender, amount=amount)
            self.session.add(allowance)
        else:
            allowance.amount = amount
        await self.session.flush()
        return allowance

    async def _spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        allowance = await self._get_allowance(owner, spender)
        available = allowance.amount if allowance else 0
        if available < amount:
            raise InsufficientAllowanceError(self.symbol, owner, spender, available, amount)
        if allowance is not None:
            allowance.amount = available - amount

    # Movements

    async def transfer(self, sender: str, recipient: str, amount: int) -> None:
        """Move ``amount`` from ``sender`` to ``recipient``."""
        validate_amount(amount)
        await self.token()

        await self._decrease(sender, amount)
        await self._increase(recipient, amount)
        await self.session.flush()

    async def transfer_from(self, spender: str, owner: str, recipient: str, amount: int) -> None:
        """Move ``amount`` out of ``owner`` using ``spender``'s allowance."""
        validate_amount(amount)
        await self.token()

        await self._spend_allowance(owner, spender, amount)
        await self._decrease(owner, amount)
        await self._increase(recipient, amount)
        await self.session.flush()

    async def mint(self, minter: str, account: str, amount: int) -> None:
        """Create ``amount`` new tokens for ``account``.

        Raises MintNotPermittedError unless ``minter`` holds MINTER:<symbol>.
        """
        validate_amount(amount)
        token = await self.token()

        if not await CapabilityRepository(self.session).has(minter, minter_capability(self.symbol)):
            raise MintNotPermittedError(self.symbol, minter)

        if token.total_supply + amount > UINT256_MAX:
            raise ArithmeticOverflowError(f"Total supply of {self.symbol} would overflow")

        await self._increase(account, amount)
        token.total_supply = token.total_supply + amount
        await self.session.flush()

    async def burn_from(self, spender: str, owner: str, amount: int) -> None:
        """Destroy ``amount`` of ``owner``'s tokens using ``spender``'s allowance."""
        validate_amount(amount)
        token = await self.token()

        await self._spend_allowance(owner, spender, amount)
        await self._decrease(owner, amount)
        token.total_supply = token.total_supply - amount
        await self.session.flush()

    # Swap engine interface

    async def debit(self, account: str, amount: int) -> None:
        """Take ``amount`` from ``account`` on behalf of the operator."""
        token = await self.token()
        if token.settlement == SettlementMode.MINT_BURN:
            await self.burn_from(self.operator, account, amount)
        else:
            await self.transfer_from(self.operator, account, self.operator, amount)

    async def credit(self, account: str, amount: int) -> None:
        """Give ``amount`` to ``account`` from the operator."""
        token = await self.token()
        if token.settlement == SettlementMode.MINT_BURN:
            await self.mint(self.operator, account, amount)
        else:
            await self.transfer(self.operator, account, amount)
