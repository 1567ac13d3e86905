"""Data models — all frozen (immutable)."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Union

from .errors import InvalidAmountError
from .units import from_base_units

if TYPE_CHECKING:
    from .messages.types import Message


@dataclass(frozen=True)
class Account:
    """Account exposed by the wallet extension."""

    address: str
    pubkey: bytes = b""
    algo: str = "secp256k1"


@dataclass(frozen=True)
class Coin:
    """Amount of a single denomination, in base units."""

    denom: str
    amount: str

    def __post_init__(self) -> None:
        amount = self.amount
        if not isinstance(amount, str) or not (amount.isascii() and amount.isdigit()):
            raise InvalidAmountError(self.amount, "base units must be a non-negative integer string")

    def to_dict(self) -> dict[str, str]:
        return {"denom": self.denom, "amount": self.amount}


@dataclass(frozen=True)
class Fee:
    amount: tuple[Coin, ...]
    gas_limit: int

    def __post_init__(self) -> None:
        if self.gas_limit <= 0:
            raise ValueError(f"Gas limit must be positive, got {self.gas_limit}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "amount": [coin.to_dict() for coin in self.amount],
            "gas": str(self.gas_limit),
        }


@dataclass(frozen=True)
class TransactionRequest:
    messages: tuple[Message, ...]
    fee: Fee
    memo: str = ""

    def __post_init__(self) -> None:
        if not self.messages:
            raise ValueError("A transaction requires at least one message")
        if self.fee is None:
            raise ValueError("A transaction requires a fee")


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a broadcast. ``code == 0`` means the chain executed it."""

    code: int
    transaction_hash: str
    raw_log: str = ""
    height: int = 0
    gas_wanted: int = 0
    gas_used: int = 0

    @property
    def is_success(self) -> bool:
        return self.code == 0


@dataclass(frozen=True)
class BalanceSnapshot:
    """Balance of the configured base denom at a point in time."""

    address: str
    denom: str
    amount: str
    as_of: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    stale: bool = False

    def display_amount(self, decimal_places: int) -> str:
        return from_base_units(self.amount, decimal_places)


# ---------------------------------------------------------------------------
# Session state variants
# ---------------------------------------------------------------------------


class SessionStatus(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


@dataclass(frozen=True)
class Disconnected:
    status = SessionStatus.DISCONNECTED


@dataclass(frozen=True)
class Connecting:
    status = SessionStatus.CONNECTING


@dataclass(frozen=True)
class Connected:
    account: Account
    signing_handle: Any

    status = SessionStatus.CONNECTED


@dataclass(frozen=True)
class Error:
    reason: Exception

    status = SessionStatus.ERROR


SessionState = Union[Disconnected, Connecting, Connected, Error]
