"""Exception hierarchy for wallet session and transaction dispatch.

On-chain execution failures are *not* exceptions: they come back as a
:class:`~nmx_wallet.models.TransactionResult` with a non-zero ``code``.
"""
from __future__ import annotations

from typing import Any


class WalletError(Exception):
    """Base class for every error raised by ``nmx_wallet``.

    Attributes:
        message: Human-readable error message.
        details: Additional context for programmatic handling.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class WalletNotFoundError(WalletError):
    """No wallet extension is available."""

    def __init__(self, message: str = "Wallet extension not found") -> None:
        super().__init__(message)


class ChainRegistrationError(WalletError):
    """The wallet extension rejected both enable and suggest-chain."""

    def __init__(self, chain_id: str, reason: str = "") -> None:
        message = f"Failed to register chain {chain_id} with wallet extension"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, {"chain_id": chain_id})
        self.chain_id = chain_id


class NoAccountError(WalletError):
    """The wallet extension returned no accounts for the chain."""


class NotConnectedError(WalletError):
    """Operation requires a connected wallet session."""

    def __init__(self, message: str = "Wallet not connected") -> None:
        super().__init__(message)


class SessionBusyError(WalletError):
    """A session transition is already in flight and cannot accept another."""

    def __init__(self, message: str = "Wallet session is busy") -> None:
        super().__init__(message)


class InvalidAmountError(WalletError, ValueError):
    """Malformed, non-numeric or negative token amount."""

    def __init__(self, amount: Any, reason: str = "") -> None:
        message = f"Invalid amount: {amount!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, {"amount": repr(amount)})
        self.amount = amount


class InvalidMessageError(WalletError, ValueError):
    """A message builder received an empty or malformed identifier."""

    def __init__(self, field_name: str, reason: str = "must not be empty") -> None:
        super().__init__(f"{field_name} {reason}", {"field": field_name})
        self.field_name = field_name


class SigningError(WalletError):
    """The signer refused or failed to sign a transaction."""


class BroadcastError(WalletError):
    """Transport-level failure while broadcasting a transaction.

    Distinct from an on-chain execution failure, which is returned as data.
    """

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, {"endpoint": endpoint} if endpoint else None)
        self.endpoint = endpoint
        self.original_error = original_error


class QueryError(WalletError):
    """The chain query service failed or returned a non-200 response."""

    def __init__(self, message: str, url: str = "", status: int | None = None) -> None:
        super().__init__(message, {"url": url, "status": status})
        self.url = url
        self.status = status
