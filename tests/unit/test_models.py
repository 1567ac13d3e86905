"""Unit tests for data models."""
from __future__ import annotations

import pytest

from nmx_wallet.config import ChainConfig
from nmx_wallet.errors import InvalidAmountError
from nmx_wallet.messages import bank
from nmx_wallet.models import (
    Account,
    BalanceSnapshot,
    Coin,
    Connected,
    Connecting,
    Disconnected,
    Error,
    Fee,
    SessionStatus,
    TransactionRequest,
    TransactionResult,
)


class TestCoin:
    def test_to_dict(self) -> None:
        assert Coin("unmx", "5000").to_dict() == {"denom": "unmx", "amount": "5000"}

    @pytest.mark.parametrize("bad", ["1.5", "-1", "", "abc", "\u00b2", "\u0661\u0662"])
    def test_rejects_non_integer_amount(self, bad: str) -> None:
        with pytest.raises(InvalidAmountError):
            Coin("unmx", bad)

    def test_frozen(self) -> None:
        c = Coin("unmx", "1")
        with pytest.raises(AttributeError):
            c.amount = "2"  # type: ignore[misc]


class TestFee:
    def test_to_dict(self) -> None:
        fee = Fee(amount=(Coin("unmx", "5000"),), gas_limit=200000)
        assert fee.to_dict() == {
            "amount": [{"denom": "unmx", "amount": "5000"}],
            "gas": "200000",
        }

    def test_gas_limit_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            Fee(amount=(), gas_limit=0)


class TestTransactionRequest:
    def test_requires_messages(self) -> None:
        fee = Fee(amount=(Coin("unmx", "5000"),), gas_limit=200000)
        with pytest.raises(ValueError, match="at least one message"):
            TransactionRequest(messages=(), fee=fee)

    def test_requires_fee(self) -> None:
        msg = bank.send(ChainConfig(), "nmx1alice", "nmx1bob", 1)
        with pytest.raises(ValueError, match="fee"):
            TransactionRequest(messages=(msg,), fee=None)  # type: ignore[arg-type]


class TestTransactionResult:
    def test_success(self) -> None:
        assert TransactionResult(code=0, transaction_hash="AA").is_success

    def test_failure(self) -> None:
        result = TransactionResult(code=5, transaction_hash="AA", raw_log="insufficient funds")
        assert not result.is_success


class TestBalanceSnapshot:
    def test_display_amount(self) -> None:
        snap = BalanceSnapshot(address="nmx1alice", denom="unmx", amount="1500000")
        assert snap.display_amount(6) == "1.5"
        assert not snap.stale
        assert snap.as_of.tzinfo is not None


class TestSessionStates:
    def test_status_per_variant(self, account: Account) -> None:
        assert Disconnected().status is SessionStatus.DISCONNECTED
        assert Connecting().status is SessionStatus.CONNECTING
        assert Connected(account=account, signing_handle=object()).status is SessionStatus.CONNECTED
        assert Error(reason=RuntimeError("x")).status is SessionStatus.ERROR

    def test_only_connected_carries_account(self, account: Account) -> None:
        assert not hasattr(Disconnected(), "account")
        assert not hasattr(Error(reason=RuntimeError("x")), "account")
        assert Connected(account=account, signing_handle=None).account == account
