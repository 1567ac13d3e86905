"""Shared test fixtures and fake external collaborators."""
from __future__ import annotations

import asyncio
import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from nmx_wallet.balance import BalanceSynchronizer
from nmx_wallet.config import ChainConfig
from nmx_wallet.models import Account, TransactionResult
from nmx_wallet.session import WalletSession
from nmx_wallet.storage import MemoryStore


# ---------------------------------------------------------------------------
# Fake wallet extension
# ---------------------------------------------------------------------------


class FakeSigner:
    """Offline signer that counts calls and can be held open with a gate."""

    def __init__(self, accounts: list[Account]) -> None:
        self.accounts = list(accounts)
        self.get_accounts_calls = 0
        self.sign_calls: list[tuple[str, Any]] = []
        self.gate: asyncio.Event | None = None
        self.reject = False

    async def get_accounts(self) -> list[Account]:
        self.get_accounts_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        return list(self.accounts)

    async def sign_direct(self, signer_address: str, sign_doc: Any) -> Any:
        if self.reject:
            raise RuntimeError("Request rejected")
        self.sign_calls.append((signer_address, sign_doc))
        return {"sign_doc": sign_doc, "signature": "c2ln"}


class FakeWallet:
    """Keplr-like extension that only knows the chains it was told about."""

    def __init__(self, signer: FakeSigner, known_chains: tuple[str, ...] = ()) -> None:
        self.signer = signer
        self.known = set(known_chains)
        self.enable_calls: list[str] = []
        self.suggested: list[dict[str, Any]] = []
        self.listeners: list[Any] = []
        self.reject_suggest = False

    async def enable(self, chain_id: str) -> None:
        self.enable_calls.append(chain_id)
        if chain_id not in self.known:
            raise RuntimeError(f"There is no chain info for {chain_id}")

    async def experimental_suggest_chain(self, chain_info: dict[str, Any]) -> None:
        if self.reject_suggest:
            raise RuntimeError("User rejected the request")
        self.suggested.append(chain_info)
        self.known.add(chain_info["chainId"])

    def get_offline_signer(self, chain_id: str) -> FakeSigner:
        return self.signer

    def add_account_change_listener(self, listener: Any) -> None:
        self.listeners.append(listener)

    def remove_account_change_listener(self, listener: Any) -> None:
        self.listeners.remove(listener)

    def switch_account(self, account: Account) -> None:
        self.signer.accounts = [account]
        for listener in list(self.listeners):
            listener()


class FakeAdapter:
    """Chain adapter that passes sign docs through as plain dicts."""

    def make_sign_doc(self, **kwargs: Any) -> dict[str, Any]:
        return dict(kwargs)

    def encode_tx(self, signed: Any) -> bytes:
        return b"signed-tx"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def chain_config() -> ChainConfig:
    return ChainConfig(
        chain_id="nomercychain-testnet-1",
        chain_name="NoMercyChain Testnet",
        display_denom="NMX",
        base_denom="unmx",
        decimal_places=6,
        rpc_endpoint="https://rpc.example.com",
        rest_endpoint="https://rest.example.com",
        gas_price="0.025unmx",
        request_timeout=5,
    )


@pytest.fixture()
def account() -> Account:
    return Account(address="nmx1alice", pubkey=b"\x02" * 33)


@pytest.fixture()
def other_account() -> Account:
    return Account(address="nmx1bob", pubkey=b"\x03" * 33)


@pytest.fixture()
def signer(account: Account) -> FakeSigner:
    return FakeSigner([account])


@pytest.fixture()
def wallet(signer: FakeSigner) -> FakeWallet:
    return FakeWallet(signer)


@pytest.fixture()
def adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture()
def query() -> AsyncMock:
    mock = AsyncMock()
    mock.get_balances.return_value = [
        {"denom": "uatom", "amount": "42"},
        {"denom": "unmx", "amount": "1500000"},
    ]
    mock.get_account.return_value = {"account_number": "7", "sequence": "3"}
    return mock


@pytest.fixture()
def success_result() -> TransactionResult:
    return TransactionResult(
        code=0, transaction_hash="ABCDEF", raw_log="[]", height=120
    )


@pytest.fixture()
def broadcaster(success_result: TransactionResult) -> AsyncMock:
    mock = AsyncMock()
    mock.broadcast_tx.return_value = success_result
    return mock


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def make_session(chain_config, wallet, adapter, query, broadcaster, store):
    """Factory so tests can override the wallet or poll interval."""

    def _make(wallet_override: Any = ..., poll_interval: float = 3600.0) -> WalletSession:
        return WalletSession(
            chain_config,
            wallet if wallet_override is ... else wallet_override,
            adapter,
            query=query,
            broadcaster=broadcaster,
            balances=BalanceSynchronizer(query, chain_config, poll_interval=poll_interval),
            store=store,
        )

    return _make


@pytest.fixture()
def session(make_session) -> WalletSession:
    return make_session()


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    chain:
      chain_id: nomercychain-devnet-2
      rpc_endpoint: "https://rpc.example.com"
      rest_endpoint: "https://rest.example.com"
      decimal_places: 6
      gas_price: 0.05unmx
    fee:
      amount: 7500
      gas_limit: 250000
    balance:
      poll_interval_seconds: 10
    storage:
      path: /tmp/nmx-session.json
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


@pytest.fixture(autouse=True)
def _clean_chain_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "NMX_CHAIN_ID",
        "NMX_CHAIN_NAME",
        "NMX_DENOM_NAME",
        "NMX_DENOM",
        "NMX_DECIMAL_PLACES",
        "NMX_RPC_ENDPOINT",
        "NMX_API_URL",
        "NMX_GAS_PRICE",
        "NMX_BECH32_PREFIX",
        "NMX_KEPLR_CHAIN_INFO",
    ):
        monkeypatch.delenv(var, raising=False)
