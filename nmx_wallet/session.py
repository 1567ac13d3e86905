"""Wallet session — connection lifecycle state machine.

States::

    Disconnected ──connect()──▶ Connecting ──▶ Connected
         ▲                          │              │
         │                          ▼              │ account changed
         └──────disconnect()─── Error ◀────────────┘ (via Disconnected)

Only one connect attempt exists at a time. Concurrent ``connect()`` calls
and account-change events join the attempt already in flight.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from .balance import DEFAULT_POLL_INTERVAL, BalanceSynchronizer
from .chain.rest import QueryClient
from .chain.rpc import RpcClient
from .chain.signing import SigningClient
from .config import AppConfig, ChainConfig
from .errors import (
    NoAccountError,
    NotConnectedError,
    SessionBusyError,
    WalletError,
    WalletNotFoundError,
)
from .interfaces.chain import Broadcaster, ChainAdapter
from .interfaces.storage import KeyValueStore
from .interfaces.wallet import WalletExtension
from .models import (
    Account,
    BalanceSnapshot,
    Connected,
    Connecting,
    Disconnected,
    Error,
    SessionState,
)
from .registrar import ChainRegistrar
from .storage import JsonFileStore, MemoryStore, ReconnectHint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountChanged:
    """Event: the wallet extension switched its active account."""


class WalletSession:
    """Owns the session state, the signing handle and the balance poller."""

    def __init__(
        self,
        chain: ChainConfig,
        wallet: WalletExtension | None,
        adapter: ChainAdapter,
        *,
        query: QueryClient | None = None,
        broadcaster: Broadcaster | None = None,
        balances: BalanceSynchronizer | None = None,
        store: KeyValueStore | None = None,
        registrar: ChainRegistrar | None = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._chain = chain
        self._wallet = wallet
        self._adapter = adapter
        self._query = query or QueryClient(chain)
        self._broadcaster = broadcaster or RpcClient(chain)
        self._balances = balances or BalanceSynchronizer(
            self._query, chain, poll_interval=poll_interval
        )
        self._registrar = registrar or ChainRegistrar(wallet, chain)
        self._hint = ReconnectHint(store or MemoryStore(), chain.chain_id)

        self._state: SessionState = Disconnected()
        self._connect_task: asyncio.Task[Account] | None = None
        # bumped by disconnect(); attempts from an older epoch are discarded
        self._epoch = 0

        self._events: asyncio.Queue[AccountChanged] | None = None
        self._pump: asyncio.Task[None] | None = None
        self._listening = False

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        wallet: WalletExtension | None,
        adapter: ChainAdapter,
    ) -> WalletSession:
        """Session with a file-backed reconnect hint and configured polling."""
        return cls(
            config.chain,
            wallet,
            adapter,
            store=JsonFileStore(config.storage.path),
            poll_interval=config.balance.poll_interval_seconds,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def chain(self) -> ChainConfig:
        return self._chain

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return isinstance(self._state, Connected)

    @property
    def account(self) -> Account | None:
        if isinstance(self._state, Connected):
            return self._state.account
        return None

    @property
    def balances(self) -> BalanceSynchronizer:
        return self._balances

    @property
    def balance(self) -> BalanceSnapshot | None:
        return self._balances.snapshot

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _set_state(self, state: SessionState) -> None:
        previous = self._state
        self._state = state
        if isinstance(state, Error):
            logger.warning(
                "Wallet session %s -> %s: %s",
                previous.status.value,
                state.status.value,
                state.reason,
            )
        else:
            logger.info(
                "Wallet session %s -> %s", previous.status.value, state.status.value
            )

    def _save_hint(self, address: str) -> None:
        # the reconnect hint is best-effort
        try:
            self._hint.save(address)
        except Exception as e:
            logger.warning("Could not save reconnect hint for %s: %s", address, e)

    def _clear_hint(self) -> None:
        try:
            self._hint.clear()
        except Exception as e:
            logger.warning("Could not clear reconnect hint: %s", e)

    def _in_flight(self) -> bool:
        return self._connect_task is not None and not self._connect_task.done()

    def _start_connect(self) -> asyncio.Task[Account]:
        self._set_state(Connecting())
        task = asyncio.get_running_loop().create_task(self._run_connect(self._epoch))
        self._connect_task = task
        return task

    async def _run_connect(self, epoch: int) -> Account:
        try:
            await self._registrar.ensure_registered()
            if self._wallet is None:
                raise WalletNotFoundError()
            signer = self._wallet.get_offline_signer(self._chain.chain_id)
            accounts = await signer.get_accounts()
            if not accounts:
                raise NoAccountError(
                    f"Wallet returned no accounts for {self._chain.chain_id}"
                )
            account = accounts[0]
        except Exception as e:
            if epoch != self._epoch:
                raise NotConnectedError("Connection attempt cancelled by disconnect") from e
            failure = e if isinstance(e, WalletError) else WalletError(
                f"Wallet connection failed: {e}"
            )
            self._set_state(Error(failure))
            if failure is e:
                raise
            raise failure from e

        if epoch != self._epoch:
            logger.info("Discarding connection for %s after disconnect", account.address)
            raise NotConnectedError("Connection attempt cancelled by disconnect")

        handle = SigningClient(
            self._chain,
            signer,
            account,
            self._adapter,
            self._query,
            self._broadcaster,
        )
        self._save_hint(account.address)
        self._set_state(Connected(account=account, signing_handle=handle))
        self._subscribe()
        self._balances.start(account)
        logger.info("Wallet connected: %s", account.address)
        return account

    async def connect(self, *, join: bool = True) -> Account:
        """Connect to the wallet and return the bound account.

        While another attempt is in flight the caller joins it, or gets
        SessionBusyError when ``join`` is False. Already connected sessions
        return the bound account unchanged.
        """
        if self._in_flight():
            if not join:
                raise SessionBusyError("A wallet connection attempt is already in progress")
            logger.debug("Joining in-flight connection attempt")
            return await asyncio.shield(self._connect_task)
        if isinstance(self._state, Connected):
            return self._state.account
        return await asyncio.shield(self._start_connect())

    def disconnect(self) -> None:
        """Drop the account, signing handle and balance. Valid in any state."""
        self._epoch += 1
        self._connect_task = None
        self._balances.clear()
        self._clear_hint()
        self._unsubscribe()
        if not isinstance(self._state, Disconnected):
            self._set_state(Disconnected())

    async def restore(self) -> bool:
        """Reconnect once if a previous session left a hint for this chain."""
        address = self._hint.load()
        if address is None:
            return False

        logger.info("Restoring wallet session (last address %s)", address)
        try:
            await self.connect()
        except WalletError as e:
            logger.warning("Automatic reconnect failed: %s", e)
            self._clear_hint()
            return False
        return True

    def close(self) -> None:
        self.disconnect()

    async def __aenter__(self) -> WalletSession:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Account-change channel
    # ------------------------------------------------------------------

    def _queue(self) -> asyncio.Queue[AccountChanged]:
        if self._events is None:
            # a single pending event is enough: reconnecting reads the latest account
            self._events = asyncio.Queue(maxsize=1)
        return self._events

    def notify_account_changed(self) -> None:
        """Listener handed to the wallet extension."""
        try:
            self._queue().put_nowait(AccountChanged())
        except asyncio.QueueFull:
            logger.debug("Account change already pending")

    def _subscribe(self) -> None:
        if self._wallet is None or self._listening:
            return
        self._wallet.add_account_change_listener(self.notify_account_changed)
        self._listening = True
        if self._pump is None or self._pump.done():
            self._pump = asyncio.get_running_loop().create_task(self._pump_events())

    def _unsubscribe(self) -> None:
        if self._listening and self._wallet is not None:
            self._wallet.remove_account_change_listener(self.notify_account_changed)
        self._listening = False
        if self._pump is not None:
            self._pump.cancel()
            self._pump = None
        self._events = None

    async def _pump_events(self) -> None:
        queue = self._queue()
        while True:
            await queue.get()
            self._handle_account_change()

    def _handle_account_change(self) -> None:
        if self._in_flight():
            logger.debug("Account change joins in-flight connection attempt")
            return
        if not isinstance(self._state, Connected):
            logger.debug("Ignoring account change while %s", self._state.status.value)
            return

        logger.info("Wallet account changed, reconnecting")
        self._balances.clear()
        self._set_state(Disconnected())
        # not awaited, so later events see the attempt as in flight and join it
        self._start_connect().add_done_callback(_log_reconnect_result)


def _log_reconnect_result(task: asyncio.Task[Account]) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.warning("Reconnect after account change failed: %s", error)
