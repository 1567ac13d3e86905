"""Balance polling for the connected account."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol

from .config import ChainConfig
from .models import Account, BalanceSnapshot

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 30.0

SnapshotListener = Callable[[BalanceSnapshot], None]


class BalanceSource(Protocol):
    async def get_balances(self, address: str) -> list[dict[str, Any]]: ...


class BalanceSynchronizer:
    """Keeps the latest base-denom balance snapshot for one account.

    Fetch failures never propagate: the snapshot degrades to a zero-amount
    placeholder flagged ``stale`` and the failure is logged.
    """

    def __init__(
        self,
        source: BalanceSource,
        chain: ChainConfig,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        on_update: SnapshotListener | None = None,
    ) -> None:
        self._source = source
        self._denom = chain.base_denom
        self._interval = poll_interval
        self._on_update = on_update
        self._snapshot: BalanceSnapshot | None = None
        self._task: asyncio.Task[None] | None = None
        # bumped on stop()/clear() so in-flight fetches cannot publish late
        self._generation = 0

    @property
    def snapshot(self) -> BalanceSnapshot | None:
        return self._snapshot

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _fetch(self, address: str) -> BalanceSnapshot:
        try:
            balances = await self._source.get_balances(address)
            amount = "0"
            for entry in balances:
                if entry.get("denom") == self._denom:
                    amount = str(entry.get("amount", "0"))
                    break
            return BalanceSnapshot(address=address, denom=self._denom, amount=amount)
        except Exception as e:
            logger.error("Error fetching balance for %s: %s", address, e)
            return BalanceSnapshot(address=address, denom=self._denom, amount="0", stale=True)

    def _publish(self, snapshot: BalanceSnapshot) -> None:
        self._snapshot = snapshot
        if self._on_update is not None:
            try:
                self._on_update(snapshot)
            except Exception as e:
                logger.error("Balance listener failed: %s", e)

    async def refresh_once(self, account: Account) -> BalanceSnapshot:
        """Fetch and publish a fresh snapshot for ``account``."""
        generation = self._generation
        snapshot = await self._fetch(account.address)
        if generation != self._generation:
            logger.debug("Discarding balance for %s fetched before stop", account.address)
            return snapshot
        self._publish(snapshot)
        return snapshot

    async def _run(self, account: Account) -> None:
        while True:
            await self.refresh_once(account)
            await asyncio.sleep(self._interval)

    def start(self, account: Account) -> None:
        """Fetch now, then every ``poll_interval`` seconds until stop()."""
        self.stop()
        logger.info(
            "Starting balance sync for %s (every %.0f seconds)",
            account.address,
            self._interval,
        )
        self._task = asyncio.get_running_loop().create_task(self._run(account))

    def stop(self) -> None:
        """Cancel polling. No fetch started before this call will publish."""
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None
            logger.info("Balance sync stopped")

    def clear(self) -> None:
        self.stop()
        self._snapshot = None
