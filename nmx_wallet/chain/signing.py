"""Signing handle built from the wallet signer, chain adapter and broadcaster."""
from __future__ import annotations

import logging
from typing import Sequence

from ..config import ChainConfig
from ..errors import BroadcastError, QueryError, SigningError
from ..interfaces.chain import Broadcaster, ChainAdapter
from ..interfaces.wallet import OfflineSigner
from ..messages.types import Message
from ..models import Account, Fee, TransactionResult
from .rest import QueryClient

logger = logging.getLogger(__name__)


class SigningClient:
    """Signs with the wallet's offline signer and broadcasts the result.

    Never sees key material: the signer only returns signed documents.
    """

    def __init__(
        self,
        config: ChainConfig,
        signer: OfflineSigner,
        account: Account,
        adapter: ChainAdapter,
        query: QueryClient,
        broadcaster: Broadcaster,
    ) -> None:
        self._config = config
        self._signer = signer
        self._account = account
        self._adapter = adapter
        self._query = query
        self._broadcaster = broadcaster

    @property
    def signer(self) -> OfflineSigner:
        return self._signer

    async def _account_sequence(self, address: str) -> tuple[int, int]:
        """Current (account_number, sequence) for ``address``."""
        try:
            account = await self._query.get_account(address)
        except QueryError as e:
            raise BroadcastError(
                f"Could not look up account {address}: {e}",
                endpoint=e.url,
                original_error=e,
            ) from e

        # vesting and module accounts nest the base account
        base = account.get("base_account", account)
        try:
            return int(base.get("account_number", 0)), int(base.get("sequence", 0))
        except (TypeError, ValueError) as e:
            raise BroadcastError(f"Malformed account record for {address}") from e

    async def sign_and_broadcast(
        self,
        signer_address: str,
        messages: Sequence[Message],
        fee: Fee,
        memo: str = "",
    ) -> TransactionResult:
        """Sign ``messages`` as ``signer_address`` and broadcast them."""
        if signer_address != self._account.address:
            raise SigningError(
                f"Signing handle is bound to {self._account.address}, not {signer_address}"
            )

        account_number, sequence = await self._account_sequence(signer_address)
        sign_doc = self._adapter.make_sign_doc(
            chain_id=self._config.chain_id,
            account_number=account_number,
            sequence=sequence,
            pubkey=self._account.pubkey,
            messages=messages,
            fee=fee,
            memo=memo,
        )

        try:
            signed = await self._signer.sign_direct(signer_address, sign_doc)
        except Exception as e:
            logger.warning("Signer rejected transaction for %s: %s", signer_address, e)
            raise SigningError(f"Transaction signing failed: {e}") from e

        tx_bytes = self._adapter.encode_tx(signed)
        return await self._broadcaster.broadcast_tx(tx_bytes)
