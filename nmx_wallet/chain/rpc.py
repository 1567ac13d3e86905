"""Tendermint RPC client for transaction broadcast."""
from __future__ import annotations

import base64
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import ChainConfig
from ..errors import BroadcastError
from ..models import TransactionResult

logger = logging.getLogger(__name__)


def parse_broadcast_result(result: dict[str, Any]) -> TransactionResult:
    """Turn a ``broadcast_tx_commit`` result into a TransactionResult.

    A failed CheckTx wins over the delivery result, since the tx never made
    it into a block. Raises KeyError/TypeError/ValueError on malformed input.
    """
    check_tx = result["check_tx"]
    # CometBFT >= 0.38 renamed deliver_tx to tx_result
    deliver_tx = result.get("tx_result") or result.get("deliver_tx") or {}
    tx_hash = str(result["hash"])

    outcome = check_tx if int(check_tx.get("code", 0)) != 0 else deliver_tx
    return TransactionResult(
        code=int(outcome.get("code", 0)),
        transaction_hash=tx_hash,
        raw_log=str(outcome.get("log", "")),
        height=int(result.get("height", 0)),
        gas_wanted=int(outcome.get("gas_wanted", 0)),
        gas_used=int(outcome.get("gas_used", 0)),
    )


class RpcClient:
    """Broadcasts signed transactions to the chain's RPC endpoint."""

    def __init__(self, config: ChainConfig) -> None:
        self.endpoint = config.rpc_endpoint
        self.timeout = config.request_timeout

    async def rpc_call(self, method: str, params: dict[str, Any]) -> dict[str, Any]:
        """Make a JSON-RPC call, raising BroadcastError on any transport problem."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.post(
                    self.endpoint,
                    json=payload,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    body = await response.json(content_type=None)
        except Exception as e:
            logger.warning("RPC endpoint %s failed: %s", self.endpoint, e)
            raise BroadcastError(
                f"RPC call {method} failed: {e}", endpoint=self.endpoint, original_error=e
            ) from e

        if not isinstance(body, dict):
            raise BroadcastError(f"Malformed RPC response: {body!r}", endpoint=self.endpoint)
        if "error" in body:
            raise BroadcastError(f"RPC Error: {body['error']}", endpoint=self.endpoint)
        return body.get("result") or {}

    async def broadcast_tx(self, tx_bytes: bytes) -> TransactionResult:
        """Broadcast and wait for the tx to be committed in a block."""
        tx = base64.b64encode(tx_bytes).decode("ascii")
        result = await self.rpc_call("broadcast_tx_commit", {"tx": tx})

        try:
            tx_result = parse_broadcast_result(result)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise BroadcastError(
                f"Malformed broadcast result: {e}", endpoint=self.endpoint, original_error=e
            ) from e

        logger.info(
            "Broadcast %s: code %d at height %d",
            tx_result.transaction_hash,
            tx_result.code,
            tx_result.height,
        )
        return tx_result
