"""Read-only REST client for the chain query service."""
from __future__ import annotations

import logging
import ssl
from typing import Any
from urllib.parse import quote

import aiohttp
import certifi

from ..config import ChainConfig
from ..errors import QueryError

logger = logging.getLogger(__name__)

_NMX = "/nomercychain/nmxchain"


class QueryClient:
    """REST client for account, staking, governance and custom module data."""

    def __init__(self, config: ChainConfig) -> None:
        self.base_url = config.rest_endpoint.rstrip("/")
        self.timeout = config.request_timeout

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET ``path`` and return the decoded JSON body."""
        url = f"{self.base_url}{path}"
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        raise QueryError(
                            f"Query failed: HTTP {response.status}",
                            url=url,
                            status=response.status,
                        )
                    return await response.json()
        except QueryError:
            raise
        except Exception as e:
            logger.warning("Query %s failed: %s", url, e)
            raise QueryError(f"Query failed: {e}", url=url) from e

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    async def get_account(self, address: str) -> dict[str, Any]:
        data = await self._get(f"/cosmos/auth/v1beta1/accounts/{address}")
        return data.get("account", {})

    async def get_balances(self, address: str) -> list[dict[str, str]]:
        """All ``{denom, amount}`` pairs held by ``address``."""
        data = await self._get(f"/cosmos/bank/v1beta1/balances/{address}")
        return list(data.get("balances", []))

    # ------------------------------------------------------------------
    # Staking / distribution
    # ------------------------------------------------------------------

    async def get_validators(self, status: str = "") -> list[dict[str, Any]]:
        params = {"status": status} if status else None
        data = await self._get("/cosmos/staking/v1beta1/validators", params)
        return list(data.get("validators", []))

    async def get_validator(self, validator_address: str) -> dict[str, Any]:
        data = await self._get(f"/cosmos/staking/v1beta1/validators/{validator_address}")
        return data.get("validator", {})

    async def get_delegations(self, address: str) -> list[dict[str, Any]]:
        data = await self._get(f"/cosmos/staking/v1beta1/delegations/{address}")
        return list(data.get("delegation_responses", []))

    async def get_delegation_rewards(self, address: str) -> dict[str, Any]:
        """Per-validator rewards plus the ``total`` across validators."""
        return await self._get(f"/cosmos/distribution/v1beta1/delegators/{address}/rewards")

    # ------------------------------------------------------------------
    # Governance
    # ------------------------------------------------------------------

    async def get_proposals(self, status: str = "") -> list[dict[str, Any]]:
        params = {"proposal_status": status} if status else None
        data = await self._get("/cosmos/gov/v1beta1/proposals", params)
        return list(data.get("proposals", []))

    async def get_proposal(self, proposal_id: int | str) -> dict[str, Any]:
        data = await self._get(f"/cosmos/gov/v1beta1/proposals/{proposal_id}")
        return data.get("proposal", {})

    async def get_proposal_votes(self, proposal_id: int | str) -> list[dict[str, Any]]:
        data = await self._get(f"/cosmos/gov/v1beta1/proposals/{proposal_id}/votes")
        return list(data.get("votes", []))

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def get_transaction(self, tx_hash: str) -> dict[str, Any]:
        return await self._get(f"/cosmos/tx/v1beta1/txs/{tx_hash}")

    async def get_transactions_by_address(
        self, address: str, direction: str = "sent", limit: int = 100
    ) -> list[dict[str, Any]]:
        """Transactions sent by (default) or received by ``address``."""
        if direction == "received":
            event = f"transfer.recipient='{address}'"
        else:
            event = f"message.sender='{address}'"
        params = {"events": event, "pagination.limit": str(limit)}
        data = await self._get("/cosmos/tx/v1beta1/txs", params)
        return list(data.get("tx_responses", []))

    # ------------------------------------------------------------------
    # Custom modules
    # ------------------------------------------------------------------

    async def get_dyna_contracts(self, owner: str = "") -> dict[str, Any]:
        if owner:
            return await self._get(f"{_NMX}/dynacontract/dyna-contracts-by-owner/{quote(owner)}")
        return await self._get(f"{_NMX}/dynacontract/dyna-contracts")

    async def get_dyna_contract(self, contract_id: str) -> dict[str, Any]:
        return await self._get(f"{_NMX}/dynacontract/dyna-contract/{quote(contract_id)}")

    async def get_hyperchains(self, owner: str = "") -> dict[str, Any]:
        if owner:
            return await self._get(f"{_NMX}/hyperchain/chains-by-owner/{quote(owner)}")
        return await self._get(f"{_NMX}/hyperchain/chains")

    async def get_oracle_queries(self, address: str = "") -> dict[str, Any]:
        if address:
            return await self._get(f"{_NMX}/truthgpt/oracle-queries-by-address/{quote(address)}")
        return await self._get(f"{_NMX}/truthgpt/oracle-queries")

    async def get_ai_agents(self, owner: str = "") -> dict[str, Any]:
        if owner:
            return await self._get(f"{_NMX}/deai/ai-agents-by-owner/{quote(owner)}")
        return await self._get(f"{_NMX}/deai/ai-agents")
