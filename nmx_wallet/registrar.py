"""Chain registration with the wallet extension."""
from __future__ import annotations

import json
import logging
import os
from typing import Any

from .config import ChainConfig
from .errors import ChainRegistrationError, WalletNotFoundError
from .interfaces.wallet import WalletExtension

logger = logging.getLogger(__name__)

CHAIN_INFO_ENV = "NMX_KEPLR_CHAIN_INFO"

GAS_PRICE_STEP = {"low": 0.01, "average": 0.025, "high": 0.04}


def build_chain_info(chain: ChainConfig) -> dict[str, Any]:
    """Suggest-chain payload describing ``chain`` to the wallet.

    A JSON object in ``NMX_KEPLR_CHAIN_INFO`` replaces the generated payload.
    """
    override = os.environ.get(CHAIN_INFO_ENV)
    if override:
        try:
            info = json.loads(override)
            if isinstance(info, dict):
                return info
            logger.error("%s is not a JSON object, ignoring", CHAIN_INFO_ENV)
        except ValueError as e:
            logger.error("Error parsing %s: %s", CHAIN_INFO_ENV, e)

    currency = {
        "coinDenom": chain.display_denom,
        "coinMinimalDenom": chain.base_denom,
        "coinDecimals": chain.decimal_places,
    }
    prefix = chain.bech32_prefix
    return {
        "chainId": chain.chain_id,
        "chainName": chain.chain_name,
        "rpc": chain.rpc_endpoint,
        "rest": chain.rest_endpoint,
        "stakeCurrency": dict(currency),
        "bip44": {"coinType": chain.coin_type},
        "bech32Config": {
            "bech32PrefixAccAddr": prefix,
            "bech32PrefixAccPub": f"{prefix}pub",
            "bech32PrefixValAddr": f"{prefix}valoper",
            "bech32PrefixValPub": f"{prefix}valoperpub",
            "bech32PrefixConsAddr": f"{prefix}valcons",
            "bech32PrefixConsPub": f"{prefix}valconspub",
        },
        "currencies": [dict(currency)],
        "feeCurrencies": [dict(currency, gasPriceStep=dict(GAS_PRICE_STEP))],
        "gasPriceStep": dict(GAS_PRICE_STEP),
    }


class ChainRegistrar:
    """Makes sure the wallet extension knows the configured chain."""

    def __init__(self, wallet: WalletExtension | None, chain: ChainConfig) -> None:
        self._wallet = wallet
        self._chain = chain

    async def ensure_registered(self) -> None:
        """Enable the chain, suggesting it first if the wallet does not know it.

        Safe to call repeatedly: once the chain is known only ``enable`` runs.
        """
        if self._wallet is None:
            raise WalletNotFoundError(
                "Wallet extension not found. Please install a Keplr-compatible wallet."
            )

        chain_id = self._chain.chain_id
        try:
            await self._wallet.enable(chain_id)
            return
        except Exception as e:
            logger.info(
                "Chain %s not registered in wallet (%s), suggesting chain...", chain_id, e
            )

        try:
            await self._wallet.experimental_suggest_chain(build_chain_info(self._chain))
            await self._wallet.enable(chain_id)
        except Exception as e:
            logger.error("Failed to register chain %s with wallet: %s", chain_id, e)
            raise ChainRegistrationError(chain_id, str(e)) from e

        logger.info("Chain %s successfully registered with wallet", chain_id)
