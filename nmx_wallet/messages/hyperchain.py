"""HyperChain module messages."""
from __future__ import annotations

from typing import Sequence

from ..config import ChainConfig
from ..units import Amount
from .types import Message, MessageKind, coin, require

HYPERCHAIN_DEPOSIT = 10_000


def create_chain(
    chain: ChainConfig,
    creator: str,
    name: str,
    description: str,
    chain_type: str,
    modules: Sequence[str],
    ai_prompt: str = "",
) -> Message:
    return Message(
        MessageKind.HYPERCHAIN_CREATE,
        {
            "creator": require("creator", creator),
            "name": require("name", name),
            "description": description or "",
            "chainType": require("chain_type", chain_type),
            "modules": [require("modules", m) for m in modules],
            "aiPrompt": ai_prompt or "",
            "deposit": coin(chain, HYPERCHAIN_DEPOSIT),
        },
    )


def join_chain(chain: ChainConfig, validator: str, chain_id: str, stake: Amount) -> Message:
    return Message(
        MessageKind.HYPERCHAIN_JOIN,
        {
            "validator": require("validator", validator),
            "chainId": require("chain_id", chain_id),
            "stake": coin(chain, stake),
        },
    )
