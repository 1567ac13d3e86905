"""Bank module messages."""
from __future__ import annotations

from ..config import ChainConfig
from ..units import Amount
from .types import Message, MessageKind, coin, require


def send(chain: ChainConfig, from_address: str, to_address: str, amount: Amount) -> Message:
    """Transfer ``amount`` display tokens from one account to another."""
    return Message(
        MessageKind.BANK_SEND,
        {
            "fromAddress": require("from_address", from_address),
            "toAddress": require("to_address", to_address),
            "amount": [coin(chain, amount)],
        },
    )
