"""Distribution module messages."""
from __future__ import annotations

from typing import Iterable

from ..config import ChainConfig
from .types import Message, MessageKind, require


def withdraw_rewards(
    chain: ChainConfig, delegator_address: str, validator_address: str
) -> Message:
    return Message(
        MessageKind.DISTRIBUTION_WITHDRAW_REWARDS,
        {
            "delegatorAddress": require("delegator_address", delegator_address),
            "validatorAddress": require("validator_address", validator_address),
        },
    )


def withdraw_all_rewards(
    chain: ChainConfig, delegator_address: str, validator_addresses: Iterable[str]
) -> list[Message]:
    """One withdraw message per validator, in the order given."""
    return [
        withdraw_rewards(chain, delegator_address, validator)
        for validator in validator_addresses
    ]
