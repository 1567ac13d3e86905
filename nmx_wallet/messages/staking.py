"""Staking module messages."""
from __future__ import annotations

from ..config import ChainConfig
from ..errors import InvalidMessageError
from ..units import Amount
from .types import Message, MessageKind, coin, require


def delegate(
    chain: ChainConfig, delegator_address: str, validator_address: str, amount: Amount
) -> Message:
    return Message(
        MessageKind.STAKING_DELEGATE,
        {
            "delegatorAddress": require("delegator_address", delegator_address),
            "validatorAddress": require("validator_address", validator_address),
            "amount": coin(chain, amount),
        },
    )


def undelegate(
    chain: ChainConfig, delegator_address: str, validator_address: str, amount: Amount
) -> Message:
    return Message(
        MessageKind.STAKING_UNDELEGATE,
        {
            "delegatorAddress": require("delegator_address", delegator_address),
            "validatorAddress": require("validator_address", validator_address),
            "amount": coin(chain, amount),
        },
    )


def redelegate(
    chain: ChainConfig,
    delegator_address: str,
    validator_src_address: str,
    validator_dst_address: str,
    amount: Amount,
) -> Message:
    """Move a delegation between validators without unbonding."""
    src = require("validator_src_address", validator_src_address)
    dst = require("validator_dst_address", validator_dst_address)
    if src == dst:
        raise InvalidMessageError("validator_dst_address", "must differ from the source validator")
    return Message(
        MessageKind.STAKING_REDELEGATE,
        {
            "delegatorAddress": require("delegator_address", delegator_address),
            "validatorSrcAddress": src,
            "validatorDstAddress": dst,
            "amount": coin(chain, amount),
        },
    )
