"""Governance module messages."""
from __future__ import annotations

import enum

from ..config import ChainConfig
from ..errors import InvalidMessageError
from ..units import Amount
from .types import Message, MessageKind, coin, require

TEXT_PROPOSAL_TYPE_URL = "/cosmos.gov.v1beta1.TextProposal"


class VoteOption(enum.IntEnum):
    YES = 1
    ABSTAIN = 2
    NO = 3
    NO_WITH_VETO = 4


def _proposal_id(proposal_id: int | str) -> str:
    text = require("proposal_id", proposal_id)
    if not text.isdigit():
        raise InvalidMessageError("proposal_id", "must be a non-negative integer")
    return text


def submit_proposal(
    chain: ChainConfig, proposer: str, title: str, description: str, deposit: Amount
) -> Message:
    """Text proposal with an initial deposit in display units."""
    return Message(
        MessageKind.GOV_SUBMIT_PROPOSAL,
        {
            "content": {
                "typeUrl": TEXT_PROPOSAL_TYPE_URL,
                "value": {
                    "title": require("title", title),
                    "description": require("description", description),
                },
            },
            "proposer": require("proposer", proposer),
            "initialDeposit": [coin(chain, deposit)],
        },
    )


def deposit(
    chain: ChainConfig, depositor: str, proposal_id: int | str, amount: Amount
) -> Message:
    return Message(
        MessageKind.GOV_DEPOSIT,
        {
            "proposalId": _proposal_id(proposal_id),
            "depositor": require("depositor", depositor),
            "amount": [coin(chain, amount)],
        },
    )


def vote(
    chain: ChainConfig, voter: str, proposal_id: int | str, option: VoteOption | int
) -> Message:
    try:
        option = VoteOption(option)
    except ValueError:
        raise InvalidMessageError("option", f"unknown vote option {option!r}") from None
    return Message(
        MessageKind.GOV_VOTE,
        {
            "proposalId": _proposal_id(proposal_id),
            "voter": require("voter", voter),
            "option": int(option),
        },
    )
