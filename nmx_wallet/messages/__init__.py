"""Message builders, one module per chain module."""
from . import bank, deai, distribution, dynacontract, gov, hyperchain, staking, truthgpt
from .gov import VoteOption
from .types import Message, MessageKind

__all__ = [
    "Message",
    "MessageKind",
    "VoteOption",
    "bank",
    "deai",
    "distribution",
    "dynacontract",
    "gov",
    "hyperchain",
    "staking",
    "truthgpt",
]
