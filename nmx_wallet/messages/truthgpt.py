"""TruthGPT oracle module messages."""
from __future__ import annotations

from ..config import ChainConfig
from .types import Message, MessageKind, coin, require

# query fee in display units, by query type
QUERY_FEES = {
    "factCheck": 5,
    "dataFeed": 2,
}
DEFAULT_QUERY_FEE = 10


def query_fee(query_type: str) -> int:
    return QUERY_FEES.get(query_type, DEFAULT_QUERY_FEE)


def submit_query(
    chain: ChainConfig, sender: str, query_type: str, query_prompt: str, provider: str
) -> Message:
    query_type = require("query_type", query_type)
    return Message(
        MessageKind.TRUTHGPT_SUBMIT_QUERY,
        {
            "sender": require("sender", sender),
            "queryType": query_type,
            "queryPrompt": require("query_prompt", query_prompt),
            "provider": require("provider", provider),
            "fee": coin(chain, query_fee(query_type)),
        },
    )


def verify_response(
    chain: ChainConfig, verifier: str, query_id: str, is_valid: bool, feedback: str = ""
) -> Message:
    return Message(
        MessageKind.TRUTHGPT_VERIFY_RESPONSE,
        {
            "verifier": require("verifier", verifier),
            "queryId": require("query_id", query_id),
            "isValid": bool(is_valid),
            "feedback": feedback or "",
        },
    )
