"""DeAI agent module messages."""
from __future__ import annotations

import json
from typing import Any

from ..config import ChainConfig
from .types import Message, MessageKind, coin, require

AGENT_DEPOSIT = 100
EXECUTION_FEE = 1


def create_agent(
    chain: ChainConfig,
    creator: str,
    name: str,
    description: str,
    ai_model: str,
    prompt: str,
) -> Message:
    return Message(
        MessageKind.DEAI_CREATE_AGENT,
        {
            "creator": require("creator", creator),
            "name": require("name", name),
            "description": description or "",
            "aiModel": require("ai_model", ai_model),
            "prompt": require("prompt", prompt),
            "deposit": coin(chain, AGENT_DEPOSIT),
        },
    )


def update_agent(
    chain: ChainConfig,
    owner: str,
    agent_id: str,
    name: str,
    description: str = "",
    permissions: dict[str, Any] | None = None,
    metadata: dict[str, Any] | None = None,
) -> Message:
    return Message(
        MessageKind.DEAI_UPDATE_AGENT,
        {
            "owner": require("owner", owner),
            "agentId": require("agent_id", agent_id),
            "name": require("name", name),
            "description": description or "",
            "permissions": json.dumps(permissions or {}, sort_keys=True),
            "metadata": json.dumps(metadata or {}, sort_keys=True),
        },
    )


def execute_agent(chain: ChainConfig, sender: str, agent_id: str, input: str) -> Message:
    return Message(
        MessageKind.DEAI_EXECUTE_AGENT,
        {
            "sender": require("sender", sender),
            "agentId": require("agent_id", agent_id),
            "input": require("input", input),
            "fee": coin(chain, EXECUTION_FEE),
        },
    )
