"""DynaContract module messages."""
from __future__ import annotations

import json
from typing import Any

from ..config import ChainConfig
from ..units import Amount
from .types import Message, MessageKind, coin, require

CONTRACT_DEPOSIT = 100
STANDARD_CONTRACT_TYPE = "1"
LEARNING_DATA_SOURCE = "client"


def _encode(data: Any) -> str:
    # sorted keys keep identical inputs byte-identical
    return json.dumps(data, sort_keys=True, separators=(",", ":"))


def create_contract(
    chain: ChainConfig,
    creator: str,
    name: str,
    code: str,
    description: str,
    ai_model: str,
) -> Message:
    return Message(
        MessageKind.DYNACONTRACT_CREATE,
        {
            "creator": require("creator", creator),
            "name": require("name", name),
            "code": require("code", code),
            "description": description or "",
            "aiModel": require("ai_model", ai_model),
            "contractType": STANDARD_CONTRACT_TYPE,
            "deposit": coin(chain, CONTRACT_DEPOSIT),
        },
    )


def execute_contract(
    chain: ChainConfig,
    sender: str,
    contract_id: str,
    function_name: str,
    params: dict[str, Any] | None = None,
    amount: Amount = 0,
) -> Message:
    return Message(
        MessageKind.DYNACONTRACT_EXECUTE,
        {
            "sender": require("sender", sender),
            "contractId": require("contract_id", contract_id),
            "functionName": require("function_name", function_name),
            "params": _encode(params or {}),
            "amount": coin(chain, amount),
        },
    )


def add_learning_data(
    chain: ChainConfig, sender: str, contract_id: str, data_type: str, data: Any
) -> Message:
    return Message(
        MessageKind.DYNACONTRACT_ADD_LEARNING_DATA,
        {
            "sender": require("sender", sender),
            "contractId": require("contract_id", contract_id),
            "dataType": require("data_type", data_type),
            "data": _encode(data),
            "source": LEARNING_DATA_SOURCE,
        },
    )
