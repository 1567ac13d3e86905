"""Message envelope and the closed set of supported operation kinds."""
from __future__ import annotations

import copy
import enum
from dataclasses import dataclass
from typing import Any

from ..config import ChainConfig
from ..errors import InvalidMessageError
from ..models import Coin
from ..units import Amount, to_base_units

_NMX = "/nomercychain.nmxchain"


class MessageKind(str, enum.Enum):
    """Every operation this client can build. Values are the type URLs."""

    BANK_SEND = "/cosmos.bank.v1beta1.MsgSend"

    STAKING_DELEGATE = "/cosmos.staking.v1beta1.MsgDelegate"
    STAKING_UNDELEGATE = "/cosmos.staking.v1beta1.MsgUndelegate"
    STAKING_REDELEGATE = "/cosmos.staking.v1beta1.MsgBeginRedelegate"

    DISTRIBUTION_WITHDRAW_REWARDS = "/cosmos.distribution.v1beta1.MsgWithdrawDelegatorReward"

    GOV_SUBMIT_PROPOSAL = "/cosmos.gov.v1beta1.MsgSubmitProposal"
    GOV_DEPOSIT = "/cosmos.gov.v1beta1.MsgDeposit"
    GOV_VOTE = "/cosmos.gov.v1beta1.MsgVote"

    DYNACONTRACT_CREATE = f"{_NMX}.dynacontract.MsgCreateDynaContract"
    DYNACONTRACT_EXECUTE = f"{_NMX}.dynacontract.MsgExecuteDynaContract"
    DYNACONTRACT_ADD_LEARNING_DATA = f"{_NMX}.dynacontract.MsgAddLearningData"

    HYPERCHAIN_CREATE = f"{_NMX}.hyperchain.MsgCreateChain"
    HYPERCHAIN_JOIN = f"{_NMX}.hyperchain.MsgJoinChain"

    TRUTHGPT_SUBMIT_QUERY = f"{_NMX}.truthgpt.MsgSubmitOracleQuery"
    TRUTHGPT_VERIFY_RESPONSE = f"{_NMX}.truthgpt.MsgVerifyOracleResponse"

    DEAI_CREATE_AGENT = f"{_NMX}.deai.MsgCreateAIAgent"
    DEAI_UPDATE_AGENT = f"{_NMX}.deai.MsgUpdateAIAgent"
    DEAI_EXECUTE_AGENT = f"{_NMX}.deai.MsgExecuteAIAgent"


@dataclass(frozen=True)
class Message:
    """A typed operation ready for a chain adapter to encode.

    Only the builders in :mod:`nmx_wallet.messages` create these.
    """

    kind: MessageKind
    value: dict[str, Any]

    @property
    def type_url(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict[str, Any]:
        return {"typeUrl": self.type_url, "value": copy.deepcopy(self.value)}


# ---------------------------------------------------------------------------
# Shared builder helpers
# ---------------------------------------------------------------------------


def require(field_name: str, value: Any) -> str:
    """Return ``value`` as a stripped string, rejecting empty identifiers."""
    if value is None:
        raise InvalidMessageError(field_name)
    text = str(value).strip()
    if not text:
        raise InvalidMessageError(field_name)
    return text


def coin(chain: ChainConfig, amount: Amount) -> dict[str, str]:
    """Base-denom coin dict for a display ``amount``."""
    return Coin(chain.base_denom, to_base_units(amount, chain.decimal_places)).to_dict()
