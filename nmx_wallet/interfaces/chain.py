"""Chain protocols — wire encoding and broadcast abstractions."""
from typing import Any, Protocol, Sequence

from ..messages.types import Message
from ..models import Fee, TransactionResult


class ChainAdapter(Protocol):
    """Serializes messages into the chain's wire format."""

    def make_sign_doc(
        self,
        *,
        chain_id: str,
        account_number: int,
        sequence: int,
        pubkey: bytes,
        messages: Sequence[Message],
        fee: Fee,
        memo: str,
    ) -> Any: ...

    def encode_tx(self, signed: Any) -> bytes: ...


class Broadcaster(Protocol):
    """Accepts signed transaction bytes and reports the execution result."""

    async def broadcast_tx(self, tx_bytes: bytes) -> TransactionResult: ...


class SigningHandle(Protocol):
    """Capability bound to a connected account that can sign and broadcast."""

    async def sign_and_broadcast(
        self, signer_address: str, messages: Sequence[Message], fee: Fee, memo: str = ""
    ) -> TransactionResult: ...
