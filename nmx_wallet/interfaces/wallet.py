"""Protocols for the wallet extension and its offline signer."""
from typing import Any, Callable, Protocol

from ..models import Account

AccountChangeListener = Callable[[], None]


class OfflineSigner(Protocol):
    """Signer handed out by the wallet extension for one chain."""

    async def get_accounts(self) -> list[Account]: ...

    async def sign_direct(self, signer_address: str, sign_doc: Any) -> Any: ...


class WalletExtension(Protocol):
    """User-controlled wallet holding the keys (Keplr-style API)."""

    async def enable(self, chain_id: str) -> None: ...

    async def experimental_suggest_chain(self, chain_info: dict[str, Any]) -> None: ...

    def get_offline_signer(self, chain_id: str) -> OfflineSigner: ...

    def add_account_change_listener(self, listener: AccountChangeListener) -> None: ...

    def remove_account_change_listener(self, listener: AccountChangeListener) -> None: ...
