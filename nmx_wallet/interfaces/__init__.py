"""Protocol interfaces for the wallet client's external collaborators."""
from .chain import Broadcaster, ChainAdapter, SigningHandle
from .storage import KeyValueStore
from .wallet import AccountChangeListener, OfflineSigner, WalletExtension

__all__ = [
    "AccountChangeListener",
    "Broadcaster",
    "ChainAdapter",
    "KeyValueStore",
    "OfflineSigner",
    "SigningHandle",
    "WalletExtension",
]
