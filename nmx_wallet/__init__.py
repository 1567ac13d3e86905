"""Wallet session and transaction dispatch client for NoMercyChain."""
from .balance import BalanceSynchronizer
from .config import AppConfig, ChainConfig, load_chain_config, load_config
from .dispatcher import FeePolicy, TransactionDispatcher
from .errors import (
    BroadcastError,
    ChainRegistrationError,
    InvalidAmountError,
    InvalidMessageError,
    NoAccountError,
    NotConnectedError,
    QueryError,
    SessionBusyError,
    SigningError,
    WalletError,
    WalletNotFoundError,
)
from .models import (
    Account,
    BalanceSnapshot,
    Coin,
    Fee,
    SessionStatus,
    TransactionRequest,
    TransactionResult,
)
from .registrar import ChainRegistrar
from .session import WalletSession
from .units import from_base_units, to_base_units

__all__ = [
    "Account",
    "AppConfig",
    "BalanceSnapshot",
    "BalanceSynchronizer",
    "BroadcastError",
    "ChainConfig",
    "ChainRegistrar",
    "ChainRegistrationError",
    "Coin",
    "Fee",
    "FeePolicy",
    "InvalidAmountError",
    "InvalidMessageError",
    "NoAccountError",
    "NotConnectedError",
    "QueryError",
    "SessionBusyError",
    "SessionStatus",
    "SigningError",
    "TransactionDispatcher",
    "TransactionRequest",
    "TransactionResult",
    "WalletError",
    "WalletNotFoundError",
    "WalletSession",
    "from_base_units",
    "load_chain_config",
    "load_config",
    "to_base_units",
]
