"""Configuration loader — chain registry from env vars, optional YAML overlay."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    chain_id: str = "nomercychain-testnet-1"
    chain_name: str = "NoMercyChain Testnet"
    display_denom: str = "NMX"
    base_denom: str = "unmx"
    decimal_places: int = 6
    rpc_endpoint: str = "http://localhost:26657"
    rest_endpoint: str = "http://localhost:1317"
    gas_price: str = "0.025unmx"
    bech32_prefix: str = "nmx"
    coin_type: int = 118
    request_timeout: int = 30


@dataclass(frozen=True)
class FeeConfig:
    amount: int = 5000
    gas_limit: int = 200000


@dataclass(frozen=True)
class BalanceConfig:
    poll_interval_seconds: float = 30.0


@dataclass(frozen=True)
class StorageConfig:
    path: str = "~/.nmx_wallet/session.json"


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    fee: FeeConfig = field(default_factory=FeeConfig)
    balance: BalanceConfig = field(default_factory=BalanceConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")

_GAS_PRICE_RE = re.compile(r"^(\d+(?:\.\d+)?)([a-zA-Z][a-zA-Z0-9/:._-]{1,127})$")

# env var → ChainConfig field
_CHAIN_ENV = {
    "NMX_CHAIN_ID": "chain_id",
    "NMX_CHAIN_NAME": "chain_name",
    "NMX_DENOM_NAME": "display_denom",
    "NMX_DENOM": "base_denom",
    "NMX_DECIMAL_PLACES": "decimal_places",
    "NMX_RPC_ENDPOINT": "rpc_endpoint",
    "NMX_API_URL": "rest_endpoint",
    "NMX_GAS_PRICE": "gas_price",
    "NMX_BECH32_PREFIX": "bech32_prefix",
}


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


def parse_gas_price(gas_price: str) -> tuple[Decimal, str]:
    """Split a gas price string such as ``"0.025unmx"`` into amount and denom."""
    match = _GAS_PRICE_RE.match(gas_price.strip())
    if not match:
        raise ValueError(f"Invalid gas price: {gas_price!r}")
    return Decimal(match.group(1)), match.group(2)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _build_chain(raw: Mapping[str, Any], base: ChainConfig) -> ChainConfig:
    # empty values (e.g. an unset ${VAR}) keep the base value
    raw = {k: v for k, v in raw.items() if v not in ("", None)}
    return ChainConfig(
        chain_id=str(raw.get("chain_id", base.chain_id)),
        chain_name=str(raw.get("chain_name", base.chain_name)),
        display_denom=str(raw.get("display_denom", base.display_denom)),
        base_denom=str(raw.get("base_denom", base.base_denom)),
        decimal_places=int(raw.get("decimal_places", base.decimal_places)),
        rpc_endpoint=str(raw.get("rpc_endpoint", base.rpc_endpoint)),
        rest_endpoint=str(raw.get("rest_endpoint", base.rest_endpoint)),
        gas_price=str(raw.get("gas_price", base.gas_price)),
        bech32_prefix=str(raw.get("bech32_prefix", base.bech32_prefix)),
        coin_type=int(raw.get("coin_type", base.coin_type)),
        request_timeout=int(raw.get("request_timeout", base.request_timeout)),
    )


def _build_fee(raw: Mapping[str, Any]) -> FeeConfig:
    return FeeConfig(
        amount=int(raw.get("amount", 5000)),
        gas_limit=int(raw.get("gas_limit", 200000)),
    )


def _build_balance(raw: Mapping[str, Any]) -> BalanceConfig:
    return BalanceConfig(
        poll_interval_seconds=float(raw.get("poll_interval_seconds", 30.0)),
    )


def _build_storage(raw: Mapping[str, Any]) -> StorageConfig:
    return StorageConfig(path=str(raw.get("path", StorageConfig.path)))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_chain_config(environ: Mapping[str, str] | None = None) -> ChainConfig:
    """Build the chain registry from ``NMX_*`` environment variables.

    Unset or empty variables fall back to the testnet defaults.
    """
    if environ is None:
        environ = os.environ
    raw = {
        name: environ[var] for var, name in _CHAIN_ENV.items() if environ.get(var)
    }
    chain = _build_chain(raw, ChainConfig())
    _validate_chain(chain)
    return chain


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load application configuration from .env, env vars and optional YAML.

    Args:
        config_path: Path to a YAML file. When omitted, everything comes from
            the environment and built-in defaults.
    """
    load_dotenv()

    raw: dict[str, Any] = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        raw = _interpolate_env(raw)

    env_chain = load_chain_config()
    cfg = AppConfig(
        chain=_build_chain(raw.get("chain") or {}, env_chain),
        fee=_build_fee(raw.get("fee") or {}),
        balance=_build_balance(raw.get("balance") or {}),
        storage=_build_storage(raw.get("storage") or {}),
    )

    _validate(cfg)
    logger.info(
        "Configuration loaded for chain %s (%s)",
        cfg.chain.chain_id,
        config_path or "environment",
    )
    return cfg


def _validate_chain(chain: ChainConfig) -> None:
    if not chain.chain_id:
        raise ValueError("Chain id must not be empty")
    if not chain.rpc_endpoint or not chain.rest_endpoint:
        raise ValueError(f"Chain '{chain.chain_id}' needs both RPC and REST endpoints")
    if not chain.base_denom:
        raise ValueError(f"Chain '{chain.chain_id}' has no base denomination")
    if not 0 <= chain.decimal_places <= 18:
        raise ValueError(
            f"Decimal places must be between 0 and 18, got {chain.decimal_places}"
        )
    parse_gas_price(chain.gas_price)


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    _validate_chain(cfg.chain)
    if cfg.fee.gas_limit <= 0:
        raise ValueError("Fee gas limit must be positive")
    if cfg.fee.amount < 0:
        raise ValueError("Fee amount must not be negative")
    if cfg.balance.poll_interval_seconds <= 0:
        raise ValueError("Balance poll interval must be positive")
