"""Key-value stores and the reconnection hint kept in them."""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from .interfaces.storage import KeyValueStore

logger = logging.getLogger(__name__)


class MemoryStore:
    """In-process store; nothing survives a restart."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Durable store backed by a single JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: not a JSON object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def clear(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class ReconnectHint:
    """Chain-scoped "was connected" flag and last address."""

    def __init__(self, store: KeyValueStore, chain_id: str) -> None:
        self._store = store
        self._connected_key = f"{chain_id}:wallet_connected"
        self._address_key = f"{chain_id}:wallet_address"

    def save(self, address: str) -> None:
        self._store.set(self._connected_key, "true")
        self._store.set(self._address_key, address)

    def load(self) -> str | None:
        """Last connected address, or None if there is no usable hint."""
        if self._store.get(self._connected_key) != "true":
            return None
        return self._store.get(self._address_key) or None

    def clear(self) -> None:
        self._store.clear(self._connected_key)
        self._store.clear(self._address_key)
