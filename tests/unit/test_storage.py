"""Unit tests for key-value stores and the reconnection hint."""
from __future__ import annotations

import json
from pathlib import Path

from nmx_wallet.storage import JsonFileStore, MemoryStore, ReconnectHint


class TestMemoryStore:
    def test_set_get_clear(self) -> None:
        store = MemoryStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.clear("k")
        assert store.get("k") is None

    def test_clear_missing_key(self) -> None:
        MemoryStore().clear("absent")


class TestJsonFileStore:
    def test_persists_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "session.json"
        JsonFileStore(path).set("k", "v")
        assert JsonFileStore(path).get("k") == "v"
        assert json.loads(path.read_text()) == {"k": "v"}

    def test_clear(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path / "s.json")
        store.set("a", "1")
        store.set("b", "2")
        store.clear("a")
        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_missing_file_reads_empty(self, tmp_path: Path) -> None:
        assert JsonFileStore(tmp_path / "none.json").get("k") is None

    def test_corrupt_file_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "s.json"
        path.write_text("{not json")
        store = JsonFileStore(path)
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_non_object_file_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "s.json"
        path.write_text("[1, 2]")
        assert JsonFileStore(path).get("0") is None

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        store = JsonFileStore(tmp_path / "s.json")
        store.set("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["s.json"]


class TestReconnectHint:
    def test_save_and_load(self) -> None:
        store = MemoryStore()
        hint = ReconnectHint(store, "nomercychain-testnet-1")
        hint.save("nmx1alice")
        assert hint.load() == "nmx1alice"
        assert store.get("nomercychain-testnet-1:wallet_connected") == "true"

    def test_empty_store(self) -> None:
        assert ReconnectHint(MemoryStore(), "c").load() is None

    def test_clear(self) -> None:
        hint = ReconnectHint(MemoryStore(), "c")
        hint.save("nmx1alice")
        hint.clear()
        assert hint.load() is None

    def test_scoped_by_chain(self) -> None:
        store = MemoryStore()
        ReconnectHint(store, "chain-a").save("nmx1alice")
        assert ReconnectHint(store, "chain-b").load() is None

    def test_flag_without_true_is_ignored(self) -> None:
        store = MemoryStore()
        store.set("c:wallet_connected", "false")
        store.set("c:wallet_address", "nmx1alice")
        assert ReconnectHint(store, "c").load() is None
