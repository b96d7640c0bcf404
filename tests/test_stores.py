"""Tests for the key-value store implementations."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from chromagen.exceptions import StoreUnavailableError
from chromagen.repositories.memory import InMemoryKeyValueStore
from chromagen.repositories.sqlite import SQLiteKeyValueStore


@pytest.fixture
def sqlite_store(clock) -> Iterator[SQLiteKeyValueStore]:
    store = SQLiteKeyValueStore(":memory:", clock=clock)
    store.initialize()
    yield store
    store.close()


@pytest.fixture(params=["memory", "sqlite"])
def store(request, memory_store: InMemoryKeyValueStore, sqlite_store: SQLiteKeyValueStore):
    return memory_store if request.param == "memory" else sqlite_store


class TestKeyValueStore:
    def test_missing_key_returns_none(self, store) -> None:
        assert store.get("ip:nobody") is None

    def test_put_then_get(self, store) -> None:
        store.put("ip:A", {"date": "2026-10-19", "used": 1, "bonusUsed": False})
        assert store.get("ip:A") == {"date": "2026-10-19", "used": 1, "bonusUsed": False}

    def test_put_overwrites(self, store) -> None:
        store.put("k", {"used": 1})
        store.put("k", {"used": 2})
        assert store.get("k") == {"used": 2}

    def test_delete(self, store) -> None:
        store.put("k", [1, 2, 3])
        store.delete("k")
        assert store.get("k") is None

    def test_delete_missing_key_is_noop(self, store) -> None:
        store.delete("never-written")

    def test_reads_are_independent_copies(self, store) -> None:
        store.put("k", {"used": 1})
        value = store.get("k")
        value["used"] = 99
        assert store.get("k") == {"used": 1}

    def test_entry_expires_after_ttl(self, store, clock) -> None:
        store.put("k", {"used": 1}, ttl_seconds=10)
        clock.advance(9)
        assert store.get("k") == {"used": 1}
        clock.advance(1)
        assert store.get("k") is None

    def test_no_ttl_never_expires(self, store, clock) -> None:
        store.put("k", "forever")
        clock.advance(10**9)
        assert store.get("k") == "forever"


class TestInMemoryKeyValueStore:
    def test_expired_entry_is_dropped_on_read(
        self, memory_store: InMemoryKeyValueStore, clock
    ) -> None:
        memory_store.put("k", 1, ttl_seconds=1)
        clock.advance(5)
        assert len(memory_store) == 1
        memory_store.get("k")
        assert len(memory_store) == 0


class TestSQLiteKeyValueStore:
    def test_purge_expired(self, sqlite_store: SQLiteKeyValueStore, clock) -> None:
        sqlite_store.put("short", 1, ttl_seconds=5)
        sqlite_store.put("long", 2, ttl_seconds=500)
        sqlite_store.put("forever", 3)
        clock.advance(10)

        assert sqlite_store.purge_expired() == 1
        assert sqlite_store.get("long") == 2
        assert sqlite_store.get("forever") == 3

    def test_initialize_is_idempotent(self, sqlite_store: SQLiteKeyValueStore) -> None:
        sqlite_store.put("k", 1)
        sqlite_store.initialize()
        assert sqlite_store.get("k") == 1

    def test_persists_across_connections(self, tmp_path: Path) -> None:
        path = tmp_path / "usage.db"
        first = SQLiteKeyValueStore(path)
        first.initialize()
        first.put("ip:A", {"used": 2}, ttl_seconds=3600)
        first.close()

        second = SQLiteKeyValueStore(path)
        assert second.get("ip:A") == {"used": 2}
        second.close()

    def test_missing_table_raises_store_unavailable(self) -> None:
        store = SQLiteKeyValueStore(":memory:")
        with pytest.raises(StoreUnavailableError):
            store.get("k")
        with pytest.raises(StoreUnavailableError):
            store.put("k", 1)
        store.close()

    def test_unopenable_path_raises_store_unavailable(self, tmp_path: Path) -> None:
        store = SQLiteKeyValueStore(tmp_path / "missing" / "dir" / "usage.db")
        with pytest.raises(StoreUnavailableError):
            store.initialize()


def _row_count(store: SQLiteKeyValueStore) -> int:
    return store.get_connection().execute("SELECT COUNT(*) FROM kv_store").fetchone()[0]


class TestExpirySweep:
    def test_memory_put_sweeps_stale_identifiers(
        self, memory_store: InMemoryKeyValueStore, clock
    ) -> None:
        for n in range(1000):
            memory_store.put(f"ip:10.0.{n // 256}.{n % 256}", {"used": 1}, ttl_seconds=604800)
        clock.advance(4 * 604800)

        memory_store.put("ip:203.0.113.7", {"used": 1}, ttl_seconds=604800)

        assert len(memory_store) == 1

    def test_memory_sweep_waits_for_interval(self, clock) -> None:
        store = InMemoryKeyValueStore(clock=clock, sweep_interval=100)
        store.put("old", 1, ttl_seconds=1)
        clock.advance(50)
        store.put("new", 2)
        assert len(store) == 2

        clock.advance(50)
        store.put("newer", 3)
        assert len(store) == 2

    def test_memory_purge_keeps_live_entries(
        self, memory_store: InMemoryKeyValueStore, clock
    ) -> None:
        memory_store.put("short", 1, ttl_seconds=5)
        memory_store.put("long", 2, ttl_seconds=500)
        memory_store.put("forever", 3)
        clock.advance(10)

        assert memory_store.purge_expired() == 1
        assert len(memory_store) == 2

    def test_sqlite_put_sweeps_stale_rows(
        self, sqlite_store: SQLiteKeyValueStore, clock
    ) -> None:
        for n in range(50):
            sqlite_store.put(f"ip:10.0.0.{n}", {"used": 1}, ttl_seconds=604800)
        clock.advance(4 * 604800)

        sqlite_store.put("ip:203.0.113.7", {"used": 1}, ttl_seconds=604800)

        assert _row_count(sqlite_store) == 1

    def test_sqlite_initialize_purges_rows_expired_while_closed(
        self, tmp_path: Path, clock
    ) -> None:
        path = tmp_path / "usage.db"
        first = SQLiteKeyValueStore(path, clock=clock)
        first.initialize()
        first.put("ip:A", {"used": 1}, ttl_seconds=10)
        first.put("ip:B", {"used": 1})
        first.close()
        clock.advance(60 * 60)

        second = SQLiteKeyValueStore(path, clock=clock)
        second.initialize()
        assert _row_count(second) == 1
        second.close()


class TestCorruptRows:
    def test_unreadable_value_reads_as_missing(self, sqlite_store: SQLiteKeyValueStore) -> None:
        conn = sqlite_store.get_connection()
        conn.execute("INSERT INTO kv_store (key, value) VALUES ('ip:A', 'not json')")
        conn.commit()

        assert sqlite_store.get("ip:A") is None

    def test_usage_check_treats_corrupt_record_as_fresh(
        self, sqlite_store: SQLiteKeyValueStore
    ) -> None:
        from chromagen.services.usage import UsageServiceImpl

        conn = sqlite_store.get_connection()
        conn.execute("INSERT INTO kv_store (key, value) VALUES ('ip:A', 'not json')")
        conn.commit()

        service = UsageServiceImpl(sqlite_store)
        assert service.check("A").remaining == 3
        assert service.consume("A").remaining == 2
