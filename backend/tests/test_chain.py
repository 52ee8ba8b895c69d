"""Tests for ledger hash strategies and stores"""
import random
import threading
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.utils.chain import GENESIS_HASH, DigestHasher, PseudoHasher, get_hasher, verify_chain
from app.utils.ledger_store import InMemoryLedgerStore, LedgerEntry, SqlLedgerStore, build_ledger_store


@pytest.fixture
def sql_session_factory():
    """Session factory over a private in-memory SQLite database"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


def test_pseudo_hash_format():
    """Test that pseudo-hashes are 0x plus eight hex digits"""
    hasher = PseudoHasher(random.Random(7))
    value = hasher(1, datetime.now(timezone.utc), ["Wheat"], GENESIS_HASH)
    assert value.startswith("0x")
    assert len(value) == 10
    int(value, 16)


def test_pseudo_hash_ignores_content():
    """Test that the same entry fields produce unrelated pseudo-hashes"""
    hasher = PseudoHasher(random.Random(7))
    ts = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
    values = {hasher(1, ts, ["Wheat"], GENESIS_HASH) for _ in range(20)}
    assert len(values) > 1


def test_digest_hash_is_deterministic():
    """Test that the sha256 hash depends only on entry content"""
    hasher = DigestHasher()
    ts = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
    first = hasher(1, ts, ["Wheat", "Barley"], GENESIS_HASH)
    assert first == hasher(1, ts, ("Wheat", "Barley"), GENESIS_HASH)
    assert first != hasher(1, ts, ["Wheat"], GENESIS_HASH)
    assert len(first) == 2 + 64


def test_get_hasher_rejects_unknown_mode():
    with pytest.raises(ValueError):
        get_hasher("md5")


def test_memory_store_append_contract():
    """Test ids, genesis sentinel and linkage for N appends"""
    store = InMemoryLedgerStore(PseudoHasher())
    for i in range(25):
        store.append([f"Crop {i}"])

    entries = store.entries()
    assert len(store) == 25
    assert [e.id for e in entries] == list(range(1, 26))
    assert entries[0].previous_hash == GENESIS_HASH
    for prev, entry in zip(entries, entries[1:]):
        assert entry.previous_hash == prev.hash


def test_memory_store_read_recent_window():
    store = InMemoryLedgerStore(PseudoHasher())
    assert store.read_recent(10) == []

    for i in range(4):
        store.append(["Oats"])
    assert [e.id for e in store.read_recent(10)] == [1, 2, 3, 4]
    assert [e.id for e in store.read_recent(2)] == [3, 4]
    assert store.read_recent(0) == []


def test_entries_are_immutable():
    store = InMemoryLedgerStore(PseudoHasher())
    entry = store.append(["Rye"])
    with pytest.raises(AttributeError):
        entry.hash = "0xdeadbeef"


def test_memory_store_concurrent_appends():
    """Test that parallel appends keep ids unique and the chain linked"""
    store = InMemoryLedgerStore(PseudoHasher())

    def worker():
        for _ in range(50):
            store.append(["Corn"])

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    entries = store.entries()
    assert [e.id for e in entries] == list(range(1, 401))
    assert verify_chain(entries, store.hasher).valid


def test_verify_chain_detects_broken_link():
    entries = [
        LedgerEntry(1, "0xaaaaaaaa", datetime.now(timezone.utc), ("Wheat",), GENESIS_HASH),
        LedgerEntry(2, "0xbbbbbbbb", datetime.now(timezone.utc), ("Corn",), "0xaaaaaaaa"),
        LedgerEntry(3, "0xcccccccc", datetime.now(timezone.utc), ("Rice",), "0x12345678"),
    ]
    check = verify_chain(entries, PseudoHasher())
    assert check.valid is False
    assert check.broken_at == 3
    assert check.total_entries == 3
    assert check.content_verified is False


def test_verify_chain_requires_genesis_sentinel():
    entries = [LedgerEntry(1, "0xaaaaaaaa", datetime.now(timezone.utc), ("Wheat",), "0xffffffff")]
    assert verify_chain(entries, PseudoHasher()).broken_at == 1


def test_sql_store_matches_memory_contract(sql_session_factory):
    """Test the database store keeps the same append/read contract"""
    store = SqlLedgerStore(sql_session_factory, PseudoHasher())
    assert store.read_recent(10) == []

    for i in range(12):
        store.append(["Wheat", "Barley", "Oats"])

    assert len(store) == 12
    recent = store.read_recent(10)
    assert [e.id for e in recent] == list(range(3, 13))
    assert recent[0].recommendations == ("Wheat", "Barley", "Oats")

    entries = store.entries()
    assert entries[0].previous_hash == GENESIS_HASH
    assert verify_chain(entries, store.hasher).valid


def test_sql_store_digest_chain_survives_round_trip(sql_session_factory):
    """Test that sha256 hashes recompute from stored rows"""
    store = SqlLedgerStore(sql_session_factory, DigestHasher())
    for crop in ("Rice", "Cotton", "Sugarcane"):
        store.append([crop])

    check = verify_chain(store.entries(), store.hasher)
    assert check.valid is True
    assert check.content_verified is True


def test_build_ledger_store_defaults_to_memory():
    store = build_ledger_store("memory", "pseudo")
    assert isinstance(store, InMemoryLedgerStore)
    assert store.hasher.name == "pseudo"

    store = build_ledger_store("memory", "sha256")
    assert store.hasher.name == "sha256"


def test_stores_stamp_entries_in_utc(sql_session_factory):
    """Test that both stores hand back timezone-aware UTC timestamps"""
    for store in (InMemoryLedgerStore(PseudoHasher()), SqlLedgerStore(sql_session_factory, PseudoHasher())):
        appended = store.append(["Kale"])
        stored = store.read_recent(1)[0]
        assert appended.timestamp.utcoffset() == timedelta(0)
        assert stored.timestamp.utcoffset() == timedelta(0)
        assert stored.timestamp == appended.timestamp
