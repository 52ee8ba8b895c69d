"""Append-only recommendation ledger storage.

Both stores share one contract: ``append`` assigns the next 1-based id,
links the entry to the last stored hash and stores it; ``read_recent``
returns the newest ``n`` entries oldest first. Id assignment, the
previous-hash lookup and the write happen under one lock.
"""
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Sequence, Tuple

from sqlalchemy.orm import sessionmaker

from app.models.ledger_entry import LedgerEntryRow
from app.utils.chain import GENESIS_HASH, get_hasher
from app.utils.logger import logger


@dataclass(frozen=True)
class LedgerEntry:
    """One immutable ledger record"""

    id: int
    hash: str
    timestamp: datetime
    recommendations: Tuple[str, ...]
    previous_hash: str


class InMemoryLedgerStore:
    """Process-wide ledger kept in a list; lost on restart."""

    backend = "memory"

    def __init__(self, hasher):
        self.hasher = hasher
        self._entries: List[LedgerEntry] = []
        self._lock = threading.Lock()

    def append(self, recommendations: Sequence[str]) -> LedgerEntry:
        names = tuple(recommendations)
        with self._lock:
            entry_id = len(self._entries) + 1
            previous_hash = self._entries[-1].hash if self._entries else GENESIS_HASH
            timestamp = datetime.now(timezone.utc)
            entry = LedgerEntry(
                id=entry_id,
                hash=self.hasher(entry_id, timestamp, names, previous_hash),
                timestamp=timestamp,
                recommendations=names,
                previous_hash=previous_hash,
            )
            self._entries.append(entry)

        logger.info(f"Ledger entry appended: {entry.id}", extra={"entry_id": entry.id})
        return entry

    def read_recent(self, n: int) -> List[LedgerEntry]:
        if n <= 0:
            return []
        with self._lock:
            return self._entries[-n:]

    def entries(self) -> List[LedgerEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class SqlLedgerStore:
    """Ledger on the ``ledger_entries`` table, for durable deployments."""

    backend = "database"

    def __init__(self, session_factory: sessionmaker, hasher):
        self.hasher = hasher
        self._session_factory = session_factory
        self._lock = threading.Lock()

    @staticmethod
    def _to_entry(row: LedgerEntryRow) -> LedgerEntry:
        timestamp = row.timestamp
        if timestamp.tzinfo is None:
            # SQLite returns naive values; stored times are always UTC
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        else:
            timestamp = timestamp.astimezone(timezone.utc)
        return LedgerEntry(
            id=row.id,
            hash=row.hash,
            timestamp=timestamp,
            recommendations=tuple(row.recommendations or ()),
            previous_hash=row.previous_hash,
        )

    def append(self, recommendations: Sequence[str]) -> LedgerEntry:
        names = tuple(recommendations)
        with self._lock, self._session_factory() as db:
            last = db.query(LedgerEntryRow).order_by(LedgerEntryRow.id.desc()).first()
            entry_id = last.id + 1 if last else 1
            previous_hash = last.hash if last else GENESIS_HASH
            timestamp = datetime.now(timezone.utc)
            row = LedgerEntryRow(
                id=entry_id,
                hash=self.hasher(entry_id, timestamp, names, previous_hash),
                timestamp=timestamp,
                recommendations=list(names),
                previous_hash=previous_hash,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            entry = self._to_entry(row)

        logger.info(f"Ledger entry appended: {entry.id}", extra={"entry_id": entry.id})
        return entry

    def read_recent(self, n: int) -> List[LedgerEntry]:
        if n <= 0:
            return []
        with self._session_factory() as db:
            rows = db.query(LedgerEntryRow).order_by(LedgerEntryRow.id.desc()).limit(n).all()
            return [self._to_entry(row) for row in reversed(rows)]

    def entries(self) -> List[LedgerEntry]:
        with self._session_factory() as db:
            rows = db.query(LedgerEntryRow).order_by(LedgerEntryRow.id.asc()).all()
            return [self._to_entry(row) for row in rows]

    def __len__(self) -> int:
        with self._session_factory() as db:
            return db.query(LedgerEntryRow).count()


def build_ledger_store(backend: str, hash_mode: str, rng=None):
    """Create the ledger store selected by ``LEDGER_BACKEND``."""
    hasher = get_hasher(hash_mode, rng)
    if backend == "database":
        from app.database import SessionLocal, init_db

        init_db()
        return SqlLedgerStore(SessionLocal, hasher)
    return InMemoryLedgerStore(hasher)
