"""Ledger hash strategies and chain verification.

Each ledger entry stores its own ``hash`` and the ``previous_hash`` of the
entry before it. Two strategies produce the ``hash`` value:

* ``pseudo`` - a random ``0x``-prefixed 8-hex-digit token. It is not derived
  from the entry, so only the structural linkage can be checked.
* ``sha256`` - ``0x`` + SHA-256 over the canonical JSON of the entry fields.
  Recomputing it on read detects edited or reordered entries.
"""
import hashlib
import json
import random
from datetime import datetime
from typing import List, NamedTuple, Optional, Sequence

GENESIS_HASH = "0x0"


class PseudoHasher:
    """Random token in place of a digest. Collisions are accepted."""

    name = "pseudo"
    content_derived = False

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def __call__(
        self,
        entry_id: int,
        timestamp: datetime,
        recommendations: Sequence[str],
        previous_hash: str,
    ) -> str:
        return f"0x{self._rng.getrandbits(32):08x}"


class DigestHasher:
    """SHA-256 over the canonical serialization of an entry."""

    name = "sha256"
    content_derived = True

    def __call__(
        self,
        entry_id: int,
        timestamp: datetime,
        recommendations: Sequence[str],
        previous_hash: str,
    ) -> str:
        block = json.dumps(
            {
                "id": entry_id,
                "timestamp": timestamp.isoformat(),
                "recommendations": list(recommendations),
                "previous_hash": previous_hash,
            },
            sort_keys=True,
            separators=(",", ":"),
        )
        return "0x" + hashlib.sha256(block.encode("utf-8")).hexdigest()


def get_hasher(mode: str, rng: Optional[random.Random] = None):
    """Return the hash strategy configured by ``LEDGER_HASH_MODE``."""
    if mode == "sha256":
        return DigestHasher()
    if mode == "pseudo":
        return PseudoHasher(rng)
    raise ValueError(f"Unknown ledger hash mode: {mode}")


class ChainCheck(NamedTuple):
    valid: bool
    total_entries: int
    broken_at: Optional[int]  # id of the first bad entry
    content_verified: bool


def verify_chain(entries: List, hasher) -> ChainCheck:
    """Walk ``entries`` oldest first and check every link.

    The first entry must carry :data:`GENESIS_HASH` as ``previous_hash`` and
    every later entry the ``hash`` of its predecessor. With a content-derived
    hasher each ``hash`` is recomputed as well.
    """
    content = bool(getattr(hasher, "content_derived", False))
    previous = GENESIS_HASH
    for entry in entries:
        if entry.previous_hash != previous:
            return ChainCheck(False, len(entries), entry.id, content)
        if content:
            expected = hasher(entry.id, entry.timestamp, entry.recommendations, entry.previous_hash)
            if entry.hash != expected:
                return ChainCheck(False, len(entries), entry.id, content)
        previous = entry.hash
    return ChainCheck(True, len(entries), None, content)
