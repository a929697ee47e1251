"""Deterministic in-memory ledger.

Reference backend with optimistic concurrency: every key carries the
version of the commit that last wrote it, and a commit is only applied when
everything its transaction read is still current.
"""

from __future__ import annotations

import bisect
import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass

from pygeocache.exceptions import LedgerConflictError
from pygeocache.ledger.stub import ReadWriteSet, Version
from pygeocache.ledger.transaction import LedgerTransaction

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Entry:
    value: bytes
    version: Version


class MemoryLedger:
    """In-memory versioned key-value ledger.

    This ledger is designed to be deterministic: given the same sequence of
    commits, it will hold the same keys, values and versions.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self._keys: list[str] = []
        self._version: Version = 0
        self._lock = threading.Lock()

    @property
    def version(self) -> Version:
        """Version of the latest applied commit (``0`` when empty)."""
        return self._version

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._keys))

    def begin(self, *, tx_id: str | None = None) -> LedgerTransaction:
        """Open a transaction against this ledger."""
        return LedgerTransaction(self, tx_id=tx_id)

    def snapshot(self) -> dict[str, bytes]:
        """Copy of the committed key/value state."""
        with self._lock:
            return {key: self._entries[key].value for key in self._keys}

    def _range_keys(self, low: str, high: str) -> list[str]:
        start = bisect.bisect_left(self._keys, low)
        end = bisect.bisect_left(self._keys, high)
        return self._keys[start:end]

    async def get_versioned(self, key: str) -> tuple[bytes, Version] | None:
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        return entry.value, entry.version

    async def scan_versioned(self, low: str, high: str) -> list[tuple[str, bytes, Version]]:
        with self._lock:
            return [(key, self._entries[key].value, self._entries[key].version) for key in self._range_keys(low, high)]

    async def commit(self, rwset: ReadWriteSet) -> Version:
        """Validate *rwset* against current state and apply its writes.

        Nothing is applied when validation fails.
        """
        with self._lock:
            for key, seen in rwset.reads.items():
                entry = self._entries.get(key)
                current = entry.version if entry is not None else None
                if current != seen:
                    raise LedgerConflictError(
                        f"MVCC read conflict on {key!r}: read version {seen}, current {current}",
                        key=key,
                    )

            for range_read in rwset.range_reads:
                current_range = tuple(
                    (key, self._entries[key].version) for key in self._range_keys(range_read.low, range_read.high)
                )
                if current_range != range_read.observed:
                    raise LedgerConflictError(
                        f"Phantom read in range [{range_read.low!r}, {range_read.high!r})",
                        key=range_read.low,
                    )

            self._version += 1
            for key, value in rwset.writes.items():
                if value is None:
                    if self._entries.pop(key, None) is not None:
                        del self._keys[bisect.bisect_left(self._keys, key)]
                    continue
                if key not in self._entries:
                    bisect.insort(self._keys, key)
                self._entries[key] = _Entry(value=value, version=self._version)

            _logger.debug("Applied commit %d (%d writes)", self._version, len(rwset.writes))
            return self._version
