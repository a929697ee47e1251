"""Per-operation ledger transaction.

A transaction is the :class:`~pygeocache.ledger.stub.LedgerStub` handed to
the registries.  Reads go to committed state and are recorded with their
versions; writes are buffered and only reach the ledger, all at once, on
:meth:`LedgerTransaction.commit`.  Reads do not observe the transaction's
own buffered writes.
"""

from __future__ import annotations

import logging
import secrets

from pygeocache.exceptions import LedgerError
from pygeocache.ledger.stub import RangeRead, ReadWriteSet, Version, VersionedLedger

_logger = logging.getLogger(__name__)


def _check_key(key: str) -> None:
    if not isinstance(key, str) or not key:
        raise LedgerError(f"ledger keys must be non-empty strings, got {key!r}")


class LedgerTransaction:
    """Buffered read-validate-write unit for one operation."""

    def __init__(self, ledger: VersionedLedger, *, tx_id: str | None = None) -> None:
        self._ledger = ledger
        self._tx_id = tx_id or secrets.token_hex(8)
        self._rwset = ReadWriteSet()
        self._done = False

    @property
    def tx_id(self) -> str:
        return self._tx_id

    @property
    def rwset(self) -> ReadWriteSet:
        return self._rwset

    @property
    def has_writes(self) -> bool:
        return bool(self._rwset.writes)

    def _require_open(self) -> None:
        if self._done:
            raise LedgerError(f"transaction {self._tx_id} is already committed")

    async def get(self, key: str) -> bytes | None:
        self._require_open()
        _check_key(key)
        entry = await self._ledger.get_versioned(key)
        version: Version | None = entry[1] if entry is not None else None
        # Keep the first observed version; a later re-read must not hide a conflict.
        self._rwset.reads.setdefault(key, version)
        return entry[0] if entry is not None else None

    async def put(self, key: str, value: bytes) -> None:
        self._require_open()
        _check_key(key)
        if not isinstance(value, bytes):
            raise LedgerError(f"ledger values must be bytes, got {type(value).__name__}")
        if not value:
            raise LedgerError(f"refusing to store an empty value under {key!r}")
        self._rwset.writes[key] = value

    async def delete(self, key: str) -> None:
        self._require_open()
        _check_key(key)
        self._rwset.writes[key] = None

    async def scan(self, low: str, high: str) -> list[tuple[str, bytes]]:
        self._require_open()
        entries = await self._ledger.scan_versioned(low, high)
        self._rwset.range_reads.append(
            RangeRead(low=low, high=high, observed=tuple((key, version) for key, _, version in entries))
        )
        return [(key, value) for key, value, _ in entries]

    async def commit(self) -> Version | None:
        """Submit all buffered writes as one atomic unit.

        Returns the commit version, or ``None`` for a read-only transaction
        (nothing is submitted).  Raises
        :class:`~pygeocache.exceptions.LedgerConflictError` when a concurrent
        commit invalidated what this transaction read.
        """
        self._require_open()
        self._done = True
        if not self._rwset.writes:
            return None
        version = await self._ledger.commit(self._rwset)
        _logger.debug("Transaction %s committed at version %d", self._tx_id, version)
        return version
