"""Custom exception hierarchy for pygeocache."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pygeocache._constants import RecordKind


class GeocacheError(Exception):
    """Base exception for all pygeocache errors."""


class GeocacheConfigError(GeocacheError):
    """Invalid or missing configuration."""


class GeocacheUnauthenticatedError(GeocacheError):
    """No caller identity could be resolved for the operation."""


class GeocacheSerializationError(GeocacheError):
    """Stored bytes could not be decoded into a record."""


class GeocacheRecordError(GeocacheError):
    """A referenced record id is unusable or in the wrong existence state."""

    def __init__(self, message: str, *, kind: RecordKind, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(message)


class GeocacheNotFoundError(GeocacheRecordError):
    """Referenced record does not exist."""


class GeocacheAlreadyExistsError(GeocacheRecordError):
    """Creation target is already present on the ledger."""


class GeocacheInvalidIdError(GeocacheRecordError):
    """Creation target id is empty."""


class GeocachePermissionError(GeocacheError):
    """Caller is not the identity the operation requires.

    Covers the maintainer check on cache mutations, the log-owner check on
    trackable transfers and chain-of-custody mismatches between logs.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class GeocacheInvalidPasswordError(GeocacheError):
    """Supplied cache password does not match the stored one."""

    def __init__(self, cache_id: str) -> None:
        self.cache_id = cache_id
        super().__init__(f"Wrong pass for cache {cache_id}")


class GeocacheConflictError(GeocacheError):
    """Trackable is already in the requested state, or sites differ on removal."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class GeocacheTemporalOrderError(GeocacheError):
    """New visit log does not strictly follow the trackable's current log."""

    def __init__(self, message: str, *, old_time: str, new_time: str) -> None:
        self.old_time = old_time
        self.new_time = new_time
        super().__init__(message)


class LedgerError(GeocacheError):
    """State store rejected a request (bad key, bad value, failed commit)."""


class LedgerConflictError(LedgerError):
    """Commit rejected because a concurrent transaction changed what we read.

    Raised by :meth:`pygeocache.ledger.MemoryLedger.commit` when the read set
    of a transaction is no longer current.  Nothing of the transaction is
    applied.  :class:`pygeocache.client.GeocacheClient` may re-run the whole
    operation, depending on ``GeocacheConfig.commit_retries``.
    """

    def __init__(self, message: str, *, key: str) -> None:
        self.key = key
        super().__init__(message)
