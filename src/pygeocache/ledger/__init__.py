"""Ledger layer.

Registries talk to a :class:`LedgerStub`; the client wraps each operation in
a :class:`LedgerTransaction` whose writes are committed atomically to a
:class:`VersionedLedger` backend such as :class:`MemoryLedger`.
"""

from pygeocache.ledger.memory import MemoryLedger
from pygeocache.ledger.stub import LedgerStub, RangeRead, ReadWriteSet, Version, VersionedLedger
from pygeocache.ledger.transaction import LedgerTransaction

__all__ = [
    "LedgerStub",
    "LedgerTransaction",
    "MemoryLedger",
    "RangeRead",
    "ReadWriteSet",
    "Version",
    "VersionedLedger",
]
