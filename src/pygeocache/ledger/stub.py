"""Structural interfaces between the registries and a ledger backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

Version = int


class LedgerStub(Protocol):
    """Key-value view a single operation works against.

    Registry functions only ever see this interface, which keeps them
    independent of the ledger backend and makes test doubles trivial.
    """

    async def get(self, key: str) -> bytes | None:
        ...

    async def put(self, key: str, value: bytes) -> None:
        ...

    async def delete(self, key: str) -> None:
        ...

    async def scan(self, low: str, high: str) -> list[tuple[str, bytes]]:
        ...


@dataclass(frozen=True, slots=True)
class RangeRead:
    """A range scan and the exact key/version list it observed."""

    low: str
    high: str
    observed: tuple[tuple[str, Version], ...]


@dataclass(slots=True)
class ReadWriteSet:
    """What one transaction read and what it wants to write.

    ``reads`` maps a key to the version seen (``None`` when absent).
    ``writes`` maps a key to its new value, ``None`` meaning delete.
    """

    reads: dict[str, Version | None] = field(default_factory=dict)
    range_reads: list[RangeRead] = field(default_factory=list)
    writes: dict[str, bytes | None] = field(default_factory=dict)


class VersionedLedger(Protocol):
    """Backend that serves versioned reads and validates atomic commits."""

    async def get_versioned(self, key: str) -> tuple[bytes, Version] | None:
        ...

    async def scan_versioned(self, low: str, high: str) -> list[tuple[str, bytes, Version]]:
        ...

    async def commit(self, rwset: ReadWriteSet) -> Version:
        ...
