from __future__ import annotations

import pytest

from pygeocache.exceptions import LedgerConflictError, LedgerError
from pygeocache.ledger import LedgerTransaction, MemoryLedger


async def _seed(ledger: MemoryLedger, items: dict[str, bytes]) -> None:
    tx = ledger.begin()
    for key, value in items.items():
        await tx.put(key, value)
    await tx.commit()


@pytest.mark.asyncio
async def test_writes_invisible_until_commit() -> None:
    ledger = MemoryLedger()
    tx = ledger.begin()
    await tx.put("CACHE-c1", b"{}")

    assert await tx.get("CACHE-c1") is None
    assert ledger.snapshot() == {}

    version = await tx.commit()
    assert version == 1
    assert ledger.snapshot() == {"CACHE-c1": b"{}"}


@pytest.mark.asyncio
async def test_all_writes_share_one_commit_version() -> None:
    ledger = MemoryLedger()
    await _seed(ledger, {"LOG-l1": b"1", "TRACKABLE-t1": b"2"})

    assert ledger.version == 1
    assert await ledger.get_versioned("LOG-l1") == (b"1", 1)
    assert await ledger.get_versioned("TRACKABLE-t1") == (b"2", 1)


@pytest.mark.asyncio
async def test_scan_is_ordered_and_half_open() -> None:
    ledger = MemoryLedger()
    await _seed(ledger, {"LOG-b": b"b", "CACHE-x": b"x", "LOG-a": b"a", "LOG-c": b"c"})

    tx = ledger.begin()
    assert await tx.scan("LOG-", "LOG-c") == [("LOG-a", b"a"), ("LOG-b", b"b")]
    assert await tx.scan("LOG-", "LOG-\U0010ffff") == [("LOG-a", b"a"), ("LOG-b", b"b"), ("LOG-c", b"c")]


@pytest.mark.asyncio
async def test_delete_removes_key_from_scans() -> None:
    ledger = MemoryLedger()
    await _seed(ledger, {"CACHE-a": b"a", "CACHE-b": b"b"})

    tx = ledger.begin()
    await tx.delete("CACHE-a")
    await tx.commit()

    assert list(ledger) == ["CACHE-b"]
    assert await ledger.get_versioned("CACHE-a") is None


@pytest.mark.asyncio
async def test_read_only_transaction_does_not_commit() -> None:
    ledger = MemoryLedger()
    await _seed(ledger, {"CACHE-a": b"a"})

    tx = ledger.begin()
    await tx.get("CACHE-a")
    assert await tx.commit() is None
    assert ledger.version == 1


@pytest.mark.asyncio
async def test_conflicting_read_rejects_commit() -> None:
    ledger = MemoryLedger()
    await _seed(ledger, {"TRACKABLE-t1": b"v1"})

    first = ledger.begin()
    second = ledger.begin()
    await first.get("TRACKABLE-t1")
    await second.get("TRACKABLE-t1")
    await first.put("TRACKABLE-t1", b"first")
    await second.put("TRACKABLE-t1", b"second")

    await first.commit()
    with pytest.raises(LedgerConflictError) as exc_info:
        await second.commit()

    assert exc_info.value.key == "TRACKABLE-t1"
    assert ledger.snapshot() == {"TRACKABLE-t1": b"first"}


@pytest.mark.asyncio
async def test_concurrent_create_of_absent_key_conflicts() -> None:
    ledger = MemoryLedger()
    first = ledger.begin()
    second = ledger.begin()
    assert await first.get("CACHE-c1") is None
    assert await second.get("CACHE-c1") is None
    await first.put("CACHE-c1", b"first")
    await second.put("CACHE-c1", b"second")

    await first.commit()
    with pytest.raises(LedgerConflictError):
        await second.commit()


@pytest.mark.asyncio
async def test_phantom_in_scanned_range_rejects_commit() -> None:
    ledger = MemoryLedger()
    await _seed(ledger, {"LOG-a": b"a"})

    scanner = ledger.begin()
    await scanner.scan("LOG-", "LOG-~")
    await scanner.put("CACHE-summary", b"1")

    await _seed(ledger, {"LOG-b": b"b"})

    with pytest.raises(LedgerConflictError):
        await scanner.commit()
    assert "CACHE-summary" not in ledger.snapshot()


@pytest.mark.asyncio
async def test_failed_commit_applies_nothing() -> None:
    ledger = MemoryLedger()
    await _seed(ledger, {"LOG-l1": b"old"})

    tx = ledger.begin()
    await tx.get("LOG-l1")
    await tx.put("LOG-l1", b"new")
    await tx.put("TRACKABLE-t1", b"new")
    await _seed(ledger, {"LOG-l1": b"raced"})

    with pytest.raises(LedgerConflictError):
        await tx.commit()
    assert ledger.snapshot() == {"LOG-l1": b"raced"}
    assert ledger.version == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("key", "value"),
    [("", b"x"), ("CACHE-c1", b""), ("CACHE-c1", "text")],
)
async def test_put_rejects_bad_input(key: str, value: bytes) -> None:
    tx = MemoryLedger().begin()
    with pytest.raises(LedgerError):
        await tx.put(key, value)


@pytest.mark.asyncio
async def test_transaction_is_single_use() -> None:
    ledger = MemoryLedger()
    tx = LedgerTransaction(ledger, tx_id="tx-1")
    await tx.put("CACHE-a", b"a")
    await tx.commit()

    assert tx.tx_id == "tx-1"
    with pytest.raises(LedgerError):
        await tx.get("CACHE-a")
    with pytest.raises(LedgerError):
        await tx.commit()
