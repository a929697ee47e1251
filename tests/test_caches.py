from __future__ import annotations

import pytest

from pygeocache.client import GeocacheClient
from pygeocache.codec import deserialize
from pygeocache.exceptions import (
    GeocacheAlreadyExistsError,
    GeocacheInvalidIdError,
    GeocacheNotFoundError,
    GeocachePermissionError,
)
from pygeocache.identity import OperationContext, StaticIdentityResolver, resolve_context
from pygeocache.ledger import MemoryLedger
from pygeocache.models import CacheSite

ALICE = OperationContext(caller_identity="alice")
BOB = OperationContext(caller_identity="bob")


def _client() -> tuple[GeocacheClient, MemoryLedger]:
    ledger = MemoryLedger()
    return GeocacheClient(ledger), ledger


@pytest.mark.asyncio
async def test_create_then_read_by_maintainer_and_stranger() -> None:
    client, _ = _client()
    created = await client.create_cache(ALICE, "c1", "Cache", "Desc", 10, 20, "secret")

    assert created.maintainer == "alice"
    assert created.report == ""
    assert (await client.read_cache(ALICE, "c1")).password == "secret"

    seen_by_bob = await client.read_cache(BOB, "c1")
    assert seen_by_bob.password == ""
    assert seen_by_bob.maintainer == "alice"
    assert seen_by_bob.name == "Cache"


@pytest.mark.asyncio
async def test_create_existing_cache_rejected() -> None:
    client, ledger = _client()
    await client.create_cache(ALICE, "c1", "Cache", "Desc", 10, 20, "secret")
    before = ledger.snapshot()

    with pytest.raises(GeocacheAlreadyExistsError) as exc_info:
        await client.create_cache(BOB, "c1", "Other", "", 0, 0, "x")

    assert str(exc_info.value) == "Cache c1 already exists"
    assert exc_info.value.record_id == "c1"
    assert ledger.snapshot() == before


@pytest.mark.asyncio
async def test_read_missing_cache() -> None:
    client, _ = _client()
    with pytest.raises(GeocacheNotFoundError, match="Cache nope does not exist"):
        await client.read_cache(ALICE, "nope")


@pytest.mark.asyncio
async def test_update_keeps_maintainer() -> None:
    client, _ = _client()
    await client.create_cache(ALICE, "c1", "Cache", "Desc", 10, 20, "secret")

    updated = await client.update_cache(ALICE, "c1", "Renamed", "New", 1.5, 2.5, "newpass", "all good")

    assert updated.maintainer == "alice"
    stored = await client.read_cache(ALICE, "c1")
    assert (stored.name, stored.gps_x, stored.password, stored.report) == ("Renamed", 1.5, "newpass", "all good")


@pytest.mark.asyncio
async def test_update_and_delete_require_maintainer() -> None:
    client, ledger = _client()
    await client.create_cache(ALICE, "c1", "Cache", "Desc", 10, 20, "secret")
    before = ledger.snapshot()

    with pytest.raises(GeocachePermissionError, match="Not maintainer"):
        await client.update_cache(BOB, "c1", "Mine", "", 0, 0, "x", "")
    with pytest.raises(GeocachePermissionError):
        await client.delete_cache(BOB, "c1")
    with pytest.raises(GeocachePermissionError):
        await client.read_cache_pass(BOB, "c1")

    assert ledger.snapshot() == before


@pytest.mark.asyncio
async def test_delete_cache() -> None:
    client, _ = _client()
    await client.create_cache(ALICE, "c1", "Cache", "Desc", 10, 20, "secret")

    assert await client.delete_cache(ALICE, "c1") == "c1"
    assert await client.cache_exists(ALICE, "c1") is False
    with pytest.raises(GeocacheNotFoundError):
        await client.delete_cache(ALICE, "c1")


@pytest.mark.asyncio
async def test_read_cache_pass_for_maintainer() -> None:
    client, _ = _client()
    await client.create_cache(ALICE, "c1", "Cache", "Desc", 10, 20, "secret")
    assert await client.read_cache_pass(ALICE, "c1") == "secret"


@pytest.mark.asyncio
async def test_anyone_may_report() -> None:
    client, ledger = _client()
    await client.create_cache(ALICE, "c1", "Cache", "Desc", 10, 20, "secret")

    reported = await client.report_cache(BOB, "c1", "Container is wet")

    assert reported.report == "Container is wet"
    assert reported.password == ""
    stored = deserialize(ledger.snapshot()["CACHE-c1"], CacheSite)
    assert stored.report == "Container is wet"
    assert stored.password == "secret"
    assert stored.maintainer == "alice"


@pytest.mark.asyncio
async def test_list_caches_redacts_per_caller() -> None:
    client, _ = _client()
    await client.create_cache(ALICE, "c1", "A", "", 0, 0, "alice-pass")
    await client.create_cache(BOB, "c2", "B", "", 0, 0, "bob-pass")

    listed = {cache.id: cache.password for cache in await client.list_caches(ALICE)}
    assert listed == {"c1": "alice-pass", "c2": ""}

    listed = {cache.id: cache.password for cache in await client.list_caches(BOB)}
    assert listed == {"c1": "", "c2": "bob-pass"}


@pytest.mark.asyncio
async def test_list_caches_ignores_other_kinds() -> None:
    client, _ = _client()
    await client.create_cache(ALICE, "c1", "A", "", 0, 0, "pw")
    await client.create_log(ALICE, "l1", "c1", "pw")

    assert [cache.id for cache in await client.list_caches(ALICE)] == ["c1"]


@pytest.mark.asyncio
async def test_cache_exists() -> None:
    client, _ = _client()
    assert await client.cache_exists(ALICE, "c1") is False
    await client.create_cache(ALICE, "c1", "A", "", 0, 0, "pw")
    assert await client.cache_exists(BOB, "c1") is True


@pytest.mark.asyncio
async def test_redacted_read_does_not_touch_ledger() -> None:
    client, ledger = _client()
    await client.create_cache(ALICE, "c1", "A", "", 0, 0, "pw")
    before = ledger.snapshot()
    version = ledger.version

    await client.read_cache(BOB, "c1")
    await client.list_caches(BOB)

    assert ledger.snapshot() == before
    assert ledger.version == version


@pytest.mark.asyncio
async def test_padded_identity_is_not_the_maintainer() -> None:
    client, _ = _client()
    await client.create_cache(ALICE, "c1", "Cache", "Desc", 10, 20, "secret")
    impostor = resolve_context(StaticIdentityResolver("alice "))

    with pytest.raises(GeocachePermissionError):
        await client.read_cache_pass(impostor, "c1")
    assert (await client.read_cache(impostor, "c1")).password == ""


@pytest.mark.asyncio
async def test_empty_cache_id_rejected() -> None:
    client, ledger = _client()
    with pytest.raises(GeocacheInvalidIdError):
        await client.create_cache(ALICE, "", "Cache", "Desc", 10, 20, "secret")
    assert ledger.snapshot() == {}
