"""Cache registry: cache-site CRUD and visibility rules."""

from __future__ import annotations

import logging

from pygeocache._constants import RecordKind
from pygeocache._registry._common import (
    assert_absent,
    assert_valid_id,
    load_record,
    record_exists,
    scan_records,
    store_record,
)
from pygeocache.config import GeocacheConfig
from pygeocache.identity import OperationContext
from pygeocache.ledger.stub import LedgerStub
from pygeocache.models.cache import CacheSite
from pygeocache.permissions import assert_maintainer, redact_cache

_logger = logging.getLogger(__name__)


async def create_cache(
    stub: LedgerStub,
    config: GeocacheConfig,
    ctx: OperationContext,
    cache_id: str,
    name: str,
    description: str,
    gps_x: float,
    gps_y: float,
    password: str,
) -> CacheSite:
    assert_valid_id(RecordKind.CACHE, cache_id)
    await assert_absent(stub, config, RecordKind.CACHE, cache_id)
    cache = CacheSite(
        id=cache_id,
        name=name,
        description=description,
        gps_x=gps_x,
        gps_y=gps_y,
        report="",
        password=password,
        maintainer=ctx.caller_identity,
    )
    await store_record(stub, config, cache)
    _logger.debug("Cache %s created by %s", cache_id, ctx.caller_identity)
    return cache


async def read_cache(stub: LedgerStub, config: GeocacheConfig, ctx: OperationContext, cache_id: str) -> CacheSite:
    cache = await load_record(stub, config, CacheSite, cache_id)
    return redact_cache(cache, ctx.caller_identity)


async def update_cache(
    stub: LedgerStub,
    config: GeocacheConfig,
    ctx: OperationContext,
    cache_id: str,
    name: str,
    description: str,
    gps_x: float,
    gps_y: float,
    password: str,
    report: str,
) -> CacheSite:
    """Overwrite every field of a cache except its maintainer."""
    existing = await load_record(stub, config, CacheSite, cache_id)
    assert_maintainer(ctx.caller_identity, existing.maintainer)
    cache = CacheSite(
        id=cache_id,
        name=name,
        description=description,
        gps_x=gps_x,
        gps_y=gps_y,
        report=report,
        password=password,
        maintainer=existing.maintainer,
    )
    await store_record(stub, config, cache)
    return cache


async def delete_cache(stub: LedgerStub, config: GeocacheConfig, ctx: OperationContext, cache_id: str) -> str:
    existing = await load_record(stub, config, CacheSite, cache_id)
    assert_maintainer(ctx.caller_identity, existing.maintainer)
    await stub.delete(config.key_for(RecordKind.CACHE, cache_id))
    _logger.debug("Cache %s deleted", cache_id)
    return cache_id


async def read_cache_pass(stub: LedgerStub, config: GeocacheConfig, ctx: OperationContext, cache_id: str) -> str:
    cache = await load_record(stub, config, CacheSite, cache_id)
    assert_maintainer(ctx.caller_identity, cache.maintainer)
    return cache.password


async def report_cache(
    stub: LedgerStub,
    config: GeocacheConfig,
    ctx: OperationContext,
    cache_id: str,
    report: str,
) -> CacheSite:
    """Replace the report of a cache; open to every caller."""
    existing = await load_record(stub, config, CacheSite, cache_id)
    cache = existing.model_copy(update={"report": report})
    await store_record(stub, config, cache)
    return redact_cache(cache, ctx.caller_identity)


async def list_caches(stub: LedgerStub, config: GeocacheConfig, ctx: OperationContext) -> list[CacheSite]:
    return [redact_cache(cache, ctx.caller_identity) for cache in await scan_records(stub, config, CacheSite)]


async def cache_exists(stub: LedgerStub, config: GeocacheConfig, cache_id: str) -> bool:
    return await record_exists(stub, config, RecordKind.CACHE, cache_id)
