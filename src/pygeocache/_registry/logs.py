"""Visit log registry."""

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
from pygeocache.exceptions import GeocacheInvalidPasswordError
from pygeocache.identity import OperationContext
from pygeocache.ledger.stub import LedgerStub
from pygeocache.models.cache import CacheSite
from pygeocache.models.visit_log import VisitLog

_logger = logging.getLogger(__name__)


async def create_log(
    stub: LedgerStub,
    config: GeocacheConfig,
    ctx: OperationContext,
    log_id: str,
    cache_id: str,
    password: str,
    *,
    now: str,
) -> VisitLog:
    """Record a visit to *cache_id* by the caller at *now*.

    Checks, in order: the log id is non-empty, the cache exists, the log id is free, and *password*
    matches the cache's pass.
    """
    assert_valid_id(RecordKind.LOG, log_id)
    cache = await load_record(stub, config, CacheSite, cache_id)
    await assert_absent(stub, config, RecordKind.LOG, log_id)
    if password != cache.password:
        raise GeocacheInvalidPasswordError(cache_id)

    visit_log = VisitLog(id=log_id, trackables=(), user=ctx.caller_identity, cache=cache_id, time=now)
    await store_record(stub, config, visit_log)
    _logger.debug("Log %s created at cache %s by %s", log_id, cache_id, ctx.caller_identity)
    return visit_log


async def read_log(stub: LedgerStub, config: GeocacheConfig, log_id: str) -> VisitLog:
    return await load_record(stub, config, VisitLog, log_id)


async def list_logs(stub: LedgerStub, config: GeocacheConfig) -> list[VisitLog]:
    return await scan_records(stub, config, VisitLog)


async def log_exists(stub: LedgerStub, config: GeocacheConfig, log_id: str) -> bool:
    return await record_exists(stub, config, RecordKind.LOG, log_id)
