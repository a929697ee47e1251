"""Trackable registry and transfer engine.

A trackable is either *inserted* (sitting in the cache network) or
*removed* (carried by someone).  It moves between states by being recorded
against a new visit log:

* create: a new trackable starts inserted, bound to a log the caller wrote;
* insert (removed -> inserted): old and new log must share the same ``User``;
* remove (inserted -> removed): old and new log must share the same ``Cache``.

Both transitions also require that the caller wrote the new log and that the
new log's time is strictly after the old one.  The owner is never stored; it
is the ``User`` of the log the trackable currently points to.
"""

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
from pygeocache.exceptions import GeocacheConflictError, GeocachePermissionError, GeocacheTemporalOrderError
from pygeocache.identity import OperationContext
from pygeocache.ledger.stub import LedgerStub
from pygeocache.models.trackable import Trackable
from pygeocache.models.visit_log import MovementTag, VisitLog

_logger = logging.getLogger(__name__)


def _assert_log_author(ctx: OperationContext, visit_log: VisitLog) -> None:
    if ctx.caller_identity != visit_log.user:
        raise GeocachePermissionError(f"Visitlog {visit_log.id} is not made by {ctx.caller_identity}")


def _assert_follows(old_log: VisitLog, new_log: VisitLog) -> None:
    # ISO-8601 UTC strings: lexicographic order is chronological order.
    if new_log.time <= old_log.time:
        raise GeocacheTemporalOrderError(
            f"Visitlog {new_log.id} is before {old_log.id}",
            old_time=old_log.time,
            new_time=new_log.time,
        )


async def _record_movement(
    stub: LedgerStub,
    config: GeocacheConfig,
    trackable: Trackable,
    visit_log: VisitLog,
    tag: MovementTag,
) -> None:
    await store_record(stub, config, trackable)
    await store_record(stub, config, visit_log.with_movement(tag))


async def create_trackable(
    stub: LedgerStub,
    config: GeocacheConfig,
    ctx: OperationContext,
    trackable_id: str,
    log_id: str,
    name: str,
) -> Trackable:
    assert_valid_id(RecordKind.TRACKABLE, trackable_id)
    visit_log = await load_record(stub, config, VisitLog, log_id)
    await assert_absent(stub, config, RecordKind.TRACKABLE, trackable_id)
    _assert_log_author(ctx, visit_log)

    trackable = Trackable(id=trackable_id, name=name, inserted=True, visit_log=log_id)
    await _record_movement(stub, config, trackable, visit_log, MovementTag.inbound(trackable_id))
    _logger.debug("Trackable %s created in log %s", trackable_id, log_id)
    return trackable


async def insert_trackable(
    stub: LedgerStub,
    config: GeocacheConfig,
    ctx: OperationContext,
    trackable_id: str,
    new_log_id: str,
) -> Trackable:
    """Put a removed trackable back into the network via *new_log_id*."""
    trackable = await load_record(stub, config, Trackable, trackable_id)
    new_log = await load_record(stub, config, VisitLog, new_log_id)

    if trackable.inserted:
        raise GeocacheConflictError(f"Trackable {trackable_id} is already inserted")

    old_log = await load_record(stub, config, VisitLog, trackable.visit_log)

    if old_log.user != new_log.user:
        raise GeocachePermissionError(f"Trackable {trackable_id} is not owned by {new_log.user}")
    _assert_log_author(ctx, new_log)
    _assert_follows(old_log, new_log)

    moved = trackable.moved_to(new_log_id, inserted=True)
    await _record_movement(stub, config, moved, new_log, MovementTag.inbound(trackable_id))
    _logger.debug("Trackable %s inserted via log %s (was %s)", trackable_id, new_log_id, old_log.id)
    return moved


async def remove_trackable(
    stub: LedgerStub,
    config: GeocacheConfig,
    ctx: OperationContext,
    trackable_id: str,
    new_log_id: str,
) -> Trackable:
    """Take an inserted trackable out of the network via *new_log_id*.

    The new log must be at the same cache as the trackable's current log.
    """
    trackable = await load_record(stub, config, Trackable, trackable_id)
    new_log = await load_record(stub, config, VisitLog, new_log_id)

    if not trackable.inserted:
        raise GeocacheConflictError(f"Trackable {trackable_id} is not inserted")

    old_log = await load_record(stub, config, VisitLog, trackable.visit_log)

    _assert_log_author(ctx, new_log)
    _assert_follows(old_log, new_log)
    if new_log.cache != old_log.cache:
        raise GeocacheConflictError(f"Trackable {trackable_id} and Visitlog {new_log_id} is for different caches")

    moved = trackable.moved_to(new_log_id, inserted=False)
    await _record_movement(stub, config, moved, new_log, MovementTag.outbound(trackable_id))
    _logger.debug("Trackable %s removed via log %s (was %s)", trackable_id, new_log_id, old_log.id)
    return moved


async def read_trackable(stub: LedgerStub, config: GeocacheConfig, trackable_id: str) -> Trackable:
    return await load_record(stub, config, Trackable, trackable_id)


async def list_trackables(stub: LedgerStub, config: GeocacheConfig) -> list[Trackable]:
    return await scan_records(stub, config, Trackable)


async def trackable_exists(stub: LedgerStub, config: GeocacheConfig, trackable_id: str) -> bool:
    return await record_exists(stub, config, RecordKind.TRACKABLE, trackable_id)


async def trackable_owner(stub: LedgerStub, config: GeocacheConfig, trackable_id: str) -> str:
    """Current owner: the author of the log the trackable points to."""
    trackable = await load_record(stub, config, Trackable, trackable_id)
    current_log = await load_record(stub, config, VisitLog, trackable.visit_log)
    return current_log.user
