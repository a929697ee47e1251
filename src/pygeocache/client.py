"""High-level async client for the geocache ledger."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TypeVar

from pygeocache._constants import format_ledger_time
from pygeocache._redact import MASK, redact_for_log
from pygeocache._registry import caches as _caches
from pygeocache._registry import logs as _logs
from pygeocache._registry import trackables as _trackables
from pygeocache.config import GeocacheConfig
from pygeocache.exceptions import LedgerConflictError
from pygeocache.fixtures import sample_records, write_records
from pygeocache.identity import OperationContext
from pygeocache.ledger.stub import VersionedLedger
from pygeocache.ledger.transaction import LedgerTransaction
from pygeocache.models.cache import CacheSite
from pygeocache.models.trackable import Trackable
from pygeocache.models.visit_log import VisitLog

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class GeocacheClient:
    """Async client for cache sites, visit logs and trackables.

    Every public coroutine is one logical transaction: it reads through a
    fresh :class:`LedgerTransaction`, validates, and commits all of its
    writes at once.  A failed check raises before anything is written.

    Every method takes the caller's :class:`OperationContext` first, so all
    operations share one call shape.  Read-only lookups of logs and
    trackables accept it without using it, since nothing about them depends
    on who asks.

    Usage::

        client = GeocacheClient(MemoryLedger())
        ctx = resolve_context(StaticIdentityResolver("alice"))
        await client.create_cache(ctx, "c1", "Cache", "Desc", 10, 20, "secret")
    """

    def __init__(
        self,
        ledger: VersionedLedger,
        config: GeocacheConfig | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ledger = ledger
        self._config = config or GeocacheConfig()
        self._clock = clock

    @property
    def config(self) -> GeocacheConfig:
        return self._config

    @property
    def ledger(self) -> VersionedLedger:
        return self._ledger

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _now(self) -> str:
        return format_ledger_time(self._clock())

    async def _run(
        self,
        operation: str,
        fn: Callable[[LedgerTransaction], Awaitable[T]],
        *,
        secret_result: bool = False,
    ) -> T:
        """Run *fn* in a transaction, re-running it on commit conflicts.

        With *secret_result* the result itself is never logged.
        """
        attempt = 0
        while True:
            attempt += 1
            tx = LedgerTransaction(self._ledger)
            result = await fn(tx)
            try:
                await tx.commit()
            except LedgerConflictError as exc:
                if attempt > self._config.commit_retries:
                    raise
                _logger.warning(
                    "%s lost a commit race on %r (attempt %d of %d), retrying",
                    operation,
                    exc.key,
                    attempt,
                    self._config.commit_retries + 1,
                )
                continue
            if self._config.log_payloads:
                _logger.debug("%s -> %s", operation, MASK if secret_result else redact_for_log(result))
            return result

    # ------------------------------------------------------------------
    # Caches
    # ------------------------------------------------------------------

    async def create_cache(
        self,
        ctx: OperationContext,
        cache_id: str,
        name: str,
        description: str,
        gps_x: float,
        gps_y: float,
        password: str,
    ) -> CacheSite:
        """Register a cache site maintained by the caller."""

        async def _op(tx: LedgerTransaction) -> CacheSite:
            return await _caches.create_cache(
                tx, self._config, ctx, cache_id, name, description, gps_x, gps_y, password
            )

        return await self._run("create_cache", _op)

    async def read_cache(self, ctx: OperationContext, cache_id: str) -> CacheSite:
        """Return a cache; the pass is blank unless the caller maintains it."""

        async def _op(tx: LedgerTransaction) -> CacheSite:
            return await _caches.read_cache(tx, self._config, ctx, cache_id)

        return await self._run("read_cache", _op)

    async def update_cache(
        self,
        ctx: OperationContext,
        cache_id: str,
        name: str,
        description: str,
        gps_x: float,
        gps_y: float,
        password: str,
        report: str,
    ) -> CacheSite:
        """Maintainer-only full overwrite (the maintainer itself is kept)."""

        async def _op(tx: LedgerTransaction) -> CacheSite:
            return await _caches.update_cache(
                tx, self._config, ctx, cache_id, name, description, gps_x, gps_y, password, report
            )

        return await self._run("update_cache", _op)

    async def delete_cache(self, ctx: OperationContext, cache_id: str) -> str:
        """Maintainer-only delete. Returns the deleted id."""

        async def _op(tx: LedgerTransaction) -> str:
            return await _caches.delete_cache(tx, self._config, ctx, cache_id)

        return await self._run("delete_cache", _op)

    async def read_cache_pass(self, ctx: OperationContext, cache_id: str) -> str:
        async def _op(tx: LedgerTransaction) -> str:
            return await _caches.read_cache_pass(tx, self._config, ctx, cache_id)

        return await self._run("read_cache_pass", _op, secret_result=True)

    async def report_cache(self, ctx: OperationContext, cache_id: str, report: str) -> CacheSite:
        """Replace the report of a cache. Any caller may do this."""

        async def _op(tx: LedgerTransaction) -> CacheSite:
            return await _caches.report_cache(tx, self._config, ctx, cache_id, report)

        return await self._run("report_cache", _op)

    async def list_caches(self, ctx: OperationContext) -> list[CacheSite]:
        async def _op(tx: LedgerTransaction) -> list[CacheSite]:
            return await _caches.list_caches(tx, self._config, ctx)

        return await self._run("list_caches", _op)

    async def cache_exists(self, ctx: OperationContext, cache_id: str) -> bool:
        async def _op(tx: LedgerTransaction) -> bool:
            return await _caches.cache_exists(tx, self._config, cache_id)

        return await self._run("cache_exists", _op)

    # ------------------------------------------------------------------
    # Visit logs
    # ------------------------------------------------------------------

    async def create_log(self, ctx: OperationContext, log_id: str, cache_id: str, password: str) -> VisitLog:
        """Record a visit by the caller, gated by the cache pass."""

        async def _op(tx: LedgerTransaction) -> VisitLog:
            return await _logs.create_log(tx, self._config, ctx, log_id, cache_id, password, now=self._now())

        return await self._run("create_log", _op)

    async def read_log(self, ctx: OperationContext, log_id: str) -> VisitLog:
        async def _op(tx: LedgerTransaction) -> VisitLog:
            return await _logs.read_log(tx, self._config, log_id)

        return await self._run("read_log", _op)

    async def list_logs(self, ctx: OperationContext) -> list[VisitLog]:
        async def _op(tx: LedgerTransaction) -> list[VisitLog]:
            return await _logs.list_logs(tx, self._config)

        return await self._run("list_logs", _op)

    async def log_exists(self, ctx: OperationContext, log_id: str) -> bool:
        async def _op(tx: LedgerTransaction) -> bool:
            return await _logs.log_exists(tx, self._config, log_id)

        return await self._run("log_exists", _op)

    # ------------------------------------------------------------------
    # Trackables
    # ------------------------------------------------------------------

    async def create_trackable(self, ctx: OperationContext, trackable_id: str, log_id: str, name: str) -> Trackable:
        """Create a trackable inside a log the caller wrote."""

        async def _op(tx: LedgerTransaction) -> Trackable:
            return await _trackables.create_trackable(tx, self._config, ctx, trackable_id, log_id, name)

        return await self._run("create_trackable", _op)

    async def insert_trackable(self, ctx: OperationContext, trackable_id: str, new_log_id: str) -> Trackable:
        async def _op(tx: LedgerTransaction) -> Trackable:
            return await _trackables.insert_trackable(tx, self._config, ctx, trackable_id, new_log_id)

        return await self._run("insert_trackable", _op)

    async def remove_trackable(self, ctx: OperationContext, trackable_id: str, new_log_id: str) -> Trackable:
        async def _op(tx: LedgerTransaction) -> Trackable:
            return await _trackables.remove_trackable(tx, self._config, ctx, trackable_id, new_log_id)

        return await self._run("remove_trackable", _op)

    async def read_trackable(self, ctx: OperationContext, trackable_id: str) -> Trackable:
        async def _op(tx: LedgerTransaction) -> Trackable:
            return await _trackables.read_trackable(tx, self._config, trackable_id)

        return await self._run("read_trackable", _op)

    async def list_trackables(self, ctx: OperationContext) -> list[Trackable]:
        async def _op(tx: LedgerTransaction) -> list[Trackable]:
            return await _trackables.list_trackables(tx, self._config)

        return await self._run("list_trackables", _op)

    async def trackable_exists(self, ctx: OperationContext, trackable_id: str) -> bool:
        async def _op(tx: LedgerTransaction) -> bool:
            return await _trackables.trackable_exists(tx, self._config, trackable_id)

        return await self._run("trackable_exists", _op)

    async def trackable_owner(self, ctx: OperationContext, trackable_id: str) -> str:
        """Identity that currently holds the trackable (author of its current log)."""

        async def _op(tx: LedgerTransaction) -> str:
            return await _trackables.trackable_owner(tx, self._config, trackable_id)

        return await self._run("trackable_owner", _op)

    # ------------------------------------------------------------------
    # Admin / dev
    # ------------------------------------------------------------------

    async def init_ledger(self, ctx: OperationContext) -> int:
        """Seed the sample caches, logs and trackables in one commit.

        Returns the number of records written.
        """

        async def _op(tx: LedgerTransaction) -> int:
            return await write_records(tx, self._config, sample_records(self._now()))

        count = await self._run("init_ledger", _op)
        _logger.info("Ledger initialized with %d records by %s", count, ctx.caller_identity)
        return count

    async def whoami(self, ctx: OperationContext) -> str:
        return ctx.caller_identity

    async def ping(self) -> str:
        return "pong"
