"""Sample records for bootstrapping a fresh ledger."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pygeocache._registry._common import store_record
from pygeocache.config import GeocacheConfig
from pygeocache.ledger.stub import LedgerStub
from pygeocache.models import CacheSite, MovementTag, Record, Trackable, VisitLog

_logger = logging.getLogger(__name__)

SEED_ADMIN = "admin"


def sample_records(now: str) -> list[Record]:
    """Three caches, one log per cache and one trackable per log.

    All logs are stamped *now*.
    """
    caches = [
        CacheSite(
            id="cache1",
            name="First Cache",
            description="This is the first cache ever!",
            gps_x=12,
            gps_y=36,
            password="CachePass123",
            maintainer=SEED_ADMIN,
        ),
        CacheSite(
            id="cache2",
            name="Second Cache",
            description="This is the second cache ever!",
            gps_x=69,
            gps_y=420,
            password="asd123",
            maintainer="Gaspacchio",
        ),
        CacheSite(
            id="cache3",
            name="Third Cache",
            description="This is the third cache ever!",
            gps_x=11,
            gps_y=11,
            password="asd123",
            maintainer="Snitzel",
        ),
    ]
    users = [SEED_ADMIN, "user2", "user3"]
    ordinals = ["First", "Second", "Third"]

    records: list[Record] = list(caches)
    for index, (cache, user) in enumerate(zip(caches, users, strict=True), start=1):
        trackable_id = f"trackable{index}"
        records.append(
            VisitLog(
                id=f"log{index}",
                trackables=(MovementTag.inbound(trackable_id),),
                user=user,
                cache=cache.id,
                time=now,
            )
        )
    for index, ordinal in enumerate(ordinals, start=1):
        records.append(
            Trackable(id=f"trackable{index}", name=f"{ordinal} Trackable", inserted=True, visit_log=f"log{index}")
        )
    return records


async def write_records(stub: LedgerStub, config: GeocacheConfig, records: Iterable[Record]) -> int:
    """Store *records* under their keys without any validation.

    Returns the number of records written.
    """
    count = 0
    for record in records:
        await store_record(stub, config, record)
        _logger.info("%s %s initialized", record.KIND.value.capitalize(), record.id)
        count += 1
    return count
