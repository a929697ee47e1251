from __future__ import annotations

import logging

import pytest

from pygeocache._redact import MASK, redact_for_log
from pygeocache.client import GeocacheClient
from pygeocache.config import GeocacheConfig
from pygeocache.identity import OperationContext
from pygeocache.ledger import MemoryLedger
from pygeocache.models import CacheSite, Trackable

ALICE = OperationContext(caller_identity="alice")


def test_cache_pass_masked() -> None:
    cache = CacheSite(id="c1", gps_x=1, gps_y=2, password="secret", maintainer="alice")
    redacted = redact_for_log(cache)
    assert redacted["Pass"] == MASK
    assert redacted["Maintainer"] == "alice"
    assert cache.password == "secret"


def test_blank_pass_left_blank() -> None:
    cache = CacheSite(id="c1", gps_x=1, gps_y=2, maintainer="alice")
    assert redact_for_log(cache)["Pass"] == ""


def test_lists_and_other_records() -> None:
    trackable = Trackable(id="t1", name="Coin", inserted=True, visit_log="l1")
    cache = CacheSite(id="c1", gps_x=1, gps_y=2, password="secret", maintainer="alice")
    redacted = redact_for_log([trackable, cache])
    assert redacted[0] == {"ID": "t1", "Name": "Coin", "Inserted": True, "VisitLog": "l1"}
    assert redacted[1]["Pass"] == MASK


@pytest.mark.parametrize("value", ["c1", True, 9, None])
def test_plain_values_unchanged(value: object) -> None:
    assert redact_for_log(value) == value


@pytest.mark.asyncio
async def test_payload_logging_never_shows_pass(caplog: pytest.LogCaptureFixture) -> None:
    client = GeocacheClient(MemoryLedger(), GeocacheConfig(log_payloads=True))

    with caplog.at_level(logging.DEBUG, logger="pygeocache.client"):
        await client.create_cache(ALICE, "c1", "Cache", "", 1, 2, "hunter2")
        assert await client.read_cache_pass(ALICE, "c1") == "hunter2"

    assert "create_cache" in caplog.text
    assert "read_cache_pass" in caplog.text
    assert "hunter2" not in caplog.text
