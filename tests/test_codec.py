from __future__ import annotations

import pytest

from pygeocache.codec import canonical_dumps, deserialize, serialize
from pygeocache.exceptions import GeocacheSerializationError
from pygeocache.models import CacheSite, MovementTag, Trackable, VisitLog


def _cache() -> CacheSite:
    return CacheSite(
        id="c1",
        name="Cache",
        description="Desc",
        gps_x=10,
        gps_y=20,
        password="secret",
        maintainer="alice",
    )


def _log() -> VisitLog:
    return VisitLog(
        id="l1",
        trackables=(MovementTag.inbound("t1"), MovementTag.outbound("t-2")),
        user="alice",
        cache="c1",
        time="2024-01-01T00:00:00.000Z",
    )


def _trackable() -> Trackable:
    return Trackable(id="t1", name="Coin", inserted=True, visit_log="l1")


def test_cache_bytes_are_sorted_and_compact() -> None:
    assert serialize(_cache()) == (
        b'{"Description":"Desc","GPSX":10.0,"GPSY":20.0,"ID":"c1",'
        b'"Maintainer":"alice","Name":"Cache","Pass":"secret","Report":""}'
    )


def test_log_bytes_carry_string_tags() -> None:
    assert serialize(_log()) == (
        b'{"Cache":"c1","ID":"l1","Time":"2024-01-01T00:00:00.000Z",'
        b'"Trackables":["t1-IN","t-2-OUT"],"User":"alice"}'
    )


def test_nested_keys_sorted_recursively() -> None:
    assert canonical_dumps({"b": {"d": 1, "c": [{"z": 0, "y": 1}]}, "a": []}) == (
        b'{"a":[],"b":{"c":[{"y":1,"z":0}],"d":1}}'
    )


def test_non_ascii_kept_as_utf8() -> None:
    assert canonical_dumps({"Name": "Schätze"}) == '{"Name":"Schätze"}'.encode()


def test_nan_rejected() -> None:
    with pytest.raises(GeocacheSerializationError):
        canonical_dumps({"GPSX": float("nan")})


@pytest.mark.parametrize("record", [_cache(), _log(), _trackable()], ids=["cache", "log", "trackable"])
def test_round_trip_is_stable(record: CacheSite | VisitLog | Trackable) -> None:
    data = serialize(record)
    decoded = deserialize(data, type(record))
    assert decoded == record
    assert serialize(decoded) == data


def test_logically_equal_records_encode_identically() -> None:
    by_alias = CacheSite.model_validate(
        {
            "Maintainer": "alice",
            "Pass": "secret",
            "Report": "",
            "Name": "Cache",
            "ID": "c1",
            "GPSY": 20,
            "GPSX": 10,
            "Description": "Desc",
        }
    )
    assert serialize(by_alias) == serialize(_cache())


def test_decodes_payload_with_unknown_fields() -> None:
    data = b'{"ID":"t1","Inserted":true,"Name":"Coin","Owner":"x","VisitLog":"l1"}'
    assert deserialize(data, Trackable) == _trackable()


@pytest.mark.parametrize(
    "data",
    [
        b"not json",
        b"\xff\xfe",
        b"[1,2]",
        b'{"ID":"t1","Name":"Coin"}',
    ],
)
def test_malformed_payload_raises(data: bytes) -> None:
    with pytest.raises(GeocacheSerializationError):
        deserialize(data, Trackable)
