"""Shared helpers for the registry modules.

This module centralizes the most repeated patterns:
- id and presence checks that raise the typed not-found / already-exists errors
- loading and decoding a record by id
- encoding and storing a record under its namespaced key
- range-scanning one record kind

It is internal to pygeocache and may change at any time.
"""

from __future__ import annotations

from pygeocache._constants import RecordKind
from pygeocache.codec import deserialize, serialize
from pygeocache.config import GeocacheConfig
from pygeocache.exceptions import GeocacheAlreadyExistsError, GeocacheInvalidIdError, GeocacheNotFoundError
from pygeocache.ledger.stub import LedgerStub
from pygeocache.models._base import GeocacheBaseModel, TRecord

_KIND_LABELS: dict[RecordKind, str] = {
    RecordKind.CACHE: "Cache",
    RecordKind.LOG: "Log",
    RecordKind.TRACKABLE: "Trackable",
}


def kind_label(kind: RecordKind) -> str:
    return _KIND_LABELS[kind]


def assert_valid_id(kind: RecordKind, record_id: str) -> None:
    if not record_id:
        raise GeocacheInvalidIdError(
            f"{kind_label(kind)} id must be non-empty",
            kind=kind,
            record_id=record_id,
        )


async def record_exists(stub: LedgerStub, config: GeocacheConfig, kind: RecordKind, record_id: str) -> bool:
    data = await stub.get(config.key_for(kind, record_id))
    return data is not None and len(data) > 0


async def assert_exists(stub: LedgerStub, config: GeocacheConfig, kind: RecordKind, record_id: str) -> None:
    if not await record_exists(stub, config, kind, record_id):
        raise GeocacheNotFoundError(
            f"{kind_label(kind)} {record_id} does not exist",
            kind=kind,
            record_id=record_id,
        )


async def assert_absent(stub: LedgerStub, config: GeocacheConfig, kind: RecordKind, record_id: str) -> None:
    if await record_exists(stub, config, kind, record_id):
        raise GeocacheAlreadyExistsError(
            f"{kind_label(kind)} {record_id} already exists",
            kind=kind,
            record_id=record_id,
        )


async def load_record(stub: LedgerStub, config: GeocacheConfig, model: type[TRecord], record_id: str) -> TRecord:
    """Fetch and decode a record, raising not-found for absent or empty keys."""
    data = await stub.get(config.key_for(model.KIND, record_id))
    if not data:
        raise GeocacheNotFoundError(
            f"{kind_label(model.KIND)} {record_id} does not exist",
            kind=model.KIND,
            record_id=record_id,
        )
    return deserialize(data, model)


async def store_record(stub: LedgerStub, config: GeocacheConfig, record: GeocacheBaseModel) -> None:
    await stub.put(config.key_for(record.KIND, record.id), serialize(record))


async def scan_records(stub: LedgerStub, config: GeocacheConfig, model: type[TRecord]) -> list[TRecord]:
    low, high = config.range_for(model.KIND)
    return [deserialize(value, model) for _key, value in await stub.scan(low, high) if value]
