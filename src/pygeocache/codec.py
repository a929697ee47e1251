"""Canonical record serialization.

Independent replicas must agree bit-for-bit on every state write, so records
are encoded as compact UTF-8 JSON with object keys sorted at every nesting
level.  Two logically identical records always produce identical bytes.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from pygeocache.exceptions import GeocacheSerializationError
from pygeocache.models._base import GeocacheBaseModel, TRecord


def canonical_dumps(value: Any) -> bytes:
    """Encode a JSON-compatible value deterministically."""
    try:
        text = json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise GeocacheSerializationError(f"value is not canonically encodable: {exc}") from exc
    return text.encode("utf-8")


def serialize(record: GeocacheBaseModel) -> bytes:
    """Encode a record using its wire field names."""
    return canonical_dumps(record.to_wire())


def deserialize(data: bytes, model: type[TRecord]) -> TRecord:
    """Decode bytes produced by :func:`serialize` back into *model*."""
    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise GeocacheSerializationError(f"{model.__name__} payload is not JSON: {data[:64]!r}") from exc
    if not isinstance(payload, dict):
        raise GeocacheSerializationError(f"{model.__name__} payload is not an object: {data[:64]!r}")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise GeocacheSerializationError(f"invalid {model.__name__} payload: {exc}") from exc
