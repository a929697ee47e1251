"""Record views for DEBUG logging.

A cache's ``Pass`` is only shown to its maintainer, so the logged form of a
result masks it whoever the caller was.
"""

from __future__ import annotations

from typing import Any

from pygeocache.models._base import GeocacheBaseModel
from pygeocache.models.cache import CacheSite

MASK = "<redacted>"

_PASS_ALIAS = CacheSite.model_fields["password"].alias


def redact_for_log(result: Any) -> Any:
    """Wire form of an operation result with every cache pass masked.

    Records become alias-keyed dicts and lists are redacted item by item.
    Anything else (ids, booleans, counts) is returned unchanged.
    """
    if isinstance(result, CacheSite):
        wire = result.to_wire()
        if wire.get(_PASS_ALIAS):
            wire[_PASS_ALIAS] = MASK
        return wire
    if isinstance(result, GeocacheBaseModel):
        return result.to_wire()
    if isinstance(result, list):
        return [redact_for_log(item) for item in result]
    return result
