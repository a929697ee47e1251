"""Maintainer gating and field redaction for cache sites."""

from __future__ import annotations

from pygeocache.exceptions import GeocachePermissionError
from pygeocache.models.cache import CacheSite


def is_maintainer(caller_identity: str, maintainer: str) -> bool:
    return caller_identity == maintainer


def assert_maintainer(caller_identity: str, maintainer: str) -> None:
    """Raise :class:`GeocachePermissionError` unless the caller maintains the record."""
    if not is_maintainer(caller_identity, maintainer):
        raise GeocachePermissionError("Not maintainer")


def redact_cache(cache: CacheSite, caller_identity: str) -> CacheSite:
    """Return the view of *cache* the caller is allowed to see.

    Non-maintainers get a copy with an empty password.  The input record is
    never modified, so a value read from the ledger is not aliased by what
    the caller receives.
    """
    if is_maintainer(caller_identity, cache.maintainer):
        return cache.model_copy()
    return cache.model_copy(update={"password": ""})
