"""Client configuration for pygeocache."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pygeocache._constants import (
    DEFAULT_CACHE_PREFIX,
    DEFAULT_LOG_PREFIX,
    DEFAULT_TRACKABLE_PREFIX,
    RANGE_END_SUFFIX,
    RecordKind,
)
from pygeocache.exceptions import GeocacheConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class GeocacheConfig:
    """Client configuration.

    Parameters
    ----------
    cache_prefix : str
        Ledger key prefix for cache-site records.
    log_prefix : str
        Ledger key prefix for visit-log records.
    trackable_prefix : str
        Ledger key prefix for trackable records.
    commit_retries : int
        How many times an operation is re-run from scratch when its commit
        loses a race against a concurrent transaction.  ``0`` rejects the
        operation on the first conflict.
    log_payloads : bool
        Emit DEBUG logs with the (redacted) records each operation returns.
    """

    cache_prefix: str = DEFAULT_CACHE_PREFIX
    log_prefix: str = DEFAULT_LOG_PREFIX
    trackable_prefix: str = DEFAULT_TRACKABLE_PREFIX
    commit_retries: int = 0
    log_payloads: bool = False

    def __post_init__(self) -> None:
        prefixes = [self.cache_prefix, self.log_prefix, self.trackable_prefix]
        if any(not prefix for prefix in prefixes):
            raise GeocacheConfigError("key prefixes must be non-empty")
        for index, prefix in enumerate(prefixes):
            for other_index, other in enumerate(prefixes):
                if index != other_index and other.startswith(prefix):
                    raise GeocacheConfigError(f"key prefix {prefix!r} overlaps {other!r}")
        if self.commit_retries < 0:
            raise GeocacheConfigError(f"commit_retries must be >= 0, got {self.commit_retries}")

    def prefix_for(self, kind: RecordKind) -> str:
        if kind is RecordKind.CACHE:
            return self.cache_prefix
        if kind is RecordKind.LOG:
            return self.log_prefix
        return self.trackable_prefix

    def key_for(self, kind: RecordKind, record_id: str) -> str:
        """Ledger key of the *kind* record with id *record_id*."""
        return f"{self.prefix_for(kind)}{record_id}"

    def range_for(self, kind: RecordKind) -> tuple[str, str]:
        """Half-open scan bounds enumerating exactly the *kind* records."""
        prefix = self.prefix_for(kind)
        return prefix, prefix + RANGE_END_SUFFIX

    @classmethod
    def from_env(cls, **overrides: Any) -> GeocacheConfig:
        """Create configuration from environment variables.

        Reads ``GEOCACHE_CACHE_PREFIX``, ``GEOCACHE_LOG_PREFIX``,
        ``GEOCACHE_TRACKABLE_PREFIX``, ``GEOCACHE_COMMIT_RETRIES`` and
        ``GEOCACHE_LOG_PAYLOADS``.  Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        GeocacheConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "GEOCACHE_CACHE_PREFIX": "cache_prefix",
            "GEOCACHE_LOG_PREFIX": "log_prefix",
            "GEOCACHE_TRACKABLE_PREFIX": "trackable_prefix",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # commit_retries is numeric, handle separately
        retries_env = env.get("GEOCACHE_COMMIT_RETRIES")
        if retries_env is not None and "commit_retries" not in overrides:
            try:
                config_kwargs["commit_retries"] = int(retries_env)
            except ValueError as exc:
                raise GeocacheConfigError(f"GEOCACHE_COMMIT_RETRIES is not an integer: {retries_env!r}") from exc

        if "log_payloads" not in overrides:
            config_kwargs["log_payloads"] = _env_bool(env.get("GEOCACHE_LOG_PAYLOADS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
