"""pygeocache - Geocache trackable custody on a replicated key-value ledger."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygeocache")
except PackageNotFoundError:
    __version__ = "0+local"
from pygeocache._constants import RecordKind
from pygeocache.client import GeocacheClient
from pygeocache.codec import canonical_dumps, deserialize, serialize
from pygeocache.config import GeocacheConfig
from pygeocache.exceptions import (
    GeocacheAlreadyExistsError,
    GeocacheConfigError,
    GeocacheConflictError,
    GeocacheError,
    GeocacheInvalidIdError,
    GeocacheInvalidPasswordError,
    GeocacheNotFoundError,
    GeocachePermissionError,
    GeocacheRecordError,
    GeocacheSerializationError,
    GeocacheTemporalOrderError,
    GeocacheUnauthenticatedError,
    LedgerConflictError,
    LedgerError,
)
from pygeocache.identity import (
    IdentityResolver,
    OperationContext,
    StaticIdentityResolver,
    X509IdentityResolver,
    resolve_context,
)
from pygeocache.ledger import LedgerStub, LedgerTransaction, MemoryLedger, VersionedLedger
from pygeocache.models import CacheSite, Direction, MovementTag, Trackable, VisitLog
from pygeocache.permissions import assert_maintainer, is_maintainer, redact_cache

__all__ = [
    "__version__",
    "CacheSite",
    "Direction",
    "GeocacheAlreadyExistsError",
    "GeocacheClient",
    "GeocacheConfig",
    "GeocacheConfigError",
    "GeocacheConflictError",
    "GeocacheError",
    "GeocacheInvalidIdError",
    "GeocacheInvalidPasswordError",
    "GeocacheNotFoundError",
    "GeocachePermissionError",
    "GeocacheRecordError",
    "GeocacheSerializationError",
    "GeocacheTemporalOrderError",
    "GeocacheUnauthenticatedError",
    "IdentityResolver",
    "LedgerConflictError",
    "LedgerError",
    "LedgerStub",
    "LedgerTransaction",
    "MemoryLedger",
    "MovementTag",
    "OperationContext",
    "RecordKind",
    "StaticIdentityResolver",
    "Trackable",
    "VersionedLedger",
    "VisitLog",
    "X509IdentityResolver",
    "assert_maintainer",
    "canonical_dumps",
    "deserialize",
    "is_maintainer",
    "redact_cache",
    "resolve_context",
    "serialize",
]
