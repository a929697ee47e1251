"""Data models for ledger records."""

from pygeocache.models._base import GeocacheBaseModel, TRecord
from pygeocache.models.cache import CacheSite
from pygeocache.models.trackable import Trackable
from pygeocache.models.visit_log import Direction, MovementTag, VisitLog

Record = CacheSite | VisitLog | Trackable

__all__ = [
    "CacheSite",
    "Direction",
    "GeocacheBaseModel",
    "MovementTag",
    "Record",
    "TRecord",
    "Trackable",
    "VisitLog",
]
