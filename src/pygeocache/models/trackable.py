"""Trackable model."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from pygeocache._constants import RecordKind
from pygeocache.models._base import GeocacheBaseModel


class Trackable(GeocacheBaseModel):
    """A physical item whose custody moves between visit logs.

    There is no owner field: the owner is the ``User`` of the visit log named
    by ``visit_log``.
    """

    KIND: ClassVar[RecordKind] = RecordKind.TRACKABLE

    name: str = Field(default="", alias="Name")
    inserted: bool = Field(alias="Inserted")
    visit_log: str = Field(alias="VisitLog")

    def moved_to(self, log_id: str, *, inserted: bool) -> Trackable:
        """Return a copy rebound to *log_id* in the given state."""
        return self.model_copy(update={"visit_log": log_id, "inserted": inserted})
