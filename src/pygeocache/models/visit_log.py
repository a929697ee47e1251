"""Visit log model and the movement tags it carries."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from pygeocache._constants import RecordKind
from pygeocache.models._base import GeocacheBaseModel


class Direction(StrEnum):
    IN = "IN"
    OUT = "OUT"


class MovementTag(BaseModel):
    """One trackable movement recorded against a visit log.

    On the wire a tag is the string ``<trackable_id>-IN`` or
    ``<trackable_id>-OUT``.  Parsing splits on the last dash, so trackable
    ids may contain dashes themselves.
    """

    model_config = ConfigDict(frozen=True)

    trackable_id: str = Field(min_length=1)
    direction: Direction

    def __str__(self) -> str:
        return f"{self.trackable_id}-{self.direction.value}"

    @classmethod
    def inbound(cls, trackable_id: str) -> MovementTag:
        return cls(trackable_id=trackable_id, direction=Direction.IN)

    @classmethod
    def outbound(cls, trackable_id: str) -> MovementTag:
        return cls(trackable_id=trackable_id, direction=Direction.OUT)

    @classmethod
    def parse(cls, value: str) -> MovementTag:
        """Parse the wire form of a tag.

        Raises :class:`ValueError` for anything that is not
        ``<non-empty id>-IN`` / ``<non-empty id>-OUT``.
        """
        trackable_id, sep, direction = value.rpartition("-")
        if not sep or not trackable_id:
            raise ValueError(f"malformed movement tag {value!r}")
        try:
            return cls(trackable_id=trackable_id, direction=Direction(direction))
        except ValueError as exc:
            raise ValueError(f"unknown movement direction in tag {value!r}") from exc


class VisitLog(GeocacheBaseModel):
    """An immutable record of one visit to a site by one identity.

    Only ``trackables`` ever changes after creation, and only by appending.
    """

    KIND: ClassVar[RecordKind] = RecordKind.LOG

    trackables: tuple[MovementTag, ...] = Field(default=(), alias="Trackables")
    user: str = Field(alias="User")
    cache: str = Field(alias="Cache")
    time: str = Field(alias="Time")
    """ISO-8601 UTC timestamp; compared as a string."""

    @field_validator("trackables", mode="before")
    @classmethod
    def _parse_tags(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(MovementTag.parse(item) if isinstance(item, str) else item for item in value)
        return value

    @field_serializer("trackables")
    def _dump_tags(self, tags: tuple[MovementTag, ...]) -> list[str]:
        return [str(tag) for tag in tags]

    def with_movement(self, tag: MovementTag) -> VisitLog:
        """Return a copy with *tag* appended."""
        return self.model_copy(update={"trackables": (*self.trackables, tag)})
