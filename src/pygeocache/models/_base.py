"""Base model for ledger records.

Every record stored on the ledger inherits from :class:`GeocacheBaseModel`
which provides:

* frozen instances, so a value read from the ledger can never be changed in
  place (updates go through ``model_copy``);
* PascalCase wire names via per-field aliases, while Python code uses
  snake_case attributes (``populate_by_name=True`` accepts both);
* a ``KIND`` class variable naming the key namespace the record lives in.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from pygeocache._constants import RecordKind


class GeocacheBaseModel(BaseModel):
    """Base for ledger record models."""

    KIND: ClassVar[RecordKind]

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    id: str = Field(alias="ID", min_length=1)

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict keyed by wire (alias) names."""
        return self.model_dump(mode="json", by_alias=True)


TRecord = TypeVar("TRecord", bound=GeocacheBaseModel)
