"""Cache site model."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from pygeocache._constants import RecordKind
from pygeocache.models._base import GeocacheBaseModel


class CacheSite(GeocacheBaseModel):
    """A registered physical location.

    ``password`` (wire name ``Pass``) gates visit-log creation and is only
    shown to the maintainer; see :func:`pygeocache.permissions.redact_cache`.
    """

    KIND: ClassVar[RecordKind] = RecordKind.CACHE

    name: str = Field(default="", alias="Name")
    description: str = Field(default="", alias="Description")
    gps_x: float = Field(alias="GPSX")
    gps_y: float = Field(alias="GPSY")
    report: str = Field(default="", alias="Report")
    """Last free-text report; any caller may overwrite it."""
    password: str = Field(default="", alias="Pass")
    maintainer: str = Field(alias="Maintainer")
    """Identity that created the site. Never reassigned."""
