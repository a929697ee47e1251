"""Caller identity for ledger operations.

Every operation receives an explicit :class:`OperationContext`; nothing in
the library reads the caller from global state.  Resolvers turn whatever the
host has (a fixed name, an X.509 client certificate) into the opaque identity
string stored as a cache ``Maintainer`` or a visit-log ``User``.
"""

from __future__ import annotations

import logging
from typing import Protocol

from cryptography import x509
from cryptography.x509.oid import NameOID
from pydantic import BaseModel, ConfigDict, field_validator

from pygeocache.exceptions import GeocacheUnauthenticatedError

_logger = logging.getLogger(__name__)


class IdentityResolver(Protocol):
    """Returns the identity of whoever invokes the current operation."""

    def current_caller_identity(self) -> str:
        ...


class OperationContext(BaseModel):
    """Per-call context threaded through every registry function.

    ``caller_identity`` is opaque and compared verbatim; ``"alice "`` and
    ``"alice"`` are different principals.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    caller_identity: str

    @field_validator("caller_identity")
    @classmethod
    def _require_identity(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("caller_identity must not be blank")
        return value


def resolve_context(resolver: IdentityResolver) -> OperationContext:
    """Resolve the caller once and wrap it in an :class:`OperationContext`."""
    identity = resolver.current_caller_identity()
    if not identity or not identity.strip():
        raise GeocacheUnauthenticatedError("No caller identity available")
    return OperationContext(caller_identity=identity)


class StaticIdentityResolver:
    """Resolver that always returns the same identity."""

    def __init__(self, identity: str) -> None:
        self._identity = identity

    def current_caller_identity(self) -> str:
        return self._identity


def _format_name(name: x509.Name) -> str:
    return "".join(f"/{attr.rfc4514_attribute_name}={attr.value!s}" for attr in name)


class X509IdentityResolver:
    """Derive the caller identity from a PEM client certificate.

    By default the identity is ``x509::<subject>::<issuer>`` with both
    distinguished names rendered as ``/C=US/O=Org/CN=alice``.  With
    ``common_name_only=True`` only the subject common name is returned.
    """

    def __init__(self, pem: bytes | str, *, common_name_only: bool = False) -> None:
        data = pem.encode("ascii") if isinstance(pem, str) else pem
        try:
            self._certificate = x509.load_pem_x509_certificate(data)
        except ValueError as exc:
            raise GeocacheUnauthenticatedError(f"Invalid client certificate: {exc}") from exc
        self._common_name_only = common_name_only

    @property
    def certificate(self) -> x509.Certificate:
        return self._certificate

    def current_caller_identity(self) -> str:
        subject = self._certificate.subject
        if self._common_name_only:
            common_names = subject.get_attributes_for_oid(NameOID.COMMON_NAME)
            if not common_names:
                raise GeocacheUnauthenticatedError("Client certificate has no common name")
            return str(common_names[0].value)
        identity = f"x509::{_format_name(subject)}::{_format_name(self._certificate.issuer)}"
        _logger.debug("Resolved certificate identity %s", identity)
        return identity
