"""
Error taxonomy shared by the domain, repositories, services and API.

Every failure surfaced by the service carries one of five kinds. The API
layer maps each kind onto an HTTP status via ``status_code``.
"""
from __future__ import annotations

from typing import Optional


class WoodysError(Exception):
    """Base class for all classified service errors."""

    kind = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def with_context(self, prefix: str) -> "WoodysError":
        """Return an error of the same kind with ``prefix`` prepended to the message."""
        wrapped = self._copy(f"{prefix}: {self.message}")
        wrapped.__cause__ = self
        return wrapped

    def _copy(self, message: str) -> "WoodysError":
        return type(self)(message)

    def to_dict(self) -> dict:
        return {"detail": self.message, "error": self.kind}


class ValidationError(WoodysError):
    """A named field failed a domain rule."""

    kind = "validation"
    status_code = 400

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}" if field else message)
        self.field = field
        self.reason = message

    def _copy(self, message: str) -> "ValidationError":
        err = ValidationError(self.field, self.reason)
        err.message = message
        err.args = (message,)
        return err

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["field"] = self.field
        return body


class NotFoundError(WoodysError):
    kind = "not_found"
    status_code = 404

    @classmethod
    def for_entity(cls, entity: str, identifier: Optional[object] = None) -> "NotFoundError":
        if identifier is None:
            return cls(f"{entity} not found")
        return cls(f"{entity} {identifier} not found")


class ConflictError(WoodysError):
    kind = "conflict"
    status_code = 409


class UnauthorizedError(WoodysError):
    """Caller identity is known but not permitted to perform the action."""

    kind = "unauthorized"
    status_code = 403


class InternalError(WoodysError):
    kind = "internal"
    status_code = 500
