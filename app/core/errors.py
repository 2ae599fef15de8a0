from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class AppError(Exception):
    """
    Base class of every failure the services raise on purpose.

    The HTTP layer renders these as ErrorResponse bodies; nothing below the
    routers knows about status codes beyond this mapping.
    """

    code = "error"
    status_code = 500

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class ValidationError(AppError):
    code = "validation_error"
    status_code = 400

    def __init__(self, errors: list[FieldError], message: str = "Invalid fields"):
        super().__init__(message, [e.as_dict() for e in errors])
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]


class NotFoundError(AppError):
    code = "not_found"
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found", [{"id": entity_id}])
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(AppError):
    code = "invalid_transition"
    status_code = 409

    def __init__(self, entity: str, entity_id: str, current: str, target: str):
        super().__init__(
            f"{entity} cannot move from {current} to {target}",
            [{"id": entity_id, "from": current, "to": target}],
        )


class StorageError(AppError):
    code = "storage_error"
    status_code = 500


class AuthorizationError(AppError):
    code = "forbidden"
    status_code = 403

    def __init__(self, message: str = "Admin access denied"):
        super().__init__(message)
