from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class AnimalNotFound(NotFound):
    code = "animal_not_found"


class ValidationError(AppError):
    code = "validation_error"
    status_code = 422


class InvalidEventDate(ValidationError):
    code = "invalid_event_date"


class InvalidTransition(ValidationError):
    code = "invalid_transition"


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500


class PersistenceFailure(InfrastructureError):
    code = "persistence_failure"


class InvariantViolation(AppError):
    code = "invariant_violation"
    status_code = 500
