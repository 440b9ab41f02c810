"""Error hierarchy shared by the playback and catalog contexts.

Every error carries a stable ``code`` and can render itself as a plain dict,
which is what the command line host prints when an engine call fails.
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Root of every error the engine raises on purpose."""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def details(self) -> dict[str, Any]:
        """Structured context for the error; subclasses add their own fields."""
        return {}

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        extra = {key: value for key, value in self.details().items() if value is not None}
        if extra:
            payload["details"] = extra
        return payload


class ValidationError(DomainError):
    """An argument handed to the engine is out of range."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def details(self) -> dict[str, Any]:
        return {"field": self.field}


class EntityNotFoundError(DomainError):
    code = "ENTITY_NOT_FOUND"

    def __init__(self, entity_type: str, identifier: str | int, message: str | None = None) -> None:
        super().__init__(message or f"No {entity_type} stored for '{identifier}'")
        self.entity_type = entity_type
        self.identifier = identifier

    def details(self) -> dict[str, Any]:
        return {"entity": self.entity_type, "id": str(self.identifier)}


class BusinessRuleViolationError(DomainError):
    code = "BUSINESS_RULE_VIOLATION"

    def __init__(self, rule: str, message: str | None = None) -> None:
        super().__init__(message or f"Rule {rule} does not hold")
        self.rule = rule

    def details(self) -> dict[str, Any]:
        return {"rule": self.rule}


class ConcurrencyError(DomainError):
    """A conditional write found the stored row already changed."""

    code = "CONCURRENCY_ERROR"

    def __init__(self, entity_type: str, message: str | None = None) -> None:
        super().__init__(message or f"{entity_type} was changed by another call")
        self.entity_type = entity_type

    def details(self) -> dict[str, Any]:
        return {"entity": self.entity_type}


class InvalidOperationError(DomainError):
    code = "INVALID_OPERATION"

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        super().__init__(message or f"Cannot {operation} with {current_state}")
        self.operation = operation
        self.current_state = current_state

    def details(self) -> dict[str, Any]:
        return {"operation": self.operation, "state": self.current_state}
