"""
models/outcome.py
-----------------
Result value returned by every service operation.

An Outcome is a tagged variant: exactly one of
Ok(value), NotFound, Invalid(errors), Conflict(message), InternalError(detail).
Callers branch on `kind`, never on exception types, so the same
value can be consumed by the HTTP layer or any other presenter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class OutcomeKind(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    CONFLICT = "conflict"
    INTERNAL_ERROR = "internal_error"


@dataclass
class Outcome:
    """
    Tagged result of a data-access operation.

    Attributes:
        kind: Which variant this is.
        value: The payload for OK (a record, a list of records, or None).
        message: Human-readable summary (success or failure).
        errors: Collected validation messages (INVALID only).
        detail: Underlying driver message (INTERNAL_ERROR only).
    """
    kind: OutcomeKind
    value: Any = None
    message: Optional[str] = None
    errors: list[str] = field(default_factory=list)
    detail: Optional[str] = None

    @classmethod
    def ok(cls, value: Any = None, message: Optional[str] = None) -> "Outcome":
        return cls(OutcomeKind.OK, value=value, message=message)

    @classmethod
    def not_found(cls, message: str) -> "Outcome":
        return cls(OutcomeKind.NOT_FOUND, message=message)

    @classmethod
    def invalid(cls, errors: list[str], message: str = "Invalid input data.") -> "Outcome":
        return cls(OutcomeKind.INVALID, message=message, errors=list(errors))

    @classmethod
    def conflict(cls, message: str) -> "Outcome":
        return cls(OutcomeKind.CONFLICT, message=message)

    @classmethod
    def internal_error(cls, detail: str, message: str = "An error occurred.") -> "Outcome":
        return cls(OutcomeKind.INTERNAL_ERROR, message=message, detail=detail)

    @property
    def is_ok(self) -> bool:
        return self.kind is OutcomeKind.OK
