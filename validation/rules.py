"""
validation/rules.py
-------------------
Shared building blocks for the per-entity validators.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from utils.errors import ValidationError


@dataclass
class ValidationResult:
    """Collected violations for a single record."""
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, message: str) -> None:
        self.errors.append(message)

    def require(self, value, message: str) -> bool:
        """Record `message` if value is missing or blank. Returns True when present."""
        if is_blank(value):
            self.add(message)
            return False
        return True

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise ValidationError(self.errors)


def is_blank(value) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def matches(pattern: re.Pattern, value: Optional[str]) -> bool:
    return value is not None and pattern.fullmatch(value) is not None


def is_future(value: date, now: Optional[datetime] = None) -> bool:
    """
    True if `value` lies after the current wall-clock time.

    Plain dates compare against today's date, so a date equal to
    today is never in the future.
    """
    now = now or datetime.now()
    if isinstance(value, datetime):
        return value > now
    return value > now.date()
