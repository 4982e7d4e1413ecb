"""Business error kinds raised by the service and repository layers.

Each error carries a human-readable `message`; the HTTP layer maps the
error class to a status code and returns the message as plain text.
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Violation:
    """A single failed field rule."""
    field: str
    message: str


class StudentError(Exception):
    """Base class for all student record failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StudentError):
    """One or more fields failed their declared constraint."""

    def __init__(self, violations: List[Violation]):
        self.violations = list(violations)
        super().__init__("; ".join(f"{v.field}: {v.message}" for v in self.violations))

    @property
    def fields(self) -> List[str]:
        return [v.field for v in self.violations]


class NotFound(StudentError):
    """The referenced student id does not exist."""


class PreconditionFailed(StudentError):
    """Caller-supplied state does not match what is stored."""


class ConstraintViolation(StudentError):
    """A storage uniqueness constraint would be broken by the write."""
