"""Pydantic request schemas used by the API.

Schemas keep API input shapes stable. Field-level business rules are
not declared here; they are checked by `validation` so every rule
produces the same `ValidationError` regardless of the entry point.
"""

from datetime import date

from .models import Address, CamelModel


class StudentIn(CamelModel):
    """Payload for creating a student. `gender` is checked by validation."""
    student_name: str
    address: Address
    age: int
    email: str
    mobile: str
    gender: str
    dob: date
