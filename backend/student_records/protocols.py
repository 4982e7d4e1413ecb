"""Protocols describing the storage capabilities services depend on."""

from typing import List, Optional, Protocol

from .models import Address, Student


class StudentStore(Protocol):
    """Durable storage for `Student` records."""

    def get(self, student_id: int) -> Optional[Student]:
        ...

    def get_by_email(self, email: str) -> Optional[Student]:
        ...

    def list_all(self) -> List[Student]:
        ...

    def list_by_address(self, address: Address) -> List[Student]:
        ...

    def list_by_age_between(self, lo: int, hi: int) -> List[Student]:
        ...

    def save(self, student: Student) -> Student:
        ...

    def update_email(self, student_id: int, old_email: str, new_email: str) -> Student:
        ...
