"""Business logic services used by HTTP controllers.

`StudentService` coordinates a `StudentStore` with the field rules in
`validation`. It is intentionally thin: each mutation is a single
fetch, validate, mutate and persist cycle; reads delegate to the store.
"""

import logging
from typing import List

from . import validation
from .errors import NotFound, PreconditionFailed
from .models import Address, Gender, Student, StudentSummary
from .protocols import StudentStore
from .schemas import StudentIn

logger = logging.getLogger("student_records.service")


class StudentService:
    """Student read, create and guarded update operations."""
    def __init__(self, store: StudentStore):
        self.store = store

    def get_all_student_details(self) -> List[Student]:
        return self.store.list_all()

    def get_student_details_by_address(self, address: Address) -> List[Student]:
        return self.store.list_by_address(address)

    def get_students_between_age(self, lo: int, hi: int) -> List[Student]:
        """Return students aged `lo` to `hi` inclusive; empty when `lo > hi`."""
        if lo > hi:
            return []
        return self.store.list_by_age_between(lo, hi)

    def get_student(self, student_id: int) -> Student:
        student = self.store.get(student_id)
        if student is None:
            raise NotFound("Student not found")
        return student

    def create_student(self, payload: StudentIn) -> Student:
        """Validate `payload` and insert it; storage assigns the id."""
        validation.ensure_valid(validation.validate_student(payload))
        student = Student(
            student_name=payload.student_name,
            address=payload.address.model_copy(),
            age=payload.age,
            email=payload.email,
            mobile=payload.mobile,
            gender=Gender(payload.gender),
            dob=payload.dob,
        )
        created = self.store.save(student)
        logger.info("created student %s", created.student_id)
        return created

    def update_student_email(self, student_id: int, old_email: str, new_email: str) -> Student:
        """Replace the email only if the stored one equals `old_email` exactly.

        The comparison is case-sensitive. A mismatch raises
        `PreconditionFailed` and leaves the stored record unchanged; the
        store repeats the comparison at write time for concurrent updates.
        """
        student = self.get_student(student_id)
        if student.email != old_email:
            logger.warning("stale email update rejected for student %s", student_id)
            raise PreconditionFailed("Old email does not match")
        updated = self.store.update_email(student_id, old_email, new_email)
        logger.info("updated email for student %s", student_id)
        return updated

    def update_student_address(self, student_id: int, address: Address) -> Student:
        """Replace the whole embedded address of a student.

        The store rejects an invalid pincode with `ValidationError`.
        """
        student = self.get_student(student_id)
        updated = self.store.save(student.model_copy(update={"address": address.model_copy()}))
        logger.info("updated address for student %s", student_id)
        return updated

    def get_name_address_age_of_all_students(self) -> List[StudentSummary]:
        return [StudentSummary.of(s) for s in self.store.list_all()]
