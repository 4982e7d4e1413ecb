"""Repository encapsulating database operations on students.

`StudentRepository` implements the `StudentStore` protocol over a
SQLModel `Session`. It accepts and returns `Student` records, mapping
them to `StudentRecord` rows explicitly, and commits per operation.
Lists are ordered by `student_id` ascending.
"""

import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from . import validation
from .errors import ConstraintViolation, NotFound, PreconditionFailed
from .models import Address, Student, StudentRecord, from_record, to_record

logger = logging.getLogger("student_records.repository")


class StudentRepository:
    """CRUD operations for `Student` records."""
    def __init__(self, session: Session):
        self.session = session

    def get(self, student_id: int) -> Optional[Student]:
        """Get a `Student` by primary key or `None` if not found."""
        record = self.session.get(StudentRecord, student_id)
        return from_record(record) if record else None

    def get_by_email(self, email: str) -> Optional[Student]:
        """Return the `Student` holding `email` or `None`."""
        stmt = select(StudentRecord).where(StudentRecord.email == email)
        record = self.session.exec(stmt).first()
        return from_record(record) if record else None

    def list_all(self) -> List[Student]:
        """Return every stored student."""
        stmt = select(StudentRecord).order_by(StudentRecord.student_id)
        return [from_record(r) for r in self.session.exec(stmt).all()]

    def list_by_address(self, address: Address) -> List[Student]:
        """Return students whose pincode, state and city all match exactly."""
        stmt = select(StudentRecord).where(
            StudentRecord.pincode == address.pincode,
            StudentRecord.state == address.state,
            StudentRecord.city == address.city
        ).order_by(StudentRecord.student_id)
        return [from_record(r) for r in self.session.exec(stmt).all()]

    def list_by_age_between(self, lo: int, hi: int) -> List[Student]:
        """Return students with `lo <= age <= hi`."""
        stmt = select(StudentRecord).where(
            StudentRecord.age >= lo,
            StudentRecord.age <= hi
        ).order_by(StudentRecord.student_id)
        return [from_record(r) for r in self.session.exec(stmt).all()]

    def save(self, student: Student) -> Student:
        """Insert `student` when it has no id, otherwise update its row.

        Every field rule is checked first; a failing student raises
        `ValidationError` and nothing is written. Raises
        `ConstraintViolation` when another student already holds the
        email and `NotFound` when updating an id with no row. The unique
        index on `email` backs the pre-check for concurrent writers.
        """
        validation.ensure_valid(validation.validate_student(student))
        holder = self.get_by_email(student.email)
        if holder is not None and holder.student_id != student.student_id:
            raise ConstraintViolation(f"Email already in use: {student.email}")
        if student.student_id is None:
            record = to_record(student)
        else:
            record = self.session.get(StudentRecord, student.student_id)
            if record is None:
                raise NotFound("Student not found")
            for field, value in to_record(student).model_dump(exclude={"student_id"}).items():
                setattr(record, field, value)
        self.session.add(record)
        self._commit(student.student_id, student.email)
        self.session.refresh(record)
        return from_record(record)

    def update_email(self, student_id: int, old_email: str, new_email: str) -> Student:
        """Set `new_email` only while the stored email still equals `old_email`.

        The comparison happens in the UPDATE itself, so a writer that
        read the row before another update committed gets
        `PreconditionFailed` instead of overwriting it.
        """
        validation.ensure_valid(validation.validate_email(new_email))
        holder = self.get_by_email(new_email)
        if holder is not None and holder.student_id != student_id:
            raise ConstraintViolation(f"Email already in use: {new_email}")
        stmt = update(StudentRecord).where(
            StudentRecord.student_id == student_id,
            StudentRecord.email == old_email
        ).values(email=new_email)
        try:
            result = self.session.connection().execute(stmt)
        except IntegrityError as e:
            self.session.rollback()
            logger.warning("integrity error updating email of student %s: %s", student_id, e.orig)
            raise ConstraintViolation(f"Email already in use: {new_email}") from e
        if result.rowcount == 0:
            self.session.rollback()
            if self.session.get(StudentRecord, student_id) is None:
                raise NotFound("Student not found")
            raise PreconditionFailed("Old email does not match")
        self._commit(student_id, new_email)
        return self.get(student_id)

    def _commit(self, student_id: Optional[int], email: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning("integrity error saving student %s: %s", student_id, e.orig)
            raise ConstraintViolation(f"Email already in use: {email}") from e
