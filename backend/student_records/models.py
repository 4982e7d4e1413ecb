"""Domain records and the SQLModel table they are stored in.

`Student`, `Address` and `StudentSummary` are plain pydantic records
used by services and returned from the API. `StudentRecord` is the
`students` table row; the embedded address is flattened into three
columns. `to_record` / `from_record` map between the two explicitly.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel, Field


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class CamelModel(BaseModel):
    """Base record serialized with camelCase keys on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(CamelModel):
    """Postal address owned by a single student.

    Compared and copied by value; never shared between students.
    """
    pincode: str
    state: str
    city: str


class Student(CamelModel):
    """A student record. `student_id` is None until storage assigns it."""
    student_id: Optional[int] = None
    student_name: str
    address: Address
    age: int
    email: str
    mobile: str
    gender: Gender
    dob: date


class StudentSummary(CamelModel):
    """Read-only name/address/age view of a `Student`."""
    student_name: str
    address: Address
    age: int

    @classmethod
    def of(cls, student: Student) -> "StudentSummary":
        return cls(
            student_name=student.student_name,
            address=student.address.model_copy(),
            age=student.age,
        )


class StudentRecord(SQLModel, table=True):
    """Row in the `students` table.

    Fields:
    - `email`: unique across all rows (unique index)
    - `pincode`, `state`, `city`: the embedded address columns
    """
    __tablename__ = "students"

    student_id: Optional[int] = Field(default=None, primary_key=True)
    student_name: str = Field(max_length=10)
    pincode: str = Field(max_length=6, index=True)
    state: str
    city: str
    age: int = Field(index=True)
    email: str = Field(index=True, nullable=False, unique=True)
    mobile: str = Field(max_length=10)
    gender: str
    dob: date


def to_record(student: Student) -> StudentRecord:
    return StudentRecord(
        student_id=student.student_id,
        student_name=student.student_name,
        pincode=student.address.pincode,
        state=student.address.state,
        city=student.address.city,
        age=student.age,
        email=student.email,
        mobile=student.mobile,
        gender=student.gender.value,
        dob=student.dob,
    )


def from_record(record: StudentRecord) -> Student:
    return Student(
        student_id=record.student_id,
        student_name=record.student_name,
        address=Address(pincode=record.pincode, state=record.state, city=record.city),
        age=record.age,
        email=record.email,
        mobile=record.mobile,
        gender=Gender(record.gender),
        dob=record.dob,
    )
