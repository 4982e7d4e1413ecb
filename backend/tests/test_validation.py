import pytest

from student_records import validation
from student_records.errors import ValidationError
from student_records.models import Address
from student_records.schemas import StudentIn

from conftest import make_student, student_payload


def _fields(violations):
    return {v.field for v in violations}


def test_valid_student_has_no_violations():
    assert validation.validate_student(make_student()) == []


@pytest.mark.parametrize("name", ["Al", "Abcdefghijk", "   ", ""])
def test_student_name_length_and_blank(name):
    assert _fields(validation.validate_student(make_student(student_name=name))) == {"studentName"}


def test_student_name_bounds_are_inclusive():
    assert validation.validate_student(make_student(student_name="Ann")) == []
    assert validation.validate_student(make_student(student_name="Abcdefghij")) == []


def test_age_minimum():
    assert validation.validate_student(make_student(age=13)) == []
    assert _fields(validation.validate_student(make_student(age=12))) == {"age"}


@pytest.mark.parametrize("mobile", ["5876543210", "987654321", "98765432100", "98765abcde", "9876543210\n"])
def test_mobile_pattern_rejects(mobile):
    assert _fields(validation.validate_student(make_student(mobile=mobile))) == {"mobile"}


@pytest.mark.parametrize("mobile", ["6000000000", "9999999999"])
def test_mobile_pattern_accepts(mobile):
    assert validation.validate_student(make_student(mobile=mobile)) == []


@pytest.mark.parametrize("pincode", ["56000", "5600011", "56000a", "５６０００１"])
def test_pincode_must_be_six_ascii_digits(pincode):
    address = Address(pincode=pincode, state="Karnataka", city="Bengaluru")
    assert _fields(validation.validate_address(address)) == {"pincode"}


def test_email_syntax():
    assert validation.validate_email("a@x.com") == []
    assert _fields(validation.validate_email("not-an-email")) == {"email"}
    assert _fields(validation.validate_email("")) == {"email"}


def test_gender_must_be_enumerated():
    payload = StudentIn.model_validate(student_payload(gender="OTHER"))
    assert _fields(validation.validate_student(payload)) == {"gender"}


def test_all_violations_are_reported_together():
    candidate = make_student(student_name="Al", age=10, mobile="123", email="bad",
                             address=Address(pincode="1", state="S", city="C"))
    assert _fields(validation.validate_student(candidate)) == {"studentName", "age", "mobile", "email", "pincode"}


def test_ensure_valid_raises_with_fields():
    violations = validation.validate_student(make_student(age=5))
    with pytest.raises(ValidationError) as exc:
        validation.ensure_valid(violations)
    assert exc.value.fields == ["age"]
    validation.ensure_valid([])
