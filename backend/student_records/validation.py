"""Field rules for students and addresses.

Every function here is pure: it inspects candidate data and returns a
list of `Violation`s (empty when valid). Callers collect the lists and
pass them to `ensure_valid` before any write. Email uniqueness is not a
field rule; the repository enforces it against stored rows.
"""

import re
from typing import List

from email_validator import EmailNotValidError, validate_email as check_email_syntax

from .errors import ValidationError, Violation
from .models import Gender

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 10
MIN_AGE = 13
MOBILE_PATTERN = re.compile(r"[6-9][0-9]{9}")
PINCODE_PATTERN = re.compile(r"[0-9]{6}")


def validate_address(address) -> List[Violation]:
    """Check the address pincode is exactly six ASCII digits."""
    pincode = address.pincode or ""
    if not PINCODE_PATTERN.fullmatch(pincode):
        return [Violation("pincode", "pincode must be exactly 6 digits")]
    return []


def validate_email(email: str) -> List[Violation]:
    """Check email syntax only; no DNS lookups are made."""
    if not email:
        return [Violation("email", "email is required")]
    try:
        check_email_syntax(email, check_deliverability=False)
    except EmailNotValidError as e:
        return [Violation("email", str(e))]
    return []


def validate_student(candidate) -> List[Violation]:
    """Run every student rule and return all violations found.

    `candidate` may be a `Student` or a `StudentIn` payload; `gender`
    is accepted either as a `Gender` member or its string value.
    """
    violations: List[Violation] = []
    name = candidate.student_name or ""
    if not name.strip() or not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH:
        violations.append(Violation(
            "studentName", f"studentName must be {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters"))
    if candidate.age is None or candidate.age < MIN_AGE:
        violations.append(Violation("age", f"age must be at least {MIN_AGE}"))
    violations.extend(validate_email(candidate.email))
    if not MOBILE_PATTERN.fullmatch(candidate.mobile or ""):
        violations.append(Violation("mobile", "mobile must be 10 digits starting with 6-9"))
    violations.extend(validate_address(candidate.address))
    gender = candidate.gender.value if isinstance(candidate.gender, Gender) else candidate.gender
    if gender not in {g.value for g in Gender}:
        violations.append(Violation("gender", "gender must be one of MALE, FEMALE"))
    return violations


def ensure_valid(violations: List[Violation]) -> None:
    """Raise `ValidationError` when any violation was collected."""
    if violations:
        raise ValidationError(violations)
