"""
Field checks run before every add and update.

Rules are applied in a fixed order and stop at the first failure. A failure
is reported as an ``Outcome`` with ``Reason.VALIDATION``; nothing is raised.
"""

from datetime import date
from typing import Optional
import logging
import re

from ..schemas.student import Student
from .outcome import Outcome, Reason

logger = logging.getLogger(__name__)

GENDERS = ("male", "female")
PHONE_PATTERN = re.compile(r"^1[3-9]\d{9}$", re.ASCII)
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _reject(message: str) -> Outcome:
    logger.info("Validation failed: %s", message)
    return Outcome.failure(Reason.VALIDATION, message)


def validate_student(student: Optional[Student], today: Optional[date] = None) -> Outcome:
    if student is None:
        return _reject("Student information must not be empty")

    if is_blank(student.student_no):
        return _reject("Student number must not be empty")

    if is_blank(student.name):
        return _reject("Name must not be empty")

    if is_blank(student.gender):
        return _reject("Gender must not be empty")
    if student.gender.strip() not in GENDERS:
        return _reject("Gender must be 'male' or 'female'")

    if student.birth_date is None:
        return _reject("Birth date must not be empty")
    if student.birth_date > (today or date.today()):
        return _reject("Birth date must not be in the future")

    if is_blank(student.major):
        return _reject("Major must not be empty")

    if is_blank(student.class_name):
        return _reject("Class must not be empty")

    if not is_blank(student.phone) and not PHONE_PATTERN.fullmatch(student.phone.strip()):
        return _reject("Phone number must be an 11-digit mobile number")

    if not is_blank(student.email) and not EMAIL_PATTERN.fullmatch(student.email.strip()):
        return _reject("Email address format is invalid")

    return Outcome.success(student)
