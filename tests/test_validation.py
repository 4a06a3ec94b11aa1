from datetime import date, timedelta

import pytest

from student_manager.core.outcome import Reason
from student_manager.core.validation import validate_student


def test_valid_student_passes(make_student):
    outcome = validate_student(make_student(phone="13812345678", email="li.wei@example.com", address="Beijing"))

    assert outcome.ok
    assert outcome.reason == Reason.OK


def test_missing_student_is_rejected():
    outcome = validate_student(None)

    assert not outcome
    assert outcome.reason == Reason.VALIDATION


@pytest.mark.parametrize("field", ["student_no", "name", "major", "class_name"])
@pytest.mark.parametrize("blank", [None, "", "   "])
def test_required_text_fields(make_student, field, blank):
    outcome = validate_student(make_student(**{field: blank}))

    assert not outcome
    assert outcome.reason == Reason.VALIDATION


@pytest.mark.parametrize("gender", [None, "", "Male", "m", "other", "男"])
def test_gender_must_be_a_recognized_literal(make_student, gender):
    assert not validate_student(make_student(gender=gender))


def test_gender_is_trimmed(make_student):
    assert validate_student(make_student(gender=" female "))


def test_birth_date_required(make_student):
    outcome = validate_student(make_student(birth_date=None))

    assert not outcome
    assert "Birth date" in outcome.message


def test_birth_date_in_future_rejected(make_student):
    today = date(2026, 10, 18)

    assert not validate_student(make_student(birth_date=today + timedelta(days=1)), today=today)
    assert validate_student(make_student(birth_date=today), today=today)


def test_birth_date_defaults_to_local_today(make_student):
    assert not validate_student(make_student(birth_date=date.today() + timedelta(days=1)))


@pytest.mark.parametrize("phone", ["12812345678", "1381234567", "138123456789", "1381234567a", "+8613812345678"])
def test_bad_phone_rejected(make_student, phone):
    outcome = validate_student(make_student(phone=phone))

    assert not outcome
    assert "Phone" in outcome.message


@pytest.mark.parametrize("phone", [None, "", "  ", "13912345678", " 19900000000 "])
def test_optional_phone_accepted(make_student, phone):
    assert validate_student(make_student(phone=phone))


@pytest.mark.parametrize("email", ["plain", "a@b", "a@b.c", "a b@example.com", "@example.com"])
def test_bad_email_rejected(make_student, email):
    outcome = validate_student(make_student(email=email))

    assert not outcome
    assert "Email" in outcome.message


@pytest.mark.parametrize("email", [None, "", "x+tag@mail.example.org", "first.last@school.edu.cn"])
def test_optional_email_accepted(make_student, email):
    assert validate_student(make_student(email=email))


def test_first_failure_wins(make_student):
    outcome = validate_student(make_student(name="", phone="bad"))

    assert outcome.message == "Name must not be empty"
