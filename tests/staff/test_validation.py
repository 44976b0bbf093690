from __future__ import annotations

import pytest

from src.staff_records.staff_records.common.validators import Rule, Violation, is_present, validate
from src.staff_records.staff_records.staff.model import StaffRecord
from src.staff_records.staff_records.staff.validation import validate_staff


@pytest.mark.parametrize(
    "email",
    ["john.doe@example.com", "a_b%c+d-e@mail.example.org", "x@y.io"],
)
def test_valid_emails(make_form, email):
    assert validate_staff(make_form(email=email)) == []


@pytest.mark.parametrize(
    "email",
    [
        "",
        "invalid..email@example.com",
        ".leading@example.com",
        "trailing.@example.com",
        "two@at@example.com",
        "no-at-sign.example.com",
        "short@tld.c",
        "digits@tld.c0m",
    ],
)
def test_invalid_emails(make_form, email):
    assert [v.field for v in validate_staff(make_form(email=email))] == ["email"]


@pytest.mark.parametrize("phone", ["(123) 456-7890", "123-456-7890", "1234567890", "+1-123-456-7890", "123.456.7890"])
def test_valid_phones(make_form, phone):
    assert validate_staff(make_form(phone_number=phone)) == []


@pytest.mark.parametrize("phone", ["123", "abc-def-ghij", "", "123-456-789", "+1234-123-456-7890"])
def test_invalid_phones(make_form, phone):
    assert [v.field for v in validate_staff(make_form(phone_number=phone))] == ["phone_number"]


@pytest.mark.parametrize(
    "staff_id, ok",
    [("A" * 3, True), ("A" * 2, False), ("A" * 20, True), ("A" * 21, False)],
)
def test_staff_id_length_boundaries(make_form, staff_id, ok):
    fields = [v.field for v in validate_staff(make_form(staff_id=staff_id))]
    assert ("staff_id" not in fields) is ok


def test_valid_form_has_no_violations(make_form):
    assert validate_staff(make_form()) == []


def test_required_wins_over_format_checks(make_form):
    violations = validate_staff(make_form(email="", phone_number=""))
    assert violations == [
        Violation("email", "Email is required"),
        Violation("phone_number", "Phone number is required"),
    ]


def test_violations_are_ordered_by_field(make_form):
    form = make_form(staff_id="", staff_name="J", email="bad", phone_number="12", starting_date=None)
    assert [v.field for v in validate_staff(form)] == [
        "staff_id",
        "staff_name",
        "email",
        "phone_number",
        "starting_date",
    ]


def test_whitespace_only_counts_as_missing(make_form):
    violations = validate_staff(make_form(staff_name="   "))
    assert violations == [Violation("staff_name", "Staff name is required")]


def test_long_email_reports_length_and_format(make_form):
    email = "a" * 95 + "@example.com"
    messages = [v.message for v in validate_staff(make_form(email=email)) if v.field == "email"]
    assert messages == ["Email cannot exceed 100 characters"]


def test_parse_error_reported_instead_of_rules(make_form):
    form = make_form(starting_date=None, parse_errors={"starting_date": "Starting date must be a valid date (YYYY-MM-DD)"})
    assert validate_staff(form) == [
        Violation("starting_date", "Starting date must be a valid date (YYYY-MM-DD)"),
    ]


@pytest.mark.parametrize("filename", ["me.JPG", "me.jpeg", "me.png", "me.Gif"])
def test_photo_allowed_extensions(make_form, make_photo, filename):
    assert validate_staff(make_form(photo=make_photo(filename=filename))) == []


def test_photo_wrong_extension(make_form, make_photo):
    violations = validate_staff(make_form(photo=make_photo(filename="cv.pdf")))
    assert violations == [Violation("photo", "Only image files (.jpg, .jpeg, .png, .gif) are allowed")]


def test_photo_size_limit(make_form, make_photo):
    at_limit = make_photo(content=b"x" * (2 * 1024 * 1024))
    too_big = make_photo(content=b"x" * (2 * 1024 * 1024 + 1))

    assert validate_staff(make_form(photo=at_limit)) == []
    assert validate_staff(make_form(photo=too_big)) == [Violation("photo", "File size cannot exceed 2MB")]


def test_validates_stored_records_too(make_form):
    record = StaffRecord(
        id=1,
        staff_id="STF001",
        staff_name="John Doe",
        email="john.doe@example.com",
        phone_number="not a phone",
        starting_date=make_form().starting_date,
    )
    assert validate_staff(record) == [Violation("phone_number", "Please enter a valid phone number")]


def test_generic_engine_halts_only_the_failing_field():
    class Candidate:
        a = None
        b = "x"

    rules = [
        Rule("a", is_present, "a required", halts=True),
        Rule("a", lambda v: False, "never reached"),
        Rule("b", lambda v: v == "y", "b must be y"),
    ]
    assert validate(Candidate(), rules) == [Violation("a", "a required"), Violation("b", "b must be y")]
