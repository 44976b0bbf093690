"""Field rules for staff submissions.

Rules are evaluated in order by ``common.validators.validate``; keep them grouped
by field in display order so violations come back ordered by field.
"""
from __future__ import annotations

import re
from typing import Any, List

from ..common.validators import Rule, Violation, is_present, length_between, matches, max_length, optional, validate
from ..core.constants import (
    ALLOWED_PHOTO_EXTENSIONS,
    EMAIL_MAX_LENGTH,
    MAX_PHOTO_BYTES,
    PHONE_MAX_LENGTH,
    STAFF_ID_MAX_LENGTH,
    STAFF_ID_MIN_LENGTH,
    STAFF_NAME_MAX_LENGTH,
    STAFF_NAME_MIN_LENGTH,
)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9_%+-]+(?:\.[a-zA-Z0-9_%+-]+)*@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"(\+?[0-9]{1,3}[-.\s]?)?\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}")


def _allowed_extension(photo) -> bool:
    return photo.extension in ALLOWED_PHOTO_EXTENSIONS


def _within_size_limit(photo) -> bool:
    return photo.size <= MAX_PHOTO_BYTES


STAFF_RULES: tuple[Rule, ...] = (
    Rule("staff_id", is_present, "Staff ID is required", halts=True),
    Rule(
        "staff_id",
        length_between(STAFF_ID_MIN_LENGTH, STAFF_ID_MAX_LENGTH),
        f"Staff ID must be between {STAFF_ID_MIN_LENGTH} and {STAFF_ID_MAX_LENGTH} characters",
    ),
    Rule("staff_name", is_present, "Staff name is required", halts=True),
    Rule(
        "staff_name",
        length_between(STAFF_NAME_MIN_LENGTH, STAFF_NAME_MAX_LENGTH),
        f"Staff name must be between {STAFF_NAME_MIN_LENGTH} and {STAFF_NAME_MAX_LENGTH} characters",
    ),
    Rule("email", is_present, "Email is required", halts=True),
    Rule("email", max_length(EMAIL_MAX_LENGTH), f"Email cannot exceed {EMAIL_MAX_LENGTH} characters"),
    Rule("email", matches(EMAIL_PATTERN), "Please enter a valid email address"),
    Rule("phone_number", is_present, "Phone number is required", halts=True),
    Rule("phone_number", max_length(PHONE_MAX_LENGTH), f"Phone number cannot exceed {PHONE_MAX_LENGTH} characters"),
    Rule("phone_number", matches(PHONE_PATTERN), "Please enter a valid phone number"),
    Rule("starting_date", is_present, "Starting date is required", halts=True),
    Rule(
        "photo",
        optional(_allowed_extension),
        "Only image files ({}) are allowed".format(", ".join(ALLOWED_PHOTO_EXTENSIONS)),
    ),
    Rule("photo", optional(_within_size_limit), f"File size cannot exceed {MAX_PHOTO_BYTES // (1024 * 1024)}MB"),
)


def validate_staff(candidate: Any) -> List[Violation]:
    """Validate a ``StaffForm`` (or a ``StaffRecord``) against ``STAFF_RULES``."""
    return validate(candidate, STAFF_RULES)
