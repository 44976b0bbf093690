from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from ..common.validators import Violation
from ..core.exceptions import DuplicateStaffError, NotFoundError, ValidationError
from ..photos.storage import PhotoStorage
from .model import StaffForm, StaffRecord
from .repository import StaffRepository
from .validation import validate_staff

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGES = {
    "staff_id": "Staff ID already exists",
    "email": "Email already exists",
}


def _duplicate_violation(err: DuplicateStaffError) -> Violation:
    return Violation(err.field, DUPLICATE_MESSAGES.get(err.field, "Value already exists"))


class StaffService:
    """Use cases: list, view, create, edit and delete staff records.

    Keeps the record store and the photo store consistent: a record never points
    at a missing file, and a file whose record was replaced or deleted is removed.
    Files are written only after validation and uniqueness checks pass.
    """

    def __init__(self, staff: StaffRepository, photos: PhotoStorage):
        self._staff = staff
        self._photos = photos

    def list_staff(self) -> Sequence[StaffRecord]:
        return self._staff.list_all()

    def get_staff(self, staff_id: str) -> StaffRecord:
        record = self._staff.get_by_staff_id(staff_id)
        if not record:
            raise NotFoundError(f"Staff member {staff_id!r} not found")
        return record

    def _uniqueness_violations(self, form: StaffForm, *, exclude_id: Optional[int] = None) -> List[Violation]:
        violations: List[Violation] = []

        other = self._staff.get_by_staff_id(form.staff_id)
        if other and other.id != exclude_id:
            violations.append(Violation("staff_id", DUPLICATE_MESSAGES["staff_id"]))

        other = self._staff.get_by_email(form.email)
        if other and other.id != exclude_id:
            violations.append(Violation("email", DUPLICATE_MESSAGES["email"]))

        return violations

    def _store_photo(self, form: StaffForm) -> Optional[str]:
        if form.photo is None:
            return None
        return self._photos.store(form.photo.content, form.photo.filename)

    def create_staff(self, form: StaffForm) -> StaffRecord:
        violations = validate_staff(form) or self._uniqueness_violations(form)
        if violations:
            logger.info("Create staff rejected: %s", [v.field for v in violations])
            raise ValidationError(violations, form=replace(form, photo=None))

        photo_path = self._store_photo(form)
        try:
            record_id = self._staff.create(
                staff_id=form.staff_id,
                staff_name=form.staff_name,
                email=form.email,
                phone_number=form.phone_number,
                starting_date=form.starting_date,
                photo_path=photo_path,
            )
        except DuplicateStaffError as e:
            # Lost a race with a concurrent create; don't leave the upload behind.
            self._photos.delete(photo_path)
            raise ValidationError([_duplicate_violation(e)], form=replace(form, photo=None)) from e
        except Exception:
            self._photos.delete(photo_path)
            raise

        logger.info("Created staff %s (id=%s)", form.staff_id, record_id)
        return StaffRecord(
            id=record_id,
            staff_id=form.staff_id,
            staff_name=form.staff_name,
            email=form.email,
            phone_number=form.phone_number,
            starting_date=form.starting_date,
            photo_path=photo_path,
        )

    def edit_staff(self, staff_id: str, form: StaffForm) -> StaffRecord:
        existing = self._staff.get_by_id(form.id) if form.id is not None else None
        # Key comparison follows the store (case-insensitive under MySQL collation).
        keyed = self._staff.get_by_staff_id(staff_id)
        if not existing or not keyed or keyed.id != existing.id:
            raise NotFoundError(f"Staff member {staff_id!r} not found")

        redisplay = replace(form, photo=None, photo_path=existing.photo_path)
        violations = validate_staff(form) or self._uniqueness_violations(form, exclude_id=existing.id)
        if violations:
            logger.info("Edit staff %s rejected: %s", staff_id, [v.field for v in violations])
            raise ValidationError(violations, form=redisplay)

        new_photo_path = self._store_photo(form)
        if new_photo_path:
            photo_path = new_photo_path
        elif form.remove_photo:
            photo_path = None
        else:
            photo_path = existing.photo_path

        updated = replace(
            existing,
            staff_id=form.staff_id,
            staff_name=form.staff_name,
            email=form.email,
            phone_number=form.phone_number,
            starting_date=form.starting_date,
            photo_path=photo_path,
        )

        try:
            found = self._staff.update(updated)
        except DuplicateStaffError as e:
            self._photos.delete(new_photo_path)
            raise ValidationError([_duplicate_violation(e)], form=redisplay) from e
        except Exception:
            self._photos.delete(new_photo_path)
            raise

        if not found:
            # Deleted by someone else between the read and the write.
            self._photos.delete(new_photo_path)
            raise NotFoundError(f"Staff member {staff_id!r} not found")

        if existing.photo_path and existing.photo_path != photo_path:
            self._photos.delete(existing.photo_path)

        logger.info("Updated staff %s (id=%s)", updated.staff_id, updated.id)
        return updated

    def delete_staff(self, staff_id: str) -> bool:
        """Delete by business key. Returns False (no-op) when already absent."""

        record = self._staff.get_by_staff_id(staff_id)
        if not record:
            return False

        self._staff.delete_by_id(record.id)
        if record.photo_path:
            self._photos.delete(record.photo_path)

        logger.info("Deleted staff %s (id=%s)", record.staff_id, record.id)
        return True
