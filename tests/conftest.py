from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import pytest

from src.staff_records.staff_records.core.exceptions import DuplicateStaffError
from src.staff_records.staff_records.photos.storage import FileSystemPhotoStorage
from src.staff_records.staff_records.staff.model import PhotoUpload, StaffForm, StaffRecord
from src.staff_records.staff_records.staff.service import StaffService

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


def _same(a: Optional[str], b: Optional[str]) -> bool:
    return a is not None and b is not None and a.casefold() == b.casefold()


class InMemoryStaff:
    """Repository fake that enforces the same unique columns as the MySQL schema.

    Key and email comparisons are case-insensitive, like the `utf8mb4_unicode_ci` collation.
    """

    def __init__(self):
        self._rows: dict[int, StaffRecord] = {}
        self._id = 0

    def _check_unique(self, *, staff_id: str, email: str, exclude_id: Optional[int] = None) -> None:
        for r in self._rows.values():
            if r.id == exclude_id:
                continue
            if _same(r.staff_id, staff_id):
                raise DuplicateStaffError("staff_id", staff_id)
            if _same(r.email, email):
                raise DuplicateStaffError("email", email)

    def list_all(self):
        return [self._rows[k] for k in sorted(self._rows)]

    def get_by_id(self, record_id: int) -> Optional[StaffRecord]:
        return self._rows.get(record_id)

    def get_by_staff_id(self, staff_id: str) -> Optional[StaffRecord]:
        return next((r for r in self._rows.values() if _same(r.staff_id, staff_id)), None)

    def get_by_email(self, email: str) -> Optional[StaffRecord]:
        return next((r for r in self._rows.values() if _same(r.email, email)), None)

    def create(self, *, staff_id, staff_name, email, phone_number, starting_date, photo_path=None) -> int:
        self._check_unique(staff_id=staff_id, email=email)
        self._id += 1
        self._rows[self._id] = StaffRecord(
            id=self._id,
            staff_id=staff_id,
            staff_name=staff_name,
            email=email,
            phone_number=phone_number,
            starting_date=starting_date,
            photo_path=photo_path,
        )
        return self._id

    def update(self, record: StaffRecord) -> bool:
        if record.id not in self._rows:
            return False
        self._check_unique(staff_id=record.staff_id, email=record.email, exclude_id=record.id)
        self._rows[record.id] = replace(record)
        return True

    def delete_by_id(self, record_id: int) -> bool:
        return self._rows.pop(record_id, None) is not None


def _make_form(**overrides) -> StaffForm:
    values = dict(
        staff_id="STF001",
        staff_name="John Doe",
        email="john.doe@example.com",
        phone_number="123-456-7890",
        starting_date=date(2024, 1, 15),
    )
    values.update(overrides)
    return StaffForm(**values)


def _make_photo(filename: str = "face.jpg", content: bytes = JPEG_BYTES) -> PhotoUpload:
    return PhotoUpload(filename=filename, content=content)


@pytest.fixture
def staff_repo() -> InMemoryStaff:
    return InMemoryStaff()


@pytest.fixture
def photo_storage(tmp_path) -> FileSystemPhotoStorage:
    return FileSystemPhotoStorage(tmp_path / "static")


@pytest.fixture
def staff_service(staff_repo, photo_storage) -> StaffService:
    return StaffService(staff_repo, photo_storage)


@pytest.fixture
def make_form():
    return _make_form


@pytest.fixture
def make_photo():
    return _make_photo
