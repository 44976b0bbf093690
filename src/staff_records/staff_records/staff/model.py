from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional


@dataclass(frozen=True)
class StaffRecord:
    """Domain entity: one staff member.

    Plain data object, no database access here. ``photo_path`` is relative to
    the public content root (see ``photos.storage``).
    """

    id: int
    staff_id: str
    staff_name: str
    email: str
    phone_number: str
    starting_date: date
    photo_path: Optional[str] = None


@dataclass(frozen=True)
class PhotoUpload:
    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.filename)[1].lower()


@dataclass(frozen=True)
class StaffForm:
    """Typed form submission for create and edit.

    ``id`` and ``remove_photo`` are only meaningful on edit. ``photo_path`` carries
    the currently stored photo so the edit page can redisplay it.
    """

    staff_id: str = ""
    staff_name: str = ""
    email: str = ""
    phone_number: str = ""
    starting_date: Optional[date] = None
    id: Optional[int] = None
    photo_path: Optional[str] = None
    photo: Optional[PhotoUpload] = None
    remove_photo: bool = False
    parse_errors: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: StaffRecord) -> "StaffForm":
        return cls(
            staff_id=record.staff_id,
            staff_name=record.staff_name,
            email=record.email,
            phone_number=record.phone_number,
            starting_date=record.starting_date,
            id=record.id,
            photo_path=record.photo_path,
        )
