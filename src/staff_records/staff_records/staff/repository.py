from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import StaffRecord


class StaffRepository(Protocol):
    """Repository interface for staff records.

    Note (DIP): the service depends on this interface, not on a concrete database.
    ``create`` and ``update`` raise ``DuplicateStaffError`` when ``staff_id`` or
    ``email`` collides with another record.
    """

    def list_all(self) -> Sequence[StaffRecord]:
        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[StaffRecord]:
        raise NotImplementedError

    def get_by_staff_id(self, staff_id: str) -> Optional[StaffRecord]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[StaffRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        staff_id: str,
        staff_name: str,
        email: str,
        phone_number: str,
        starting_date: date,
        photo_path: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, record: StaffRecord) -> bool:
        raise NotImplementedError

    def delete_by_id(self, record_id: int) -> bool:
        raise NotImplementedError
