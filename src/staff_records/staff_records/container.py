from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .photos.storage import FileSystemPhotoStorage, PhotoStorage
from .staff.mysql_staff_repository import MySQLStaffRepository
from .staff.repository import StaffRepository
from .staff.service import StaffService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    staff_repo: StaffRepository
    photo_storage: PhotoStorage

    staff_service: StaffService


def build_container(
    *,
    db_config: dict,
    upload_root: str | Path,
    staff_repo: Optional[StaffRepository] = None,
) -> Container:
    """Wire repositories, storage and services.

    Pass ``staff_repo`` to swap the MySQL repository (tests use an in-memory one).
    """

    conn = None
    if staff_repo is None:
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
        staff_repo = MySQLStaffRepository(conn)

    photo_storage = FileSystemPhotoStorage(upload_root)
    staff_service = StaffService(staff_repo, photo_storage)

    return Container(
        conn=conn,
        staff_repo=staff_repo,
        photo_storage=photo_storage,
        staff_service=staff_service,
    )
