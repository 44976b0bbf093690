from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Dict, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import DuplicateStaffError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import StaffRecord
from .repository import StaffRepository

logger = logging.getLogger(__name__)

_COLUMNS = "id, staff_id, staff_name, email, phone_number, starting_date, photo_path"
_DUP_KEY_RE = re.compile(r"for key '([^']+)'")


def _to_record(row: Dict[str, Any]) -> StaffRecord:
    return StaffRecord(
        id=int(row["id"]),
        staff_id=row["staff_id"],
        staff_name=row["staff_name"],
        email=row["email"],
        phone_number=row["phone_number"],
        starting_date=normalize_mysql_date(row["starting_date"]),
        photo_path=row.get("photo_path") or None,
    )


def _duplicate_error(err: IntegrityError, *, staff_id: str, email: str) -> Optional[DuplicateStaffError]:
    """Map a MySQL duplicate-key error onto the offending column.

    The message names the violated index, e.g.
    ``Duplicate entry 'a@b.com' for key 'staff.uq_staff_email'``.
    """

    if err.errno != errorcode.ER_DUP_ENTRY:
        return None
    match = _DUP_KEY_RE.search(str(getattr(err, "msg", "") or err))
    if match and "email" in match.group(1).lower():
        return DuplicateStaffError("email", email)
    return DuplicateStaffError("staff_id", staff_id)


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[StaffRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff ORDER BY id")
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, record_id: int) -> Optional[StaffRecord]:
        return self._get_one("id", int(record_id))

    def get_by_staff_id(self, staff_id: str) -> Optional[StaffRecord]:
        return self._get_one("staff_id", staff_id)

    def get_by_email(self, email: str) -> Optional[StaffRecord]:
        return self._get_one("email", email)

    def _get_one(self, column: str, value: Any) -> Optional[StaffRecord]:
        # column is always one of the literals above, never user input
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM staff WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _to_record(row) if row else None

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO staff(staff_id, staff_name, email, phone_number, starting_date, photo_path)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (staff_id, staff_name, email, phone_number, starting_date, photo_path),
                )
                return int(cur.lastrowid)
        except IntegrityError as e:
            dup = _duplicate_error(e, staff_id=staff_id, email=email)
            if dup is None:
                raise
            logger.warning("Insert rejected by unique index on %s (%r)", dup.field, dup.value)
            raise dup from e

    def update(self, record: StaffRecord) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE staff
                    SET staff_id=%s, staff_name=%s, email=%s, phone_number=%s, starting_date=%s, photo_path=%s
                    WHERE id=%s
                    """,
                    (
                        record.staff_id,
                        record.staff_name,
                        record.email,
                        record.phone_number,
                        record.starting_date,
                        record.photo_path,
                        record.id,
                    ),
                )
                # MySQL reports 0 affected rows when nothing changed, so re-check existence.
                if cur.rowcount > 0:
                    return True
                cur.execute("SELECT 1 AS found FROM staff WHERE id=%s", (record.id,))
                return fetchone(cur) is not None
        except IntegrityError as e:
            dup = _duplicate_error(e, staff_id=record.staff_id, email=record.email)
            if dup is None:
                raise
            logger.warning("Update of staff id=%s rejected by unique index on %s", record.id, dup.field)
            raise dup from e

    def delete_by_id(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff WHERE id=%s", (int(record_id),))
            return cur.rowcount > 0
