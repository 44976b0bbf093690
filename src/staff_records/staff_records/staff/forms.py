from __future__ import annotations

from typing import Mapping, Optional

from werkzeug.datastructures import FileStorage

from ..common.datetime_utils import parse_iso_date
from .model import PhotoUpload, StaffForm

_TRUTHY = {"1", "true", "on", "yes"}


def _text(form: Mapping[str, str], name: str) -> str:
    return (form.get(name) or "").strip()


def _read_photo(files: Optional[Mapping[str, FileStorage]]) -> Optional[PhotoUpload]:
    if not files:
        return None
    storage = files.get("photo")
    if storage is None or not storage.filename:
        return None
    content = storage.read()
    if not content:
        # An empty file input behaves like "no photo supplied".
        return None
    return PhotoUpload(filename=storage.filename, content=content)


def parse_staff_form(form: Mapping[str, str], files: Optional[Mapping[str, FileStorage]] = None) -> StaffForm:
    """Turn a submitted form (``request.form`` / ``request.files``) into a ``StaffForm``.

    Values that cannot be converted are recorded in ``parse_errors`` and surface
    as validation violations on the same field.
    """

    parse_errors: dict[str, str] = {}

    starting_date = None
    raw_date = _text(form, "starting_date")
    if raw_date:
        try:
            starting_date = parse_iso_date(raw_date)
        except ValueError:
            parse_errors["starting_date"] = "Starting date must be a valid date (YYYY-MM-DD)"

    # A malformed id is treated as missing; edit then reports not found.
    raw_id = _text(form, "id")
    record_id = int(raw_id) if raw_id.isdigit() else None

    return StaffForm(
        staff_id=_text(form, "staff_id"),
        staff_name=_text(form, "staff_name"),
        email=_text(form, "email"),
        phone_number=_text(form, "phone_number"),
        starting_date=starting_date,
        id=record_id,
        photo_path=_text(form, "photo_path") or None,
        photo=_read_photo(files),
        remove_photo=_text(form, "remove_photo").lower() in _TRUTHY,
        parse_errors=parse_errors,
    )
