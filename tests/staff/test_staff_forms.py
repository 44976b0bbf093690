from __future__ import annotations

import io
from datetime import date

from werkzeug.datastructures import FileStorage, ImmutableMultiDict

from src.staff_records.staff_records.staff.forms import parse_staff_form


def _form(**overrides):
    data = {
        "staff_id": " STF001 ",
        "staff_name": "John Doe",
        "email": "john.doe@example.com",
        "phone_number": "123-456-7890",
        "starting_date": "2024-01-15",
    }
    data.update(overrides)
    return ImmutableMultiDict(data)


def test_parse_strips_and_converts():
    form = parse_staff_form(_form())

    assert form.staff_id == "STF001"
    assert form.starting_date == date(2024, 1, 15)
    assert form.id is None
    assert form.photo is None
    assert form.remove_photo is False
    assert dict(form.parse_errors) == {}


def test_unparseable_date_becomes_parse_error():
    form = parse_staff_form(_form(starting_date="15/01/2024"))

    assert form.starting_date is None
    assert "starting_date" in form.parse_errors


def test_missing_date_is_not_a_parse_error():
    form = parse_staff_form(_form(starting_date=""))

    assert form.starting_date is None
    assert "starting_date" not in form.parse_errors


def test_edit_fields():
    form = parse_staff_form(_form(id="7", photo_path="uploads/staff/a_b.jpg", remove_photo="on"))

    assert form.id == 7
    assert form.photo_path == "uploads/staff/a_b.jpg"
    assert form.remove_photo is True


def test_malformed_id_is_treated_as_missing():
    assert parse_staff_form(_form(id="abc")).id is None


def test_uploaded_photo_is_read():
    files = ImmutableMultiDict(
        {"photo": FileStorage(stream=io.BytesIO(b"imagebytes"), filename="Me.PNG", content_type="image/png")}
    )
    form = parse_staff_form(_form(), files)

    assert form.photo is not None
    assert form.photo.filename == "Me.PNG"
    assert form.photo.content == b"imagebytes"
    assert form.photo.extension == ".png"
    assert form.photo.size == 10


def test_empty_file_input_means_no_photo():
    files = ImmutableMultiDict({"photo": FileStorage(stream=io.BytesIO(b""), filename="")})
    assert parse_staff_form(_form(), files).photo is None
