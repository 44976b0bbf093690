"""Example: using the service layer without Flask.

Controllers are a thin layer; the workflow lives in StaffService.
"""

import importlib
from pathlib import Path

from config import get_settings_module

from src.staff_records.staff_records.container import build_container
from src.staff_records.staff_records.core.exceptions import ValidationError
from src.staff_records.staff_records.staff.forms import parse_staff_form


def main():
    settings = importlib.import_module(get_settings_module())
    upload_root = Path(__file__).resolve().parents[1] / "static"
    container = build_container(db_config=settings.DB_CONFIG, upload_root=upload_root)

    form = parse_staff_form(
        {
            "staff_id": "STF100",
            "staff_name": "Example Person",
            "email": "example.person@example.com",
            "phone_number": "+1-123-456-7890",
            "starting_date": "2025-01-06",
        }
    )
    try:
        record = container.staff_service.create_staff(form)
        print("created", record)
    except ValidationError as e:
        for v in e.violations:
            print(f"{v.field}: {v.message}")

    for record in container.staff_service.list_staff():
        print(record.staff_id, record.staff_name, record.email)


if __name__ == "__main__":
    main()
