from __future__ import annotations

import logging

from flask import Flask, abort, flash, redirect, render_template, request, url_for

from ..common.validators import group_by_field
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .forms import parse_staff_form
from .model import StaffForm

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.staff_service

    @app.route("/", endpoint="home")
    def home():
        return redirect(url_for("staff_index"))

    @app.route("/staff", methods=["GET"], endpoint="staff_index")
    def staff_index():
        return render_template("staff/index.html", staff=service.list_staff())

    @app.route("/staff/new", methods=["GET"], endpoint="staff_new")
    def staff_new():
        return render_template("staff/create.html", form=StaffForm(), errors={})

    @app.route("/staff", methods=["POST"], endpoint="staff_create")
    def staff_create():
        form = parse_staff_form(request.form, request.files)
        try:
            record = service.create_staff(form)
        except ValidationError as e:
            return render_template("staff/create.html", form=e.form or form, errors=group_by_field(e.violations))

        flash(f"Staff member {record.staff_id} created.", "success")
        return redirect(url_for("staff_index"))

    @app.route("/staff/<staff_id>", methods=["GET"], endpoint="staff_details")
    def staff_details(staff_id: str):
        try:
            record = service.get_staff(staff_id)
        except NotFoundError:
            abort(404)
        return render_template("staff/details.html", staff=record)

    @app.route("/staff/<staff_id>/edit", methods=["GET", "POST"], endpoint="staff_edit")
    def staff_edit(staff_id: str):
        if request.method == "GET":
            try:
                record = service.get_staff(staff_id)
            except NotFoundError:
                abort(404)
            return render_template("staff/edit.html", form=StaffForm.from_record(record), errors={}, key=staff_id)

        form = parse_staff_form(request.form, request.files)
        try:
            record = service.edit_staff(staff_id, form)
        except NotFoundError:
            abort(404)
        except ValidationError as e:
            return render_template(
                "staff/edit.html", form=e.form or form, errors=group_by_field(e.violations), key=staff_id
            )

        flash(f"Staff member {record.staff_id} updated.", "success")
        return redirect(url_for("staff_index"))

    @app.route("/staff/<staff_id>/delete", methods=["GET"], endpoint="staff_delete")
    def staff_delete(staff_id: str):
        try:
            record = service.get_staff(staff_id)
        except NotFoundError:
            abort(404)
        return render_template("staff/delete.html", staff=record)

    @app.route("/staff/<staff_id>/delete", methods=["POST"], endpoint="staff_delete_confirmed")
    def staff_delete_confirmed(staff_id: str):
        if service.delete_staff(staff_id):
            flash(f"Staff member {staff_id} deleted.", "success")
        else:
            logger.info("Delete of missing staff %s ignored", staff_id)
        return redirect(url_for("staff_index"))
