from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, handle_errors
from ..common.validators import optional_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _csv_response(result):
        filename, chunks = result
        return app.response_class(
            chunks,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.route("/api/exports/staff", methods=["GET"], endpoint="export_staff")
    @admin_required
    @handle_errors
    def export_staff():
        return _csv_response(
            container.export_service.export_staff(
                office_location_id=optional_int(request.args.get("office_location_id"), "office_location_id"),
                division_id=optional_int(request.args.get("division_id"), "division_id"),
                status=request.args.get("status"),
            )
        )

    @app.route("/api/exports/attendance", methods=["GET"], endpoint="export_attendance")
    @admin_required
    @handle_errors
    def export_attendance():
        return _csv_response(
            container.export_service.export_attendance(
                start_date=request.args.get("start_date"),
                end_date=request.args.get("end_date"),
                staff_member_id=optional_int(request.args.get("staff_member_id"), "staff_member_id"),
            )
        )

    @app.route("/api/exports/leaves", methods=["GET"], endpoint="export_leaves")
    @admin_required
    @handle_errors
    def export_leaves():
        return _csv_response(
            container.export_service.export_leaves(
                year=request.args.get("year"),
                month=request.args.get("month"),
                status=request.args.get("status"),
            )
        )

    @app.route("/api/exports/payroll", methods=["GET"], endpoint="export_payroll")
    @admin_required
    @handle_errors
    def export_payroll():
        return _csv_response(
            container.export_service.export_payroll(salary_period=request.args.get("salary_period"))
        )
