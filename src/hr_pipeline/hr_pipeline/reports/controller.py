from __future__ import annotations

from flask import Flask, current_app, request

from ..common.datetime_utils import now_local
from ..common.http import admin_required, handle_errors, login_required, ok, session_staff_member_id
from ..common.validators import optional_int, optional_month, require_year
from ..container import Container
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    def _accounting_year() -> int:
        raw = request.args.get("year")
        if raw not in (None, ""):
            return require_year(raw)
        configured = current_app.config.get("ACCOUNTING_YEAR")
        if configured:
            return require_year(configured)
        return now_local().year

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="report_attendance")
    @admin_required
    @handle_errors
    def report_attendance():
        data = container.attendance_report_service.monthly_report(
            month=request.args.get("month"),
            office_location_id=optional_int(request.args.get("office_location_id"), "office_location_id"),
            division_id=optional_int(request.args.get("division_id"), "division_id"),
            staff_member_id=optional_int(request.args.get("staff_member_id"), "staff_member_id"),
        )
        return ok(data)

    @app.route("/api/reports/leaves", methods=["GET"], endpoint="report_leaves")
    @admin_required
    @handle_errors
    def report_leaves():
        data = container.leave_report_service.report(
            year=request.args.get("year"),
            month=optional_month(request.args.get("month")),
            category_id=optional_int(request.args.get("time_off_category_id"), "time_off_category_id"),
            staff_member_id=optional_int(request.args.get("staff_member_id"), "staff_member_id"),
        )
        return ok(data)

    @app.route("/api/reports/payroll", methods=["GET"], endpoint="report_payroll")
    @admin_required
    @handle_errors
    def report_payroll():
        data = container.payroll_report_service.report(
            salary_period=request.args.get("salary_period"),
            office_location_id=optional_int(request.args.get("office_location_id"), "office_location_id"),
            division_id=optional_int(request.args.get("division_id"), "division_id"),
        )
        return ok(data)

    @app.route("/api/reports/headcount", methods=["GET"], endpoint="report_headcount")
    @admin_required
    @handle_errors
    def report_headcount():
        return ok(container.headcount_report_service.report())

    @app.route("/api/leave/balances", methods=["GET"], endpoint="leave_balances")
    @admin_required
    @handle_errors
    def leave_balances():
        year = _accounting_year()
        staff_member_id = optional_int(request.args.get("staff_member_id"), "staff_member_id")
        if staff_member_id is None:
            all_balances = container.leave_balance_service.all_balances(year=year)
            return ok(
                {
                    "year": year,
                    "staff": [
                        {"staff_member_id": sid, "balances": [b.to_dict() for b in balances]}
                        for sid, balances in all_balances.items()
                    ],
                }
            )

        if not container.staff_repo.get_by_id(staff_member_id):
            raise NotFoundError("Staff member not found")
        balances = container.leave_balance_service.balances(staff_member_id, year=year)
        return ok({"year": year, "staff_member_id": staff_member_id, "balances": [b.to_dict() for b in balances]})

    @app.route("/api/leave/my-balances", methods=["GET"], endpoint="leave_my_balances")
    @login_required
    @handle_errors
    def leave_my_balances():
        year = _accounting_year()
        staff_member_id = session_staff_member_id()
        if staff_member_id is None:
            return ok({"year": year, "balances": []})
        balances = container.leave_balance_service.balances(staff_member_id, year=year)
        return ok({"year": year, "balances": [b.to_dict() for b in balances]})
