from __future__ import annotations

from flask import Flask, request, session

from ..common.http import admin_required, handle_errors, ok
from ..common.validators import optional_int
from ..core.enums import ImportStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .kinds import parse_kind


def register(app: Flask, container: Container) -> None:
    @app.route("/api/imports/template", methods=["GET"], endpoint="import_template")
    @admin_required
    @handle_errors
    def import_template():
        kind = parse_kind(request.args.get("type", ""))
        return ok(container.import_service.template(kind))

    @app.route("/api/imports/<kind>", methods=["POST"], endpoint="import_upload")
    @admin_required
    @handle_errors
    def import_upload(kind: str):
        import_kind = parse_kind(kind)
        job = container.import_service.accept_upload(
            import_kind,
            request.files.get("file"),
            author_id=optional_int(session.get("user_id"), "user_id"),
        )
        message = f"Import completed. {job.success_rows} succeeded, {job.error_rows} failed."
        return ok(job.to_dict(), message)

    @app.route("/api/imports", methods=["GET"], endpoint="import_list")
    @admin_required
    @handle_errors
    def import_list():
        kind_raw = request.args.get("import_type")
        status_raw = request.args.get("status")
        try:
            status = ImportStatus(status_raw) if status_raw else None
        except ValueError:
            raise ValidationError(f"Invalid status: {status_raw}")

        jobs = container.import_service.list_jobs(
            kind=parse_kind(kind_raw) if kind_raw else None,
            status=status,
        )
        return ok([j.to_dict() for j in jobs])

    @app.route("/api/imports/<int:import_id>", methods=["GET"], endpoint="import_detail")
    @admin_required
    @handle_errors
    def import_detail(import_id: int):
        job = container.import_service.get_job(import_id)
        data = job.to_dict()
        data["progress_percentage"] = job.progress_percentage
        return ok(data)
