from __future__ import annotations

import io
from datetime import date, time

import pytest
from werkzeug.datastructures import FileStorage

from src.hr_pipeline.hr_pipeline.core.enums import ImportKind, ImportStatus
from src.hr_pipeline.hr_pipeline.core.exceptions import NotFoundError, ValidationError
from src.hr_pipeline.hr_pipeline.imports.kinds import parse_kind


def _run(service, kind: ImportKind, text: str):
    return service.run(kind, io.StringIO(text), file_path="imports/x.csv", original_name="x.csv", author_id=7)


def _assert_counters(job):
    assert job.processed_rows == job.success_rows + job.error_rows == job.total_rows
    assert len(job.errors) == job.error_rows


def test_work_log_import_counts_partial_failures(import_service, work_logs_repo):
    text = (
        "staff_code,log_date,status,clock_in,clock_out\n"
        "STF00001,2025-03-03,present,09:00,18:00\n"
        "GHOST,2025-03-03,present,09:00,18:00\n"
        "STF00002,2025-03-03,absent,,\n"
    )

    job = _run(import_service, ImportKind.WORK_LOGS, text)

    assert job.status == ImportStatus.COMPLETED
    assert (job.total_rows, job.success_rows, job.error_rows) == (3, 2, 1)
    assert job.errors == ["Row 3: Staff not found: GHOST"]
    assert job.author_id == 7
    _assert_counters(job)
    assert len(work_logs_repo.rows) == 2


def test_work_log_reimport_overwrites_same_day(import_service, work_logs_repo):
    header = "staff_code,log_date,status,clock_in,clock_out\n"
    _run(import_service, ImportKind.WORK_LOGS, header + "STF00001,2025-03-03,present,09:00,17:00\n")

    job = _run(import_service, ImportKind.WORK_LOGS, header + "STF00001,2025-03-03,present,09:00,18:30\n")

    assert job.success_rows == 1
    assert len(work_logs_repo.rows) == 1
    assert work_logs_repo.get_for_staff_and_date(1, date(2025, 3, 3)).clock_out == time(18, 30)


def test_holiday_import_is_idempotent(import_service, holidays_repo):
    text = "title,holiday_date,is_optional\nNew Year,2025-01-01,no\nTet,2025-01-29,Yes\n"

    _run(import_service, ImportKind.COMPANY_HOLIDAYS, text)
    job = _run(import_service, ImportKind.COMPANY_HOLIDAYS, text)

    assert job.success_rows == 2
    assert len(holidays_repo.rows) == 2
    assert holidays_repo.get_by_date(date(2025, 1, 29)).is_optional is True
    assert holidays_repo.get_by_date(date(2025, 1, 1)).is_optional is False


def test_staff_import_creates_new_rows_each_time(import_service, staff_repo, fixed_now):
    text = "first_name,last_name,hire_date\nJane,Roe,\n"

    _run(import_service, ImportKind.STAFF_MEMBERS, text)
    _run(import_service, ImportKind.STAFF_MEMBERS, text)

    created = [m for m in staff_repo.members.values() if m.first_name == "Jane"]
    assert len(created) == 2
    assert all(m.hire_date == fixed_now.date() for m in created)
    assert {m.staff_code for m in created} == {"STF00003", "STF00004"}


def test_ragged_rows_are_processed(import_service, holidays_repo):
    text = "title,holiday_date,is_optional\nLabour Day,2025-05-01\nNational Day,2025-09-02,yes,extra,cells\n"

    job = _run(import_service, ImportKind.COMPANY_HOLIDAYS, text)

    assert job.success_rows == 2
    assert holidays_repo.get_by_date(date(2025, 5, 1)).is_optional is False
    assert holidays_repo.get_by_date(date(2025, 9, 2)).is_optional is True


def test_row_numbers_account_for_blank_lines(import_service):
    text = "title,holiday_date\nNew Year,2025-01-01\n\n,2025-02-01\n"

    job = _run(import_service, ImportKind.COMPANY_HOLIDAYS, text)

    assert job.total_rows == 2
    assert job.errors == ["Row 4: Missing required field 'title'"]
    _assert_counters(job)


def test_header_only_file_completes_with_zero_rows(import_service):
    job = _run(import_service, ImportKind.COMPANY_HOLIDAYS, "title,holiday_date\n")

    assert job.status == ImportStatus.COMPLETED
    assert job.total_rows == 0
    assert job.progress_percentage == 0


def test_missing_required_column_creates_no_job(import_service, jobs_repo):
    with pytest.raises(ValidationError):
        _run(import_service, ImportKind.WORK_LOGS, "staff_code,status\nSTF00001,present\n")

    assert jobs_repo.jobs == {}


def test_store_failure_becomes_row_error(import_service, holidays_repo):
    def broken(draft):
        raise RuntimeError("duplicate key")

    holidays_repo.upsert_by_date = broken

    job = _run(import_service, ImportKind.COMPANY_HOLIDAYS, "title,holiday_date\nNew Year,2025-01-01\n")

    assert job.status == ImportStatus.COMPLETED
    assert job.errors == ["Row 2: duplicate key"]


def test_job_is_finalized_once(import_service, jobs_repo):
    job = _run(import_service, ImportKind.COMPANY_HOLIDAYS, "title,holiday_date\nNew Year,2025-01-01\n")

    assert jobs_repo.finalize_calls == 1
    assert job.progress_percentage == 100
    assert job.completed_at is not None


def test_accept_upload_stores_file_and_runs(import_service, tmp_path):
    upload = FileStorage(
        stream=io.BytesIO("title,holiday_date\nNew Year,2025-01-01\n".encode("utf-8-sig")),
        filename="holidays 2025.csv",
    )

    job = import_service.accept_upload(ImportKind.COMPANY_HOLIDAYS, upload, author_id=1)

    assert job.success_rows == 1
    assert job.original_name == "holidays 2025.csv"
    assert job.file_path.startswith("imports")
    assert (tmp_path / job.file_path).exists()


@pytest.mark.parametrize("filename", ["", "people.xlsx"])
def test_accept_upload_rejects_bad_files(import_service, filename):
    upload = FileStorage(stream=io.BytesIO(b"x"), filename=filename)

    with pytest.raises(ValidationError):
        import_service.accept_upload(ImportKind.STAFF_MEMBERS, upload, author_id=1)


def test_templates_list_columns_and_sample(import_service):
    template = import_service.template(ImportKind.WORK_LOGS)

    assert template["columns"] == ["staff_code", "log_date", "status", "clock_in", "clock_out"]
    assert template["sample"] == [["EMP001", "2024-12-16", "present", "09:00", "18:00"]]
    for kind in ImportKind:
        t = import_service.template(kind)
        assert len(t["columns"]) == len(t["sample"][0])


def test_unknown_kind_is_rejected():
    with pytest.raises(ValidationError):
        parse_kind("payroll")


def test_get_job_missing(import_service):
    with pytest.raises(NotFoundError):
        import_service.get_job(999)


def test_staff_import_blank_hire_date_defaults_to_import_date(import_service, staff_repo, fixed_now):
    text = (
        "first_name,last_name,hire_date\n"
        "Amy,Pham,2024-02-01\n"
        "Ben,Vo,\n"
        "Cat,Do,2024-03-15\n"
    )

    job = _run(import_service, ImportKind.STAFF_MEMBERS, text)

    assert (job.success_rows, job.error_rows) == (3, 0)
    ben = next(m for m in staff_repo.members.values() if m.first_name == "Ben")
    assert ben.hire_date == fixed_now.date()


def test_reimport_with_legacy_staff_code_keeps_one_row(import_service, staff_repo, work_logs_repo, member_factory):
    staff_repo.members[5] = member_factory(5, "Eve", "Ho", staff_code="EMP001")
    header = "staff_code,log_date,status,clock_in,clock_out\n"

    _run(import_service, ImportKind.WORK_LOGS, header + "EMP001,2024-12-16,present,09:00,18:00\n")
    _run(import_service, ImportKind.WORK_LOGS, header + "EMP001,2024-12-16,present,09:00,19:15\n")

    rows = [r for r in work_logs_repo.rows.values() if r.staff_member_id == 5]
    assert len(rows) == 1
    assert rows[0].clock_out == time(19, 15)


def test_invalid_bytes_only_fail_their_own_row(import_service, holidays_repo):
    body = "title,holiday_date\n" + "".join(f"Day {i},2030-01-{i:02d}\n" for i in range(1, 29))
    upload = FileStorage(
        stream=io.BytesIO(body.encode("utf-8") + b"\xff\xfe bad,2031-01-01\nAfter,2032-01-01\n"),
        filename="holidays.csv",
    )

    job = import_service.accept_upload(ImportKind.COMPANY_HOLIDAYS, upload, author_id=1)

    assert job.status == ImportStatus.COMPLETED
    assert (job.total_rows, job.success_rows, job.error_rows) == (30, 29, 1)
    assert job.errors == ["Row 30: Row is not valid UTF-8 text"]
    _assert_counters(job)
    assert holidays_repo.get_by_date(date(2032, 1, 1)).title == "After"


def test_rejected_upload_leaves_no_stored_file(import_service, jobs_repo, tmp_path):
    upload = FileStorage(stream=io.BytesIO(b"staff_code,status\nSTF00001,present\n"), filename="w.csv")

    with pytest.raises(ValidationError):
        import_service.accept_upload(ImportKind.WORK_LOGS, upload, author_id=1)

    assert jobs_repo.jobs == {}
    assert list((tmp_path / "imports").iterdir()) == []


def test_staff_file_without_first_name_column_imports(import_service, staff_repo):
    job = _run(import_service, ImportKind.STAFF_MEMBERS, "last_name,hire_date\nDoe,2024-05-01\n")

    assert (job.success_rows, job.error_rows) == (1, 0)
    created = next(m for m in staff_repo.members.values() if m.last_name == "Doe")
    assert created.first_name == ""
