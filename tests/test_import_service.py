from __future__ import annotations

from datetime import date

from dtr_payroll.core.context import OperatorContext
from dtr_payroll.dtr.service import DTRImportService

HEADER = "employee_id,entry_date,time_in,time_out,month,hours_worked,overtime_hrs,absent"


def _csv(*rows: str) -> str:
    return "\n".join((HEADER,) + rows) + "\n"


def test_mixed_file_partitions_total(records, employees, make_record):
    records.rows.append(make_record(employee_id=1002, day=2))
    text = _csv(
        "1001,8/1/2024,8:00,17:00,AUGUST,8,0,No",
        ",8/1/2024,8:00,17:00,AUGUST,8,0,No",
        "1002,8/2/2024,8:00,17:00,AUGUST,8,0,No",
    )

    summary = DTRImportService(records, employees).import_csv(text, context=OperatorContext(actor_id=7))

    assert (summary.total, summary.imported, summary.failed, summary.duplicates) == (3, 1, 1, 1)
    assert summary.errors[0].row_number == 3
    assert summary.duplicate_records[0].row_number == 4
    assert summary.duplicate_records[0].employee_id == 1002
    assert summary.duplicate_records[0].entry_date == date(2024, 8, 2)
    assert records.insert_calls == [1]


def test_reimporting_same_file_reports_only_duplicates(records, employees):
    text = _csv(
        "1001,8/1/2024,8:00,17:00,AUGUST,8,0,No",
        "1001,8/2/2024,8:00,17:00,AUGUST,8,1,No",
        "1002,8/2/2024,9:00,18:00,AUGUST,8,0,No",
    )
    service = DTRImportService(records, employees)

    first = service.import_csv(text)
    second = service.import_csv(text)

    assert first.imported == 3
    assert second.imported == 0
    assert second.duplicates == 3
    assert second.message == "All records already exist"
    # the second run never calls insert
    assert records.insert_calls == [3]


def test_progress_checkpoints(records, employees):
    rows = [f"1001,8/{d}/2024,8:00,17:00,AUGUST,8,0,No" for d in range(1, 31)]
    progress = []

    DTRImportService(records, employees, batch_size=10).import_csv(_csv(*rows), progress=progress.append)

    assert progress == [10, 30, 50, 70, 90, 100]


def test_empty_file_is_a_top_level_failure(records, employees):
    summary = DTRImportService(records, employees).import_csv(HEADER + "\n")

    assert summary.total == 0
    assert summary.message == "No data rows found in the CSV file"
    assert records.insert_calls == []


def test_no_valid_rows(records, employees):
    summary = DTRImportService(records, employees).import_csv(_csv("9999,8/1/2024,8:00,17:00,AUGUST,8,0,No"))

    assert (summary.total, summary.imported, summary.failed) == (1, 0, 1)
    assert summary.message == "No valid records to import"
    assert records.insert_calls == []


def test_employee_lookup_failure_fails_every_row(records, employees):
    employees.fail = True
    summary = DTRImportService(records, employees).import_csv(_csv("1001,8/1/2024,8:00,17:00,AUGUST,8,0,No"))

    assert summary.failed == 1
    assert summary.imported == 0
    assert "Could not load employees" in summary.message


def test_malformed_lines_are_dropped_by_default(records, employees):
    text = _csv("1001,8/1/2024,8:00", "1001,8/2/2024,8:00,17:00,AUGUST,8,0,No")

    summary = DTRImportService(records, employees).import_csv(text)

    assert (summary.total, summary.imported, summary.failed) == (1, 1, 0)


def test_strict_csv_reports_malformed_lines(records, employees):
    text = _csv("1001,8/1/2024,8:00", "1001,8/2/2024,8:00,17:00,AUGUST,8,0,No")

    summary = DTRImportService(records, employees, strict_csv=True).import_csv(text)

    assert (summary.total, summary.imported, summary.failed) == (2, 1, 1)
    assert summary.errors[0].row_number == 2
    assert summary.errors[0].raw_row == {"line": "1001,8/1/2024,8:00"}


def test_error_samples_are_bounded(records, employees):
    rows = [f"9999,8/{d}/2024,8:00,17:00,AUGUST,8,0,No" for d in range(1, 16)]
    rows.append("1001,8/20/2024,8:00,17:00,AUGUST,8,0,No")

    summary = DTRImportService(records, employees).import_csv(_csv(*rows))

    assert summary.failed == 15
    assert len(summary.errors) == 10
    assert summary.imported == 1


def test_summary_serializes_flat(records, employees):
    summary = DTRImportService(records, employees).import_csv(_csv("1001,8/1/2024,8:00,17:00,AUGUST,8,0,No"))
    body = summary.to_dict()

    assert body["total"] == 1
    assert body["imported"] == 1
    assert body["batches"] == [{"index": 1, "size": 1, "state": "INSERTED", "error": None}]
    assert body["message"] == "Imported 1 of 1 rows"


def test_superscript_digits_fail_only_their_row(records, employees):
    text = _csv(
        "1001,8/1/²024,8:00,17:00,AUGUST,8,0,No",
        "1001,8/2/2024,8:00,17:00,AUGUST,²,0,No",
        "1001,8/3/2024,8:00,17:00,AUGUST,8,0,No",
    )

    summary = DTRImportService(records, employees).import_csv(text)

    assert (summary.total, summary.imported, summary.failed) == (3, 1, 2)
    assert [e.row_number for e in summary.errors] == [2, 3]
    assert records.rows[0].entry_date == date(2024, 8, 3)
