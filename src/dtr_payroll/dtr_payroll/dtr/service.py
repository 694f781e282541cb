"""DTR import use-case: CSV text in, `ImportSummary` out."""
from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.constants import (
    DEFAULT_DUPLICATE_CHECK_WORKERS,
    DEFAULT_IMPORT_BATCH_SIZE,
    PROGRESS_COMPLETE,
    PROGRESS_DUPLICATE_CHECK_DONE,
    PROGRESS_DUPLICATE_CHECK_STARTED,
    SUMMARY_SAMPLE_LIMIT,
)
from ..core.context import SYSTEM_CONTEXT, OperatorContext
from ..core.exceptions import DomainError, ValidationError
from ..employees.repository import EmployeeRepository
from .csv_parser import parse_csv
from .importer import BatchImporter, ProgressCallback
from .model import DuplicateEntry, ImportRowError, ImportSummary, TimeRecord
from .reconciliation import DuplicateReconciler
from .repository import TimeRecordRepository
from .validator import validate_rows

logger = logging.getLogger(__name__)


def _duplicate_entries(candidates) -> list[DuplicateEntry]:
    return [
        DuplicateEntry(row_number=c.row_number, employee_id=c.record.employee_id, entry_date=c.record.entry_date)
        for c in candidates[:SUMMARY_SAMPLE_LIMIT]
    ]


class DTRImportService:
    def __init__(
        self,
        records: TimeRecordRepository,
        employees: EmployeeRepository,
        *,
        batch_size: int = DEFAULT_IMPORT_BATCH_SIZE,
        duplicate_check_workers: int = DEFAULT_DUPLICATE_CHECK_WORKERS,
        strict_csv: bool = False,
    ):
        self._records = records
        self._employees = employees
        self._reconciler = DuplicateReconciler(records, max_workers=duplicate_check_workers)
        self._importer = BatchImporter(records, batch_size=batch_size)
        self._strict_csv = bool(strict_csv)

    def import_csv(
        self,
        text: str,
        *,
        context: OperatorContext = SYSTEM_CONTEXT,
        progress: Optional[ProgressCallback] = None,
    ) -> ImportSummary:
        """Run parse -> validate -> duplicate check -> batch insert.

        Never raises for bad input or store failures; everything is reported
        on the returned summary.
        """
        report = progress or (lambda _pct: None)
        parsed = parse_csv(text or "")

        parse_errors: list[ImportRowError] = []
        if self._strict_csv:
            parse_errors = [
                ImportRowError(row_number=e.line_number, message=str(e), raw_row={"line": e.raw_line})
                for e in parsed.malformed
            ]

        total = len(parsed.rows) + len(parse_errors)
        logger.info(
            "DTR import started by %s: %s rows (%s malformed lines)",
            context.describe(), len(parsed.rows), len(parsed.malformed),
        )
        if total == 0:
            return ImportSummary(total=0, imported=0, failed=0, duplicates=0, message="No data rows found in the CSV file")

        try:
            valid_ids = self._employees.get_employee_ids()
        except DomainError as exc:
            logger.error("DTR import aborted, employee lookup failed: %s", exc)
            return ImportSummary(
                total=total,
                imported=0,
                failed=total,
                duplicates=0,
                errors=parse_errors[:SUMMARY_SAMPLE_LIMIT],
                message=f"Could not load employees: {exc}",
            )

        validation = validate_rows(parsed.rows, valid_ids)
        errors = sorted(parse_errors + validation.errors, key=lambda e: e.row_number)

        if not validation.candidates:
            message = "No employees found" if not valid_ids else "No valid records to import"
            return ImportSummary(
                total=total,
                imported=0,
                failed=len(errors),
                duplicates=0,
                errors=errors[:SUMMARY_SAMPLE_LIMIT],
                message=message,
            )

        report(PROGRESS_DUPLICATE_CHECK_STARTED)
        reconciled = self._reconciler.reconcile(validation.candidates)
        report(PROGRESS_DUPLICATE_CHECK_DONE)

        duplicates = reconciled.duplicates
        if not reconciled.unique:
            logger.info("DTR import skipped: all %s valid records already exist", len(duplicates))
            report(PROGRESS_COMPLETE)
            return ImportSummary(
                total=total,
                imported=0,
                failed=len(errors),
                duplicates=len(duplicates),
                errors=errors[:SUMMARY_SAMPLE_LIMIT],
                duplicate_records=_duplicate_entries(duplicates),
                message="All records already exist",
            )

        run = self._importer.run(reconciled.unique, progress=report)
        report(PROGRESS_COMPLETE)

        errors = sorted(errors + run.errors, key=lambda e: e.row_number)
        failed = len(parse_errors) + len(validation.errors) + run.failed
        logger.info(
            "DTR import finished by %s: total=%s imported=%s failed=%s duplicates=%s",
            context.describe(), total, run.imported, failed, len(duplicates),
        )
        return ImportSummary(
            total=total,
            imported=run.imported,
            failed=failed,
            duplicates=len(duplicates),
            errors=errors[:SUMMARY_SAMPLE_LIMIT],
            duplicate_records=_duplicate_entries(duplicates),
            batches=run.batches,
            message=f"Imported {run.imported} of {total} rows",
        )


class DTRService:
    """Read side of the daily time records."""

    def __init__(self, records: TimeRecordRepository):
        self._records = records

    def list_records(
        self,
        employee_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[TimeRecord]:
        if start and end and start > end:
            raise ValidationError("start date must not be after end date")
        return self._records.list_for_employee(employee_id=int(employee_id), start_date=start, end_date=end)
