from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from ..common.normalizers import (
    month_name_to_first_of_month,
    normalize_boolean,
    normalize_duration,
    normalize_entry_date,
    normalize_time,
)
from ..core.exceptions import ValidationError
from .model import CandidateRecord, ImportRowError, ParsedRow, TimeRecord

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    candidates: list[CandidateRecord] = field(default_factory=list)
    errors: list[ImportRowError] = field(default_factory=list)


def _field(row: Mapping[str, str], *names: str) -> str:
    for name in names:
        value = row.get(name)
        if value is not None and value.strip():
            return value.strip()
    return ""


def transform_row(row: Mapping[str, str], row_number: int, valid_ids: set[str]) -> TimeRecord:
    """Apply DTR business rules to one CSV row.

    Raises `ValidationError` (carrying `row_number`) on the first rule broken.
    """
    raw_id = _field(row, "employee_id")
    if not raw_id:
        raise ValidationError(f"Row {row_number}: employee_id is required", row_number=row_number)
    try:
        employee_id = int(raw_id)
    except ValueError:
        raise ValidationError(
            f"Row {row_number}: employee_id {raw_id!r} is not a number", row_number=row_number
        ) from None
    if str(employee_id) not in valid_ids:
        raise ValidationError(
            f"Row {row_number}: employee_id {employee_id} does not exist", row_number=row_number
        )

    raw_date = _field(row, "entry_date")
    if not raw_date:
        raise ValidationError(f"Row {row_number}: entry_date is required", row_number=row_number)

    try:
        entry_date = normalize_entry_date(raw_date)
        period_month = entry_date.replace(day=1)

        month = _field(row, "month")
        if month:
            period_month = month_name_to_first_of_month(month, entry_date.year)

        time_in = normalize_time(_field(row, "time_in") or "00:00")
        time_out = normalize_time(_field(row, "time_out") or "00:00")
        hours_worked = normalize_duration(_field(row, "hours_worked", "hrs_worked") or "0")
        overtime_hours = normalize_duration(_field(row, "overtime_hrs") or "0")
    except ValidationError as exc:
        raise ValidationError(f"Row {row_number}: {exc}", row_number=row_number) from exc

    return TimeRecord(
        employee_id=employee_id,
        entry_date=entry_date,
        time_in=time_in,
        time_out=time_out,
        period_month=period_month,
        hours_worked=hours_worked,
        overtime_hours=overtime_hours,
        absent=normalize_boolean(row.get("absent")),
    )


def validate_rows(rows: Iterable[ParsedRow], valid_ids: set[str]) -> ValidationResult:
    """Transform every row; a failing row becomes an error entry and the rest continue."""
    result = ValidationResult()
    for parsed in rows:
        try:
            record = transform_row(parsed.fields, parsed.row_number, valid_ids)
        except ValidationError as exc:
            logger.debug("Rejected CSV row %s: %s", parsed.row_number, exc)
            result.errors.append(
                ImportRowError(row_number=parsed.row_number, message=str(exc), raw_row=dict(parsed.fields))
            )
            continue
        result.candidates.append(
            CandidateRecord(row_number=parsed.row_number, record=record, raw_row=dict(parsed.fields))
        )
    return result
