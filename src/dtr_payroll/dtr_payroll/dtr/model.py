from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..core.enums import BatchState


@dataclass(frozen=True)
class TimeRecord:
    """Domain entity: one Daily-Time-Record row."""

    employee_id: int
    entry_date: date
    time_in: str
    time_out: str
    period_month: date
    hours_worked: str
    overtime_hours: str
    absent: bool = False
    dtr_id: Optional[int] = None

    @property
    def natural_key(self) -> tuple[int, date, str, str]:
        return (self.employee_id, self.entry_date, self.time_in, self.time_out)

    def to_dict(self) -> dict[str, Any]:
        return {
            "dtr_id": self.dtr_id,
            "employee_id": self.employee_id,
            "entry_date": self.entry_date.isoformat(),
            "time_in": self.time_in,
            "time_out": self.time_out,
            "month": self.period_month.isoformat(),
            "hrs_worked": self.hours_worked,
            "overtime_hrs": self.overtime_hours,
            "absent": self.absent,
        }


@dataclass(frozen=True)
class ParsedRow:
    """One CSV data line, keyed by lower-cased header name."""

    row_number: int
    fields: dict[str, str]


@dataclass(frozen=True)
class CandidateRecord:
    """A validated record still tied to the CSV row it came from."""

    row_number: int
    record: TimeRecord
    raw_row: dict[str, str]


@dataclass(frozen=True)
class ImportRowError:
    row_number: int
    message: str
    raw_row: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row_number, "message": self.message, "data": dict(self.raw_row)}


@dataclass(frozen=True)
class DuplicateEntry:
    row_number: int
    employee_id: int
    entry_date: date

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row_number,
            "employee_id": self.employee_id,
            "entry_date": self.entry_date.isoformat(),
        }


@dataclass
class BatchResult:
    index: int
    size: int
    state: BatchState = BatchState.PENDING
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "size": self.size, "state": self.state.value, "error": self.error}


@dataclass(frozen=True)
class ImportSummary:
    total: int
    imported: int
    failed: int
    duplicates: int
    errors: list[ImportRowError] = field(default_factory=list)
    duplicate_records: list[DuplicateEntry] = field(default_factory=list)
    batches: list[BatchResult] = field(default_factory=list)
    message: str = ""

    @property
    def success(self) -> bool:
        return self.imported > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "imported": self.imported,
            "failed": self.failed,
            "duplicates": self.duplicates,
            "errors": [e.to_dict() for e in self.errors],
            "duplicate_records": [d.to_dict() for d in self.duplicate_records],
            "batches": [b.to_dict() for b in self.batches],
            "message": self.message,
        }
