from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeRecord


class TimeRecordRepository(Protocol):
    def find_by_natural_key(
        self,
        *,
        employee_id: int,
        entry_date: date,
        time_in: str,
        time_out: str,
    ) -> Optional[TimeRecord]:
        raise NotImplementedError

    def insert_many(self, records: Sequence[TimeRecord]) -> int:
        """Insert all records or none; returns the number inserted."""

        raise NotImplementedError

    def list_for_employee(
        self,
        *,
        employee_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[TimeRecord]:
        raise NotImplementedError
