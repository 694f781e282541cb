from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import month_bounds
from ..common.normalizers import duration_to_decimal_hours
from ..dtr.repository import TimeRecordRepository
from .model import PayrollTotals


class PayrollAggregator:
    """Sum worked and overtime hours for one employee and calendar month."""

    def __init__(self, records: TimeRecordRepository):
        self._records = records

    def aggregate(self, employee_id: int, *, year: int, month: int) -> Optional[PayrollTotals]:
        """Return None when the employee has no DTR rows in the month."""
        start, end = month_bounds(year, month)
        rows = self._records.list_for_employee(employee_id=int(employee_id), start_date=start, end_date=end)
        if not rows:
            return None

        total_hours = Decimal(0)
        total_overtime = Decimal(0)
        for r in rows:
            total_hours += duration_to_decimal_hours(r.hours_worked)
            total_overtime += duration_to_decimal_hours(r.overtime_hours)

        return PayrollTotals(
            employee_id=int(employee_id),
            year=int(year),
            month=int(month),
            record_count=len(rows),
            total_hours=total_hours,
            total_overtime_hours=total_overtime,
        )
