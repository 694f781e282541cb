from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from dtr_payroll.container import build_services
from dtr_payroll.core.exceptions import ConflictError, PersistenceError
from dtr_payroll.dtr.model import TimeRecord
from dtr_payroll.employees.model import Employee
from dtr_payroll.payroll.model import PayslipReport


class InMemoryEmployees:
    def __init__(self, employees: dict[int, Employee] | None = None):
        self.employees = dict(employees or {})
        self.fail = False

    def get_employee_ids(self) -> set[str]:
        if self.fail:
            raise PersistenceError("employee table unavailable")
        return {str(e) for e in self.employees}

    def get_by_id(self, emp_id: int) -> Optional[Employee]:
        if self.fail:
            raise PersistenceError("employee table unavailable")
        return self.employees.get(int(emp_id))


class InMemoryTimeRecords:
    def __init__(self):
        self.rows: list[TimeRecord] = []
        self.insert_calls: list[int] = []
        self.fail_batches: set[int] = set()
        self.lookup_error = False
        self.list_error = False

    def find_by_natural_key(self, *, employee_id, entry_date, time_in, time_out):
        if self.lookup_error:
            raise PersistenceError("lookup failed")
        for r in self.rows:
            if r.natural_key == (employee_id, entry_date, time_in, time_out):
                return r
        return None

    def insert_many(self, records):
        self.insert_calls.append(len(records))
        if len(self.insert_calls) in self.fail_batches:
            raise PersistenceError("insert failed")
        for rec in records:
            if self.find_by_natural_key(
                employee_id=rec.employee_id, entry_date=rec.entry_date, time_in=rec.time_in, time_out=rec.time_out
            ):
                raise ConflictError("duplicate natural key")
        self.rows.extend(records)
        return len(records)

    def list_for_employee(self, *, employee_id, start_date=None, end_date=None):
        if self.list_error:
            raise PersistenceError("read failed")
        return [
            r
            for r in self.rows
            if r.employee_id == employee_id
            and (start_date is None or r.entry_date >= start_date)
            and (end_date is None or r.entry_date <= end_date)
        ]


class InMemoryPayslips:
    def __init__(self):
        self.reports: dict[int, PayslipReport] = {}
        self.insert_calls = 0
        self._next_id = 1

    def find_for_period(self, *, employee_id, month, year):
        for r in self.reports.values():
            if (r.employee_id, r.period_month, r.period_year) == (employee_id, month, year):
                return r
        return None

    def insert(self, report: PayslipReport) -> int:
        self.insert_calls += 1
        if self.find_for_period(employee_id=report.employee_id, month=report.period_month, year=report.period_year):
            raise ConflictError("payslip period taken")
        rid = self._next_id
        self._next_id += 1
        self.reports[rid] = replace(report, report_id=rid)
        return rid

    def list_for_employee(self, *, employee_id, year=None):
        items = [
            r for r in self.reports.values()
            if r.employee_id == employee_id and (year is None or r.period_year == year)
        ]
        return sorted(items, key=lambda r: (r.period_year, r.report_id), reverse=True)

    def delete(self, *, report_id):
        return self.reports.pop(int(report_id), None) is not None

    def total_net_pay(self, *, employee_id):
        return sum((r.net_pay for r in self.reports.values() if r.employee_id == employee_id), Decimal(0))


def _make_record(employee_id=1001, day=1, *, month=8, year=2024, time_in="08:00:00", time_out="17:00:00",
                hours="08:00:00", overtime="00:00:00") -> TimeRecord:
    entry = date(year, month, day)
    return TimeRecord(
        employee_id=employee_id,
        entry_date=entry,
        time_in=time_in,
        time_out=time_out,
        period_month=entry.replace(day=1),
        hours_worked=hours,
        overtime_hours=overtime,
    )


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 9, 1, 9, 0, 0)


@pytest.fixture()
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        {
            1001: Employee(emp_id=1001, hourly_rate=Decimal("100"), full_name="Ana Cruz"),
            1002: Employee(emp_id=1002, hourly_rate=Decimal("85.50"), full_name="Ben Reyes"),
            1003: Employee(emp_id=1003, hourly_rate=None, full_name="Carla Santos"),
        }
    )


@pytest.fixture()
def records() -> InMemoryTimeRecords:
    return InMemoryTimeRecords()


@pytest.fixture()
def payslips() -> InMemoryPayslips:
    return InMemoryPayslips()


@pytest.fixture()
def container(employees, records, payslips):
    return build_services(employees=employees, records=records, payslips=payslips)


@pytest.fixture()
def make_record():
    return _make_record
