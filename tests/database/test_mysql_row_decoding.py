from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from dtr_payroll.core.context import OperatorContext
from dtr_payroll.core.exceptions import PersistenceError
from dtr_payroll.dtr.mysql_dtr_repository import MySQLTimeRecordRepository
from dtr_payroll.dtr.service import DTRImportService
from dtr_payroll.employees.mysql_employee_repository import MySQLEmployeeRepository
from dtr_payroll.payroll.mysql_payslip_repository import MySQLPayslipRepository
from dtr_payroll.payroll.service import PayslipService


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append(params)

    def executemany(self, sql, seq):
        self.executed.append(list(seq))

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows):
        self.cursor_obj = FakeCursor(rows)
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        pass

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnectionFactory:
    """Hands out connections whose queries all return `rows`."""

    def __init__(self, rows):
        self.rows = rows
        self.connections = []

    def connect(self, with_database=True):
        conn = FakeConnection(self.rows)
        self.connections.append(conn)
        return conn


def _dtr_row(**overrides):
    row = {
        "dtr_id": 1,
        "employee_id": 1001,
        "entry_date": date(2024, 8, 1),
        "time_in": timedelta(hours=8),
        "time_out": timedelta(hours=17),
        "month": date(2024, 8, 1),
        "hrs_worked": timedelta(hours=8),
        "overtime_hrs": timedelta(0),
        "absent": 0,
    }
    row.update(overrides)
    return row


def test_stored_time_record_decodes():
    repo = MySQLTimeRecordRepository(FakeConnectionFactory([_dtr_row(hrs_worked="36:30:00")]))

    [record] = repo.list_for_employee(employee_id=1001)

    assert record.time_in == "08:00:00"
    assert record.hours_worked == "36:30:00"


@pytest.mark.parametrize("bad", ["x", 3.5])
def test_undecodable_time_value_is_a_persistence_error(bad):
    factory = FakeConnectionFactory([_dtr_row(hrs_worked=bad)])
    repo = MySQLTimeRecordRepository(factory)

    with pytest.raises(PersistenceError):
        repo.find_by_natural_key(
            employee_id=1001, entry_date=date(2024, 8, 1), time_in="08:00:00", time_out="17:00:00"
        )
    assert factory.connections[0].rolled_back


def test_undecodable_payslip_amount_is_a_persistence_error():
    row = {
        "report_id": 1, "emp_id": 1001, "month": "August", "year": 2024, "total_hours": "8.00",
        "total_overtime": "0.00", "gross_salary": "n/a", "overtime_pay": "0", "sss": "0",
        "phil_health": "0", "pag_ibig": "200", "total_deductions": "200", "net_pay": "0",
        "payslip_status_id": 1, "created_at": None,
    }
    repo = MySQLPayslipRepository(FakeConnectionFactory([row]))

    with pytest.raises(PersistenceError):
        repo.find_for_period(employee_id=1001, month="August", year=2024)


def test_corrupt_stored_row_does_not_abort_import(employees):
    records = MySQLTimeRecordRepository(FakeConnectionFactory([_dtr_row(time_in="bad")]))
    text = (
        "employee_id,entry_date,time_in,time_out,month,hours_worked,overtime_hrs,absent\n"
        "1001,8/1/2024,8:00,17:00,AUGUST,8,0,No\n"
    )

    summary = DTRImportService(records, employees).import_csv(text, context=OperatorContext(actor_id=7))

    assert (summary.total, summary.imported, summary.duplicates) == (1, 1, 0)


def test_corrupt_stored_row_becomes_employee_error(payslips, employees):
    records = MySQLTimeRecordRepository(FakeConnectionFactory([_dtr_row(overtime_hrs="??")]))

    result = PayslipService(payslips, employees, records).generate_payslips([1001], month=8, year=2024)

    assert result.error_count == 1
    assert "Could not decode stored row" in result.outcomes[0].reason
    assert payslips.insert_calls == 0


def test_undecodable_hourly_rate_is_a_persistence_error():
    row = {"emp_id": 1001, "emp_fname": "Ana", "emp_middle": None, "emp_lname": "Cruz", "hourly_rate": "abc"}
    repo = MySQLEmployeeRepository(FakeConnectionFactory([row]))

    with pytest.raises(PersistenceError):
        repo.get_by_id(1001)
    assert repo.get_employee_ids() == {"1001"}
