from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_row, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r: dict) -> Employee:
    rate = r.get("hourly_rate")
    names = [r.get("emp_fname"), r.get("emp_middle"), r.get("emp_lname")]
    return Employee(
        emp_id=int(r["emp_id"]),
        hourly_rate=Decimal(str(rate)) if rate is not None else None,
        full_name=" ".join(n for n in names if n),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_employee_ids(self) -> set[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT emp_id FROM employee")
            return {decode_row(lambda r: str(int(r["emp_id"])), r) for r in fetchall(cur)}

    def get_by_id(self, emp_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT emp_id, emp_fname, emp_middle, emp_lname, hourly_rate
                FROM employee
                WHERE emp_id=%s
                """,
                (int(emp_id),),
            )
            r = fetchone(cur)
            return decode_row(_to_employee, r) if r else None
