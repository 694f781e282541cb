from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_row, fetchall, fetchone, mysql_time_to_clock
from .model import TimeRecord
from .repository import TimeRecordRepository

_COLUMNS = "dtr_id, employee_id, entry_date, time_in, time_out, month, hrs_worked, overtime_hrs, absent"


def _to_record(r: dict) -> TimeRecord:
    return TimeRecord(
        dtr_id=int(r["dtr_id"]),
        employee_id=int(r["employee_id"]),
        entry_date=r["entry_date"],
        time_in=mysql_time_to_clock(r.get("time_in")),
        time_out=mysql_time_to_clock(r.get("time_out")),
        period_month=r["month"],
        hours_worked=mysql_time_to_clock(r.get("hrs_worked")),
        overtime_hours=mysql_time_to_clock(r.get("overtime_hrs")),
        absent=bool(r.get("absent")),
    )


class MySQLTimeRecordRepository(TimeRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_natural_key(
        self,
        *,
        employee_id: int,
        entry_date: date,
        time_in: str,
        time_out: str,
    ) -> Optional[TimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_time_record
                WHERE employee_id=%s AND entry_date=%s AND time_in=%s AND time_out=%s
                LIMIT 1
                """,
                (int(employee_id), entry_date, time_in, time_out),
            )
            r = fetchone(cur)
            return decode_row(_to_record, r) if r else None

    def insert_many(self, records: Sequence[TimeRecord]) -> int:
        if not records:
            return 0
        # One transaction per call: db_cursor rolls back the whole chunk on error.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO daily_time_record
                    (employee_id, entry_date, time_in, time_out, month, hrs_worked, overtime_hrs, absent)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                [
                    (
                        rec.employee_id,
                        rec.entry_date,
                        rec.time_in,
                        rec.time_out,
                        rec.period_month,
                        rec.hours_worked,
                        rec.overtime_hours,
                        int(rec.absent),
                    )
                    for rec in records
                ],
            )
            return len(records)

    def list_for_employee(
        self,
        *,
        employee_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[TimeRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]

        if start_date is not None:
            clauses.append("entry_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("entry_date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM daily_time_record
                WHERE {where}
                ORDER BY entry_date ASC, time_in ASC
                """,
                tuple(params),
            )
            return [decode_row(_to_record, r) for r in fetchall(cur)]
