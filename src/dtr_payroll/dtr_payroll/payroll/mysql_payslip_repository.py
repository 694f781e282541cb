from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..common.normalizers import MONTH_NAMES
from ..core.constants import PENDING_PAYSLIP_STATUS_ID
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decode_row, fetchall, fetchone
from .model import PayslipReport
from .repository import PayslipRepository

_COLUMNS = """
    report_id, emp_id, month, year, total_hours, total_overtime, gross_salary, overtime_pay,
    sss, phil_health, pag_ibig, total_deductions, net_pay, payslip_status_id, created_at
"""


def _dec(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal(0)


def _to_report(r: dict) -> PayslipReport:
    return PayslipReport(
        report_id=int(r["report_id"]),
        employee_id=int(r["emp_id"]),
        period_month=str(r["month"]),
        period_year=int(r["year"]),
        total_hours=_dec(r.get("total_hours")),
        total_overtime_hours=_dec(r.get("total_overtime")),
        gross_salary=_dec(r.get("gross_salary")),
        overtime_pay=_dec(r.get("overtime_pay")),
        sss=_dec(r.get("sss")),
        phil_health=_dec(r.get("phil_health")),
        pag_ibig=_dec(r.get("pag_ibig")),
        total_deductions=_dec(r.get("total_deductions")),
        net_pay=_dec(r.get("net_pay")),
        status_id=int(r.get("payslip_status_id") or PENDING_PAYSLIP_STATUS_ID),
        date_generated=r.get("created_at"),
    )


def _month_index(name: str) -> int:
    key = (name or "").strip().lower()
    return MONTH_NAMES.index(key) + 1 if key in MONTH_NAMES else 0


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_period(self, *, employee_id: int, month: str, year: int) -> Optional[PayslipReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslip_reports
                WHERE emp_id=%s AND month=%s AND year=%s
                LIMIT 1
                """,
                (int(employee_id), month, int(year)),
            )
            r = fetchone(cur)
            return decode_row(_to_report, r) if r else None

    def insert(self, report: PayslipReport) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payslip_reports (
                    emp_id, month, year, total_hours, total_overtime, gross_salary, overtime_pay,
                    sss, phil_health, pag_ibig, total_deductions, net_pay, payslip_status_id, created_at
                )
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    report.employee_id,
                    report.period_month,
                    report.period_year,
                    report.total_hours,
                    report.total_overtime_hours,
                    report.gross_salary,
                    report.overtime_pay,
                    report.sss,
                    report.phil_health,
                    report.pag_ibig,
                    report.total_deductions,
                    report.net_pay,
                    report.status_id,
                    report.date_generated,
                ),
            )
            return int(cur.lastrowid)

    def list_for_employee(self, *, employee_id: int, year: Optional[int] = None) -> Sequence[PayslipReport]:
        clauses = ["emp_id=%s"]
        params: list[object] = [int(employee_id)]
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslip_reports
                WHERE {" AND ".join(clauses)}
                """,
                tuple(params),
            )
            reports = [decode_row(_to_report, r) for r in fetchall(cur)]

        # month is stored by name, so calendar order is applied here
        reports.sort(
            key=lambda p: (p.period_year, _month_index(p.period_month), p.report_id or 0),
            reverse=True,
        )
        return reports

    def delete(self, *, report_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payslip_reports WHERE report_id=%s", (int(report_id),))
            return cur.rowcount > 0

    def total_net_pay(self, *, employee_id: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COALESCE(SUM(net_pay), 0) AS total FROM payslip_reports WHERE emp_id=%s",
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _dec(r["total"] if r else 0)
