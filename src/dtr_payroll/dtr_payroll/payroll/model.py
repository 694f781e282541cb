from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..core.constants import PENDING_PAYSLIP_STATUS_ID
from ..core.enums import PayslipOutcome, PayslipStatus


@dataclass(frozen=True)
class PayrollTotals:
    """Decimal hours summed from an employee's DTR rows for one month."""

    employee_id: int
    year: int
    month: int
    record_count: int
    total_hours: Decimal
    total_overtime_hours: Decimal


@dataclass(frozen=True)
class PayslipAmounts:
    gross_salary: Decimal
    overtime_pay: Decimal
    sss: Decimal
    phil_health: Decimal
    pag_ibig: Decimal
    total_deductions: Decimal
    net_pay: Decimal


@dataclass(frozen=True)
class PayslipReport:
    employee_id: int
    period_month: str
    period_year: int
    total_hours: Decimal
    total_overtime_hours: Decimal
    gross_salary: Decimal
    overtime_pay: Decimal
    sss: Decimal
    phil_health: Decimal
    pag_ibig: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    status_id: int = PENDING_PAYSLIP_STATUS_ID
    date_generated: Optional[datetime] = None
    report_id: Optional[int] = None

    @property
    def status_name(self) -> str:
        return PayslipStatus.label_for(self.status_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "report_id": self.report_id,
            "emp_id": self.employee_id,
            "month": self.period_month,
            "year": self.period_year,
            "total_hours": str(self.total_hours),
            "total_overtime": str(self.total_overtime_hours),
            "gross_salary": str(self.gross_salary),
            "overtime_pay": str(self.overtime_pay),
            "sss": str(self.sss),
            "phil_health": str(self.phil_health),
            "pag_ibig": str(self.pag_ibig),
            "total_deductions": str(self.total_deductions),
            "net_pay": str(self.net_pay),
            "payslip_status_id": self.status_id,
            "status_name": self.status_name,
            "created_at": self.date_generated.isoformat() if self.date_generated else None,
        }


@dataclass(frozen=True)
class EmployeeOutcome:
    employee_id: int
    outcome: PayslipOutcome
    reason: str

    def line(self) -> str:
        return f"Employee {self.employee_id}: {self.outcome.value.lower()} - {self.reason}"


@dataclass
class PayslipGenerationResult:
    period_month: str
    period_year: int
    outcomes: list[EmployeeOutcome] = field(default_factory=list)
    message: str = ""

    def _count(self, outcome: PayslipOutcome) -> int:
        return sum(1 for o in self.outcomes if o.outcome == outcome)

    @property
    def generated_count(self) -> int:
        return self._count(PayslipOutcome.GENERATED)

    @property
    def skipped_count(self) -> int:
        return self._count(PayslipOutcome.SKIPPED)

    @property
    def error_count(self) -> int:
        return self._count(PayslipOutcome.ERROR)

    @property
    def summary(self) -> str:
        lines = [o.line() for o in self.outcomes]
        if self.message:
            lines.insert(0, self.message)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.period_month,
            "year": self.period_year,
            "generated_count": self.generated_count,
            "skipped_count": self.skipped_count,
            "error_count": self.error_count,
            "summary": self.summary,
        }
