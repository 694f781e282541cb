from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.normalizers import month_name, month_name_to_first_of_month
from ..core.constants import PENDING_PAYSLIP_STATUS_ID
from ..core.context import SYSTEM_CONTEXT, OperatorContext
from ..core.enums import PayslipOutcome
from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from ..dtr.repository import TimeRecordRepository
from ..employees.repository import EmployeeRepository
from .aggregator import PayrollAggregator
from .calculator.base import PayslipCalculator
from .calculator.standard_calculator import StandardPayslipCalculator, to_money
from .model import EmployeeOutcome, PayslipGenerationResult, PayslipReport
from .repository import PayslipRepository

logger = logging.getLogger(__name__)


def resolve_period(month: int | str, year: int) -> tuple[int, str, int]:
    """Accept a month number or English month name; return (number, name, year)."""
    try:
        year = int(year)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid year: {year!r}") from None
    if not 1900 <= year <= 9999:
        raise ValidationError(f"Invalid year: {year}")

    if isinstance(month, str) and not month.strip().isdecimal():
        number = month_name_to_first_of_month(month, year).month
    else:
        try:
            number = int(month)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid month: {month!r}") from None
    return number, month_name(number), year


class PayslipService:
    def __init__(
        self,
        payslips: PayslipRepository,
        employees: EmployeeRepository,
        records: TimeRecordRepository,
        *,
        calculator: Optional[PayslipCalculator] = None,
    ):
        self._payslips = payslips
        self._employees = employees
        self._aggregator = PayrollAggregator(records)
        self._calculator = calculator or StandardPayslipCalculator()

    def generate_payslips(
        self,
        employee_ids: Iterable[int],
        *,
        month: int | str,
        year: int,
        context: OperatorContext = SYSTEM_CONTEXT,
        now: Optional[datetime] = None,
    ) -> PayslipGenerationResult:
        """Generate one PENDING payslip per employee for the month.

        Employees are processed one at a time; each ends up generated,
        skipped or errored with a reason line in the result summary.
        """
        try:
            month_no, name, year = resolve_period(month, year)
        except ValidationError as exc:
            logger.warning("Payslip generation rejected: %s", exc)
            return PayslipGenerationResult(period_month=str(month), period_year=year, message=str(exc))
        result = PayslipGenerationResult(period_month=name, period_year=year)

        ids: list[int] = []
        for raw in employee_ids:
            try:
                emp_id = int(raw)
            except (TypeError, ValueError):
                result.outcomes.append(EmployeeOutcome(raw, PayslipOutcome.ERROR, "invalid employee id"))
                continue
            if emp_id not in ids:
                ids.append(emp_id)
        if not ids and not result.outcomes:
            result.message = "No employees selected"
            return result

        logger.info("Payslip generation for %s %s started by %s (%s employees)", name, year, context.describe(), len(ids))
        generated_at = now or now_local()
        for emp_id in ids:
            outcome = self._generate_one(emp_id, month_no=month_no, name=name, year=year, now=generated_at)
            logger.info("Payslip %s %s: %s", name, year, outcome.line())
            result.outcomes.append(outcome)

        result.message = (
            f"{name} {year}: {result.generated_count} generated, "
            f"{result.skipped_count} skipped, {result.error_count} errors"
        )
        return result

    def _generate_one(self, emp_id: int, *, month_no: int, name: str, year: int, now: datetime) -> EmployeeOutcome:
        period = f"{name} {year}"
        try:
            employee = self._employees.get_by_id(emp_id)
            if employee is None:
                return EmployeeOutcome(emp_id, PayslipOutcome.ERROR, "employee not found")
            if employee.hourly_rate is None:
                return EmployeeOutcome(emp_id, PayslipOutcome.ERROR, "no hourly rate set")

            if self._payslips.find_for_period(employee_id=emp_id, month=name, year=year) is not None:
                return EmployeeOutcome(emp_id, PayslipOutcome.SKIPPED, f"payslip for {period} already exists")

            totals = self._aggregator.aggregate(emp_id, year=year, month=month_no)
            if totals is None:
                return EmployeeOutcome(emp_id, PayslipOutcome.ERROR, f"no DTR records for {period}")

            amounts = self._calculator.compute(
                hourly_rate=employee.hourly_rate,
                total_hours=totals.total_hours,
                overtime_hours=totals.total_overtime_hours,
            )
            report = PayslipReport(
                employee_id=emp_id,
                period_month=name,
                period_year=year,
                total_hours=to_money(totals.total_hours),
                total_overtime_hours=to_money(totals.total_overtime_hours),
                gross_salary=amounts.gross_salary,
                overtime_pay=amounts.overtime_pay,
                sss=amounts.sss,
                phil_health=amounts.phil_health,
                pag_ibig=amounts.pag_ibig,
                total_deductions=amounts.total_deductions,
                net_pay=amounts.net_pay,
                status_id=PENDING_PAYSLIP_STATUS_ID,
                date_generated=now,
            )
            self._payslips.insert(report)
        except ConflictError:
            return EmployeeOutcome(emp_id, PayslipOutcome.SKIPPED, f"payslip for {period} already exists")
        except DomainError as exc:
            logger.warning("Payslip generation failed for employee %s: %s", emp_id, exc)
            return EmployeeOutcome(emp_id, PayslipOutcome.ERROR, str(exc))

        return EmployeeOutcome(emp_id, PayslipOutcome.GENERATED, f"net pay {amounts.net_pay}")

    def list_payslips(self, employee_id: int, *, year: Optional[int] = None) -> Sequence[PayslipReport]:
        return self._payslips.list_for_employee(employee_id=int(employee_id), year=year)

    def delete_payslip(self, report_id: int, *, context: OperatorContext = SYSTEM_CONTEXT) -> None:
        if not self._payslips.delete(report_id=int(report_id)):
            raise NotFoundError(f"Payslip {report_id} not found")
        logger.info("Payslip %s deleted by %s", report_id, context.describe())

    def total_earnings(self, employee_id: int) -> Decimal:
        return to_money(self._payslips.total_net_pay(employee_id=int(employee_id)))
