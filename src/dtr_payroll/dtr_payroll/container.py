from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .core.constants import (
    DEFAULT_DUPLICATE_CHECK_WORKERS,
    DEFAULT_IMPORT_BATCH_SIZE,
    DEFAULT_OVERTIME_MULTIPLIER,
    DEFAULT_PAGIBIG_FIXED,
    DEFAULT_PHILHEALTH_RATE,
    DEFAULT_SSS_RATE,
)
from .database.connection import DBConfig, DatabaseConnection
from .dtr.mysql_dtr_repository import MySQLTimeRecordRepository
from .dtr.repository import TimeRecordRepository
from .dtr.service import DTRImportService, DTRService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .payroll.calculator.standard_calculator import StandardPayslipCalculator
from .payroll.mysql_payslip_repository import MySQLPayslipRepository
from .payroll.repository import PayslipRepository
from .payroll.service import PayslipService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employees_repo: EmployeeRepository
    dtr_repo: TimeRecordRepository
    payslips_repo: PayslipRepository

    dtr_import_service: DTRImportService
    dtr_service: DTRService
    payslip_service: PayslipService


def build_services(
    *,
    employees: EmployeeRepository,
    records: TimeRecordRepository,
    payslips: PayslipRepository,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of any repository implementation (MySQL or fakes)."""

    def setting(name: str, default):
        return getattr(settings, name, default) if settings is not None else default

    calculator = StandardPayslipCalculator(
        overtime_multiplier=Decimal(str(setting("OVERTIME_MULTIPLIER", DEFAULT_OVERTIME_MULTIPLIER))),
        sss_rate=Decimal(str(setting("SSS_RATE", DEFAULT_SSS_RATE))),
        philhealth_rate=Decimal(str(setting("PHILHEALTH_RATE", DEFAULT_PHILHEALTH_RATE))),
        pagibig_fixed=Decimal(str(setting("PAGIBIG_FIXED", DEFAULT_PAGIBIG_FIXED))),
    )

    return Container(
        conn=conn,
        employees_repo=employees,
        dtr_repo=records,
        payslips_repo=payslips,
        dtr_import_service=DTRImportService(
            records,
            employees,
            batch_size=int(setting("IMPORT_BATCH_SIZE", DEFAULT_IMPORT_BATCH_SIZE)),
            duplicate_check_workers=int(setting("DUPLICATE_CHECK_WORKERS", DEFAULT_DUPLICATE_CHECK_WORKERS)),
            strict_csv=bool(setting("STRICT_CSV", False)),
        ),
        dtr_service=DTRService(records),
        payslip_service=PayslipService(payslips, employees, records, calculator=calculator),
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        employees=MySQLEmployeeRepository(conn),
        records=MySQLTimeRecordRepository(conn),
        payslips=MySQLPayslipRepository(conn),
        settings=settings,
        conn=conn,
    )
