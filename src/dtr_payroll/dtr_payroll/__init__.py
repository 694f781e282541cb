"""Hotel HR back-office core: DTR CSV ingestion and payroll/payslip engine.

Organized by feature modules (dtr, employees, payroll) with a thin Flask
controller layer over service and repository layers.
"""
from __future__ import annotations

from .container import Container, build_container, build_services
from .core.context import OperatorContext
from .dtr.model import ImportSummary, TimeRecord
from .dtr.service import DTRImportService, DTRService
from .payroll.model import PayslipGenerationResult, PayslipReport
from .payroll.service import PayslipService

__all__ = [
    "Container",
    "DTRImportService",
    "DTRService",
    "ImportSummary",
    "OperatorContext",
    "PayslipGenerationResult",
    "PayslipReport",
    "PayslipService",
    "TimeRecord",
    "build_container",
    "build_services",
]
