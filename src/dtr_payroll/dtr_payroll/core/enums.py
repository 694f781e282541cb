from __future__ import annotations

from enum import Enum


class BatchState(str, Enum):
    """Lifecycle of one insert chunk during a DTR import."""

    PENDING = "PENDING"
    INSERTED = "INSERTED"
    FAILED = "FAILED"


class PayslipOutcome(str, Enum):
    """Per-employee result of a payslip generation run."""

    GENERATED = "GENERATED"
    SKIPPED = "SKIPPED"
    ERROR = "ERROR"


class PayslipStatus(int, Enum):
    """Known payslip status ids stored in `payslip_status`."""

    PENDING = 1
    DRAFT = 2
    PAID = 3

    @classmethod
    def label_for(cls, status_id: int | None) -> str:
        # Missing or unknown ids fall back to PENDING.
        try:
            return cls(int(status_id or cls.PENDING)).name
        except ValueError:
            return cls.PENDING.name
