from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import PayslipReport


class PayslipRepository(Protocol):
    def find_for_period(self, *, employee_id: int, month: str, year: int) -> Optional[PayslipReport]:
        raise NotImplementedError

    def insert(self, report: PayslipReport) -> int:
        """Persist a new report and return its id.

        Raises ConflictError if the (employee, month, year) period is taken.
        """

        raise NotImplementedError

    def list_for_employee(self, *, employee_id: int, year: Optional[int] = None) -> Sequence[PayslipReport]:
        raise NotImplementedError

    def delete(self, *, report_id: int) -> bool:
        raise NotImplementedError

    def total_net_pay(self, *, employee_id: int) -> Decimal:
        raise NotImplementedError
