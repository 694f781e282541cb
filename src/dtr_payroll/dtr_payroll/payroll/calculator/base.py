from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import PayslipAmounts


class PayslipCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, *, hourly_rate: Decimal, total_hours: Decimal, overtime_hours: Decimal) -> PayslipAmounts:
        raise NotImplementedError
