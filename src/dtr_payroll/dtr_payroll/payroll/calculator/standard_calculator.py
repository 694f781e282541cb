from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import (
    DEFAULT_OVERTIME_MULTIPLIER,
    DEFAULT_PAGIBIG_FIXED,
    DEFAULT_PHILHEALTH_RATE,
    DEFAULT_SSS_RATE,
)
from ..model import PayslipAmounts
from .base import PayslipCalculator

CENT = Decimal("0.01")


def to_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class StandardPayslipCalculator(PayslipCalculator):
    """Standard rule: hours x rate, overtime at a multiplier, SSS/PhilHealth
    as a share of gross + overtime, Pag-IBIG fixed.

    Amounts are computed at full precision and rounded to centavos at the end.
    """

    def __init__(
        self,
        *,
        overtime_multiplier: Decimal = DEFAULT_OVERTIME_MULTIPLIER,
        sss_rate: Decimal = DEFAULT_SSS_RATE,
        philhealth_rate: Decimal = DEFAULT_PHILHEALTH_RATE,
        pagibig_fixed: Decimal = DEFAULT_PAGIBIG_FIXED,
    ):
        self._overtime_multiplier = Decimal(str(overtime_multiplier))
        self._sss_rate = Decimal(str(sss_rate))
        self._philhealth_rate = Decimal(str(philhealth_rate))
        self._pagibig_fixed = Decimal(str(pagibig_fixed))

    def compute(self, *, hourly_rate: Decimal, total_hours: Decimal, overtime_hours: Decimal) -> PayslipAmounts:
        rate = Decimal(str(hourly_rate))
        gross = Decimal(total_hours) * rate
        overtime_pay = Decimal(overtime_hours) * (rate * self._overtime_multiplier)
        base = gross + overtime_pay

        sss = base * self._sss_rate
        phil_health = base * self._philhealth_rate
        pag_ibig = self._pagibig_fixed
        deductions = sss + phil_health + pag_ibig
        net = gross + overtime_pay - deductions

        return PayslipAmounts(
            gross_salary=to_money(gross),
            overtime_pay=to_money(overtime_pay),
            sss=to_money(sss),
            phil_health=to_money(phil_health),
            pag_ibig=to_money(pag_ibig),
            total_deductions=to_money(deductions),
            net_pay=to_money(net),
        )
