from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Read-only view of an employee: id and pay rate."""

    emp_id: int
    hourly_rate: Optional[Decimal] = None
    full_name: str = ""
