from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    def get_employee_ids(self) -> set[str]:
        """All valid employee ids, stringified."""

        raise NotImplementedError

    def get_by_id(self, emp_id: int) -> Optional[Employee]:
        raise NotImplementedError
