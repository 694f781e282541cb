from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OperatorContext:
    """Who triggered an operation. Passed explicitly into every service call."""

    actor_id: Optional[int] = None
    actor_name: Optional[str] = None

    def describe(self) -> str:
        if self.actor_id is None:
            return "system"
        if self.actor_name:
            return f"{self.actor_name}#{self.actor_id}"
        return f"#{self.actor_id}"


SYSTEM_CONTEXT = OperatorContext()
