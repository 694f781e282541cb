from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Sequence

from ..core.constants import DEFAULT_DUPLICATE_CHECK_WORKERS
from ..core.exceptions import DomainError
from .model import CandidateRecord
from .repository import TimeRecordRepository

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationResult:
    unique: list[CandidateRecord] = field(default_factory=list)
    duplicates: list[CandidateRecord] = field(default_factory=list)
    lookup_failures: int = 0


class DuplicateReconciler:
    """Split candidates into new and already-persisted records.

    Existence checks are independent reads, so they all run in a thread pool
    and are joined before partitioning. Input order is preserved.
    """

    def __init__(self, records: TimeRecordRepository, *, max_workers: int = DEFAULT_DUPLICATE_CHECK_WORKERS):
        self._records = records
        self._max_workers = max(1, int(max_workers))

    def _exists(self, candidate: CandidateRecord) -> tuple[bool, bool]:
        """Return (is_duplicate, lookup_failed)."""
        rec = candidate.record
        try:
            found = self._records.find_by_natural_key(
                employee_id=rec.employee_id,
                entry_date=rec.entry_date,
                time_in=rec.time_in,
                time_out=rec.time_out,
            )
        except DomainError as exc:
            # Unknown state counts as new; the insert will surface a real conflict.
            logger.warning("Duplicate check failed for row %s: %s", candidate.row_number, exc)
            return False, True
        return found is not None, False

    def reconcile(self, candidates: Sequence[CandidateRecord]) -> ReconciliationResult:
        result = ReconciliationResult()
        if not candidates:
            return result

        # A key repeated inside the same file is a duplicate of its first occurrence.
        seen: set[tuple] = set()
        first_seen: list[CandidateRecord] = []
        for candidate in candidates:
            key = candidate.record.natural_key
            if key in seen:
                result.duplicates.append(candidate)
                continue
            seen.add(key)
            first_seen.append(candidate)

        workers = min(self._max_workers, len(first_seen))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="dtr-dup-check") as pool:
            outcomes = list(pool.map(self._exists, first_seen))

        for candidate, (is_duplicate, lookup_failed) in zip(first_seen, outcomes):
            if lookup_failed:
                result.lookup_failures += 1
            if is_duplicate:
                result.duplicates.append(candidate)
            else:
                result.unique.append(candidate)
        result.duplicates.sort(key=lambda c: c.row_number)
        return result
