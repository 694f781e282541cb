from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from ..core.constants import (
    DEFAULT_IMPORT_BATCH_SIZE,
    PROGRESS_BATCHES_DONE,
    PROGRESS_DUPLICATE_CHECK_DONE,
)
from ..core.enums import BatchState
from ..core.exceptions import DomainError
from .model import BatchResult, CandidateRecord, ImportRowError
from .repository import TimeRecordRepository

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def chunked(items: Sequence, size: int) -> list[Sequence]:
    if size < 1:
        raise ValueError("batch size must be >= 1")
    return [items[i : i + size] for i in range(0, len(items), size)]


@dataclass
class BatchRunResult:
    imported: int = 0
    failed: int = 0
    batches: list[BatchResult] = field(default_factory=list)
    errors: list[ImportRowError] = field(default_factory=list)


class BatchImporter:
    """Insert records chunk by chunk.

    A chunk is all-or-nothing: if its insert fails every record in it counts
    as failed. Chunks run one after another so progress and failure counts
    are known before the next insert starts.
    """

    def __init__(self, records: TimeRecordRepository, *, batch_size: int = DEFAULT_IMPORT_BATCH_SIZE):
        self._records = records
        self._batch_size = int(batch_size)

    def run(
        self,
        candidates: Sequence[CandidateRecord],
        *,
        progress: Optional[ProgressCallback] = None,
    ) -> BatchRunResult:
        result = BatchRunResult()
        total = len(candidates)
        processed = 0
        span = PROGRESS_BATCHES_DONE - PROGRESS_DUPLICATE_CHECK_DONE

        for index, chunk in enumerate(chunked(candidates, self._batch_size), start=1):
            batch = BatchResult(index=index, size=len(chunk))
            result.batches.append(batch)
            try:
                self._records.insert_many([c.record for c in chunk])
            except DomainError as exc:
                batch.state = BatchState.FAILED
                batch.error = str(exc)
                result.failed += len(chunk)
                logger.error("DTR batch %s (%s records) failed: %s", index, len(chunk), exc)
                result.errors.extend(
                    ImportRowError(
                        row_number=c.row_number,
                        message=f"Batch {index} insert failed: {exc}",
                        raw_row=c.raw_row,
                    )
                    for c in chunk
                )
            else:
                batch.state = BatchState.INSERTED
                result.imported += len(chunk)
                logger.debug("DTR batch %s inserted %s records", index, len(chunk))

            processed += len(chunk)
            if progress is not None:
                progress(PROGRESS_DUPLICATE_CHECK_DONE + int(span * processed / total))

        return result
