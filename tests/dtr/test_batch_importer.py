from __future__ import annotations

from dtr_payroll.core.enums import BatchState
from dtr_payroll.dtr.importer import BatchImporter, chunked
from dtr_payroll.dtr.model import CandidateRecord


def _unique_candidates(make_record, count):
    out = []
    for i in range(count):
        rec = make_record(employee_id=1001 + i // 28, day=i % 28 + 1)
        out.append(CandidateRecord(row_number=i + 2, record=rec, raw_row={}))
    return out


def test_chunked_sizes():
    assert [len(c) for c in chunked(list(range(120)), 50)] == [50, 50, 20]
    assert chunked([], 50) == []


def test_120_records_make_three_insert_calls(records, make_record):
    progress = []
    result = BatchImporter(records, batch_size=50).run(_unique_candidates(make_record, 120), progress=progress.append)

    assert records.insert_calls == [50, 50, 20]
    assert result.imported == 120
    assert result.failed == 0
    assert [b.state for b in result.batches] == [BatchState.INSERTED] * 3
    assert progress == [55, 80, 90]


def test_failed_batch_counts_every_record_and_continues(records, make_record):
    records.fail_batches = {2}
    result = BatchImporter(records, batch_size=50).run(_unique_candidates(make_record, 120))

    assert records.insert_calls == [50, 50, 20]
    assert result.imported == 70
    assert result.failed == 50
    assert [b.state for b in result.batches] == [BatchState.INSERTED, BatchState.FAILED, BatchState.INSERTED]
    assert result.batches[1].error == "insert failed"
    assert len(result.errors) == 50
    assert result.errors[0].row_number == 52
    assert result.errors[0].message.startswith("Batch 2 insert failed")
