from __future__ import annotations

from dtr_payroll.dtr.model import CandidateRecord
from dtr_payroll.dtr.reconciliation import DuplicateReconciler


def _candidates(make_record, *days):
    return [CandidateRecord(row_number=i + 2, record=make_record(day=d), raw_row={}) for i, d in enumerate(days)]


def test_partitions_on_full_natural_key(records, make_record):
    records.rows.append(make_record(day=1))
    # same day, different clock-out: not a duplicate
    records.rows.append(make_record(day=2, time_out="18:00:00"))

    result = DuplicateReconciler(records, max_workers=4).reconcile(_candidates(make_record, 1, 2, 3))

    assert [c.row_number for c in result.duplicates] == [2]
    assert [c.row_number for c in result.unique] == [3, 4]


def test_lookup_failure_counts_as_not_duplicate(records, make_record):
    records.rows.append(make_record(day=1))
    records.lookup_error = True

    result = DuplicateReconciler(records).reconcile(_candidates(make_record, 1, 2))

    assert result.duplicates == []
    assert len(result.unique) == 2
    assert result.lookup_failures == 2


def test_repeated_key_within_file_is_a_duplicate(records, make_record):
    result = DuplicateReconciler(records).reconcile(_candidates(make_record, 5, 5, 6))

    assert [c.row_number for c in result.unique] == [2, 4]
    assert [c.row_number for c in result.duplicates] == [3]


def test_empty_input(records):
    result = DuplicateReconciler(records).reconcile([])
    assert result.unique == [] and result.duplicates == []
