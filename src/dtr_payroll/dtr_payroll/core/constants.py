"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_IMPORT_BATCH_SIZE = 50
DEFAULT_DUPLICATE_CHECK_WORKERS = 8
SUMMARY_SAMPLE_LIMIT = 10

# Progress checkpoints reported by the DTR importer (percent).
PROGRESS_DUPLICATE_CHECK_STARTED = 10
PROGRESS_DUPLICATE_CHECK_DONE = 30
PROGRESS_BATCHES_DONE = 90
PROGRESS_COMPLETE = 100

DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.5")
DEFAULT_SSS_RATE = Decimal("0.05")
DEFAULT_PHILHEALTH_RATE = Decimal("0.025")
DEFAULT_PAGIBIG_FIXED = Decimal("200.00")

PENDING_PAYSLIP_STATUS_ID = 1

CSV_HEADERS = (
    "employee_id",
    "entry_date",
    "time_in",
    "time_out",
    "month",
    "hours_worked",
    "overtime_hrs",
    "absent",
)
