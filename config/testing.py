import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hotel_hr_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

IMPORT_BATCH_SIZE = 50
DUPLICATE_CHECK_WORKERS = 4
STRICT_CSV = False

OVERTIME_MULTIPLIER = "1.5"
SSS_RATE = "0.05"
PHILHEALTH_RATE = "0.025"
PAGIBIG_FIXED = "200.00"
