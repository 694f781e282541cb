import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hotel_hr"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# DTR import
IMPORT_BATCH_SIZE = int(os.getenv("IMPORT_BATCH_SIZE", "50"))
DUPLICATE_CHECK_WORKERS = int(os.getenv("DUPLICATE_CHECK_WORKERS", "8"))
STRICT_CSV = bool(int(os.getenv("STRICT_CSV", "0")))

# Payroll rates
OVERTIME_MULTIPLIER = os.getenv("OVERTIME_MULTIPLIER", "1.5")
SSS_RATE = os.getenv("SSS_RATE", "0.05")
PHILHEALTH_RATE = os.getenv("PHILHEALTH_RATE", "0.025")
PAGIBIG_FIXED = os.getenv("PAGIBIG_FIXED", "200.00")
