import os

from config.config import DEFAULT_RULES, db_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

# 'mysql' or 'memory' (no database; data lives for the process lifetime)
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mysql")

# 'reject' or 'accumulate' when a second entry arrives for the same day
DUPLICATE_DATE_POLICY = os.getenv("DUPLICATE_DATE_POLICY", "reject")
FUTURE_GRACE_DAYS = int(os.getenv("FUTURE_GRACE_DAYS", "0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
