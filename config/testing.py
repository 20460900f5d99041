from config.config import DEFAULT_RULES, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env()

STORAGE_BACKEND = "memory"

DUPLICATE_DATE_POLICY = "reject"
FUTURE_GRACE_DAYS = 0

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_INIT_DB = False
