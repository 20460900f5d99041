import os

from config.config import DEFAULT_RULES, db_config_from_env

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = db_config_from_env()

STORAGE_BACKEND = "mysql"

DUPLICATE_DATE_POLICY = os.getenv("DUPLICATE_DATE_POLICY", "reject")
FUTURE_GRACE_DAYS = int(os.getenv("FUTURE_GRACE_DAYS", "0"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")
