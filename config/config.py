"""Settings shared by every environment module."""

import os

# Position defaults for the compensation rule set. Amounts are strings so they
# reach Decimal without passing through float.
DEFAULT_RULES = {
    "seller": {"base_rate": os.getenv("RULE_SELLER_BASE_RATE", "500"), "sales_percentage": os.getenv("RULE_SELLER_SALES_PCT", "0.1")},
    "courier": {"base_rate": os.getenv("RULE_COURIER_BASE_RATE", "400"), "sales_percentage": os.getenv("RULE_COURIER_SALES_PCT", "0")},
    "manager": {"base_rate": os.getenv("RULE_MANAGER_BASE_RATE", "800"), "sales_percentage": os.getenv("RULE_MANAGER_SALES_PCT", "0.02")},
    "admin": {"base_rate": os.getenv("RULE_ADMIN_BASE_RATE", "700"), "sales_percentage": os.getenv("RULE_ADMIN_SALES_PCT", "0")},
}


def db_config_from_env(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "shop_payroll"),
    }
