from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.shop_payroll.shop_payroll.database.bootstrap import (
    apply_schema,
    ensure_admin_account,
    ensure_default_rules,
    list_tables,
)


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    schema_path = REPO_ROOT / "database" / "schema.sql"
    apply_schema(db_config, schema_path=schema_path)
    ensure_default_rules(db_config, settings.DEFAULT_RULES)

    admin_username = getattr(settings, "ADMIN_USERNAME", None)
    admin_password = getattr(settings, "ADMIN_PASSWORD", None)
    if admin_username and admin_password:
        ensure_admin_account(db_config, username=admin_username, password=admin_password)

    tables = list_tables(db_config)
    print(
        "OK: Applied schema.sql -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
