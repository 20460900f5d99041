from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import STORAGE_MYSQL, build_container
from .core.enums import Role
from .database.bootstrap import apply_schema, ensure_admin_account, ensure_default_rules, list_tables
from .employees.controller import register as register_employees
from .identity.controller import register as register_identity
from .ledger.controller import register as register_ledger
from .payroll.controller import register as register_payroll
from .rules.controller import register as register_rules

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    storage_backend = getattr(settings, "STORAGE_BACKEND", STORAGE_MYSQL)
    db_config = getattr(settings, "DB_CONFIG", None)
    default_rules = getattr(settings, "DEFAULT_RULES", {})
    admin_username = getattr(settings, "ADMIN_USERNAME", None)
    admin_password = getattr(settings, "ADMIN_PASSWORD", None)

    if storage_backend == STORAGE_MYSQL:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            ensure_default_rules(db_config, default_rules)
            if admin_username and admin_password:
                ensure_admin_account(db_config, username=admin_username, password=admin_password)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        storage_backend=storage_backend,
        db_config=db_config,
        merge_policy=getattr(settings, "DUPLICATE_DATE_POLICY", "reject"),
        future_grace_days=int(getattr(settings, "FUTURE_GRACE_DAYS", 0)),
        default_rules=default_rules,
    )
    app.extensions["shop_payroll"] = container

    if storage_backend != STORAGE_MYSQL and admin_username and admin_password:
        container.auth_service.register_account(username=admin_username, password=admin_password, role=Role.ADMIN)

    register_error_handlers(app)
    register_identity(app, container)
    register_employees(app, container)
    register_ledger(app, container)
    register_payroll(app, container)
    register_rules(app, container)

    logger.info("Shop payroll startup complete (storage=%s)", storage_backend)
    return app
