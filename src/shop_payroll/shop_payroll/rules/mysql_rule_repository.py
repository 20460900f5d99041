from __future__ import annotations

from decimal import Decimal
from typing import Mapping

from ..core.enums import Position
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import CompensationRule
from .repository import RuleSetRepository


class MySQLRuleSetRepository(RuleSetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_rule_set(self) -> Mapping[Position, CompensationRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT position, base_rate, sales_percentage FROM compensation_rules")
            rules = {}
            for r in fetchall(cur):
                position = Position(r["position"])
                rules[position] = CompensationRule(
                    position=position,
                    base_rate=Decimal(str(r["base_rate"])),
                    sales_percentage=Decimal(str(r["sales_percentage"])),
                )
            return rules

    def save_rule(self, rule: CompensationRule) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO compensation_rules(position, base_rate, sales_percentage)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE base_rate=VALUES(base_rate), sales_percentage=VALUES(sales_percentage)
                """,
                (rule.position.value, rule.base_rate, rule.sales_percentage),
            )
