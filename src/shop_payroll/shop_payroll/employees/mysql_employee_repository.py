from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import Position
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_optional_decimal
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, full_name, position, base_rate, sales_percentage, is_active"


def _row_to_employee(row: dict) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        full_name=row["full_name"],
        position=Position(row["position"]),
        base_rate=to_optional_decimal(row.get("base_rate")),
        sales_percentage=to_optional_decimal(row.get("sales_percentage")),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_employee(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def list_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY employee_id")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def add_employee(
        self,
        *,
        full_name: str,
        position: Position,
        base_rate: Optional[Decimal],
        sales_percentage: Optional[Decimal],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(full_name, position, base_rate, sales_percentage)
                VALUES(%s,%s,%s,%s)
                """,
                (full_name, position.value, base_rate, sales_percentage),
            )
            return int(cur.lastrowid)

    def save_employee(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET full_name=%s, position=%s, base_rate=%s, sales_percentage=%s, is_active=%s
                WHERE employee_id=%s
                """,
                (
                    employee.full_name,
                    employee.position.value,
                    employee.base_rate,
                    employee.sales_percentage,
                    int(employee.is_active),
                    employee.employee_id,
                ),
            )

    def delete_employee(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (int(employee_id),))
            return cur.rowcount > 0
