"""Example: drive the engine through the access gate without Flask."""

from datetime import date

from src.shop_payroll.shop_payroll.container import build_container
from src.shop_payroll.shop_payroll.core.enums import Role
from src.shop_payroll.shop_payroll.identity.model import Principal

from config.config import DEFAULT_RULES


def main():
    container = build_container(storage_backend="memory", default_rules=DEFAULT_RULES)
    admin = Principal(user_id=1, role=Role.ADMIN)

    seller = container.gate.create_employee(admin, full_name="Demo Seller", position="seller")
    container.gate.append_entry(admin, seller.employee_id, {"date": date.today(), "shop": "Main St", "sales": "1000"})

    breakdown = container.gate.compute_breakdown(admin, seller.employee_id, date.today(), date.today())
    print(breakdown.as_dict())


if __name__ == "__main__":
    main()
