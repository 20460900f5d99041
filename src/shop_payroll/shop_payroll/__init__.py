"""Shop Payroll package.

Organized by feature modules (identity, employees, ledger, rules, payroll, access)
with a thin Flask controller layer over service/repository layers.
"""
