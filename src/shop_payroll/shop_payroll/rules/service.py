from __future__ import annotations

import logging
from typing import Any, Sequence

from ..core.enums import RateSource
from ..core.exceptions import MissingRuleError, ValidationError
from ..employees.model import Employee
from ..identity.model import Principal
from .model import CompensationRule, ResolvedRate
from .repository import RuleSetRepository

logger = logging.getLogger(__name__)


class RuleSetService:
    """Position-keyed compensation rules with per-employee overrides."""

    def __init__(self, rules: RuleSetRepository):
        self._rules = rules

    def resolve_rate(self, employee: Employee) -> ResolvedRate:
        """Employee override wins; otherwise the position default.

        A field the employee does not override and the position has no rule
        for is a configuration defect and raises MissingRuleError.
        """
        if employee.base_rate is not None and employee.sales_percentage is not None:
            return ResolvedRate(
                base_rate=employee.base_rate,
                sales_percentage=employee.sales_percentage,
                source=RateSource.EMPLOYEE,
            )

        rule = self._rules.load_rule_set().get(employee.position)
        if rule is None:
            logger.error("No compensation rule configured for position %s", employee.position.value)
            raise MissingRuleError(f"No compensation rule configured for position '{employee.position.value}'")

        partial = employee.base_rate is not None or employee.sales_percentage is not None
        return ResolvedRate(
            base_rate=employee.base_rate if employee.base_rate is not None else rule.base_rate,
            sales_percentage=(
                employee.sales_percentage if employee.sales_percentage is not None else rule.sales_percentage
            ),
            source=RateSource.MIXED if partial else RateSource.POSITION,
        )

    def list_rules(self) -> Sequence[CompensationRule]:
        rules = self._rules.load_rule_set()
        return sorted(rules.values(), key=lambda r: r.position.value)

    def set_rule(self, actor: Principal, *, position: Any, base_rate: Any, sales_percentage: Any) -> CompensationRule:
        try:
            rule = CompensationRule.build(position, base_rate, sales_percentage)
        except ValueError:
            raise ValidationError(f"Unknown position: {position!r}")
        self._rules.save_rule(rule)
        logger.info(
            "Rule for %s set by user %s: base_rate=%s sales_percentage=%s",
            rule.position.value,
            actor.user_id,
            rule.base_rate,
            rule.sales_percentage,
        )
        return rule
