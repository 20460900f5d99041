from __future__ import annotations

from typing import Mapping, Protocol

from ..core.enums import Position
from .model import CompensationRule


class RuleSetRepository(Protocol):
    def load_rule_set(self) -> Mapping[Position, CompensationRule]:
        raise NotImplementedError

    def save_rule(self, rule: CompensationRule) -> None:
        raise NotImplementedError
