"""AssignmentRule entity — a policy evaluated by the AUTO strategy."""

from dataclasses import dataclass, field

from distribution_engine.domain.value_objects.enums import RuleType


@dataclass
class AssignmentRule:
    id: int | None
    contract_id: int | None  # None = applies to every contract
    rule_type: str
    priority: int = 0
    configuration: dict = field(default_factory=dict)
    active: bool = True

    def kind(self) -> RuleType | None:
        """Return the rule type as an enum member, or None if unrecognized."""
        try:
            return RuleType(self.rule_type)
        except ValueError:
            return None

    def applies_to(self, contract_id: int) -> bool:
        return self.contract_id is None or self.contract_id == contract_id
