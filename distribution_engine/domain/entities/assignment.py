"""AssignmentResult — the decision produced by the distribution engine."""

from dataclasses import dataclass

from distribution_engine.domain.value_objects.enums import AssignmentStrategy, RuleType


@dataclass
class AssignmentResult:
    supervisor_id: str
    strategy: AssignmentStrategy
    reason: str
    technician_id: int | None = None
    report_elaborator_id: str | None = None
    contract_manager_id: str | None = None
    fallback_used: bool = False
    rule_type: RuleType | None = None

    def has_worker_pair(self) -> bool:
        return self.technician_id is not None and self.report_elaborator_id is not None

    def to_dict(self) -> dict:
        return {
            "technician_id": self.technician_id,
            "report_elaborator_id": self.report_elaborator_id,
            "supervisor_id": self.supervisor_id,
            "contract_manager_id": self.contract_manager_id,
            "strategy": self.strategy.value,
            "reason": self.reason,
            "fallback_used": self.fallback_used,
            "rule_type": self.rule_type.value if self.rule_type else None,
        }
