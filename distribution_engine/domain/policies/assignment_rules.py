"""AssignmentRulePolicy — one evaluator per rule type for the AUTO strategy.

Each evaluator receives the rule configuration and the request context and
returns a RuleOutcome when the rule produces a concrete assignment, or None
when it does not fire. The three evaluators are extension points and do not
fire yet, so AUTO currently always falls through to the balanced strategy.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from distribution_engine.domain.entities.assignment_rule import AssignmentRule
from distribution_engine.domain.value_objects.enums import RuleType


@dataclass(frozen=True)
class RuleOutcome:
    """Partial assignment produced by a rule."""

    technician_id: int | None = None
    report_elaborator_id: str | None = None
    contract_manager_id: str | None = None


RuleEvaluator = Callable[[dict, int, str], RuleOutcome | None]


def evaluate_load_balance(configuration: dict, contract_id: int, supervisor_id: str) -> RuleOutcome | None:
    return None


def evaluate_skill_match(configuration: dict, contract_id: int, supervisor_id: str) -> RuleOutcome | None:
    return None


def evaluate_region_match(configuration: dict, contract_id: int, supervisor_id: str) -> RuleOutcome | None:
    return None


RULE_EVALUATORS: dict[RuleType, RuleEvaluator] = {
    RuleType.LOAD_BALANCE: evaluate_load_balance,
    RuleType.SKILL_MATCH: evaluate_skill_match,
    RuleType.REGION_MATCH: evaluate_region_match,
}

_unhandled = set(RuleType) - set(RULE_EVALUATORS)
if _unhandled:
    raise RuntimeError(f"No evaluator registered for rule types: {sorted(_unhandled)}")


def evaluate_rule(rule: AssignmentRule, contract_id: int, supervisor_id: str) -> RuleOutcome | None:
    """Dispatch a rule to its evaluator. Unrecognized rule types never fire."""
    kind = rule.kind()
    if kind is None:
        return None
    return RULE_EVALUATORS[kind](rule.configuration or {}, contract_id, supervisor_id)
