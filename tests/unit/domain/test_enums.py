"""Tests for domain enums."""

from distribution_engine.domain.value_objects.enums import (
    AssignmentStrategy,
    RuleType,
    WorkOrderStatus,
)


def test_work_order_statuses():
    assert {s.value for s in WorkOrderStatus} == {"PENDING", "SCHEDULED", "COMPLETED", "OVERDUE"}


def test_rule_types():
    assert {r.value for r in RuleType} == {"LOAD_BALANCE", "SKILL_MATCH", "REGION_MATCH"}


def test_strategy_parse_known_values():
    assert AssignmentStrategy.parse("AUTO") == AssignmentStrategy.AUTO
    assert AssignmentStrategy.parse("manual") == AssignmentStrategy.MANUAL
    assert AssignmentStrategy.parse(" balanced ") == AssignmentStrategy.BALANCED


def test_strategy_parse_unknown_falls_back_to_balanced():
    assert AssignmentStrategy.parse("ROUND_ROBIN") == AssignmentStrategy.BALANCED
    assert AssignmentStrategy.parse("") == AssignmentStrategy.BALANCED
    assert AssignmentStrategy.parse(None) == AssignmentStrategy.BALANCED
