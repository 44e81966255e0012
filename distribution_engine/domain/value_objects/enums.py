"""Domain enums — pure Python, no external dependencies."""

from __future__ import annotations

from enum import Enum


class WorkOrderStatus(str, Enum):
    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"


class WorkOrderPriority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


class AssignmentStrategy(str, Enum):
    BALANCED = "BALANCED"
    AUTO = "AUTO"
    MANUAL = "MANUAL"

    @classmethod
    def parse(cls, raw: str | None) -> AssignmentStrategy:
        """Map a raw strategy string to a member; unknown values become BALANCED."""
        if raw is None:
            return cls.BALANCED
        try:
            return cls(raw.strip().upper())
        except ValueError:
            return cls.BALANCED


class RuleType(str, Enum):
    LOAD_BALANCE = "LOAD_BALANCE"
    SKILL_MATCH = "SKILL_MATCH"
    REGION_MATCH = "REGION_MATCH"
