"""Port interface for assignment-rule lookup."""

from abc import ABC, abstractmethod

from distribution_engine.domain.entities.assignment_rule import AssignmentRule


class AssignmentRuleRepository(ABC):
    @abstractmethod
    async def list_active_for_contract(self, contract_id: int) -> list[AssignmentRule]:
        """Active rules for the contract and global rules, highest priority first."""
        ...
