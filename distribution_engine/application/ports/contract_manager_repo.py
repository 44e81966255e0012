"""Port interface for contract-manager lookup."""

from abc import ABC, abstractmethod

from distribution_engine.domain.entities.contract_manager import ContractManager


class ContractManagerRepository(ABC):
    @abstractmethod
    async def get_active_for_contract(self, contract_id: int) -> ContractManager | None:
        ...
