"""Port interface for the distribution ledger."""

from abc import ABC, abstractmethod

from distribution_engine.domain.entities.work_distribution import WorkDistribution


class DistributionRepository(ABC):
    @abstractmethod
    async def upsert(
        self,
        contract_id: int,
        technician_id: int,
        report_elaborator_id: str,
        supervisor_id: str | None = None,
    ) -> None:
        """Insert the ledger row with assigned_count=1 or increment it on conflict.

        Must be a single conflict-resolving write, not read-then-branch.
        On conflict the row takes the new supervisor_id unless it is None.
        Raises LedgerWriteError if the row cannot be stored.
        """
        ...

    @abstractmethod
    async def get_stats(self, contract_id: int | None = None) -> list[WorkDistribution]:
        ...
