"""Port interface for work-order lookup and workload aggregates."""

from abc import ABC, abstractmethod

from distribution_engine.domain.entities.assignment import AssignmentResult
from distribution_engine.domain.entities.work_order import WorkOrder


class WorkOrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, work_order_id: int) -> WorkOrder | None:
        ...

    @abstractmethod
    async def count_pending_by_technician(self) -> dict[int, int]:
        """Number of PENDING work orders per technician id."""
        ...

    @abstractmethod
    async def count_pending_by_elaborator(self) -> dict[str, int]:
        """Number of PENDING work orders per report-elaborator id."""
        ...

    @abstractmethod
    async def apply_assignment(self, work_order_id: int, result: AssignmentResult) -> None:
        """Write the selected workers onto the work order. Unset fields are left untouched."""
        ...
