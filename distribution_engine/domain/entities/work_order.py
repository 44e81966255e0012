"""WorkOrder entity — a unit of maintenance work being distributed."""

from dataclasses import dataclass

from distribution_engine.domain.value_objects.enums import (
    WorkOrderPriority,
    WorkOrderStatus,
)


@dataclass
class WorkOrder:
    id: int | None
    os_number: str
    title: str
    contract_id: int | None
    status: WorkOrderStatus = WorkOrderStatus.PENDING
    priority: WorkOrderPriority = WorkOrderPriority.NORMAL
    technician_id: int | None = None
    report_elaborator_id: str | None = None
    supervisor_id: str | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None

    def is_pending(self) -> bool:
        return self.status == WorkOrderStatus.PENDING

    def is_assigned(self) -> bool:
        return self.technician_id is not None
