"""Work-order endpoints — detail view with current assignment."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from distribution_engine.adapters.persistence.repositories import SqlWorkOrderRepository
from distribution_engine.domain.entities.work_order import WorkOrder
from distribution_engine.infrastructure.api.dependencies import get_work_order_repo

router = APIRouter(prefix="/work-orders", tags=["work-orders"])


@router.get("/{work_order_id}")
async def get_work_order(
    work_order_id: int,
    repo: SqlWorkOrderRepository = Depends(get_work_order_repo),
):
    """Get a single work order with its assignment fields."""
    work_order = await repo.get_by_id(work_order_id)
    if not work_order:
        raise HTTPException(status_code=404, detail="Work order not found")

    return _serialize_work_order(work_order)


def _serialize_work_order(w: WorkOrder) -> dict:
    return {
        "id": w.id,
        "os_number": w.os_number,
        "title": w.title,
        "contract_id": w.contract_id,
        "status": w.status.value,
        "priority": w.priority.value,
        "estimated_hours": w.estimated_hours,
        "actual_hours": w.actual_hours,
        "assigned": w.is_assigned(),
        "assignment": {
            "technician_id": w.technician_id,
            "report_elaborator_id": w.report_elaborator_id,
            "supervisor_id": w.supervisor_id,
        },
    }
