"""Distribution endpoints — assign a work order, ledger statistics, current workload."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from distribution_engine.application.use_cases.distribute_work_order import AssignWorkOrderUseCase
from distribution_engine.application.use_cases.distribution_stats import (
    GetDistributionStatsUseCase,
    GetWorkloadSnapshotUseCase,
)
from distribution_engine.config import settings
from distribution_engine.domain.exceptions import WorkOrderNotFoundError
from distribution_engine.domain.value_objects.enums import AssignmentStrategy
from distribution_engine.infrastructure.api.dependencies import (
    get_assign_uc,
    get_stats_uc,
    get_workload_uc,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["distribution"])


class AssignRequest(BaseModel):
    contract_id: int
    supervisor_id: str
    strategy: str | None = None


@router.post("/work-orders/{work_order_id}/assign")
async def assign_work_order(
    work_order_id: int,
    body: AssignRequest,
    assign_uc: AssignWorkOrderUseCase = Depends(get_assign_uc),
):
    """Distribute a work order to a technician and report elaborator."""
    raw_strategy = body.strategy or settings.default_assignment_strategy
    strategy = AssignmentStrategy.parse(raw_strategy)
    if strategy.value != raw_strategy.strip().upper():
        logger.warning("Unknown assignment strategy %r, using %s", raw_strategy, strategy.value)

    try:
        result = await assign_uc.execute(
            work_order_id, body.contract_id, body.supervisor_id, strategy
        )
    except WorkOrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {
        "message": "Work order distributed",
        "assignment": result.to_dict(),
    }


@router.get("/distribution/stats")
async def distribution_stats(
    contract_id: int | None = None,
    stats_uc: GetDistributionStatsUseCase = Depends(get_stats_uc),
):
    """Distribution ledger rows, optionally for one contract."""
    rows = await stats_uc.execute(contract_id)
    return {
        "total": len(rows),
        "stats": [
            {
                "contract_id": r.contract_id,
                "technician_id": r.technician_id,
                "report_elaborator_id": r.report_elaborator_id,
                "assigned_count": r.assigned_count,
                "completed_count": r.completed_count,
                "avg_completion_time": r.avg_completion_time,
                "last_assignment": r.last_assignment.isoformat() if r.last_assignment else None,
            }
            for r in rows
        ],
    }


@router.get("/distribution/workload")
async def workload(workload_uc: GetWorkloadSnapshotUseCase = Depends(get_workload_uc)):
    """Pending work orders per active technician and report elaborator."""
    snapshot = await workload_uc.execute()
    return {
        "technicians": [
            {"id": w.worker_id, "name": w.name, "pending": w.pending}
            for w in snapshot.technicians
        ],
        "elaborators": [
            {"id": w.worker_id, "name": w.name, "pending": w.pending}
            for w in snapshot.elaborators
        ],
    }
