"""Read-side use cases for the distribution ledger and current workload."""

from __future__ import annotations

from dataclasses import dataclass

from distribution_engine.application.ports.distribution_repo import DistributionRepository
from distribution_engine.application.ports.report_elaborator_repo import ReportElaboratorRepository
from distribution_engine.application.ports.technician_repo import TechnicianRepository
from distribution_engine.application.ports.work_order_repo import WorkOrderRepository
from distribution_engine.domain.entities.work_distribution import WorkDistribution


@dataclass
class WorkerLoad:
    worker_id: str
    name: str | None
    pending: int


@dataclass
class WorkloadSnapshot:
    technicians: list[WorkerLoad]
    elaborators: list[WorkerLoad]


class GetDistributionStatsUseCase:
    def __init__(self, distribution_repo: DistributionRepository):
        self._ledger = distribution_repo

    async def execute(self, contract_id: int | None = None) -> list[WorkDistribution]:
        return await self._ledger.get_stats(contract_id)


class GetWorkloadSnapshotUseCase:
    """Pending work orders per active worker, busiest first."""

    def __init__(
        self,
        work_order_repo: WorkOrderRepository,
        technician_repo: TechnicianRepository,
        elaborator_repo: ReportElaboratorRepository,
    ):
        self._work_orders = work_order_repo
        self._technicians = technician_repo
        self._elaborators = elaborator_repo

    async def execute(self) -> WorkloadSnapshot:
        tech_loads = await self._work_orders.count_pending_by_technician()
        elab_loads = await self._work_orders.count_pending_by_elaborator()

        technicians = [
            WorkerLoad(worker_id=str(t.id), name=t.name, pending=tech_loads.get(t.id, 0))
            for t in await self._technicians.list_active()
            if t.is_available()
        ]
        elaborators = [
            WorkerLoad(worker_id=e.user_id, name=e.name, pending=elab_loads.get(e.user_id, 0))
            for e in await self._elaborators.list_active()
            if e.is_available()
        ]
        # sorted() is stable, so equal loads keep directory order
        return WorkloadSnapshot(
            technicians=sorted(technicians, key=lambda w: -w.pending),
            elaborators=sorted(elaborators, key=lambda w: -w.pending),
        )
