"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from distribution_engine.adapters.persistence.models import (
    AssignmentRuleModel,
    ContractManagerModel,
    ReportElaboratorModel,
    TechnicianModel,
    WorkDistributionModel,
    WorkOrderModel,
)
from distribution_engine.application.ports.assignment_rule_repo import AssignmentRuleRepository
from distribution_engine.application.ports.contract_manager_repo import ContractManagerRepository
from distribution_engine.application.ports.distribution_repo import DistributionRepository
from distribution_engine.application.ports.report_elaborator_repo import ReportElaboratorRepository
from distribution_engine.application.ports.technician_repo import TechnicianRepository
from distribution_engine.application.ports.work_order_repo import WorkOrderRepository
from distribution_engine.domain.entities.assignment import AssignmentResult
from distribution_engine.domain.entities.assignment_rule import AssignmentRule
from distribution_engine.domain.entities.contract_manager import ContractManager
from distribution_engine.domain.entities.report_elaborator import ReportElaborator
from distribution_engine.domain.entities.technician import Technician
from distribution_engine.domain.entities.work_distribution import WorkDistribution
from distribution_engine.domain.entities.work_order import WorkOrder
from distribution_engine.domain.exceptions import LedgerWriteError
from distribution_engine.domain.value_objects.enums import (
    WorkOrderPriority,
    WorkOrderStatus,
)

# ─── Mappers ─────────────────────────────────────────────────────────


def _technician_to_domain(m: TechnicianModel) -> Technician:
    return Technician(id=m.id, name=m.name, active=m.active, user_id=m.user_id, email=m.email)


def _elaborator_to_domain(m: ReportElaboratorModel) -> ReportElaborator:
    return ReportElaborator(
        user_id=m.user_id,
        name=m.name,
        active=m.active,
        specialization=m.specialization,
        max_concurrent_reports=m.max_concurrent_reports,
    )


def _work_order_to_domain(m: WorkOrderModel) -> WorkOrder:
    return WorkOrder(
        id=m.id,
        os_number=m.os_number,
        title=m.title,
        contract_id=m.contract_id,
        status=WorkOrderStatus(m.status),
        priority=WorkOrderPriority(m.priority),
        technician_id=m.technician_id,
        report_elaborator_id=m.report_elaborator_id,
        supervisor_id=m.supervisor_id,
        estimated_hours=m.estimated_hours,
        actual_hours=m.actual_hours,
    )


def _manager_to_domain(m: ContractManagerModel) -> ContractManager:
    return ContractManager(id=m.id, contract_id=m.contract_id, user_id=m.user_id, active=m.active)


def _rule_to_domain(m: AssignmentRuleModel) -> AssignmentRule:
    return AssignmentRule(
        id=m.id,
        contract_id=m.contract_id,
        rule_type=m.rule_type,
        priority=m.priority,
        configuration=dict(m.configuration) if m.configuration else {},
        active=m.active,
    )


def _distribution_to_domain(m: WorkDistributionModel) -> WorkDistribution:
    return WorkDistribution(
        id=m.id,
        contract_id=m.contract_id,
        technician_id=m.technician_id,
        report_elaborator_id=m.report_elaborator_id,
        supervisor_id=m.supervisor_id,
        assigned_count=m.assigned_count,
        completed_count=m.completed_count,
        avg_completion_time=m.avg_completion_time,
        last_assignment=m.last_assignment,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlTechnicianRepository(TechnicianRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def list_active(self) -> list[Technician]:
        result = await self._s.execute(
            select(TechnicianModel)
            .where(TechnicianModel.active.is_(True))
            .order_by(TechnicianModel.id)
        )
        return [_technician_to_domain(m) for m in result.scalars()]


class SqlReportElaboratorRepository(ReportElaboratorRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def list_active(self) -> list[ReportElaborator]:
        result = await self._s.execute(
            select(ReportElaboratorModel)
            .where(ReportElaboratorModel.active.is_(True))
            .order_by(ReportElaboratorModel.id)
        )
        return [_elaborator_to_domain(m) for m in result.scalars()]


class SqlWorkOrderRepository(WorkOrderRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, work_order_id: int) -> WorkOrder | None:
        m = await self._s.get(WorkOrderModel, work_order_id)
        return _work_order_to_domain(m) if m else None

    async def count_pending_by_technician(self) -> dict[int, int]:
        result = await self._s.execute(
            select(WorkOrderModel.technician_id, func.count(WorkOrderModel.id))
            .where(
                WorkOrderModel.status == WorkOrderStatus.PENDING.value,
                WorkOrderModel.technician_id.is_not(None),
            )
            .group_by(WorkOrderModel.technician_id)
        )
        return {row[0]: row[1] for row in result.all()}

    async def count_pending_by_elaborator(self) -> dict[str, int]:
        result = await self._s.execute(
            select(WorkOrderModel.report_elaborator_id, func.count(WorkOrderModel.id))
            .where(
                WorkOrderModel.status == WorkOrderStatus.PENDING.value,
                WorkOrderModel.report_elaborator_id.is_not(None),
            )
            .group_by(WorkOrderModel.report_elaborator_id)
        )
        return {row[0]: row[1] for row in result.all()}

    async def apply_assignment(self, work_order_id: int, result: AssignmentResult) -> None:
        values = {"supervisor_id": result.supervisor_id}
        if result.technician_id is not None:
            values["technician_id"] = result.technician_id
        if result.report_elaborator_id is not None:
            values["report_elaborator_id"] = result.report_elaborator_id

        await self._s.execute(
            update(WorkOrderModel)
            .where(WorkOrderModel.id == work_order_id)
            .values(**values)
        )
        await self._s.flush()


class SqlContractManagerRepository(ContractManagerRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_active_for_contract(self, contract_id: int) -> ContractManager | None:
        result = await self._s.execute(
            select(ContractManagerModel)
            .where(
                ContractManagerModel.contract_id == contract_id,
                ContractManagerModel.active.is_(True),
            )
            .order_by(ContractManagerModel.id)
            .limit(1)
        )
        m = result.scalar_one_or_none()
        return _manager_to_domain(m) if m else None


class SqlAssignmentRuleRepository(AssignmentRuleRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def list_active_for_contract(self, contract_id: int) -> list[AssignmentRule]:
        result = await self._s.execute(
            select(AssignmentRuleModel)
            .where(
                AssignmentRuleModel.active.is_(True),
                or_(
                    AssignmentRuleModel.contract_id == contract_id,
                    AssignmentRuleModel.contract_id.is_(None),
                ),
            )
            .order_by(AssignmentRuleModel.priority.desc(), AssignmentRuleModel.id)
        )
        return [_rule_to_domain(m) for m in result.scalars()]


class SqlDistributionRepository(DistributionRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    def _insert(self):
        # PostgreSQL in production, SQLite in tests; both support ON CONFLICT
        if self._s.get_bind().dialect.name == "sqlite":
            return sqlite_insert(WorkDistributionModel.__table__)
        return pg_insert(WorkDistributionModel.__table__)

    async def upsert(
        self,
        contract_id: int,
        technician_id: int,
        report_elaborator_id: str,
        supervisor_id: str | None = None,
    ) -> None:
        stmt = self._insert().values(
            contract_id=contract_id,
            technician_id=technician_id,
            report_elaborator_id=report_elaborator_id,
            supervisor_id=supervisor_id,
            assigned_count=1,
            completed_count=0,
            last_assignment=func.now(),
        )
        ledger = WorkDistributionModel.__table__
        stmt = stmt.on_conflict_do_update(
            index_elements=[ledger.c.contract_id, ledger.c.technician_id, ledger.c.report_elaborator_id],
            set_={
                "assigned_count": ledger.c.assigned_count + 1,
                "supervisor_id": func.coalesce(stmt.excluded.supervisor_id, ledger.c.supervisor_id),
                "last_assignment": func.now(),
                "updated_at": func.now(),
            },
        )
        try:
            await self._s.execute(stmt)
            await self._s.flush()
        except SQLAlchemyError as e:
            await self._s.rollback()
            raise LedgerWriteError(str(e)) from e

    async def get_stats(self, contract_id: int | None = None) -> list[WorkDistribution]:
        query = (
            select(WorkDistributionModel)
            .order_by(WorkDistributionModel.id)
            .execution_options(populate_existing=True)
        )
        if contract_id is not None:
            query = query.where(WorkDistributionModel.contract_id == contract_id)
        result = await self._s.execute(query)
        return [_distribution_to_domain(m) for m in result.scalars()]
