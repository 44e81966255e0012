"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from distribution_engine.adapters.persistence.database import get_session
from distribution_engine.adapters.persistence.repositories import (
    SqlAssignmentRuleRepository,
    SqlContractManagerRepository,
    SqlDistributionRepository,
    SqlReportElaboratorRepository,
    SqlTechnicianRepository,
    SqlWorkOrderRepository,
)
from distribution_engine.application.use_cases.distribute_work_order import (
    AssignWorkOrderUseCase,
    DistributeWorkOrderUseCase,
)
from distribution_engine.application.use_cases.distribution_stats import (
    GetDistributionStatsUseCase,
    GetWorkloadSnapshotUseCase,
)


def get_work_order_repo(session: AsyncSession = Depends(get_session)) -> SqlWorkOrderRepository:
    return SqlWorkOrderRepository(session)


def get_distribute_uc(
    session: AsyncSession = Depends(get_session),
) -> DistributeWorkOrderUseCase:
    return DistributeWorkOrderUseCase(
        work_order_repo=SqlWorkOrderRepository(session),
        technician_repo=SqlTechnicianRepository(session),
        elaborator_repo=SqlReportElaboratorRepository(session),
        contract_manager_repo=SqlContractManagerRepository(session),
        rule_repo=SqlAssignmentRuleRepository(session),
        distribution_repo=SqlDistributionRepository(session),
    )


def get_assign_uc(
    session: AsyncSession = Depends(get_session),
    distribute_uc: DistributeWorkOrderUseCase = Depends(get_distribute_uc),
) -> AssignWorkOrderUseCase:
    return AssignWorkOrderUseCase(
        distribute=distribute_uc,
        work_order_repo=SqlWorkOrderRepository(session),
    )


def get_stats_uc(session: AsyncSession = Depends(get_session)) -> GetDistributionStatsUseCase:
    return GetDistributionStatsUseCase(SqlDistributionRepository(session))


def get_workload_uc(session: AsyncSession = Depends(get_session)) -> GetWorkloadSnapshotUseCase:
    return GetWorkloadSnapshotUseCase(
        work_order_repo=SqlWorkOrderRepository(session),
        technician_repo=SqlTechnicianRepository(session),
        elaborator_repo=SqlReportElaboratorRepository(session),
    )
