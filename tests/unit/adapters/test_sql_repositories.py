"""Tests for SQLAlchemy repositories against in-memory SQLite."""

from __future__ import annotations

import asyncio

import pytest
import pytest_asyncio
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from distribution_engine.adapters.persistence.database import Base
from distribution_engine.adapters.persistence.models import (
    AssignmentRuleModel,
    ContractManagerModel,
    ReportElaboratorModel,
    TechnicianModel,
    WorkDistributionModel,
    WorkOrderModel,
)
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
from distribution_engine.domain.entities.assignment import AssignmentResult
from distribution_engine.domain.value_objects.enums import AssignmentStrategy


@pytest_asyncio.fixture
async def db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


async def _seed(session: AsyncSession) -> None:
    session.add_all([
        TechnicianModel(id=1, name="T1", active=True),
        TechnicianModel(id=2, name="T2", active=True),
        TechnicianModel(id=3, name="Retired", active=False),
        ReportElaboratorModel(user_id="E1", name="Elaine", active=True),
        ReportElaboratorModel(user_id="E2", name="Off", active=False),
        ContractManagerModel(contract_id=10, user_id="mgr-10", active=True),
        ContractManagerModel(contract_id=10, user_id="mgr-old", active=False),
        WorkOrderModel(id=1, os_number="OS-1", title="Target", contract_id=10),
    ])
    for i in range(4):
        session.add(WorkOrderModel(
            os_number=f"OS-T2-{i}", title="Busy", contract_id=10, technician_id=2,
        ))
    session.add(WorkOrderModel(
        os_number="OS-E1", title="Report", contract_id=10, report_elaborator_id="E1",
    ))
    session.add(WorkOrderModel(
        os_number="OS-DONE", title="Done", contract_id=10, technician_id=1, status="COMPLETED",
    ))
    await session.flush()


@pytest.mark.asyncio
async def test_list_active_workers(db):
    await _seed(db)
    techs = await SqlTechnicianRepository(db).list_active()
    elabs = await SqlReportElaboratorRepository(db).list_active()
    assert [t.id for t in techs] == [1, 2]
    assert [e.user_id for e in elabs] == ["E1"]


@pytest.mark.asyncio
async def test_pending_counts(db):
    await _seed(db)
    repo = SqlWorkOrderRepository(db)
    assert await repo.count_pending_by_technician() == {2: 4}
    assert await repo.count_pending_by_elaborator() == {"E1": 1}


@pytest.mark.asyncio
async def test_get_work_order(db):
    await _seed(db)
    repo = SqlWorkOrderRepository(db)
    wo = await repo.get_by_id(1)
    assert wo.os_number == "OS-1"
    assert wo.is_pending()
    assert await repo.get_by_id(999999) is None


@pytest.mark.asyncio
async def test_active_contract_manager(db):
    await _seed(db)
    repo = SqlContractManagerRepository(db)
    manager = await repo.get_active_for_contract(10)
    assert manager.user_id == "mgr-10"
    assert await repo.get_active_for_contract(11) is None


@pytest.mark.asyncio
async def test_rules_ordered_by_priority_including_global(db):
    db.add_all([
        AssignmentRuleModel(contract_id=10, rule_type="LOAD_BALANCE", priority=1),
        AssignmentRuleModel(contract_id=None, rule_type="SKILL_MATCH", priority=5,
                            configuration={"skills": ["hvac"]}),
        AssignmentRuleModel(contract_id=10, rule_type="REGION_MATCH", priority=3, active=False),
        AssignmentRuleModel(contract_id=11, rule_type="REGION_MATCH", priority=9),
    ])
    await db.flush()
    rules = await SqlAssignmentRuleRepository(db).list_active_for_contract(10)
    assert [r.rule_type for r in rules] == ["SKILL_MATCH", "LOAD_BALANCE"]
    assert rules[0].configuration == {"skills": ["hvac"]}


@pytest.mark.asyncio
async def test_upsert_inserts_then_increments(db):
    await _seed(db)
    ledger = SqlDistributionRepository(db)
    await ledger.upsert(10, 1, "E1", "sup-1")
    await ledger.upsert(10, 1, "E1", "sup-2")
    await ledger.upsert(10, 2, "E1", "sup-1")

    stats = await ledger.get_stats(10)
    assert len(stats) == 2
    row = next(r for r in stats if r.technician_id == 1)
    assert row.assigned_count == 2
    assert row.supervisor_id == "sup-2"
    assert row.last_assignment is not None

    await ledger.upsert(10, 1, "E1")
    row = next(r for r in await ledger.get_stats(10) if r.technician_id == 1)
    assert row.assigned_count == 3
    assert row.supervisor_id == "sup-2"


@pytest.mark.asyncio
async def test_get_stats_filters_by_contract(db):
    await _seed(db)
    ledger = SqlDistributionRepository(db)
    await ledger.upsert(10, 1, "E1")
    await ledger.upsert(11, 1, "E1")
    assert len(await ledger.get_stats()) == 2
    assert [r.contract_id for r in await ledger.get_stats(11)] == [11]


@pytest.mark.asyncio
async def test_apply_assignment_updates_only_selected_fields(db):
    await _seed(db)
    repo = SqlWorkOrderRepository(db)
    await repo.apply_assignment(1, AssignmentResult(
        supervisor_id="sup-1", strategy=AssignmentStrategy.MANUAL, reason="manual",
    ))
    wo = await repo.get_by_id(1)
    assert wo.supervisor_id == "sup-1"
    assert wo.technician_id is None

    await repo.apply_assignment(1, AssignmentResult(
        supervisor_id="sup-1", strategy=AssignmentStrategy.BALANCED, reason="balanced",
        technician_id=1, report_elaborator_id="E1",
    ))
    m = (await db.execute(
        select(WorkOrderModel)
        .where(WorkOrderModel.id == 1)
        .execution_options(populate_existing=True)
    )).scalar_one()
    assert (m.technician_id, m.report_elaborator_id) == (1, "E1")


@pytest.mark.asyncio
async def test_engine_end_to_end_on_sqlite(db):
    """Contract 10: T1 has 0 pending, T2 has 4, E1 has 1 → T1/E1, ledger count 1."""
    await _seed(db)
    uc = DistributeWorkOrderUseCase(
        work_order_repo=SqlWorkOrderRepository(db),
        technician_repo=SqlTechnicianRepository(db),
        elaborator_repo=SqlReportElaboratorRepository(db),
        contract_manager_repo=SqlContractManagerRepository(db),
        rule_repo=SqlAssignmentRuleRepository(db),
        distribution_repo=SqlDistributionRepository(db),
    )
    result = await uc.execute(1, 10, "sup-1")
    assert (result.technician_id, result.report_elaborator_id) == (1, "E1")
    assert result.contract_manager_id == "mgr-10"

    rows = (await db.execute(select(WorkDistributionModel))).scalars().all()
    assert len(rows) == 1
    assert (rows[0].contract_id, rows[0].technician_id, rows[0].report_elaborator_id) == (10, 1, "E1")
    assert rows[0].assigned_count == 1


@pytest.mark.asyncio
async def test_assignment_stored_when_ledger_write_fails(db):
    await _seed(db)
    await db.commit()
    await db.execute(text("DROP TABLE work_distribution"))
    await db.commit()

    distribute = DistributeWorkOrderUseCase(
        work_order_repo=SqlWorkOrderRepository(db),
        technician_repo=SqlTechnicianRepository(db),
        elaborator_repo=SqlReportElaboratorRepository(db),
        contract_manager_repo=SqlContractManagerRepository(db),
        rule_repo=SqlAssignmentRuleRepository(db),
        distribution_repo=SqlDistributionRepository(db),
    )
    uc = AssignWorkOrderUseCase(distribute, SqlWorkOrderRepository(db))
    result = await uc.execute(1, 10, "sup-1")
    assert (result.technician_id, result.report_elaborator_id) == (1, "E1")

    await db.commit()
    m = (await db.execute(
        select(WorkOrderModel)
        .where(WorkOrderModel.id == 1)
        .execution_options(populate_existing=True)
    )).scalar_one()
    assert (m.technician_id, m.report_elaborator_id, m.supervisor_id) == (1, "E1", "sup-1")


@pytest.mark.asyncio
async def test_concurrent_upserts_of_same_triple_keep_one_row(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def assign_once(supervisor_id: str) -> None:
        async with factory() as session:
            await SqlDistributionRepository(session).upsert(10, 1, "E1", supervisor_id)
            await session.commit()

    await asyncio.gather(*(assign_once(f"sup-{i}") for i in range(5)))

    async with factory() as session:
        stats = await SqlDistributionRepository(session).get_stats(10)
    await engine.dispose()
    assert [r.assigned_count for r in stats] == [5]
