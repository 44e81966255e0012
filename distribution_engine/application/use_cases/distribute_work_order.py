"""DistributeWorkOrderUseCase — pick a technician and report elaborator for a work order."""

from __future__ import annotations

import logging

from distribution_engine.application.ports.assignment_rule_repo import AssignmentRuleRepository
from distribution_engine.application.ports.contract_manager_repo import ContractManagerRepository
from distribution_engine.application.ports.distribution_repo import DistributionRepository
from distribution_engine.application.ports.report_elaborator_repo import ReportElaboratorRepository
from distribution_engine.application.ports.technician_repo import TechnicianRepository
from distribution_engine.application.ports.work_order_repo import WorkOrderRepository
from distribution_engine.domain.entities.assignment import AssignmentResult
from distribution_engine.domain.exceptions import LedgerWriteError, WorkOrderNotFoundError
from distribution_engine.domain.policies.assignment_rules import evaluate_rule
from distribution_engine.domain.policies.least_loaded import select_least_loaded
from distribution_engine.domain.value_objects.enums import AssignmentStrategy

logger = logging.getLogger(__name__)

AUTO_FALLBACK_NOTICE = "AUTO fallback: no assignment rule fired"
MANUAL_PENDING_REASON = "Manual assignment by supervisor - awaiting selection"


class DistributeWorkOrderUseCase:
    """Distribution engine: BALANCED, AUTO and MANUAL strategies."""

    def __init__(
        self,
        work_order_repo: WorkOrderRepository,
        technician_repo: TechnicianRepository,
        elaborator_repo: ReportElaboratorRepository,
        contract_manager_repo: ContractManagerRepository,
        rule_repo: AssignmentRuleRepository,
        distribution_repo: DistributionRepository,
    ):
        self._work_orders = work_order_repo
        self._technicians = technician_repo
        self._elaborators = elaborator_repo
        self._managers = contract_manager_repo
        self._rules = rule_repo
        self._ledger = distribution_repo

    async def execute(
        self,
        work_order_id: int,
        contract_id: int,
        supervisor_id: str,
        strategy: AssignmentStrategy = AssignmentStrategy.BALANCED,
    ) -> AssignmentResult:
        """Select workers for a work order using the requested strategy.

        Raises:
            WorkOrderNotFoundError: if the work order does not exist.
        """
        work_order = await self._work_orders.get_by_id(work_order_id)
        if work_order is None:
            raise WorkOrderNotFoundError(work_order_id)

        if strategy == AssignmentStrategy.MANUAL:
            result = self._manual(supervisor_id)
        elif strategy == AssignmentStrategy.AUTO:
            result = await self._auto(contract_id, supervisor_id)
        else:
            result = await self._balanced(contract_id, supervisor_id)

        logger.info(
            "Work order %s: strategy=%s technician=%s elaborator=%s (%s)",
            work_order_id, result.strategy.value, result.technician_id,
            result.report_elaborator_id, result.reason,
        )
        return result

    async def _balanced(self, contract_id: int, supervisor_id: str) -> AssignmentResult:
        technicians = await self._technicians.list_active()
        technician_loads = await self._work_orders.count_pending_by_technician()
        elaborators = await self._elaborators.list_active()
        elaborator_loads = await self._work_orders.count_pending_by_elaborator()
        manager = await self._managers.get_active_for_contract(contract_id)

        tech_sel = select_least_loaded(technicians, technician_loads, key=lambda t: t.id)
        elab_sel = select_least_loaded(elaborators, elaborator_loads, key=lambda e: e.user_id)

        result = AssignmentResult(
            supervisor_id=supervisor_id,
            strategy=AssignmentStrategy.BALANCED,
            reason="",
            technician_id=tech_sel.worker.id if tech_sel.worker else None,
            report_elaborator_id=elab_sel.worker.user_id if elab_sel.worker else None,
            contract_manager_id=manager.user_id if manager else None,
        )

        if tech_sel.worker:
            tech_part = f"technician {tech_sel.worker.name} ({tech_sel.load} pending)"
        else:
            tech_part = "no technician (0 candidates)"
        if elab_sel.worker:
            elab_name = elab_sel.worker.name or elab_sel.worker.user_id
            elab_part = f"elaborator {elab_name} ({elab_sel.load} pending reports)"
        else:
            elab_part = "no elaborator (0 candidates)"
        result.reason = f"Balanced distribution: {tech_part}, {elab_part}"

        await self._record(contract_id, result)
        return result

    async def _auto(self, contract_id: int, supervisor_id: str) -> AssignmentResult:
        rules = await self._rules.list_active_for_contract(contract_id)

        for rule in rules:
            if rule.kind() is None:
                logger.warning("Skipping rule %s with unknown type %r", rule.id, rule.rule_type)
                continue
            outcome = evaluate_rule(rule, contract_id, supervisor_id)
            if outcome is None:
                continue

            contract_manager_id = outcome.contract_manager_id
            if contract_manager_id is None:
                manager = await self._managers.get_active_for_contract(contract_id)
                contract_manager_id = manager.user_id if manager else None

            result = AssignmentResult(
                supervisor_id=supervisor_id,
                strategy=AssignmentStrategy.AUTO,
                reason=f"Automatic rule applied: {rule.kind().value}",
                technician_id=outcome.technician_id,
                report_elaborator_id=outcome.report_elaborator_id,
                contract_manager_id=contract_manager_id,
                rule_type=rule.kind(),
            )
            await self._record(contract_id, result)
            return result

        logger.info(
            "Contract %s: %d active rules, none fired → balanced fallback",
            contract_id, len(rules),
        )
        result = await self._balanced(contract_id, supervisor_id)
        result.fallback_used = True
        result.reason = f"{AUTO_FALLBACK_NOTICE}; {result.reason}"
        return result

    def _manual(self, supervisor_id: str) -> AssignmentResult:
        return AssignmentResult(
            supervisor_id=supervisor_id,
            strategy=AssignmentStrategy.MANUAL,
            reason=MANUAL_PENDING_REASON,
        )

    async def _record(self, contract_id: int, result: AssignmentResult) -> None:
        """Upsert the ledger row. A failed write does not undo the decision."""
        if not result.has_worker_pair():
            return
        try:
            await self._ledger.upsert(
                contract_id,
                result.technician_id,
                result.report_elaborator_id,
                result.supervisor_id,
            )
        except LedgerWriteError as e:
            logger.warning(
                "Distribution ledger not updated for contract %s (technician=%s, elaborator=%s): %s",
                contract_id, result.technician_id, result.report_elaborator_id, e,
            )


class AssignWorkOrderUseCase:
    """Run the distribution engine and store the decision on the work order."""

    def __init__(
        self,
        distribute: DistributeWorkOrderUseCase,
        work_order_repo: WorkOrderRepository,
    ):
        self._distribute = distribute
        self._work_orders = work_order_repo

    async def execute(
        self,
        work_order_id: int,
        contract_id: int,
        supervisor_id: str,
        strategy: AssignmentStrategy = AssignmentStrategy.BALANCED,
    ) -> AssignmentResult:
        result = await self._distribute.execute(
            work_order_id, contract_id, supervisor_id, strategy
        )
        await self._work_orders.apply_assignment(work_order_id, result)
        return result
