"""Health check: the distribution engine needs its work-order and ledger tables."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from distribution_engine.adapters.persistence.database import get_session
from distribution_engine.adapters.persistence.models import WorkDistributionModel, WorkOrderModel
from distribution_engine.config import settings
from distribution_engine.domain.value_objects.enums import AssignmentStrategy

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

_REQUIRED_TABLES = (WorkOrderModel, WorkDistributionModel)


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Row counts of the tables the engine reads and writes, plus the default strategy."""
    rows: dict[str, int | None] = {}
    for model in _REQUIRED_TABLES:
        try:
            rows[model.__tablename__] = await session.scalar(
                select(func.count()).select_from(model)
            )
        except SQLAlchemyError as e:
            logger.warning("Health check: table %s unavailable: %s", model.__tablename__, e)
            await session.rollback()
            rows[model.__tablename__] = None

    return {
        "status": "ok" if None not in rows.values() else "degraded",
        "rows": rows,
        "default_strategy": AssignmentStrategy.parse(settings.default_assignment_strategy).value,
    }
