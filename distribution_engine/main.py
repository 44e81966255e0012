"""Work-order distribution engine — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from distribution_engine.adapters.persistence.database import engine
from distribution_engine.config import settings
from distribution_engine.infrastructure.api.routes_distribution import router as distribution_router
from distribution_engine.infrastructure.api.routes_health import router as health_router
from distribution_engine.infrastructure.api.routes_work_orders import router as work_orders_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(levelname)s | %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Work-Order Distribution Engine",
        description="Balanced, rule-based and manual assignment of maintenance work orders",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(distribution_router, prefix="/api")
    app.include_router(work_orders_router, prefix="/api")

    return app


app = create_app()
