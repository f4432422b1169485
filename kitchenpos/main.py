"""
FastAPI Application Entry Point

Kitchen POS - order lifecycle backend.

Endpoints:
    - POST /api/orders: Place an order at a table
    - GET /api/orders: List orders
    - GET /api/orders/{order_id}: Get one order
    - PUT /api/orders/{order_id}/order-status: Change an order's status
    - GET /health: System health check
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
import uvicorn

from kitchenpos.core.config import get_settings, setup_logging
from kitchenpos.core.exceptions import KitchenPosError
from kitchenpos.database import dispose_engine, get_session_maker, init_db
from kitchenpos.schemas import (
    ErrorResponse,
    HealthResponse,
    OrderCreate,
    OrderResponse,
    OrderStatusChange,
)
from kitchenpos.services import OrderService, get_order_service

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    settings = get_settings()

    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Storage: {settings.storage_backend.value}")
    logger.info("=" * 60)

    if not settings.use_memory_store:
        await init_db()
        logger.info("✅ Database initialized")

    problems = settings.validate_production_config()
    if problems:
        logger.warning(f"⚠️ Configuration problems: {problems}")

    logger.info("✅ Application ready!")

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    if not settings.use_memory_store:
        await dispose_engine()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description="Restaurant point-of-sale backend: tables, menus and order lifecycle.",
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ROOT & HEALTH ENDPOINTS
# =============================================================================

@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """API root with navigation links."""
    settings = get_settings()
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.env_mode.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check() -> HealthResponse:
    """Verify the configured store is reachable."""
    settings = get_settings()

    db_status = "not used"
    if not settings.use_memory_store:
        db_status = "healthy"
        try:
            async with get_session_maker()() as session:
                await session.execute(select(1))
        except Exception as e:
            db_status = f"unhealthy: {str(e)}"
            logger.error(f"Database health check failed: {e}")

    overall = "degraded" if db_status.startswith("unhealthy") else "operational"

    return HealthResponse(
        status=overall,
        storage_backend=settings.storage_backend.value,
        database=db_status,
        timestamp=datetime.now(),
    )


# =============================================================================
# ORDER API ENDPOINTS
# =============================================================================

@app.post(
    "/api/orders",
    response_model=OrderResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
    tags=["Orders"],
    summary="Create Order",
)
async def create_order(
    order_data: OrderCreate,
    response: Response,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """
    Place an order at an occupied table.

    The order starts in COOKING.
    """
    order = await service.create_order(
        order_data.order_table_id,
        [item.to_domain() for item in order_data.order_line_items],
    )
    response.headers["Location"] = f"/api/orders/{order.id}"
    return OrderResponse.from_order(order)


@app.get(
    "/api/orders",
    response_model=list[OrderResponse],
    tags=["Orders"],
    summary="List Orders",
)
async def list_orders(
    service: OrderService = Depends(get_order_service),
) -> list[OrderResponse]:
    orders = await service.list_orders()
    return [OrderResponse.from_order(order) for order in orders]


@app.get(
    "/api/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
    tags=["Orders"],
)
async def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """Get a specific order by ID."""
    return OrderResponse.from_order(await service.get_order(order_id))


@app.put(
    "/api/orders/{order_id}/order-status",
    response_model=OrderResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    tags=["Orders"],
    summary="Change Order Status",
)
async def change_order_status(
    order_id: int,
    status_change: OrderStatusChange,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    """Move an order to MEAL or COMPLETION."""
    order = await service.change_order_status(order_id, status_change.order_status)
    return OrderResponse.from_order(order)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(KitchenPosError)
async def kitchen_pos_exception_handler(request: Request, exc: KitchenPosError) -> JSONResponse:
    """Translate rejected order operations into client errors."""
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.error, detail=exc.message).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            detail=str(exc) if get_settings().debug else "An unexpected error occurred",
        ).model_dump(),
    )


# =============================================================================
# SERVER
# =============================================================================

def run() -> None:
    """Serve the API on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "kitchenpos.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
