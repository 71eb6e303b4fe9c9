"""FastAPI application entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from rich.logging import RichHandler
from sqlalchemy.ext.asyncio import AsyncEngine

from carebase import database
from carebase.config import settings
from carebase.database import ConnectionManager, build_session_factory
from carebase.handlers import register_exception_handlers
from carebase.routers.appointments import router as appointments_router
from carebase.routers.health import router as health_router
from carebase.routers.medical import router as medical_router
from carebase.routers.patients import router as patients_router
from carebase.routers.seed import router as seed_router
from carebase.services.appointment_service import AppointmentStore
from carebase.services.cascade import CascadeCoordinator
from carebase.services.patient_service import PatientStore

logging.basicConfig(
    level=logging.INFO,
    format="%(name)s - %(message)s",
    datefmt="%H:%M:%S",
    handlers=[RichHandler(rich_tracebacks=True, markup=False)],
    force=True,
)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
# Our app loggers: show DEBUG when debug=True, keep third-party libs at INFO
if settings.debug:
    logging.getLogger("carebase").setLevel(logging.DEBUG)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    connection: ConnectionManager = app.state.connection
    # DatabaseConnectionError propagates and aborts startup
    await connection.connect(settings.db_max_retries, settings.db_retry_delay_ms)
    yield
    await connection.dispose()


def create_app(engine: AsyncEngine | None = None) -> FastAPI:
    """Build the application and the objects its routes depend on."""
    if engine is None:
        engine = database.engine
    session_factory = build_session_factory(engine)

    app = FastAPI(
        title="Carebase",
        description="Patient and appointment records API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.connection = ConnectionManager(engine, create_tables=settings.create_tables)
    app.state.session_factory = session_factory
    app.state.patient_store = PatientStore(session_factory, CascadeCoordinator())
    app.state.appointment_store = AppointmentStore(session_factory)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_credentials=True,
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(patients_router)
    app.include_router(appointments_router)
    app.include_router(medical_router)
    app.include_router(seed_router)
    return app


app = create_app()
