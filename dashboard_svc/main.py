"""
FastAPI application entry point for the Patient Vitals Dashboard.

This module configures and creates the FastAPI application with:
- Structured JSON Logging: Request/response logging
- Request ID Propagation: X-Request-ID tracked across logs
- Dependency Injection: Services and the record client injected via Depends()
- Exception Handling: Consistent error responses via setup_exception_handlers()
- Lifespan Management: Logging setup and configuration check at startup

Architecture Overview:
    ┌─────────────────────────────────────────────────────────────┐
    │                     FastAPI Application                      │
    ├─────────────────────────────────────────────────────────────┤
    │  Middleware                                                  │
    │    └── LoggingMiddleware  - Request logging & request ids    │
    ├─────────────────────────────────────────────────────────────┤
    │  Routers (api/routers/)                                     │
    │    ├── health.py     - /, /health                           │
    │    └── dashboard.py  - /dashboard, /api/v1/dashboard/...    │
    ├─────────────────────────────────────────────────────────────┤
    │  Services (services/)     ← Injected via Depends()          │
    │    ├── PatientService     - Load records, select patient    │
    │    └── DashboardService   - Aggregate vitals, render        │
    ├─────────────────────────────────────────────────────────────┤
    │  RecordServiceClient (clients/)  ← RecordServiceConfig      │
    └─────────────────────────────────────────────────────────────┘
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
import uvicorn

from core.config import get_settings
from core.exceptions import setup_exception_handlers
from core.logging_config import setup_logging
from core.middleware import LoggingMiddleware
from api.routers import health_router, dashboard_router
from api.routers.health import SERVICE_VERSION


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        - Configures structured JSON logging
        - Loads settings (fails fast when RECORD_SERVICE_URL is missing)
    """
    setup_logging(level="INFO", json_format=True)

    logger = logging.getLogger(__name__)
    logger.info("Starting Patient Vitals Dashboard...")

    settings = get_settings()
    logger.info(
        "Record service configured",
        extra={
            **settings.record_service_config.log_fields(),
            "default_patient": settings.dashboard_patient_name,
            "window_size": settings.dashboard_window_size,
        }
    )

    yield

    logger.info("Patient Vitals Dashboard shutting down...")


def create_app() -> FastAPI:
    """Create the FastAPI application with handlers, middleware and routers."""
    app = FastAPI(
        title="Patient Vitals Dashboard",
        description="Fetches a patient's health record from the record service and renders vitals, "
                    "blood pressure history, diagnostics and profile as a dashboard.",
        version=SERVICE_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    setup_exception_handlers(app)
    app.add_middleware(LoggingMiddleware)

    app.include_router(health_router)
    app.include_router(dashboard_router)
    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.dashboard_host,
        port=settings.dashboard_port,
        reload=settings.dashboard_reload
    )
