"""FastAPI application factory"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from underwriting_gateway.api.middleware import AccessLogMiddleware, RequestIDMiddleware, MetricsMiddleware
from underwriting_gateway.api.dependencies import get_decision_store, get_memory_store
from underwriting_gateway.api.v1 import decision, history
from underwriting_gateway.infrastructure.database.session import create_tables
from underwriting_gateway.infrastructure.observability.logging import setup_logging
from underwriting_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.store_backend == "database" and settings.create_tables_on_startup:
        create_tables()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Mortgage Underwriting Gateway",
        description="Deterministic DTI/LTV underwriting decisions with decision history",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(decision.router, prefix=settings.api_prefix, tags=["decisions"])
    app.include_router(history.router, prefix=settings.api_prefix, tags=["history"])

    # Memory backend never opens a database session
    if settings.store_backend == "memory":
        app.dependency_overrides[get_decision_store] = get_memory_store

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn (console script: underwriting-gateway)"""
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
