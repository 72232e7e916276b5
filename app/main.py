"""FastAPI application entrypoint for the metrics ingestion server."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.lib.logger import configure_logging, get_logger
from app.metrics import IngestError, IngestService, MemStorage, MetricStorage, router as metrics_router
from app.metrics.routes import ingest_error_handler

logger = get_logger(__name__)


def create_app(storage: MetricStorage | None = None) -> FastAPI:
    """Build the application around one explicitly constructed storage."""

    application = FastAPI(title="Metrics Server", version="0.1.0")

    metric_storage = storage if storage is not None else MemStorage()
    application.state.metric_storage = metric_storage
    application.state.ingest_service = IngestService(metric_storage)

    application.include_router(metrics_router, prefix="/update", tags=["metrics"])
    application.add_exception_handler(IngestError, ingest_error_handler)  # type: ignore[arg-type]

    @application.get("/health", tags=["system"], summary="Health check")
    async def health_check() -> JSONResponse:
        """Return liveness response for uptime monitoring."""
        payload = {"ok": True, "data": {"status": "healthy"}}
        return JSONResponse(content=payload)

    return application


settings = get_settings()

configure_logging(settings.log_level)
app = create_app()


def run() -> None:
    """Serve the application on the configured address."""

    logger.info("server_starting", extra={"address": f"http://{settings.address}"})
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
