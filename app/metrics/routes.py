"""Metric update routes decoding `/update/<kind>/<name>/<value>` paths."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from app.metrics.errors import IngestError
from app.metrics.schemas import MetricUpdateResult
from app.metrics.service import IngestService

router = APIRouter()


def get_ingest_service(request: Request) -> IngestService:
    service: IngestService | None = getattr(request.app.state, "ingest_service", None)
    if service is None:
        raise RuntimeError("Ingest service not configured on application state")
    return service


def split_update_path(path: str) -> tuple[str, str, str]:
    """Split the part after `/update/` into its kind, name and value segments."""

    parts = path.split("/")
    if len(parts) != 3:
        raise HTTPException(
            status_code=400,
            detail="Invalid URL format, expected /update/<kind>/<name>/<value>",
        )
    kind, name, value = parts
    return kind, name, value


@router.post("/{path:path}")
async def update_metric(path: str, service: IngestService = Depends(get_ingest_service)) -> JSONResponse:
    """Apply a single gauge or counter update."""

    kind, name, value = split_update_path(path)
    service.apply(kind, name, value)
    result = MetricUpdateResult(kind=kind, name=name, value=value)  # type: ignore[arg-type]
    return JSONResponse({"ok": True, "data": result.model_dump(mode="json")})


async def ingest_error_handler(request: Request, exc: IngestError) -> JSONResponse:
    """Render a classified ingestion failure with its mapped status code."""

    return JSONResponse(
        {"ok": False, "error": exc.code, "detail": exc.message},
        status_code=exc.status_code,
    )
