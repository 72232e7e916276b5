"""Metrics package providing update ingestion and in-memory storage."""

from app.metrics.errors import IngestError, StorageError
from app.metrics.routes import router
from app.metrics.service import IngestService
from app.metrics.storage import MemStorage, MetricStorage

__all__ = [
    "IngestError",
    "IngestService",
    "MemStorage",
    "MetricStorage",
    "StorageError",
    "router",
]
