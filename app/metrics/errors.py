"""Classified failures raised while ingesting a metric update."""

from __future__ import annotations


class StorageError(Exception):
    """Raised by a storage backend that could not apply an update."""


class IngestError(Exception):
    """Base class for rejected or failed metric updates."""

    code: str = "ingest_error"
    status_code: int = 400

    def __init__(self, message: str, *, kind: str | None = None, name: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.name = name


class EmptyNameError(IngestError):
    code = "empty_name"
    status_code = 404


class UnsupportedKindError(IngestError):
    code = "unsupported_kind"
    status_code = 400


class InvalidValueError(IngestError):
    code = "invalid_value"
    status_code = 400


class StorageFailureError(IngestError):
    code = "storage_failure"
    status_code = 500
