"""Ingestion service validating metric updates before they reach storage."""

from __future__ import annotations

import math
import re
from typing import Any, Callable

from app.lib.logger import get_logger
from app.metrics.errors import (
    EmptyNameError,
    IngestError,
    InvalidValueError,
    StorageError,
    StorageFailureError,
    UnsupportedKindError,
)
from app.metrics.schemas import METRIC_KINDS, MetricKind
from app.metrics.storage import MetricStorage

logger = get_logger(__name__)

_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?",
    re.ASCII,
)
# Binary exponent is mandatory; `_` may follow the prefix or separate digits.
_HEX_FLOAT_LITERAL = re.compile(
    r"[+-]?0[xX](?=_?[0-9a-fA-F]|\.[0-9a-fA-F])"
    r"(?:_?[0-9a-fA-F])*"
    r"(?:\.(?:[0-9a-fA-F](?:_?[0-9a-fA-F])*)?)?"
    r"[pP][+-]?\d+",
    re.ASCII,
)
_FLOAT_SPECIAL = re.compile(r"[+-]?inf(?:inity)?|nan", re.ASCII | re.IGNORECASE)
_INT_LITERAL = re.compile(r"[+-]?\d+", re.ASCII)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def parse_gauge_value(raw_value: str) -> float:
    """Parse a gauge reading as a float64, rejecting out-of-range literals.

    Accepts decimal literals, hexadecimal literals such as ``0x1.8p1`` and
    the special values ``inf``/``infinity``/``nan``.
    """

    if _FLOAT_SPECIAL.fullmatch(raw_value):
        return float(raw_value)
    if _HEX_FLOAT_LITERAL.fullmatch(raw_value):
        try:
            value = float.fromhex(raw_value.replace("_", ""))
        except OverflowError as exc:
            raise ValueError(f"'{raw_value}' is out of float64 range") from exc
    elif _FLOAT_LITERAL.fullmatch(raw_value):
        value = float(raw_value)
    else:
        raise ValueError(f"'{raw_value}' is not a float64 literal")
    if math.isinf(value):
        raise ValueError(f"'{raw_value}' is out of float64 range")
    return value


def parse_counter_delta(raw_value: str) -> int:
    """Parse a counter delta as a base-10 signed 64-bit integer."""

    if not _INT_LITERAL.fullmatch(raw_value):
        raise ValueError(f"'{raw_value}' is not a base-10 integer")
    delta = int(raw_value)
    if not _INT64_MIN <= delta <= _INT64_MAX:
        raise ValueError(f"'{raw_value}' is out of int64 range")
    return delta


_PARSERS: dict[MetricKind, tuple[Callable[[str], Any], str]] = {
    MetricKind.GAUGE: (parse_gauge_value, "float64"),
    MetricKind.COUNTER: (parse_counter_delta, "int64"),
}


class IngestService:
    """Validate decoded update requests and apply them to a metric storage."""

    def __init__(self, storage: MetricStorage) -> None:
        self._storage = storage

    @property
    def storage(self) -> MetricStorage:
        return self._storage

    def apply(self, kind: str, name: str, raw_value: str) -> None:
        """Apply one update or raise the first matching :class:`IngestError`.

        Checks run in a fixed order: empty name, unknown kind, unparsable
        value, storage failure.
        """

        try:
            self._apply(kind, name, raw_value)
        except IngestError as exc:
            if not isinstance(exc, StorageFailureError):
                logger.info(
                    "metric_rejected",
                    extra={"error": exc.code, "metric_kind": kind, "detail": exc.message},
                )
            raise

        logger.debug("metric_updated", extra={"metric_kind": kind, "metric_name": name})

    def _updater(self, kind: MetricKind) -> Callable[[str, Any], None]:
        if kind is MetricKind.GAUGE:
            return self._storage.update_gauge
        return self._storage.update_counter

    def _apply(self, kind: str, name: str, raw_value: str) -> None:
        if not name:
            raise EmptyNameError("Metric name must not be empty", kind=kind, name=name)

        if kind not in METRIC_KINDS:
            raise UnsupportedKindError(
                f"Unsupported metric kind '{kind}', expected one of: {', '.join(METRIC_KINDS)}",
                kind=kind,
                name=name,
            )

        metric_kind = MetricKind(kind)
        parse, expected = _PARSERS[metric_kind]
        update = self._updater(metric_kind)
        try:
            value = parse(raw_value)
        except ValueError as exc:
            raise InvalidValueError(
                f"Invalid value for {kind}, expected {expected}: {exc}",
                kind=kind,
                name=name,
            ) from exc

        try:
            update(name, value)
        except StorageError as exc:
            logger.error(
                "metric_storage_failed",
                extra={"metric_kind": kind, "metric_name": name},
                exc_info=exc,
            )
            raise StorageFailureError(
                f"Failed to store {kind} metric '{name}'",
                kind=kind,
                name=name,
            ) from exc
