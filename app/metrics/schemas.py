"""Pydantic schemas for metric kinds, updates, and store snapshots."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MetricKind(str, Enum):
    GAUGE = "gauge"
    COUNTER = "counter"


METRIC_KINDS: tuple[str, ...] = tuple(kind.value for kind in MetricKind)


class MetricUpdateResult(BaseModel):
    """Echo of an accepted update returned to the caller."""

    kind: MetricKind
    name: str = Field(..., min_length=1)
    value: str


class MetricsSnapshot(BaseModel):
    """Point-in-time copy of every stored gauge and counter."""

    model_config = ConfigDict(frozen=True)

    gauges: dict[str, float] = Field(default_factory=dict)
    counters: dict[str, int] = Field(default_factory=dict)
