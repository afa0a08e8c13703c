"""Path-tracing engine: move legality, retreat, reset and completion."""

from src.engine.tracer import MAX_HINTS, PathTracer
from src.engine.types import (
    EngineState,
    MoveOutcome,
    TraceListener,
    TraceStats,
    Variant,
)

__all__ = [
    "EngineState",
    "MAX_HINTS",
    "MoveOutcome",
    "PathTracer",
    "TraceListener",
    "TraceStats",
    "Variant",
]
