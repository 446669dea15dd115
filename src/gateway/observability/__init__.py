"""Observabilidade: correlation_id e métricas via logs estruturados.

Uso:
    from gateway.observability import correlation_scope, get_correlation_id
    from gateway.observability import record_latency, record_outcome
"""

from gateway.observability.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from gateway.observability.metrics import OUTCOMES, record_latency, record_outcome

__all__ = [
    "OUTCOMES",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "record_latency",
    "record_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
