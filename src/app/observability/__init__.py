"""Observabilidade: correlation_id e métricas em logs estruturados.

Uso:
    from app.observability import correlation_scope, record_latency
"""

from app.observability.correlation import (
    CORRELATION_HEADER,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_latency,
    record_refresh_outcome,
)

__all__ = [
    "CORRELATION_HEADER",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "record_latency",
    "record_refresh_outcome",
    "reset_correlation_id",
    "set_correlation_id",
]
