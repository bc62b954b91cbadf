"""Registro de métricas via structured logging.

Métricas suportadas:
- Latência: tempo de cada chamada HTTP por endpoint
- Renovação: contador de renovações por resultado (ok/failed/skipped/circuit_open)

Uso:
    start = time.perf_counter()
    # ... chamada ...
    record_latency("http_client", "/users/me", (time.perf_counter() - start) * 1000)

    record_refresh_outcome("failed", failure_count=2)
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    status_code: int | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "http_client")
        operation: Nome da operação (ex: "/tokens/refresh-access")
        latency_ms: Latência em milissegundos
        status_code: Status HTTP (None quando não houve resposta)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "status_code": status_code,
            "correlation_id": get_correlation_id(),
        },
    )


def record_refresh_outcome(outcome: str, failure_count: int = 0) -> None:
    """Registra o resultado de um tick de renovação.

    Args:
        outcome: ok | failed | skipped | circuit_open
        failure_count: Falhas consecutivas após o tick
    """
    logger.info(
        "metric_token_refresh",
        extra={
            "metric_type": "counter",
            "component": "refresh_scheduler",
            "outcome": outcome,
            "failure_count": failure_count,
            "correlation_id": get_correlation_id(),
        },
    )
