"""Registro de métricas via structured logging.

As métricas saem como logs estruturados e são agregadas fora do
processo (ex: consultas sobre os logs JSON).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Desfecho: contagem de resultados da verificação por estratégia
- Limpeza: exclusões da mensagem de teste, com sucesso ou não

Uso:
    start = time.perf_counter()
    # ... operação ...
    record_latency("verification", "verify", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "verification")
        operation: Nome da operação (ex: "verify", "round_trip")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (usa o do contexto se None)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )


def record_verification_outcome(
    outcome: str,
    strategy: str,
    correlation_id: str | None = None,
) -> None:
    """Registra o desfecho de uma tentativa de verificação.

    Args:
        outcome: "success", "mismatch", "error", "has_access" ou "no_access"
        strategy: Estratégia que decidiu ("sent", "inbox", "round_trip",
            "fallback", "folder_sync", "transport_setup" ou "access_check")
        correlation_id: ID de correlação (usa o do contexto se None)
    """
    logger.info(
        "metric_verification_outcome",
        extra={
            "metric_type": "counter",
            "outcome": outcome,
            "strategy": strategy,
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )


def record_probe_cleanup(
    location: str,
    deleted: bool,
    correlation_id: str | None = None,
) -> None:
    """Registra tentativa de exclusão da mensagem de teste.

    Args:
        location: "sent" ou "inbox"
        deleted: Se a exclusão foi confirmada pelo servidor
        correlation_id: ID de correlação (usa o do contexto se None)
    """
    logger.info(
        "metric_probe_cleanup",
        extra={
            "metric_type": "counter",
            "location": location,
            "deleted": deleted,
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )
