"""Métricas do gateway emitidas como logs estruturados.

Cada métrica é um registro INFO com `metric_type`; qualquer coletor de
logs JSON pode agrega-las.

- latency: duração das operações autorizadas, até a entrega do resultado
- outcome: desfecho de cada operação protegida (ok, pending, denied, unhandled)
"""

from __future__ import annotations

import logging
from typing import Final

logger = logging.getLogger(__name__)

OUTCOMES: Final = frozenset({"ok", "pending", "denied", "unhandled"})


def _emit(metric_type: str, correlation_id: str | None, **fields: object) -> None:
    logger.info(
        f"metric_{metric_type}",
        extra={"metric_type": metric_type, "correlation_id": correlation_id, **fields},
    )


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra a latência de uma operação em milissegundos."""
    _emit(
        "latency",
        correlation_id,
        component=component,
        operation=operation,
        latency_ms=round(latency_ms, 2),
    )


def record_outcome(
    operation: str,
    entity_kind: str,
    result: str,
    correlation_id: str | None = None,
) -> None:
    """Registra o desfecho de uma operação protegida.

    Args:
        operation: Nome da operação (ex: "delete_reminder").
        entity_kind: "event" ou "reminder".
        result: Um dos valores de `OUTCOMES`.
        correlation_id: ID de correlação para rastreamento.

    Raises:
        ValueError: Se `result` não for um desfecho conhecido.
    """
    if result not in OUTCOMES:
        raise ValueError(f"Desfecho desconhecido: {result}")
    _emit(
        "outcome",
        correlation_id,
        component="authorization_gateway",
        operation=operation,
        entity_kind=entity_kind,
        result=result,
    )
