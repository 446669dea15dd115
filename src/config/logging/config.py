"""Configuração centralizada de logging JSON.

Chamada uma vez pelo bootstrap (`gateway.bootstrap.initialize_gateway`);
os módulos apenas obtêm loggers por nome.
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, RecordContentFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "agenda_gateway"


def _normalize_level(level: str) -> str:
    normalized = level.strip().upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
    return normalized


def build_handler(
    level: str,
    service_name: str,
    correlation_id_getter: Callable[[], str] | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Cria o handler JSON com contexto de correlação e máscara de conteúdo."""
    handler = logging.StreamHandler(stream)
    handler.setLevel(_normalize_level(level))
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(RecordContentFilter())
    return handler


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configura logging JSON estruturado no root logger.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço injetado em cada registro.
        correlation_id_getter: Função que retorna o correlation_id do
            contexto atual (ex: `gateway.observability.get_correlation_id`).
        stream: Destino dos logs; padrão stderr.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    handler = build_handler(level, service_name, correlation_id_getter, stream)
    root = logging.getLogger()
    root.setLevel(handler.level)
    # Um único handler no root; reconfigurar substitui o anterior
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo (o filter injeta service e correlation_id)."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um valor padrão substituiu uma resposta ausente.

    Exemplo: o store respondeu a busca de lembretes com None e o gateway
    entregou lista vazia.

    Args:
        logger: Logger do módulo que aplicou o fallback.
        component: Operação afetada (ex: "search_reminders").
        reason: Motivo, sem conteúdo do usuário (ex: "store_returned_none").
        elapsed_ms: Tempo decorrido em ms, quando aplicável.
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms
    logger.info("Fallback applied for %s", component, extra=extra)
