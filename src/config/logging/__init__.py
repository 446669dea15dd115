"""Logging estruturado do gateway.

    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="agenda_gateway")
    logger = get_logger(__name__)
    logger.info("gateway_dispatch", extra={"entity_kind": "event"})

Todo registro sai com correlation_id, service, level, logger, message e
asctime. Conteúdo de eventos e lembretes (título, notas...) é mascarado.
"""

from config.logging.config import build_handler, configure_logging, get_logger, log_fallback
from config.logging.filters import CONTENT_FIELDS, CorrelationIdFilter, RecordContentFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "CONTENT_FIELDS",
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "RecordContentFilter",
    "build_handler",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
