"""Formatter JSON com os campos obrigatórios do gateway."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria o formatter JSON padrão.

    Campos vindos de `extra` (component, action, entity_kind, result...)
    entram no objeto ao lado dos obrigatórios:

        {"asctime": "2026-10-19 10:30:00,123", "level": "INFO",
         "logger": "gateway.observability.metrics", "message": "metric_outcome",
         "correlation_id": "abc-123", "service": "agenda_gateway",
         "entity_kind": "reminder", "result": "denied"}
    """
    return JsonFormatter(
        " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS)),
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=False,
    )
