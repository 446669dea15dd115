"""Filters que enriquecem e higienizam registros de log."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

# Atributos de eventos e lembretes que nunca devem sair nos logs
CONTENT_FIELDS: Final = frozenset({"title", "notes", "due", "location", "attendees"})

CONTENT_MASK: Final = "[REDACTED]"


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual;
            sem ela o campo fica vazio.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id = correlation_id_getter

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._correlation_id() if self._correlation_id else ""
        record.service = self._service_name
        return True


class RecordContentFilter(logging.Filter):
    """Mascara conteúdo de eventos e lembretes passado via `extra`.

    Chamadores não devem logar títulos ou notas; o filter é a segunda
    barreira caso algum módulo o faça.
    """

    def __init__(self, fields: Iterable[str] = CONTENT_FIELDS) -> None:
        super().__init__()
        self._fields = frozenset(fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for field in self._fields.intersection(record.__dict__):
            setattr(record, field, CONTENT_MASK)
        return True
