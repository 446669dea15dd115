"""Tipos de domínio compartilhados entre gateway e stores.

Os valores inteiros seguem as constantes do host (EventKit) para que os
adapters convertam status e tipos sem tabelas de tradução.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime  # noqa: TC003 - usado em runtime pela dataclass
from enum import Enum, IntEnum


class EntityKind(IntEnum):
    """Domínio de permissão e de dados alvo de uma chamada."""

    EVENT = 0
    REMINDER = 1


class AuthorizationClass(Enum):
    """As três classes de autorização que o gateway distingue."""

    AUTHORIZED = "authorized"
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"


class AuthorizationStatus(IntEnum):
    """Estado de permissão mantido pelo host para um tipo de entidade.

    O host pode expor variantes mais finas; `classify()` reduz todas a
    uma `AuthorizationClass`. Apenas AUTHORIZED (alias FULL_ACCESS) libera
    as operações protegidas.
    """

    NOT_DETERMINED = 0
    RESTRICTED = 1
    DENIED = 2
    AUTHORIZED = 3
    FULL_ACCESS = 3
    WRITE_ONLY = 4

    def classify(self) -> AuthorizationClass:
        if self is AuthorizationStatus.AUTHORIZED:
            return AuthorizationClass.AUTHORIZED
        if self is AuthorizationStatus.NOT_DETERMINED:
            return AuthorizationClass.NOT_DETERMINED
        return AuthorizationClass.DENIED


class Span(IntEnum):
    """Escopo de alteração de um evento recorrente."""

    THIS_EVENT = 0
    FUTURE_EVENTS = 1

    @classmethod
    def from_recurrently(cls, recurrently: bool) -> Span:
        """Converte a flag `recurrently` no span correspondente."""
        return cls.FUTURE_EVENTS if recurrently else cls.THIS_EVENT


@dataclass(frozen=True, slots=True)
class DateRangeFilter:
    """Filtro de intervalo de datas e calendários usado pelo store em memória.

    Attributes:
        entity_kind: Tipo de entidade consultado.
        start: Limite inicial (inclusivo).
        end: Limite final (exclusivo).
        calendar_ids: Calendários aceitos; None aceita todos.
    """

    entity_kind: EntityKind
    start: datetime
    end: datetime
    calendar_ids: frozenset[str] | None = None

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("end deve ser maior ou igual a start")

    def accepts_calendar(self, calendar_id: str) -> bool:
        return self.calendar_ids is None or calendar_id in self.calendar_ids


__all__ = [
    "AuthorizationClass",
    "AuthorizationStatus",
    "DateRangeFilter",
    "EntityKind",
    "Span",
]
