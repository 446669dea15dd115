"""Registros do store em memória.

Para o gateway esses modelos são opacos: ele apenas os repassa ao store.
Ficam no domínio para que testes e ferramentas de desenvolvimento montem
dados sem depender de um host real.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gateway.domain.entities import EntityKind  # noqa: TC001 - usado em runtime pelo Pydantic


def _new_id() -> str:
    return uuid4().hex[:12]


class CalendarInfo(BaseModel):
    """Calendário (ou lista de lembretes) exposto pelo store."""

    model_config = ConfigDict(frozen=True)

    calendar_id: str = Field(default_factory=_new_id, description="Identificador do calendário.")
    title: str = Field(..., description="Nome exibido do calendário.")
    entity_kind: EntityKind = Field(..., description="Tipo de entidade que o calendário guarda.")


class EventRecord(BaseModel):
    """Evento de calendário, opcionalmente parte de uma série recorrente."""

    model_config = ConfigDict(extra="ignore")

    event_id: str = Field(default_factory=_new_id, description="Identificador do evento.")
    calendar_id: str = Field(..., description="Calendário ao qual o evento pertence.")
    title: str = Field(..., description="Título do evento.")
    start: datetime = Field(..., description="Data/hora de início.")
    end: datetime = Field(..., description="Data/hora de fim.")
    notes: str = Field(default="", description="Notas livres do evento.")
    series_id: str | None = Field(
        default=None,
        description="Série recorrente; ocorrências da mesma série compartilham o valor.",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> EventRecord:
        if self.end < self.start:
            raise ValueError("end deve ser maior ou igual a start")
        return self


class ReminderRecord(BaseModel):
    """Lembrete com data de vencimento opcional."""

    model_config = ConfigDict(extra="ignore")

    reminder_id: str = Field(default_factory=_new_id, description="Identificador do lembrete.")
    calendar_id: str = Field(..., description="Lista de lembretes de destino.")
    title: str = Field(..., description="Título do lembrete.")
    due: datetime | None = Field(default=None, description="Vencimento do lembrete.")
    completed: bool = Field(default=False, description="Indica se já foi concluído.")


__all__ = ["CalendarInfo", "EventRecord", "ReminderRecord"]
