"""Contrato do store de calendários e lembretes fornecido pelo host.

O gateway trata o store como uma capacidade opaca: lista calendários,
monta filtros, consulta e persiste entidades. Qualquer método pode
levantar erros nativos; o gateway os converte em `UnhandledStoreError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from gateway.domain.entities import AuthorizationStatus, EntityKind, Span


@runtime_checkable
class StoreCapabilityProtocol(Protocol):
    """Operações que o host expõe para eventos e lembretes."""

    def authorization_status(self, kind: EntityKind) -> AuthorizationStatus:
        """Retorna o status de autorização atual para o tipo de entidade."""
        ...

    def request_access(
        self,
        kind: EntityKind,
        callback: Callable[[bool, BaseException | None], None],
    ) -> None:
        """Solicita acesso; pode exibir prompt e responder em outra thread."""
        ...

    def list_calendars(self, kind: EntityKind) -> Sequence[Any]:
        """Lista os calendários do tipo de entidade."""
        ...

    def build_filter(
        self,
        kind: EntityKind,
        start: datetime,
        end: datetime,
        calendars: Sequence[Any] | None,
    ) -> Any:
        """Monta o filtro de intervalo de datas e calendários."""
        ...

    def query_events(self, predicate: Any) -> Sequence[Any]:
        """Consulta eventos de forma síncrona."""
        ...

    def fetch_reminders(
        self,
        predicate: Any,
        callback: Callable[[Sequence[Any] | None], None],
    ) -> None:
        """Consulta lembretes de forma assíncrona; o callback pode receber None."""
        ...

    def save_event(self, event: Any, span: Span, *, commit: bool) -> None:
        """Persiste um evento no span informado."""
        ...

    def remove_event(self, event: Any, span: Span, *, commit: bool) -> None:
        """Remove um evento no span informado."""
        ...

    def save_reminder(self, reminder: Any, *, commit: bool) -> None:
        """Persiste um lembrete."""
        ...

    def remove_reminder(self, reminder: Any, *, commit: bool) -> None:
        """Remove um lembrete."""
        ...
