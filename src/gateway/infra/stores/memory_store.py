"""Store de calendários e lembretes em memória, apenas para dev e testes.

ATENÇÃO: sem persistência entre reinicios. Simula o comportamento do host:
status de autorização por tipo de entidade, prompt de permissão, spans de
eventos recorrentes, commit adiado e callbacks assíncronos (quando um
executor é informado).
"""

from __future__ import annotations

import contextvars
import logging
import threading
from collections import Counter
from typing import TYPE_CHECKING, Any

from gateway.domain.entities import AuthorizationStatus, DateRangeFilter, EntityKind, Span
from gateway.domain.notifications import StoreChangedNotification
from gateway.domain.records import CalendarInfo, EventRecord, ReminderRecord
from gateway.infra.notifications import NotificationCenter, default_notification_center
from gateway.observability import get_correlation_id
from gateway.protocols.store import StoreCapabilityProtocol

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from concurrent.futures import Executor, Future
    from datetime import datetime

logger = logging.getLogger(__name__)

_COMPONENT = "memory_calendar_store"


class StoreOperationError(RuntimeError):
    """Base dos erros nativos do store em memória."""


class CalendarNotFoundError(StoreOperationError):
    """Entidade aponta para calendário inexistente para o seu tipo."""


class EntityNotFoundError(StoreOperationError):
    """Remoção de entidade que não existe no store."""


def _grant_all(kind: EntityKind) -> bool:
    _ = kind
    return True


def _log_task_failure(future: Future[None]) -> None:
    exc = future.exception()
    if exc is not None:
        logger.error(
            "memory_store_callback_failed",
            extra={
                "component": _COMPONENT,
                "error_type": type(exc).__name__,
                "correlation_id": get_correlation_id(),
            },
            exc_info=exc,
        )


class InMemoryCalendarStore(StoreCapabilityProtocol):
    """Store em memória que implementa o protocolo de capacidade do host.

    Args:
        statuses: Status inicial por tipo de entidade (padrão NOT_DETERMINED).
        access_responder: Simula o prompt do host; retorna se o acesso foi
            concedido. Padrão: concede.
        notifications: Central onde as alterações são publicadas.
        executor: Quando informado, `request_access` e `fetch_reminders`
            respondem de forma assíncrona nesse executor.
    """

    def __init__(
        self,
        *,
        statuses: Mapping[EntityKind, AuthorizationStatus] | None = None,
        access_responder: Callable[[EntityKind], bool] | None = None,
        notifications: NotificationCenter | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._statuses: dict[EntityKind, AuthorizationStatus] = {
            kind: AuthorizationStatus.NOT_DETERMINED for kind in EntityKind
        }
        if statuses:
            self._statuses.update(statuses)
        self._access_responder = access_responder or _grant_all
        self._notifications = notifications or default_notification_center()
        self._executor = executor
        self._calendars: dict[str, CalendarInfo] = {}
        self._events: dict[str, EventRecord] = {}
        self._reminders: dict[str, ReminderRecord] = {}
        self._pending: list[Callable[[], None]] = []
        self.calls: Counter[str] = Counter()

    # Autorização

    def authorization_status(self, kind: EntityKind) -> AuthorizationStatus:
        with self._lock:
            return self._statuses[kind]

    def set_authorization_status(self, kind: EntityKind, status: AuthorizationStatus) -> None:
        with self._lock:
            self._statuses[kind] = status

    def request_access(
        self,
        kind: EntityKind,
        callback: Callable[[bool, BaseException | None], None],
    ) -> None:
        self.calls["request_access"] += 1

        def _prompt() -> None:
            granted = bool(self._access_responder(kind))
            self.set_authorization_status(
                kind,
                AuthorizationStatus.AUTHORIZED if granted else AuthorizationStatus.DENIED,
            )
            logger.info(
                "memory_store_access_answered",
                extra={
                    "component": _COMPONENT,
                    "action": "request_access",
                    "entity_kind": kind.name.lower(),
                    "result": "granted" if granted else "denied",
                    "correlation_id": get_correlation_id(),
                },
            )
            callback(granted, None)

        self._run(_prompt)

    # Calendários

    def add_calendar(self, kind: EntityKind, title: str) -> CalendarInfo:
        calendar = CalendarInfo(title=title, entity_kind=kind)
        with self._lock:
            self._calendars[calendar.calendar_id] = calendar
        return calendar

    def list_calendars(self, kind: EntityKind) -> list[CalendarInfo]:
        with self._lock:
            return [c for c in self._calendars.values() if c.entity_kind is kind]

    # Consultas

    def build_filter(
        self,
        kind: EntityKind,
        start: datetime,
        end: datetime,
        calendars: Sequence[CalendarInfo] | None,
    ) -> DateRangeFilter:
        calendar_ids = (
            frozenset(c.calendar_id for c in calendars) if calendars is not None else None
        )
        return DateRangeFilter(entity_kind=kind, start=start, end=end, calendar_ids=calendar_ids)

    def query_events(self, predicate: DateRangeFilter) -> list[EventRecord]:
        self.calls["query_events"] += 1
        with self._lock:
            matches = [
                event.model_copy(deep=True)
                for event in self._events.values()
                if predicate.accepts_calendar(event.calendar_id)
                and event.start < predicate.end
                and event.end > predicate.start
            ]
        return sorted(matches, key=lambda event: event.start)

    def fetch_reminders(
        self,
        predicate: DateRangeFilter,
        callback: Callable[[Sequence[ReminderRecord] | None], None],
    ) -> None:
        self.calls["fetch_reminders"] += 1

        def _fetch() -> None:
            with self._lock:
                matches = [
                    reminder.model_copy(deep=True)
                    for reminder in self._reminders.values()
                    if predicate.accepts_calendar(reminder.calendar_id)
                    and not reminder.completed
                    and reminder.due is not None
                    and predicate.start <= reminder.due < predicate.end
                ]
            callback(sorted(matches, key=lambda reminder: reminder.due))

        self._run(_fetch)

    # Escrita

    def save_event(self, event: EventRecord, span: Span, *, commit: bool) -> None:
        self.calls["save_event"] += 1
        self._require_calendar(event.calendar_id, EntityKind.EVENT)
        stored = event.model_copy(deep=True)
        self._apply(lambda: self._save_event_sync(stored, span), commit=commit)

    def remove_event(self, event: EventRecord, span: Span, *, commit: bool) -> None:
        self.calls["remove_event"] += 1
        with self._lock:
            if event.event_id not in self._events:
                raise EntityNotFoundError(f"Evento inexistente: {event.event_id}")
        self._apply(lambda: self._remove_event_sync(event.event_id, span), commit=commit)

    def save_reminder(self, reminder: ReminderRecord, *, commit: bool) -> None:
        self.calls["save_reminder"] += 1
        self._require_calendar(reminder.calendar_id, EntityKind.REMINDER)
        stored = reminder.model_copy(deep=True)
        self._apply(lambda: self._reminders.__setitem__(stored.reminder_id, stored), commit=commit)

    def remove_reminder(self, reminder: ReminderRecord, *, commit: bool) -> None:
        self.calls["remove_reminder"] += 1
        with self._lock:
            if reminder.reminder_id not in self._reminders:
                raise EntityNotFoundError(f"Lembrete inexistente: {reminder.reminder_id}")
        self._apply(lambda: self._reminders.pop(reminder.reminder_id, None), commit=commit)

    def commit(self) -> int:
        """Aplica as alterações pendentes e retorna quantas foram aplicadas."""
        with self._lock:
            pending, self._pending = self._pending, []
            for change in pending:
                change()
        if pending:
            self._notify(len(pending))
        return len(pending)

    def reset(self) -> None:
        """Descarta alterações pendentes sem aplica-las."""
        with self._lock:
            self._pending.clear()

    # Helpers

    def _save_event_sync(self, event: EventRecord, span: Span) -> None:
        self._events[event.event_id] = event
        if span is not Span.FUTURE_EVENTS or event.series_id is None:
            return
        for other in self._future_occurrences(event):
            other.title = event.title
            other.notes = event.notes

    def _remove_event_sync(self, event_id: str, span: Span) -> None:
        event = self._events.pop(event_id, None)
        if event is None or span is not Span.FUTURE_EVENTS or event.series_id is None:
            return
        for other in self._future_occurrences(event):
            del self._events[other.event_id]

    def _future_occurrences(self, event: EventRecord) -> list[EventRecord]:
        return [
            other
            for other in self._events.values()
            if other.series_id == event.series_id
            and other.event_id != event.event_id
            and other.start >= event.start
        ]

    def _require_calendar(self, calendar_id: str, kind: EntityKind) -> None:
        with self._lock:
            calendar = self._calendars.get(calendar_id)
        if calendar is None or calendar.entity_kind is not kind:
            raise CalendarNotFoundError(
                f"Calendário {calendar_id} inexistente para {kind.name.lower()}"
            )

    def _apply(self, change: Callable[[], Any], *, commit: bool) -> None:
        with self._lock:
            self._pending.append(change)
        if commit:
            self.commit()

    def _notify(self, changes: int) -> None:
        self._notifications.post(
            StoreChangedNotification(source=self, user_info={"changes": changes})
        )

    def _run(self, task: Callable[[], None]) -> None:
        if self._executor is None:
            task()
            return
        # Callbacks no executor herdam o correlation_id de quem chamou
        context = contextvars.copy_context()
        self._executor.submit(context.run, task).add_done_callback(_log_task_failure)


__all__ = [
    "CalendarNotFoundError",
    "EntityNotFoundError",
    "InMemoryCalendarStore",
    "StoreOperationError",
]
