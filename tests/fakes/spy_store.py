"""Fakes determinísticos do store do host e do observer para testes."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from typing import Any

from gateway.domain.entities import AuthorizationStatus, EntityKind, Span
from gateway.domain.notifications import StoreChangedNotification


class SpyStore:
    """Store roteirizado que conta cada chamada que toca dados.

    Attributes:
        calls: Contador por nome de método.
        errors: Exceção a levantar por nome de método.
        events: Resultado de `query_events`.
        reminders: Resultado entregue por `fetch_reminders` (pode ser None).
        defer_reminders: Guarda o callback de lembretes em vez de responder.
        access_answer: Resposta de `request_access` como (granted, error).
        spans: Spans recebidos por save/remove de eventos, em ordem.
        commits: Flags de commit recebidas, em ordem.
    """

    def __init__(
        self,
        statuses: dict[EntityKind, AuthorizationStatus] | None = None,
    ) -> None:
        self.statuses: dict[EntityKind, AuthorizationStatus] = {
            EntityKind.EVENT: AuthorizationStatus.NOT_DETERMINED,
            EntityKind.REMINDER: AuthorizationStatus.NOT_DETERMINED,
        }
        if statuses:
            self.statuses.update(statuses)
        self.calls: Counter[str] = Counter()
        self.errors: dict[str, Exception] = {}
        self.events: list[Any] = []
        self.reminders: Sequence[Any] | None = []
        self.defer_reminders = False
        self.deliver_reminders_twice = False
        self.pending_reminder_callbacks: list[Callable[[Sequence[Any] | None], None]] = []
        self.access_answer: tuple[bool, BaseException | None] = (True, None)
        self.defer_access = False
        self.pending_access_callbacks: list[Callable[[bool, BaseException | None], None]] = []
        self.spans: list[Span] = []
        self.commits: list[bool] = []
        self.filters: list[tuple[EntityKind, Any, Any, Any]] = []
        self.calendars = {EntityKind.EVENT: ["work"], EntityKind.REMINDER: ["inbox"]}

    @property
    def data_calls(self) -> int:
        """Total de chamadas que leem ou alteram dados."""
        return sum(
            self.calls[name]
            for name in (
                "build_filter",
                "query_events",
                "fetch_reminders",
                "save_event",
                "remove_event",
                "save_reminder",
                "remove_reminder",
            )
        )

    def authorization_status(self, kind: EntityKind) -> AuthorizationStatus:
        self.calls["authorization_status"] += 1
        return self.statuses[kind]

    def request_access(
        self,
        kind: EntityKind,
        callback: Callable[[bool, BaseException | None], None],
    ) -> None:
        _ = kind
        self.calls["request_access"] += 1
        if self.defer_access:
            self.pending_access_callbacks.append(callback)
            return
        callback(*self.access_answer)

    def list_calendars(self, kind: EntityKind) -> list[Any]:
        self.calls["list_calendars"] += 1
        return list(self.calendars[kind])

    def build_filter(self, kind: EntityKind, start: Any, end: Any, calendars: Any) -> Any:
        self._touch("build_filter")
        self.filters.append((kind, start, end, calendars))
        return {"kind": kind, "start": start, "end": end, "calendars": calendars}

    def query_events(self, predicate: Any) -> list[Any]:
        _ = predicate
        self._touch("query_events")
        return list(self.events)

    def fetch_reminders(
        self,
        predicate: Any,
        callback: Callable[[Sequence[Any] | None], None],
    ) -> None:
        _ = predicate
        self._touch("fetch_reminders")
        if self.defer_reminders:
            self.pending_reminder_callbacks.append(callback)
            return
        callback(self.reminders)
        if self.deliver_reminders_twice:
            callback(self.reminders)

    def save_event(self, event: Any, span: Span, *, commit: bool) -> None:
        _ = event
        self._touch("save_event")
        self.spans.append(span)
        self.commits.append(commit)

    def remove_event(self, event: Any, span: Span, *, commit: bool) -> None:
        _ = event
        self._touch("remove_event")
        self.spans.append(span)
        self.commits.append(commit)

    def save_reminder(self, reminder: Any, *, commit: bool) -> None:
        _ = reminder
        self._touch("save_reminder")
        self.commits.append(commit)

    def remove_reminder(self, reminder: Any, *, commit: bool) -> None:
        _ = reminder
        self._touch("remove_reminder")
        self.commits.append(commit)

    def _touch(self, name: str) -> None:
        self.calls[name] += 1
        error = self.errors.get(name)
        if error is not None:
            raise error


class RecordingObserver:
    """Observer que guarda cada notificação recebida."""

    def __init__(self) -> None:
        self.received: list[tuple[Any, StoreChangedNotification]] = []

    def on_store_changed(self, gateway: Any, notification: StoreChangedNotification) -> None:
        self.received.append((gateway, notification))


class ResultCollector:
    """Callback de conclusão que acumula os resultados entregues."""

    def __init__(self) -> None:
        self.results: list[Any] = []

    def __call__(self, result: Any) -> None:
        self.results.append(result)

    @property
    def single(self) -> Any:
        assert len(self.results) == 1, f"esperado 1 resultado, recebido {len(self.results)}"
        return self.results[0]
