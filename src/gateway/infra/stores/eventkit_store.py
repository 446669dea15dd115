"""Store de calendários e lembretes sobre o EventKit do macOS (PyObjC).

Os frameworks `EventKit` e `Foundation` são importados sob demanda; em
hosts sem PyObjC a construção do store levanta `StoreUnavailableError`
com a instrução de instalação.

Referência:
https://developer.apple.com/documentation/eventkit/ekeventstore
"""

from __future__ import annotations

import importlib
import logging
import threading
from types import ModuleType
from typing import TYPE_CHECKING, Any

from gateway.domain.entities import AuthorizationStatus, EntityKind, Span
from gateway.domain.notifications import StoreChangedNotification
from gateway.observability import get_correlation_id
from gateway.protocols.store import StoreCapabilityProtocol
from utils.errors import StoreUnavailableError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from gateway.infra.notifications import NotificationCenter

logger = logging.getLogger(__name__)

_COMPONENT = "eventkit_store"
_INSTALL_HINT = 'Instale o extra macOS: pip install "agenda-gateway[macos]"'
_STORE_CHANGED_NAME = "EKEventStoreChangedNotification"


class EventKitOperationError(RuntimeError):
    """Falha reportada pelo EventKit via parâmetro de saída NSError."""

    def __init__(self, action: str, native_error: Any) -> None:
        self.action = action
        self.native_error = native_error
        super().__init__(f"EventKit falhou em {action}: {_describe(native_error)}")


def _describe(native_error: Any) -> str:
    if native_error is None:
        return "erro desconhecido"
    describe = getattr(native_error, "localizedDescription", None)
    return str(describe()) if callable(describe) else str(native_error)


def _import_framework(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except ImportError as exc:
        raise StoreUnavailableError(f"Framework {name} indisponível. {_INSTALL_HINT}") from exc


class _NativeSubscription:
    """Inscrição no NSNotificationCenter, cancelada com `dispose()`."""

    __slots__ = ("_center", "_lock", "_token")

    def __init__(self, center: Any, token: Any) -> None:
        self._center = center
        self._token = token
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        return self._token is not None

    def dispose(self) -> None:
        with self._lock:
            token, self._token = self._token, None
        if token is not None:
            self._center.removeObserver_(token)


class EventKitStore(StoreCapabilityProtocol):
    """Implementação do protocolo de store usando `EKEventStore`.

    Args:
        eventkit: Módulo `EventKit` já importado; por padrão importa o do PyObjC.
        foundation: Módulo `Foundation`, usado apenas para notificações.
    """

    def __init__(
        self,
        *,
        eventkit: ModuleType | Any | None = None,
        foundation: ModuleType | Any | None = None,
    ) -> None:
        self._eventkit = eventkit if eventkit is not None else _import_framework("EventKit")
        self._foundation = foundation
        self._store: Any | None = None
        self._store_lock = threading.Lock()
        self._bridge: _NativeSubscription | None = None

    @property
    def native_store(self) -> Any:
        """`EKEventStore` criado sob demanda na primeira chamada."""
        with self._store_lock:
            if self._store is None:
                self._store = self._eventkit.EKEventStore.alloc().init()
                logger.debug(
                    "eventkit_store_created",
                    extra={"component": _COMPONENT, "correlation_id": get_correlation_id()},
                )
            return self._store

    def authorization_status(self, kind: EntityKind) -> AuthorizationStatus:
        raw = self._eventkit.EKEventStore.authorizationStatusForEntityType_(int(kind))
        try:
            return AuthorizationStatus(int(raw))
        except ValueError:
            logger.warning(
                "eventkit_unknown_authorization_status",
                extra={
                    "component": _COMPONENT,
                    "entity_kind": kind.name.lower(),
                    "raw_status": int(raw),
                    "correlation_id": get_correlation_id(),
                },
            )
            return AuthorizationStatus.DENIED

    def request_access(
        self,
        kind: EntityKind,
        callback: Callable[[bool, BaseException | None], None],
    ) -> None:
        def _handler(granted: bool, native_error: Any) -> None:
            error = EventKitOperationError("request_access", native_error) if native_error else None
            callback(bool(granted), error)

        self.native_store.requestAccessToEntityType_completion_(int(kind), _handler)

    def list_calendars(self, kind: EntityKind) -> list[Any]:
        return list(self.native_store.calendarsForEntityType_(int(kind)) or [])

    def build_filter(
        self,
        kind: EntityKind,
        start: datetime,
        end: datetime,
        calendars: Sequence[Any] | None,
    ) -> Any:
        native_calendars = list(calendars) if calendars is not None else None
        if kind is EntityKind.REMINDER:
            return self.native_store.predicateForIncompleteRemindersWithDueDateStarting_ending_calendars_(
                start, end, native_calendars
            )
        return self.native_store.predicateForEventsWithStartDate_endDate_calendars_(
            start, end, native_calendars
        )

    def query_events(self, predicate: Any) -> list[Any]:
        return list(self.native_store.eventsMatchingPredicate_(predicate) or [])

    def fetch_reminders(
        self,
        predicate: Any,
        callback: Callable[[Sequence[Any] | None], None],
    ) -> None:
        def _handler(reminders: Any) -> None:
            callback(list(reminders) if reminders is not None else None)

        self.native_store.fetchRemindersMatchingPredicate_completion_(predicate, _handler)

    def save_event(self, event: Any, span: Span, *, commit: bool) -> None:
        self._check(
            "save_event",
            self.native_store.saveEvent_span_commit_error_(event, int(span), commit, None),
        )

    def remove_event(self, event: Any, span: Span, *, commit: bool) -> None:
        self._check(
            "remove_event",
            self.native_store.removeEvent_span_commit_error_(event, int(span), commit, None),
        )

    def save_reminder(self, reminder: Any, *, commit: bool) -> None:
        self._check(
            "save_reminder",
            self.native_store.saveReminder_commit_error_(reminder, commit, None),
        )

    def remove_reminder(self, reminder: Any, *, commit: bool) -> None:
        self._check(
            "remove_reminder",
            self.native_store.removeReminder_commit_error_(reminder, commit, None),
        )

    @property
    def bridge(self) -> _NativeSubscription | None:
        """Ponte ativa com o NSNotificationCenter, se houver."""
        return self._bridge

    def close(self) -> None:
        """Remove o observer nativo da ponte de notificações."""
        bridge, self._bridge = self._bridge, None
        if bridge is not None:
            bridge.dispose()

    def bridge_store_changes(self, center: NotificationCenter) -> _NativeSubscription:
        """Republica `EKEventStoreChangedNotification` na central informada.

        Uma ponte anterior deste store é removida antes de criar a nova.

        Returns:
            Handle que remove o observer nativo em `dispose()`; fica
            guardado em `bridge`.
        """
        self.close()
        foundation = self._foundation or _import_framework("Foundation")
        native_center = foundation.NSNotificationCenter.defaultCenter()

        def _on_native(native_notification: Any) -> None:
            info = native_notification.userInfo() if native_notification is not None else None
            center.post(
                StoreChangedNotification(
                    source=self,
                    user_info={"native": native_notification, "user_info": info},
                )
            )

        name = getattr(self._eventkit, "EKEventStoreChangedNotification", _STORE_CHANGED_NAME)
        token = native_center.addObserverForName_object_queue_usingBlock_(
            name, self.native_store, None, _on_native
        )
        self._bridge = _NativeSubscription(native_center, token)
        return self._bridge

    @staticmethod
    def _check(action: str, outcome: Any) -> None:
        # PyObjC devolve (ok, NSError) para métodos com parâmetro de saída error:.
        if isinstance(outcome, tuple):
            ok, native_error = outcome
        else:
            ok, native_error = outcome, None
        if not ok:
            logger.error(
                "eventkit_operation_failed",
                extra={
                    "component": _COMPONENT,
                    "action": action,
                    "correlation_id": get_correlation_id(),
                },
            )
            raise EventKitOperationError(action, native_error)


__all__ = ["EventKitOperationError", "EventKitStore"]
