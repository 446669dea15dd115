"""Gateway de acesso ao store de calendários e lembretes.

Ponto único por onde passa todo acesso ao store. Cada operação de dados
consulta a autorização atual antes de tocar o store e entrega ao callback
de conclusão exatamente um `Result`:

| status          | desfecho                                             |
|-----------------|------------------------------------------------------|
| AUTHORIZED      | executa a operação; `Ok(payload)` ou `Err(Unhandled)` |
| NOT_DETERMINED  | `Err(AuthorizationPendingError)`, sem chamar o store |
| demais          | `Err(NotAuthorizedError)`, sem chamar o store        |

O gateway não faz cache, não tenta de novo e não serializa chamadas; a
segurança entre threads é responsabilidade do store.
"""

from __future__ import annotations

import logging
import time
import weakref
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from config.logging import log_fallback
from gateway.domain.entities import AuthorizationClass, EntityKind, Span
from gateway.domain.result import Err, Ok
from gateway.infra.notifications import default_notification_center
from gateway.observability import get_correlation_id, record_latency, record_outcome
from utils.errors import (
    AuthorizationPendingError,
    GatewayError,
    NotAuthorizedError,
    UnhandledStoreError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from gateway.domain.entities import AuthorizationStatus
    from gateway.domain.notifications import StoreChangedNotification
    from gateway.domain.result import Result
    from gateway.protocols import (
        NotificationSourceProtocol,
        StoreCapabilityProtocol,
        StoreChangeObserverProtocol,
        SubscriptionProtocol,
    )

logger = logging.getLogger(__name__)

_COMPONENT = "authorization_gateway"

T = TypeVar("T")


class _Delivery(Generic[T]):
    """Garante que o callback de conclusão seja chamado uma única vez."""

    __slots__ = (
        "_action",
        "_completion",
        "_entity_kind",
        "_started",
        "completion_failed",
        "delivered",
    )

    def __init__(
        self,
        completion: Callable[[Result[T]], None],
        *,
        action: str,
        entity_kind: EntityKind,
    ) -> None:
        self._completion = completion
        self._action = action
        self._entity_kind = entity_kind
        self._started = time.perf_counter()
        self.delivered = False
        self.completion_failed = False

    def resolve(self, value: T) -> None:
        if self._claim():
            record_latency(
                _COMPONENT,
                self._action,
                (time.perf_counter() - self._started) * 1000,
                get_correlation_id(),
            )
            _record(self._action, self._entity_kind, "ok")
            self._call(Ok(value))

    def fail(self, error: GatewayError) -> None:
        if self._claim():
            self._call(Err(error))

    def _call(self, result: Result[T]) -> None:
        try:
            self._completion(result)
        except BaseException:
            self.completion_failed = True
            raise

    def _claim(self) -> bool:
        if self.delivered:
            logger.warning(
                "gateway_duplicate_delivery_dropped",
                extra={
                    "component": _COMPONENT,
                    "action": self._action,
                    "entity_kind": self._entity_kind.name.lower(),
                    "correlation_id": get_correlation_id(),
                },
            )
            return False
        self.delivered = True
        return True


def _record(action: str, kind: EntityKind, result: str) -> None:
    record_outcome(action, kind.name.lower(), result, get_correlation_id())


def _relay_handler(
    gateway_ref: weakref.ReferenceType[AuthorizationGateway],
    observer_ref: weakref.ReferenceType[Any],
) -> Callable[[StoreChangedNotification], None]:
    """Cria o handler de relay sem referencias fortes a gateway ou observer."""

    def _relay(notification: StoreChangedNotification) -> None:
        gateway = gateway_ref()
        observer = observer_ref()
        if gateway is None or observer is None:
            return
        observer.on_store_changed(gateway, notification)

    return _relay


def _dispose(subscription: SubscriptionProtocol) -> None:
    subscription.dispose()


class AuthorizationGateway:
    """Camada de política entre chamadores e o store do host.

    Args:
        store: Capacidade de store do host.
        notifications: Fonte de notificações de alteração; por padrão a
            central compartilhada do processo.
        observer: Observer opcional que recebe as alterações do store. O
            gateway guarda apenas uma referência fraca a ele.
    """

    def __init__(
        self,
        store: StoreCapabilityProtocol,
        *,
        notifications: NotificationSourceProtocol | None = None,
        observer: StoreChangeObserverProtocol | None = None,
    ) -> None:
        self._store = store
        self._observer: weakref.ReferenceType[Any] | None = None
        self._subscription: SubscriptionProtocol | None = None
        self._finalizer: weakref.finalize | None = None

        if observer is None:
            return

        self._observer = weakref.ref(observer)
        source = notifications if notifications is not None else default_notification_center()
        self._subscription = source.subscribe(_relay_handler(weakref.ref(self), self._observer))
        self._finalizer = weakref.finalize(self, _dispose, self._subscription)

    # Ciclo de vida

    @property
    def subscription(self) -> SubscriptionProtocol | None:
        """Handle da inscrição de alterações; None quando não há observer."""
        return self._subscription

    @property
    def observer(self) -> StoreChangeObserverProtocol | None:
        return self._observer() if self._observer is not None else None

    def close(self) -> None:
        """Cancela a inscrição de alterações. Pode ser chamado varias vezes."""
        if self._finalizer is not None:
            self._finalizer()

    def __enter__(self) -> AuthorizationGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Autorização e calendários

    def authorization_status(self, kind: EntityKind) -> AuthorizationStatus:
        """Retorna o status de autorização do host para o tipo de entidade."""
        return self._store.authorization_status(kind)

    def request_authorization(
        self,
        kind: EntityKind,
        completion: Callable[[bool, BaseException | None], None],
    ) -> None:
        """Solicita acesso ao tipo de entidade quando ainda não determinado.

        Com status NOT_DETERMINED repassa o pedido ao store, que pode exibir
        o prompt do host e responder em outra thread; `(granted, error)` chega
        ao callback sem alteração. Com qualquer outro status, inclusive
        negado, responde `(True, None)` na hora: a negação aparece depois,
        nas operações protegidas.
        """
        if self.authorization_status(kind).classify() is AuthorizationClass.NOT_DETERMINED:
            logger.info(
                "gateway_access_requested",
                extra={
                    "component": _COMPONENT,
                    "action": "request_authorization",
                    "entity_kind": kind.name.lower(),
                    "correlation_id": get_correlation_id(),
                },
            )
            self._store.request_access(kind, completion)
            return
        completion(True, None)

    def calendars(self, kind: EntityKind) -> list[Any]:
        """Lista os calendários do tipo de entidade (sem verificação de acesso)."""
        return list(self._store.list_calendars(kind))

    # Eventos

    def search_events(
        self,
        start: datetime,
        end: datetime,
        completion: Callable[[Result[list[Any]]], None],
        *,
        calendars: Sequence[Any] | None = None,
    ) -> None:
        """Busca eventos entre `start` e `end`, opcionalmente por calendário."""

        def _search(resolve: Callable[[list[Any]], None]) -> None:
            predicate = self._store.build_filter(EntityKind.EVENT, start, end, calendars)
            resolve(list(self._store.query_events(predicate)))

        self._dispatch(EntityKind.EVENT, "search_events", completion, _search)

    def save_event(
        self,
        event: Any,
        recurrently: bool,
        completion: Callable[[Result[None]], None],
    ) -> None:
        """Salva o evento; `recurrently` estende a alteração as ocorrências futuras."""
        span = Span.from_recurrently(recurrently)

        def _save(resolve: Callable[[None], None]) -> None:
            self._store.save_event(event, span, commit=True)
            resolve(None)

        self._dispatch(EntityKind.EVENT, "save_event", completion, _save)

    def delete_event(
        self,
        event: Any,
        recurrently: bool,
        completion: Callable[[Result[None]], None],
    ) -> None:
        """Remove o evento; `recurrently` remove também as ocorrências futuras."""
        span = Span.from_recurrently(recurrently)

        def _delete(resolve: Callable[[None], None]) -> None:
            self._store.remove_event(event, span, commit=True)
            resolve(None)

        self._dispatch(EntityKind.EVENT, "delete_event", completion, _delete)

    # Lembretes

    def search_reminders(
        self,
        start: datetime,
        end: datetime,
        completion: Callable[[Result[list[Any]]], None],
        *,
        calendars: Sequence[Any] | None = None,
    ) -> None:
        """Busca lembretes entre `start` e `end`.

        A consulta do store é assíncrona; quando ele responde sem resultado
        o callback recebe lista vazia.
        """

        def _search(resolve: Callable[[list[Any]], None]) -> None:
            predicate = self._store.build_filter(EntityKind.REMINDER, start, end, calendars)

            def _on_reminders(reminders: Sequence[Any] | None) -> None:
                if reminders is None:
                    log_fallback(logger, "search_reminders", reason="store_returned_none")
                    resolve([])
                    return
                resolve(list(reminders))

            self._store.fetch_reminders(predicate, _on_reminders)

        self._dispatch(EntityKind.REMINDER, "search_reminders", completion, _search)

    def save_reminder(self, reminder: Any, completion: Callable[[Result[None]], None]) -> None:
        def _save(resolve: Callable[[None], None]) -> None:
            self._store.save_reminder(reminder, commit=True)
            resolve(None)

        self._dispatch(EntityKind.REMINDER, "save_reminder", completion, _save)

    def delete_reminder(self, reminder: Any, completion: Callable[[Result[None]], None]) -> None:
        def _delete(resolve: Callable[[None], None]) -> None:
            self._store.remove_reminder(reminder, commit=True)
            resolve(None)

        self._dispatch(EntityKind.REMINDER, "delete_reminder", completion, _delete)

    # Despacho protegido

    def _dispatch(
        self,
        kind: EntityKind,
        action: str,
        completion: Callable[[Result[T]], None],
        operation: Callable[[Callable[[T], None]], None],
    ) -> None:
        """Verifica a autorização e executa `operation` apenas se autorizado.

        `operation` recebe `resolve` e o chama com o payload, de forma
        síncrona ou mais tarde. Erros levantados antes da entrega viram
        `UnhandledStoreError`; erros do próprio callback do chamador
        propagam sem nova entrega. Erros do store depois da entrega vão
        apenas para o log.
        """
        access = self.authorization_status(kind).classify()

        if access is AuthorizationClass.NOT_DETERMINED:
            _record(action, kind, "pending")
            completion(Err(AuthorizationPendingError(kind)))
            return
        if access is not AuthorizationClass.AUTHORIZED:
            _record(action, kind, "denied")
            completion(Err(NotAuthorizedError(kind)))
            return

        logger.debug(
            "gateway_dispatch",
            extra={
                "component": _COMPONENT,
                "action": action,
                "entity_kind": kind.name.lower(),
                "result": "authorized",
                "correlation_id": get_correlation_id(),
            },
        )
        delivery: _Delivery[T] = _Delivery(completion, action=action, entity_kind=kind)
        try:
            operation(delivery.resolve)
        except Exception as exc:
            if delivery.completion_failed:
                raise
            if delivery.delivered:
                # Resultado já entregue; o erro tardio do store só vai para o log
                logger.warning(
                    "gateway_store_error_after_delivery",
                    extra={
                        "component": _COMPONENT,
                        "action": action,
                        "entity_kind": kind.name.lower(),
                        "error_type": type(exc).__name__,
                        "correlation_id": get_correlation_id(),
                    },
                )
                return
            logger.warning(
                "gateway_store_error",
                extra={
                    "component": _COMPONENT,
                    "action": action,
                    "entity_kind": kind.name.lower(),
                    "result": "unhandled",
                    "error_type": type(exc).__name__,
                    "correlation_id": get_correlation_id(),
                },
            )
            _record(action, kind, "unhandled")
            delivery.fail(UnhandledStoreError(exc))


__all__ = ["AuthorizationGateway"]
