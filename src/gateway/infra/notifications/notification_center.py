"""Central de notificações em processo para alterações do store.

Implementa `NotificationSourceProtocol` como um broadcast simples: cada
`post` entrega a notificação a todos os handlers inscritos naquele nome.
A lista de inscritos é protegida por lock; os handlers rodam fora do lock
sobre um snapshot, para que possam se desinscrever durante a entrega.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import TYPE_CHECKING

from gateway.domain.notifications import STORE_CHANGED, StoreChangedNotification
from gateway.observability import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_COMPONENT = "notification_center"


class Subscription:
    """Handle de inscrição devolvido por `NotificationCenter.subscribe`.

    Pode ser usado como context manager; `dispose()` é idempotente.
    """

    __slots__ = ("__weakref__", "_center", "_handler", "_name")

    def __init__(
        self,
        center: NotificationCenter,
        name: str,
        handler: Callable[[StoreChangedNotification], None],
    ) -> None:
        self._center: NotificationCenter | None = center
        self._name = name
        self._handler = handler

    @property
    def name(self) -> str:
        return self._name

    @property
    def active(self) -> bool:
        return self._center is not None

    def dispose(self) -> None:
        center, self._center = self._center, None
        if center is not None:
            center._remove(self._name, self)

    def _deliver(self, notification: StoreChangedNotification) -> None:
        if self._center is not None:
            self._handler(notification)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class NotificationCenter:
    """Broadcast de notificações por nome, seguro para varias threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: dict[str, list[Subscription]] = {}

    def subscribe(
        self,
        handler: Callable[[StoreChangedNotification], None],
        *,
        name: str = STORE_CHANGED,
    ) -> Subscription:
        """Inscreve o handler no nome informado."""
        subscription = Subscription(self, name, handler)
        with self._lock:
            self._subscribers.setdefault(name, []).append(subscription)
        logger.debug(
            "notification_subscribed",
            extra={
                "component": _COMPONENT,
                "action": "subscribe",
                "notification_name": name,
                "correlation_id": get_correlation_id(),
            },
        )
        return subscription

    def post(
        self,
        notification: StoreChangedNotification,
        *,
        name: str = STORE_CHANGED,
    ) -> int:
        """Entrega a notificação aos inscritos e retorna quantos a receberam sem erro.

        Um handler que levanta exceção é registrado em log e ignorado; os
        demais continuam recebendo e quem publicou não vê o erro.
        """
        with self._lock:
            snapshot = list(self._subscribers.get(name, ()))
        delivered = 0
        for subscription in snapshot:
            try:
                subscription._deliver(notification)
            except Exception as exc:
                logger.exception(
                    "notification_handler_failed",
                    extra={
                        "component": _COMPONENT,
                        "action": "post",
                        "notification_name": name,
                        "error_type": type(exc).__name__,
                        "correlation_id": get_correlation_id(),
                    },
                )
                continue
            delivered += 1
        return delivered

    def subscriber_count(self, name: str = STORE_CHANGED) -> int:
        with self._lock:
            return len(self._subscribers.get(name, ()))

    def _remove(self, name: str, subscription: Subscription) -> None:
        with self._lock:
            subscribers = self._subscribers.get(name)
            if subscribers and subscription in subscribers:
                subscribers.remove(subscription)
                if not subscribers:
                    del self._subscribers[name]


@lru_cache(maxsize=1)
def default_notification_center() -> NotificationCenter:
    """Retorna a central de notificações compartilhada pelo processo."""
    return NotificationCenter()


__all__ = ["NotificationCenter", "Subscription", "default_notification_center"]
