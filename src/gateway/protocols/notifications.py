"""Contrato da fonte global de notificações de alteração do store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable

    from gateway.domain.notifications import StoreChangedNotification


@runtime_checkable
class SubscriptionProtocol(Protocol):
    """Handle de inscrição; `dispose()` deve ser idempotente."""

    @property
    def active(self) -> bool:
        """Indica se a inscrição ainda recebe notificações."""
        ...

    def dispose(self) -> None:
        """Cancela a inscrição."""
        ...


@runtime_checkable
class NotificationSourceProtocol(Protocol):
    """Broadcast de processo que avisa quando o store muda."""

    def subscribe(
        self,
        handler: Callable[[StoreChangedNotification], None],
    ) -> SubscriptionProtocol:
        """Inscreve o handler e retorna o handle para cancelamento."""
        ...
