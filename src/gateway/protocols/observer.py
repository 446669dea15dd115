"""Contrato do observer que recebe alterações do store via gateway."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gateway.domain.notifications import StoreChangedNotification
    from gateway.services.authorization_gateway import AuthorizationGateway


@runtime_checkable
class StoreChangeObserverProtocol(Protocol):
    """Recebe cada notificação de alteração exatamente como foi publicada."""

    def on_store_changed(
        self,
        gateway: AuthorizationGateway,
        notification: StoreChangedNotification,
    ) -> None:
        """Chamado para cada alteração do store enquanto o observer existir."""
        ...
