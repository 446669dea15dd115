"""Composition root do gateway.

Configura logging e conecta o store escolhido nos settings ao gateway.

Uso:
    from gateway.bootstrap import initialize_gateway, build_gateway

    initialize_gateway()
    gateway = build_gateway(observer=my_view_model)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging import configure_logging
from config.settings import GatewaySettings, get_gateway_settings
from gateway.infra.notifications import NotificationCenter, default_notification_center
from gateway.infra.stores import EventKitStore, InMemoryCalendarStore
from gateway.observability import get_correlation_id
from gateway.services import AsyncCalendarGateway, AuthorizationGateway
from utils.errors import StoreUnavailableError

if TYPE_CHECKING:
    from gateway.protocols import StoreCapabilityProtocol, StoreChangeObserverProtocol

logger = logging.getLogger(__name__)


def initialize_gateway(settings: GatewaySettings | None = None) -> GatewaySettings:
    """Configura logging estruturado e valida os settings.

    Raises:
        ValueError: Se os settings forem invalidos.
    """
    settings = settings or get_gateway_settings()
    errors = settings.validate_settings()
    if errors:
        raise ValueError("; ".join(errors))

    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name,
        correlation_id_getter=get_correlation_id,
    )
    logger.info(
        "gateway_initialized",
        extra={
            "component": "bootstrap",
            "store_backend": settings.store_backend,
            "relay_store_changes": settings.relay_store_changes,
        },
    )
    return settings


def build_store(
    settings: GatewaySettings | None = None,
    *,
    notifications: NotificationCenter | None = None,
) -> StoreCapabilityProtocol:
    """Cria o store do backend configurado.

    Raises:
        StoreUnavailableError: Se o backend não estiver disponível no host.
    """
    settings = settings or get_gateway_settings()
    center = notifications or default_notification_center()
    if settings.store_backend == "memory":
        return InMemoryCalendarStore(notifications=center)
    if settings.store_backend == "eventkit":
        store = EventKitStore()
        if settings.relay_store_changes:
            # Handle fica em `store.bridge`; `store.close()` remove o observer nativo.
            store.bridge_store_changes(center)
        return store
    raise StoreUnavailableError(f"Backend de store desconhecido: {settings.store_backend}")


def build_gateway(
    settings: GatewaySettings | None = None,
    *,
    store: StoreCapabilityProtocol | None = None,
    observer: StoreChangeObserverProtocol | None = None,
    notifications: NotificationCenter | None = None,
) -> AuthorizationGateway:
    """Monta o gateway; o observer só é conectado se o relay estiver ativo."""
    settings = settings or get_gateway_settings()
    center = notifications or default_notification_center()
    store = store or build_store(settings, notifications=center)
    return AuthorizationGateway(
        store,
        notifications=center,
        observer=observer if settings.relay_store_changes else None,
    )


def build_async_gateway(
    settings: GatewaySettings | None = None,
    *,
    store: StoreCapabilityProtocol | None = None,
    observer: StoreChangeObserverProtocol | None = None,
    notifications: NotificationCenter | None = None,
) -> AsyncCalendarGateway:
    """Monta a fachada async com o timeout configurado."""
    settings = settings or get_gateway_settings()
    gateway = build_gateway(settings, store=store, observer=observer, notifications=notifications)
    return AsyncCalendarGateway(gateway, timeout_seconds=settings.async_timeout_seconds)


__all__ = [
    "build_async_gateway",
    "build_gateway",
    "build_store",
    "initialize_gateway",
]
