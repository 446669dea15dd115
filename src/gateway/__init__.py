"""Gateway de acesso a calendários e lembretes protegido por autorização."""

from gateway.domain import (
    AuthorizationClass,
    AuthorizationStatus,
    EntityKind,
    Err,
    Ok,
    Result,
    Span,
    StoreChangedNotification,
)
from gateway.services import AsyncCalendarGateway, AuthorizationGateway

__all__ = [
    "AsyncCalendarGateway",
    "AuthorizationClass",
    "AuthorizationGateway",
    "AuthorizationStatus",
    "EntityKind",
    "Err",
    "Ok",
    "Result",
    "Span",
    "StoreChangedNotification",
]
