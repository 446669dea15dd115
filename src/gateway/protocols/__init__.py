"""Protocolos e contratos do gateway."""

from .notifications import NotificationSourceProtocol, SubscriptionProtocol
from .observer import StoreChangeObserverProtocol
from .store import StoreCapabilityProtocol

__all__ = [
    "NotificationSourceProtocol",
    "StoreCapabilityProtocol",
    "StoreChangeObserverProtocol",
    "SubscriptionProtocol",
]
