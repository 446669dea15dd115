"""Stores concretos que implementam `StoreCapabilityProtocol`."""

from gateway.infra.stores.eventkit_store import EventKitOperationError, EventKitStore
from gateway.infra.stores.memory_store import (
    CalendarNotFoundError,
    EntityNotFoundError,
    InMemoryCalendarStore,
    StoreOperationError,
)

__all__ = [
    "CalendarNotFoundError",
    "EntityNotFoundError",
    "EventKitOperationError",
    "EventKitStore",
    "InMemoryCalendarStore",
    "StoreOperationError",
]
