"""Tipos de domínio do gateway."""

from gateway.domain.entities import (
    AuthorizationClass,
    AuthorizationStatus,
    DateRangeFilter,
    EntityKind,
    Span,
)
from gateway.domain.notifications import STORE_CHANGED, StoreChangedNotification
from gateway.domain.records import CalendarInfo, EventRecord, ReminderRecord
from gateway.domain.result import Err, Ok, Result

__all__ = [
    "STORE_CHANGED",
    "AuthorizationClass",
    "AuthorizationStatus",
    "CalendarInfo",
    "DateRangeFilter",
    "EntityKind",
    "Err",
    "EventRecord",
    "Ok",
    "ReminderRecord",
    "Result",
    "Span",
    "StoreChangedNotification",
]
