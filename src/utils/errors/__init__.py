"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthorizationPendingError,
    GatewayError,
    NotAuthorizedError,
    StoreUnavailableError,
    UnhandledStoreError,
)

__all__ = [
    "AuthorizationPendingError",
    "GatewayError",
    "NotAuthorizedError",
    "StoreUnavailableError",
    "UnhandledStoreError",
]
