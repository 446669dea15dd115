"""Infra de notificações de alteração do store."""

from gateway.infra.notifications.notification_center import (
    NotificationCenter,
    Subscription,
    default_notification_center,
)

__all__ = ["NotificationCenter", "Subscription", "default_notification_center"]
