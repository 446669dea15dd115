"""Testes da central de notificações em processo."""

from __future__ import annotations

import pytest

from gateway.domain import StoreChangedNotification
from gateway.infra.notifications import (
    NotificationCenter,
    Subscription,
    default_notification_center,
)


class TestNotificationCenter:
    """Broadcast, cancelamento e nomes de notificação."""

    def test_post_reaches_every_subscriber(self) -> None:
        center = NotificationCenter()
        first: list[StoreChangedNotification] = []
        second: list[StoreChangedNotification] = []
        center.subscribe(first.append)
        center.subscribe(second.append)
        notification = StoreChangedNotification()

        delivered = center.post(notification)

        assert delivered == 2
        assert first == [notification]
        assert second == [notification]

    def test_dispose_is_idempotent(self) -> None:
        center = NotificationCenter()
        received: list[StoreChangedNotification] = []
        subscription = center.subscribe(received.append)

        subscription.dispose()
        subscription.dispose()
        center.post(StoreChangedNotification())

        assert subscription.active is False
        assert received == []
        assert center.subscriber_count() == 0

    def test_subscription_as_context_manager(self) -> None:
        center = NotificationCenter()
        with center.subscribe(lambda n: None) as subscription:
            assert isinstance(subscription, Subscription)
            assert center.subscriber_count() == 1
        assert center.subscriber_count() == 0

    def test_handler_may_dispose_during_delivery(self) -> None:
        center = NotificationCenter()
        received: list[str] = []
        subscriptions: list[Subscription] = []

        def _once(notification: StoreChangedNotification) -> None:
            received.append("once")
            subscriptions[0].dispose()

        subscriptions.append(center.subscribe(_once))
        center.subscribe(lambda n: received.append("always"))

        center.post(StoreChangedNotification())
        center.post(StoreChangedNotification())

        assert received == ["once", "always", "always"]

    def test_failing_handler_does_not_starve_others(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        center = NotificationCenter()
        received: list[StoreChangedNotification] = []

        def _broken(notification: StoreChangedNotification) -> None:
            raise RuntimeError("observer bug")

        center.subscribe(_broken)
        center.subscribe(received.append)
        notification = StoreChangedNotification()

        delivered = center.post(notification)

        assert delivered == 1
        assert received == [notification]
        (record,) = [r for r in caplog.records if r.getMessage() == "notification_handler_failed"]
        assert record.error_type == "RuntimeError"
        assert record.exc_info is not None

    def test_names_are_isolated(self) -> None:
        center = NotificationCenter()
        received: list[StoreChangedNotification] = []
        center.subscribe(received.append, name="other")

        assert center.post(StoreChangedNotification()) == 0
        assert received == []

    def test_default_center_is_shared(self) -> None:
        assert default_notification_center() is default_notification_center()

    def test_user_info_is_read_only(self) -> None:
        notification = StoreChangedNotification(user_info={"changes": 1})

        assert notification.user_info["changes"] == 1
        try:
            notification.user_info["changes"] = 2  # type: ignore[index]
        except TypeError:
            pass
        else:
            raise AssertionError("user_info deveria ser somente leitura")
