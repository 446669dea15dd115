"""Testes da fachada asyncio do gateway."""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

import pytest

from gateway.domain import AuthorizationStatus, EntityKind, EventRecord, ReminderRecord
from gateway.infra.notifications import NotificationCenter
from gateway.infra.stores import InMemoryCalendarStore
from gateway.services import AsyncCalendarGateway, AuthorizationGateway
from tests.fakes.spy_store import SpyStore
from utils.errors import AuthorizationPendingError, NotAuthorizedError, UnhandledStoreError

START = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)
END = START + timedelta(days=7)


def _authorized_spy() -> SpyStore:
    return SpyStore(
        {
            EntityKind.EVENT: AuthorizationStatus.AUTHORIZED,
            EntityKind.REMINDER: AuthorizationStatus.AUTHORIZED,
        }
    )


class TestAsyncCalendarGateway:
    """Operações awaitable sobre o contrato de callback."""

    @pytest.mark.asyncio
    async def test_search_events_returns_payload(self) -> None:
        store = _authorized_spy()
        store.events = ["standup"]
        facade = AsyncCalendarGateway(AuthorizationGateway(store))

        events = await facade.search_events(START, END)

        assert events == ["standup"]

    @pytest.mark.asyncio
    async def test_pending_authorization_is_raised(self) -> None:
        facade = AsyncCalendarGateway(AuthorizationGateway(SpyStore()))

        with pytest.raises(AuthorizationPendingError) as exc_info:
            await facade.save_reminder("rem")

        assert exc_info.value.entity_kind is EntityKind.REMINDER

    @pytest.mark.asyncio
    async def test_denied_is_raised(self) -> None:
        store = SpyStore({EntityKind.EVENT: AuthorizationStatus.DENIED})
        facade = AsyncCalendarGateway(AuthorizationGateway(store))

        with pytest.raises(NotAuthorizedError):
            await facade.delete_event("evt", recurrently=True)

        assert store.data_calls == 0

    @pytest.mark.asyncio
    async def test_store_failure_is_raised_as_unhandled(self) -> None:
        store = _authorized_spy()
        store.errors["save_event"] = OSError("io")
        facade = AsyncCalendarGateway(AuthorizationGateway(store))

        with pytest.raises(UnhandledStoreError):
            await facade.save_event("evt", recurrently=False)

    @pytest.mark.asyncio
    async def test_reminders_answered_from_another_thread(self) -> None:
        store = _authorized_spy()
        store.defer_reminders = True
        facade = AsyncCalendarGateway(AuthorizationGateway(store))

        task = asyncio.create_task(facade.search_reminders(START, END))
        await asyncio.sleep(0)
        callback = store.pending_reminder_callbacks.pop()
        worker = threading.Thread(target=callback, args=(None,))
        worker.start()
        reminders = await task
        worker.join()

        assert reminders == []

    @pytest.mark.asyncio
    async def test_timeout_when_store_never_answers(self) -> None:
        store = _authorized_spy()
        store.defer_reminders = True
        facade = AsyncCalendarGateway(AuthorizationGateway(store), timeout_seconds=0.05)

        with pytest.raises(TimeoutError):
            await facade.search_reminders(START, END)

    @pytest.mark.asyncio
    async def test_request_authorization_returns_raw_answer(self) -> None:
        store = SpyStore()
        store.access_answer = (False, None)
        facade = AsyncCalendarGateway(AuthorizationGateway(store))

        granted, error = await facade.request_authorization(EntityKind.EVENT)

        assert granted is False
        assert error is None

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValueError, match="timeout_seconds"):
            AsyncCalendarGateway(AuthorizationGateway(SpyStore()), timeout_seconds=0)


class TestAsyncWithMemoryStore:
    """Fluxo completo com store em memória respondendo em executor."""

    @pytest.mark.asyncio
    async def test_request_then_crud_round(self) -> None:
        center = NotificationCenter()
        with ThreadPoolExecutor(max_workers=2) as executor:
            store = InMemoryCalendarStore(notifications=center, executor=executor)
            calendar = store.add_calendar(EntityKind.EVENT, "Trabalho")
            inbox = store.add_calendar(EntityKind.REMINDER, "Inbox")
            facade = AsyncCalendarGateway(AuthorizationGateway(store, notifications=center))

            assert await facade.request_authorization(EntityKind.EVENT) == (True, None)
            assert await facade.request_authorization(EntityKind.REMINDER) == (True, None)

            event = EventRecord(
                calendar_id=calendar.calendar_id,
                title="Planning",
                start=START,
                end=START + timedelta(hours=1),
            )
            reminder = ReminderRecord(
                calendar_id=inbox.calendar_id,
                title="Enviar ata",
                due=START + timedelta(days=1),
            )
            await facade.save_event(event, recurrently=False)
            await facade.save_reminder(reminder)

            events = await facade.search_events(START, END)
            reminders = await facade.search_reminders(START, END)

        assert [e.event_id for e in events] == [event.event_id]
        assert [r.reminder_id for r in reminders] == [reminder.reminder_id]
        assert store.authorization_status(EntityKind.EVENT) is AuthorizationStatus.AUTHORIZED
