"""Fachada asyncio sobre o `AuthorizationGateway`.

Converte o contrato de callback em awaitables: cada operação devolve o
payload ou levanta a variante de `GatewayError` recebida. Callbacks do
store podem chegar em qualquer thread, por isso a entrega no event loop
passa por `call_soon_threadsafe`.

Não há cancelamento: um timeout apenas para de esperar, a operação já
despachada segue até o fim no store.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from gateway.observability import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime

    from gateway.domain.entities import AuthorizationStatus, EntityKind
    from gateway.domain.result import Result
    from gateway.services.authorization_gateway import AuthorizationGateway

logger = logging.getLogger(__name__)

_COMPONENT = "async_calendar_gateway"

T = TypeVar("T")


def _settle(future: asyncio.Future[T], value: T) -> None:
    if not future.done():
        future.set_result(value)


class AsyncCalendarGateway:
    """Versão awaitable das operações do gateway.

    Args:
        gateway: Gateway de autorização subjacente.
        timeout_seconds: Tempo máximo de espera por resposta; None espera
            indefinidamente.
    """

    __slots__ = ("_gateway", "_timeout")

    def __init__(
        self,
        gateway: AuthorizationGateway,
        *,
        timeout_seconds: float | None = None,
    ) -> None:
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError("timeout_seconds deve ser positivo")
        self._gateway = gateway
        self._timeout = timeout_seconds

    @property
    def gateway(self) -> AuthorizationGateway:
        return self._gateway

    def authorization_status(self, kind: EntityKind) -> AuthorizationStatus:
        return self._gateway.authorization_status(kind)

    def calendars(self, kind: EntityKind) -> list[Any]:
        return self._gateway.calendars(kind)

    async def request_authorization(self, kind: EntityKind) -> tuple[bool, BaseException | None]:
        """Solicita acesso e retorna `(granted, error)` como o store respondeu."""
        return await self._await(
            "request_authorization",
            lambda deliver: self._gateway.request_authorization(
                kind, lambda granted, error: deliver((granted, error))
            ),
        )

    async def search_events(
        self,
        start: datetime,
        end: datetime,
        *,
        calendars: Sequence[Any] | None = None,
    ) -> list[Any]:
        result = await self._await(
            "search_events",
            lambda deliver: self._gateway.search_events(
                start, end, deliver, calendars=calendars
            ),
        )
        return result.unwrap()

    async def save_event(self, event: Any, *, recurrently: bool) -> None:
        result = await self._await(
            "save_event",
            lambda deliver: self._gateway.save_event(event, recurrently, deliver),
        )
        result.unwrap()

    async def delete_event(self, event: Any, *, recurrently: bool) -> None:
        result = await self._await(
            "delete_event",
            lambda deliver: self._gateway.delete_event(event, recurrently, deliver),
        )
        result.unwrap()

    async def search_reminders(
        self,
        start: datetime,
        end: datetime,
        *,
        calendars: Sequence[Any] | None = None,
    ) -> list[Any]:
        result = await self._await(
            "search_reminders",
            lambda deliver: self._gateway.search_reminders(
                start, end, deliver, calendars=calendars
            ),
        )
        return result.unwrap()

    async def save_reminder(self, reminder: Any) -> None:
        result = await self._await(
            "save_reminder",
            lambda deliver: self._gateway.save_reminder(reminder, deliver),
        )
        result.unwrap()

    async def delete_reminder(self, reminder: Any) -> None:
        result = await self._await(
            "delete_reminder",
            lambda deliver: self._gateway.delete_reminder(reminder, deliver),
        )
        result.unwrap()

    async def _await(
        self,
        action: str,
        start_call: Callable[[Callable[[Any], None]], None],
    ) -> Result[Any] | Any:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()

        def _deliver(value: Any) -> None:
            # Respostas tardias (após timeout e fim do loop) são descartadas.
            if not loop.is_closed():
                loop.call_soon_threadsafe(_settle, future, value)

        start_call(_deliver)
        if self._timeout is None:
            return await future
        try:
            return await asyncio.wait_for(future, timeout=self._timeout)
        except TimeoutError:
            logger.warning(
                "async_gateway_timeout",
                extra={
                    "component": _COMPONENT,
                    "action": action,
                    "timeout_seconds": self._timeout,
                    "correlation_id": get_correlation_id(),
                },
            )
            raise


__all__ = ["AsyncCalendarGateway"]
