"""Correlation_id das chamadas ao gateway.

Uma chamada de alto nível (ex: buscar eventos e depois salvar um lembrete)
fixa um correlation_id; os logs do gateway e dos stores o carregam via
`CorrelationIdFilter`. O valor vive num ContextVar, isolado por thread e
por task asyncio. Callbacks que o store executa em outro thread só veem o
valor se o store copiar o contexto (ver `InMemoryCalendarStore`).

Uso:
    with correlation_scope():
        gateway.search_events(start, end, on_events)
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str] = ContextVar("gateway_correlation_id", default="")


def generate_correlation_id() -> str:
    return uuid.uuid4().hex


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual ou string vazia."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Fixa o correlation_id do contexto; gera um novo se None.

    Returns:
        Token para restaurar o valor anterior via reset_correlation_id().
    """
    return _correlation_id.set(correlation_id or generate_correlation_id())


def reset_correlation_id(token: Token[str]) -> None:
    _correlation_id.reset(token)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Fixa um correlation_id durante o bloco e restaura o anterior ao sair."""
    token = set_correlation_id(correlation_id)
    try:
        yield _correlation_id.get()
    finally:
        reset_correlation_id(token)
