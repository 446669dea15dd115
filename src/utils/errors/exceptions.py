"""Exceções do gateway de calendário e lembretes.

`GatewayError` funciona como uma união rotulada: todo resultado de
operação protegida termina em sucesso ou em exatamente uma das três
variantes abaixo. Use `match` com `__match_args__` para discriminar.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gateway.domain.entities import EntityKind


class GatewayError(Exception):
    """Base do canal único de erro das operações protegidas."""


class AuthorizationPendingError(GatewayError):
    """Autorização ainda não foi solicitada; pedir acesso e tentar de novo."""

    __match_args__ = ("entity_kind",)

    def __init__(self, entity_kind: EntityKind) -> None:
        self.entity_kind = entity_kind
        super().__init__(f"Autorização pendente para {entity_kind.name.lower()}")


class NotAuthorizedError(GatewayError):
    """Acesso negado ou restrito; o usuário precisa liberar nos ajustes."""

    __match_args__ = ("entity_kind",)

    def __init__(self, entity_kind: EntityKind) -> None:
        self.entity_kind = entity_kind
        super().__init__(f"Acesso não autorizado para {entity_kind.name.lower()}")


class UnhandledStoreError(GatewayError):
    """Falha nativa do store, preservando a causa original para diagnóstico."""

    __match_args__ = ("cause",)

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Falha não tratada no store: {type(cause).__name__}: {cause}")
        self.__cause__ = cause


class StoreUnavailableError(RuntimeError):
    """Backend de store indisponível neste host ou mal configurado."""
