"""Resultado discriminado entregue aos callbacks de conclusão.

Cada operação protegida entrega exatamente um `Ok(payload)` ou um
`Err(GatewayError)`. `unwrap()` devolve o payload ou relanca o erro,
para quem prefere consumir o resultado como um acessor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

from utils.errors import GatewayError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Operação concluída com sucesso."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """Operação concluída com uma das variantes de `GatewayError`."""

    error: GatewayError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Ok[T] | Err

__all__ = ["Err", "Ok", "Result"]
