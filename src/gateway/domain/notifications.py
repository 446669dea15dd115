"""Notificação de alteração do store repassada ao observer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

STORE_CHANGED = "store_changed"


@dataclass(frozen=True, slots=True)
class StoreChangedNotification:
    """Aviso global de que o conteúdo do store mudou.

    O gateway não interpreta o conteúdo: a notificação chega ao observer
    exatamente como foi publicada.

    Attributes:
        source: Objeto que publicou (store ou adapter nativo), se conhecido.
        posted_at: Momento da publicação (UTC).
        user_info: Metadados livres do host (somente leitura).
    """

    source: Any = None
    posted_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    user_info: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "user_info", MappingProxyType(dict(self.user_info)))


__all__ = ["STORE_CHANGED", "StoreChangedNotification"]
