"""Settings do gateway de calendários e lembretes.

Centralizar a leitura de env aqui evita espalhar parse de configuração
pelo bootstrap e pelos scripts.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

StoreBackend = Literal["memory", "eventkit"]

VALID_STORE_BACKENDS = frozenset({"memory", "eventkit"})


class GatewaySettings(BaseModel):
    """Configurações do gateway e do store de backend."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    service_name: str = Field(
        default="agenda_gateway",
        description="Nome do serviço injetado nos logs.",
    )
    log_level: str = Field(
        default="INFO",
        description="Nível do root logger (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    store_backend: StoreBackend = Field(
        default="memory",
        description="Store do host: memória (dev/test) ou EventKit (macOS).",
    )
    relay_store_changes: bool = Field(
        default=True,
        description="Repassa alterações do store ao observer quando houver um.",
    )
    async_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Espera máxima da fachada async; None espera indefinidamente.",
    )

    def validate_settings(self) -> list[str]:
        """Valida configurações minimas.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if not self.service_name.strip():
            errors.append("SERVICE_NAME não pode ser vazio")
        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")
        return errors


def _read_optional_env(key: str) -> str | None:
    """Retorna valor opcional da env sem propagar string vazia."""
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    stripped_value = raw_value.strip()
    return stripped_value or None


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_backend(value: str) -> StoreBackend:
    backend = value.strip().lower()
    if backend not in VALID_STORE_BACKENDS:
        raise ValueError(
            f"GATEWAY_STORE_BACKEND inválido: {value}. "
            f"Validos: {', '.join(sorted(VALID_STORE_BACKENDS))}"
        )
    return backend  # type: ignore[return-value]


def _load_gateway_from_env() -> GatewaySettings:
    """Carrega GatewaySettings a partir de variaveis de ambiente."""
    timeout = _read_optional_env("GATEWAY_ASYNC_TIMEOUT_SECONDS")
    return GatewaySettings(
        service_name=os.getenv("SERVICE_NAME", "agenda_gateway"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        store_backend=_parse_backend(os.getenv("GATEWAY_STORE_BACKEND", "memory")),
        relay_store_changes=_parse_bool(os.getenv("GATEWAY_RELAY_STORE_CHANGES", "true")),
        async_timeout_seconds=float(timeout) if timeout is not None else None,
    )


@lru_cache(maxsize=1)
def get_gateway_settings() -> GatewaySettings:
    """Retorna instância cacheada de GatewaySettings."""
    return _load_gateway_from_env()


__all__ = ["GatewaySettings", "StoreBackend", "get_gateway_settings"]
