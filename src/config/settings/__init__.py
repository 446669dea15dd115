"""Agregador de settings do gateway."""

from __future__ import annotations

from config.settings.gateway import GatewaySettings, StoreBackend, get_gateway_settings

__all__ = ["GatewaySettings", "StoreBackend", "get_gateway_settings"]
