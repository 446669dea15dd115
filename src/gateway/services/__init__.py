"""Serviços do gateway: despacho protegido e fachada assíncrona."""

from gateway.services.async_gateway import AsyncCalendarGateway
from gateway.services.authorization_gateway import AuthorizationGateway

__all__ = ["AsyncCalendarGateway", "AuthorizationGateway"]
