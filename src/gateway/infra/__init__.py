"""Implementações concretas dos protocolos do gateway."""
