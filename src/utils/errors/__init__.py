"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationError,
    InfrastructureError,
    TransportError,
)

__all__ = [
    "AuthenticationError",
    "InfrastructureError",
    "TransportError",
]
