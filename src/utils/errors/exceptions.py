"""Exceções de domínio para falhas de infraestrutura e de transporte EAS."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class TransportError(InfrastructureError):
    """Falha de um comando EAS (FolderSync, Sync, SendMail...).

    A mensagem é exibida ao usuário sem alteração quando a falha
    interrompe a verificação, portanto nunca deve conter credenciais.
    """


class AuthenticationError(TransportError):
    """Servidor recusou as credenciais (HTTP 401/403)."""
