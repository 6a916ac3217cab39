"""Contrato de persistência de contas criadas pelo setup."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.account import ExchangeAccount


@runtime_checkable
class AccountStoreProtocol(Protocol):
    """Store de contas Exchange."""

    async def save(self, account: ExchangeAccount) -> None:
        """Persiste (ou substitui) a conta identificada pelo email."""
        ...

    async def get(self, email: str) -> ExchangeAccount | None:
        """Busca conta pelo email normalizado."""
        ...
