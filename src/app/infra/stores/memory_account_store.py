"""Store de contas em memória — apenas para desenvolvimento e testes.

ATENÇÃO: Sem persistência entre reinícios.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.account_store import AccountStoreProtocol

if TYPE_CHECKING:
    from app.domain.account import ExchangeAccount


class MemoryAccountStore(AccountStoreProtocol):
    """Store de contas em memória, indexado pelo email normalizado."""

    def __init__(self) -> None:
        self._accounts: dict[str, ExchangeAccount] = {}

    async def save(self, account: ExchangeAccount) -> None:
        self._accounts[account.email] = account

    async def get(self, email: str) -> ExchangeAccount | None:
        return self._accounts.get(email)

    def __len__(self) -> int:
        return len(self._accounts)
