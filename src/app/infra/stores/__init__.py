"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - memory_account_store: Store de contas em memória (dev/testes)
"""

from __future__ import annotations

from app.infra.stores.memory_account_store import MemoryAccountStore

__all__ = [
    "MemoryAccountStore",
]
