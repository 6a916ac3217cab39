"""Conta Exchange pronta para ser persistida após a verificação."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.domain.mailbox import ConnectionSettings


class ExchangeAccount(BaseModel):
    """Conta criada pelo fluxo de setup."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    email: str = Field(..., description="Endereço verificado, normalizado.")
    display_name: str = Field(default="")
    connection: ConnectionSettings


__all__ = ["ExchangeAccount"]
