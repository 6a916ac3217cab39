"""Contrato do transporte EAS consumido pela verificação.

O transporte concreto (montagem de XML/WBXML, Provision, NTLM...)
fica fora deste pacote. Toda falha de comando deve chegar como
`TransportError`; a verificação decide o que é fatal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.mailbox import (
        ConnectionSettings,
        FolderSyncResponse,
        MailMessage,
        SyncResponse,
    )


@runtime_checkable
class MailTransportProtocol(Protocol):
    """Comandos EAS usados pela verificação de identidade."""

    async def folder_sync(self) -> FolderSyncResponse:
        """Lista a hierarquia de pastas a partir do syncKey inicial."""
        ...

    async def sync(
        self,
        folder_id: str,
        sync_key: str,
        window_size: int,
    ) -> SyncResponse:
        """Busca incremental na pasta.

        Com `sync_key="0"` o servidor só devolve o primeiro cursor,
        sem mensagens.
        """
        ...

    async def send_mail(self, to: str, subject: str, body: str) -> None:
        """Envia mensagem em texto puro salvando cópia em Itens Enviados."""
        ...

    async def delete_email_permanently(
        self,
        folder_id: str,
        message_id: str,
        sync_key: str,
    ) -> None:
        """Exclui a mensagem sem mover para Itens Excluídos."""
        ...

    async def fetch_one_message(self, folder_id: str) -> MailMessage | None:
        """Retorna uma mensagem qualquer da pasta, ou None se vazia."""
        ...

    async def aclose(self) -> None:
        """Libera a sessão HTTP do transporte."""
        ...


@runtime_checkable
class MailTransportFactoryProtocol(Protocol):
    """Cria um transporte novo por tentativa de verificação.

    Tentativas concorrentes para contas diferentes nunca compartilham
    a mesma instância de transporte.
    """

    def create(self, connection: ConnectionSettings) -> MailTransportProtocol:
        """Monta um transporte para as credenciais informadas.

        Raises:
            ValueError: Certificado cliente sem senha ou ilegível
            TransportError: Falha ao preparar a conexão
        """
        ...
