"""Fake in-memory do transporte EAS para testes deterministas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.mailbox import (
    Folder,
    FolderSyncResponse,
    FolderType,
    MailMessage,
    SyncResponse,
)
from utils.errors import TransportError

if TYPE_CHECKING:
    from app.domain.mailbox import ConnectionSettings

SENT = Folder(server_id="sent-1", type=FolderType.SENT_ITEMS, display_name="Sent Items")
INBOX = Folder(server_id="inbox-1", type=FolderType.INBOX, display_name="Inbox")
DRAFTS = Folder(server_id="drafts-1", type=FolderType.DRAFTS, display_name="Drafts")


class FakeMailTransport:
    """Implementa o protocolo de transporte sem IO.

    Mantém pastas e mensagens em memória, em ordem de chegada. `send_mail`
    grava a cópia em Enviados (se a pasta existir) e, com `self_delivery`,
    entrega outra cópia no Inbox, como faz o Exchange com mensagem para
    si mesmo. `sync` pagina como o servidor: cada syncKey emitido guarda
    a posição do próximo lote. Toda chamada fica registrada em `calls`.
    """

    def __init__(
        self,
        *,
        folders: list[Folder] | None = None,
        messages: dict[str, list[MailMessage]] | None = None,
        mailbox_from: str = "",
        self_delivery: bool = True,
        folder_sync_error: str | None = None,
        fetch_error: str | None = None,
        send_error: str | None = None,
        delete_error: str | None = None,
        sync_error_folders: set[str] | None = None,
        sent_created_on_send: Folder | None = None,
    ) -> None:
        self._folders = list(folders or [])
        self._messages = {key: list(value) for key, value in (messages or {}).items()}
        self._mailbox_from = mailbox_from
        self._self_delivery = self_delivery
        self._folder_sync_error = folder_sync_error
        self._fetch_error = fetch_error
        self._send_error = send_error
        self._delete_error = delete_error
        self._sync_error_folders = sync_error_folders or set()
        self._sent_created_on_send = sent_created_on_send
        self._id_counter = 0
        self._sync_counter = 0
        self._cursors: dict[str, int] = {}
        self.calls: list[tuple[str, ...]] = []
        self.deleted: list[tuple[str, str]] = []
        self.sent_mail: list[tuple[str, str, str]] = []
        self.closed = False

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def messages_in(self, folder_id: str) -> list[MailMessage]:
        return list(self._messages.get(folder_id, []))

    async def folder_sync(self) -> FolderSyncResponse:
        self.calls.append(("folder_sync",))
        if self._folder_sync_error:
            raise TransportError(self._folder_sync_error)
        return FolderSyncResponse(sync_key="1", folders=list(self._folders))

    async def sync(self, folder_id: str, sync_key: str, window_size: int) -> SyncResponse:
        self.calls.append(("sync", folder_id, sync_key, str(window_size)))
        if folder_id in self._sync_error_folders:
            raise TransportError(f"Sync falhou em {folder_id}")
        if sync_key == "0":
            return SyncResponse(sync_key=self._issue_key(folder_id, 0))

        offset = self._cursors.get(sync_key, 0)
        items = self._messages.get(folder_id, [])
        batch = items[offset : offset + window_size]
        end = offset + len(batch)
        return SyncResponse(
            sync_key=self._issue_key(folder_id, end),
            messages=list(batch),
            more_available=end < len(items),
        )

    async def send_mail(self, to: str, subject: str, body: str) -> None:
        self.calls.append(("send_mail", to, subject))
        if self._send_error:
            raise TransportError(self._send_error)
        self.sent_mail.append((to, subject, body))

        if self._sent_created_on_send is not None and not self._find(FolderType.SENT_ITEMS):
            self._folders.append(self._sent_created_on_send)

        sent = self._find(FolderType.SENT_ITEMS)
        if sent is not None:
            self._store(sent.server_id, to, subject)

        inbox = self._find(FolderType.INBOX)
        if inbox is not None and self._self_delivery:
            self._store(inbox.server_id, to, subject)

    async def delete_email_permanently(
        self,
        folder_id: str,
        message_id: str,
        sync_key: str,
    ) -> None:
        self.calls.append(("delete_email_permanently", folder_id, message_id, sync_key))
        if self._delete_error:
            raise TransportError(self._delete_error)
        self.deleted.append((folder_id, message_id))
        self._messages[folder_id] = [
            m for m in self._messages.get(folder_id, []) if m.server_id != message_id
        ]

    async def fetch_one_message(self, folder_id: str) -> MailMessage | None:
        self.calls.append(("fetch_one_message", folder_id))
        if self._fetch_error:
            raise TransportError(self._fetch_error)
        items = self._messages.get(folder_id, [])
        return items[0] if items else None

    async def aclose(self) -> None:
        self.calls.append(("aclose",))
        self.closed = True

    def deliver(self, folder_id: str, message: MailMessage) -> None:
        """Simula uma mensagem que chega ao servidor fora de `send_mail`."""
        self._messages.setdefault(folder_id, []).append(message)

    def _issue_key(self, folder_id: str, offset: int) -> str:
        self._sync_counter += 1
        key = f"{folder_id}:{self._sync_counter}"
        self._cursors[key] = offset
        return key

    def _find(self, folder_type: FolderType) -> Folder | None:
        return next((f for f in self._folders if f.type == folder_type), None)

    def _store(self, folder_id: str, to: str, subject: str) -> None:
        self._id_counter += 1
        message = MailMessage(
            server_id=f"{folder_id}:msg-{self._id_counter}",
            from_address=self._mailbox_from,
            to_address=to,
            subject=subject,
        )
        self._messages.setdefault(folder_id, []).append(message)


class FakeTransportFactory:
    """Devolve sempre o transporte configurado e registra as conexões.

    Com `create_error`, levanta a exceção como uma fábrica real faria
    com certificado cliente inválido.
    """

    def __init__(
        self,
        transport: FakeMailTransport,
        create_error: Exception | None = None,
    ) -> None:
        self._transport = transport
        self._create_error = create_error
        self.connections: list[ConnectionSettings] = []

    def create(self, connection: ConnectionSettings) -> FakeMailTransport:
        self.connections.append(connection)
        if self._create_error is not None:
            raise self._create_error
        return self._transport


async def no_sleep(_seconds: float) -> None:
    """Substitui asyncio.sleep nos testes."""
    return None
