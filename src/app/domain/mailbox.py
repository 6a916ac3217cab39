"""Modelos de domínio da caixa postal EAS vistos pela verificação.

Só os campos que a verificação consome são modelados; o restante da
resposta FolderSync/Sync é descartado pelo transporte.
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class FolderType(IntEnum):
    """Códigos de tipo de pasta retornados no FolderSync.

    A verificação só interpreta INBOX e SENT_ITEMS.
    """

    USER_GENERIC = 1
    INBOX = 2
    DRAFTS = 3
    DELETED_ITEMS = 4
    SENT_ITEMS = 5
    OUTBOX = 6


class Folder(BaseModel):
    """Pasta listada pelo FolderSync."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    server_id: str = Field(..., description="Identificador da pasta no servidor.")
    type: int = Field(..., description="Código de tipo atribuído pelo servidor.")
    display_name: str = Field(default="", description="Nome exibido da pasta.")
    parent_id: str = Field(default="0", description="Pasta pai (0 = raiz).")


class FolderSyncResponse(BaseModel):
    """Resultado de um FolderSync."""

    model_config = ConfigDict(extra="ignore")

    sync_key: str = Field(default="0", description="Cursor da hierarquia de pastas.")
    folders: list[Folder] = Field(default_factory=list)
    status: int = Field(default=1, description="Status EAS (1 = sucesso).")

    def find_by_type(self, folder_type: FolderType) -> Folder | None:
        """Retorna a primeira pasta do tipo pedido, se houver."""
        return next((f for f in self.folders if f.type == folder_type), None)


class MailMessage(BaseModel):
    """Mensagem retornada por um Sync.

    Os cabeçalhos chegam como texto livre: `Nome <user@dominio>`,
    endereço puro ou um DN X.500.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    server_id: str = Field(..., description="Identificador da mensagem na pasta.")
    from_address: str = Field(default="", alias="from")
    to_address: str = Field(default="", alias="to")
    cc: str = Field(default="")
    subject: str = Field(default="")
    date_received: str = Field(default="")


class SyncResponse(BaseModel):
    """Resultado incremental de um Sync em uma pasta."""

    model_config = ConfigDict(extra="ignore")

    sync_key: str = Field(..., description="Novo cursor da pasta.")
    messages: list[MailMessage] = Field(default_factory=list)
    status: int = Field(default=1)
    more_available: bool = Field(default=False)


class ProbeMessage(BaseModel):
    """Cópia em Itens Enviados da mensagem de teste do round trip.

    Existe só durante a verificação: é lida, usada como evidência e
    apagada. Se a exclusão falhar, fica abandonada no servidor.
    """

    model_config = ConfigDict(frozen=True)

    server_id: str
    sync_key: str
    from_address: str
    to_address: str
    subject: str


class TlsOptions(BaseModel):
    """Opções de transporte seguro repassadas ao cliente EAS."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    use_https: bool = True
    port: int = Field(default=443, ge=1, le=65535)
    accept_all_certs: bool = False
    certificate_path: str | None = None
    client_certificate_path: str | None = Field(
        default=None, description="Certificado cliente (PKCS#12) para mTLS"
    )
    client_certificate_password: SecretStr | None = None


class ConnectionSettings(BaseModel):
    """Pacote opaco de conexão e credenciais de uma conta EAS.

    A verificação nunca lê a senha; apenas repassa o pacote à fábrica
    de transporte.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    server_url: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    password: SecretStr
    domain: str = Field(default="")
    tls: TlsOptions = Field(default_factory=TlsOptions)
    device_id_suffix: str = Field(
        default="",
        description="Sufixo do DeviceId, normalmente o email da conta.",
    )


__all__ = [
    "ConnectionSettings",
    "Folder",
    "FolderSyncResponse",
    "FolderType",
    "MailMessage",
    "ProbeMessage",
    "SyncResponse",
    "TlsOptions",
]
