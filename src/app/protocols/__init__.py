"""Protocolos e contratos do core da aplicação."""

from .account_store import AccountStoreProtocol
from .mail_transport import MailTransportFactoryProtocol, MailTransportProtocol

__all__ = [
    "AccountStoreProtocol",
    "MailTransportFactoryProtocol",
    "MailTransportProtocol",
]
