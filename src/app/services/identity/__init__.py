"""Estratégias de verificação de identidade da caixa postal."""

from app.services.identity.access_checker import MailboxAccessChecker
from app.services.identity.address_normalizer import (
    address_domain,
    addresses_match,
    extract_address,
    is_usable_address,
)
from app.services.identity.evidence_probe import AddressField, check_folder
from app.services.identity.mailbox_scan import (
    FoundMessage,
    delete_message,
    find_and_delete,
    find_message,
    subject_matches,
)
from app.services.identity.round_trip_probe import RoundTripProbe, RoundTripReport

__all__ = [
    "AddressField",
    "FoundMessage",
    "MailboxAccessChecker",
    "RoundTripProbe",
    "RoundTripReport",
    "address_domain",
    "addresses_match",
    "check_folder",
    "delete_message",
    "extract_address",
    "find_and_delete",
    "find_message",
    "is_usable_address",
    "subject_matches",
]
