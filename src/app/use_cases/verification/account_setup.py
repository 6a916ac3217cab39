"""Use case de criação de conta Exchange guiada pela verificação."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, assert_never

from app.domain.account import ExchangeAccount
from app.domain.verification import (
    AccessCheckError,
    EmailMismatch,
    HasAccess,
    NoAccess,
    Success,
    VerificationError,
)
from app.services.identity import extract_address

if TYPE_CHECKING:
    from app.domain.mailbox import ConnectionSettings
    from app.protocols.account_store import AccountStoreProtocol
    from app.use_cases.verification.check_mailbox_access import (
        CheckMailboxAccessUseCase,
    )
    from app.use_cases.verification.verify_mailbox_identity import (
        StatusCallback,
        VerifyMailboxIdentityUseCase,
    )

logger = logging.getLogger(__name__)

_COMPONENT = "account_setup"

SetupStatus = Literal["saved", "needs_correction", "no_access", "failed"]


@dataclass(frozen=True, slots=True)
class AccountSetupRequest:
    """Dados digitados na tela de setup."""

    email: str
    connection: ConnectionSettings
    display_name: str = ""


@dataclass(frozen=True, slots=True)
class AccountSetupOutcome:
    """Resultado para a camada de apresentação.

    - saved: conta persistida
    - needs_correction: mostrar entered_email/actual_email e pedir correção
      (ou oferecer a checagem de acesso delegado)
    - no_access: as credenciais não recebem mensagens do endereço digitado
    - failed: mostrar error_message e permitir editar a conexão
    """

    status: SetupStatus
    account: ExchangeAccount | None = None
    entered_email: str | None = None
    actual_email: str | None = None
    error_message: str | None = None


class AccountSetupUseCase:
    """Verifica a identidade e persiste a conta apenas em Success ou HasAccess."""

    def __init__(
        self,
        verifier: VerifyMailboxIdentityUseCase,
        store: AccountStoreProtocol,
        access_checker: CheckMailboxAccessUseCase,
    ) -> None:
        self._verifier = verifier
        self._store = store
        self._access_checker = access_checker

    async def execute(
        self,
        request: AccountSetupRequest,
        on_status: StatusCallback | None = None,
    ) -> AccountSetupOutcome:
        result = await self._verifier.verify(request.email, request.connection, on_status)

        match result:
            case Success():
                return await self._save(request)
            case EmailMismatch(entered_email=entered, actual_email=actual):
                logger.info("account_setup_needs_correction", extra={"component": _COMPONENT})
                return AccountSetupOutcome(
                    status="needs_correction",
                    entered_email=entered,
                    actual_email=actual,
                )
            case VerificationError(message=message):
                logger.info("account_setup_failed", extra={"component": _COMPONENT})
                return AccountSetupOutcome(status="failed", error_message=message)
            case _:
                assert_never(result)

    async def confirm_access(self, request: AccountSetupRequest) -> AccountSetupOutcome:
        """Segue o mismatch quando o usuário afirma ter acesso ao endereço digitado."""
        result = await self._access_checker.check(request.email, request.connection)

        match result:
            case HasAccess():
                return await self._save(request)
            case NoAccess():
                logger.info("account_setup_no_access", extra={"component": _COMPONENT})
                return AccountSetupOutcome(
                    status="no_access",
                    entered_email=extract_address(request.email),
                )
            case AccessCheckError(message=message):
                logger.info("account_setup_failed", extra={"component": _COMPONENT})
                return AccountSetupOutcome(status="failed", error_message=message)
            case _:
                assert_never(result)

    async def _save(self, request: AccountSetupRequest) -> AccountSetupOutcome:
        account = ExchangeAccount(
            email=extract_address(request.email),
            display_name=request.display_name,
            connection=request.connection,
        )
        await self._store.save(account)
        logger.info("account_setup_saved", extra={"component": _COMPONENT})
        return AccountSetupOutcome(status="saved", account=account)
