"""Bootstrap da aplicação — inicialização e wiring.

Composition root: configura logging, valida settings e conecta
implementações concretas aos use cases de verificação.

Uso:
    from app.bootstrap import initialize_app, create_account_setup_use_case

    initialize_app()
    setup = create_account_setup_use_case(transport_factory)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.infra.stores import MemoryAccountStore
from app.observability import get_correlation_id
from app.services.identity import MailboxAccessChecker, RoundTripProbe
from app.use_cases.verification import (
    AccountSetupUseCase,
    CheckMailboxAccessUseCase,
    VerifyMailboxIdentityUseCase,
)
from config.logging import configure_logging
from config.settings import get_base_settings, get_verification_settings

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.protocols.account_store import AccountStoreProtocol
    from app.protocols.mail_transport import MailTransportFactoryProtocol
    from config.settings import VerificationSettings

# Nome do serviço para logs e métricas
SERVICE_NAME = "eas_mailbox_verifier"

STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do processo.
    """
    base = get_base_settings()
    configure_logging(
        level=base.log_level,
        service_name=base.service_name or SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def initialize_test_app() -> None:
    """Inicializa logging em nível DEBUG para testes."""
    configure_logging(
        level="DEBUG",
        service_name=f"{SERVICE_NAME}_test",
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido; em `development` apenas
    registra o alerta.
    """
    base = get_base_settings()
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(
        f"verification: {error}" for error in get_verification_settings().validate()
    )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": base.environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": base.environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.environment in STRICT_VALIDATION_ENVS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")


def create_verification_use_case(
    transport_factory: MailTransportFactoryProtocol,
    settings: VerificationSettings | None = None,
    sleep: Callable[[float], Awaitable[None]] | None = None,
) -> VerifyMailboxIdentityUseCase:
    """Monta o use case de verificação.

    Args:
        transport_factory: Fábrica de transportes EAS (um por tentativa)
        settings: Settings de verificação (usa env se None)
        sleep: Substitui asyncio.sleep na espera de propagação
    """
    resolved = settings or get_verification_settings()
    probe = (
        RoundTripProbe(resolved, sleep=sleep)
        if sleep is not None
        else RoundTripProbe(resolved)
    )
    return VerifyMailboxIdentityUseCase(transport_factory, probe)


def create_access_check_use_case(
    transport_factory: MailTransportFactoryProtocol,
    settings: VerificationSettings | None = None,
    sleep: Callable[[float], Awaitable[None]] | None = None,
) -> CheckMailboxAccessUseCase:
    """Monta a checagem de acesso a caixa delegada."""
    resolved = settings or get_verification_settings()
    checker = (
        MailboxAccessChecker(resolved, sleep=sleep)
        if sleep is not None
        else MailboxAccessChecker(resolved)
    )
    return CheckMailboxAccessUseCase(transport_factory, checker)


def create_account_setup_use_case(
    transport_factory: MailTransportFactoryProtocol,
    store: AccountStoreProtocol | None = None,
    settings: VerificationSettings | None = None,
) -> AccountSetupUseCase:
    """Monta o fluxo de setup; sem store, usa o store em memória."""
    return AccountSetupUseCase(
        create_verification_use_case(transport_factory, settings),
        store or MemoryAccountStore(),
        create_access_check_use_case(transport_factory, settings),
    )
