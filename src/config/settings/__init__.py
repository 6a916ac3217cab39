"""Agregador de settings do verificador de identidade EAS.

Re-exporta settings e funções de cada módulo.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# Verificação de identidade
from config.settings.verification import (
    DEFAULT_ACCESS_CHECK_BODY,
    DEFAULT_PROBE_BODY,
    DEFAULT_PROBE_SUBJECT,
    VerificationSettings,
    get_verification_settings,
)

__all__ = [
    # Constants
    "DEFAULT_ACCESS_CHECK_BODY",
    "DEFAULT_PROBE_BODY",
    "DEFAULT_PROBE_SUBJECT",
    # Base
    "BaseSettings",
    "Environment",
    # Verificação
    "VerificationSettings",
    "get_base_settings",
    "get_verification_settings",
]
