"""
Estados canônicos da verificação de identidade da caixa postal.

A verificação percorre as estratégias em ordem fixa de prioridade;
cada estado não-terminal corresponde a uma estratégia (ou ao
FolderSync inicial) e cada terminal a um desfecho.
"""

from enum import StrEnum


class VerificationState(StrEnum):
    """
    Estados de uma tentativa de verificação.

    Estados não-terminais:
        - START: Tentativa criada, nenhuma chamada de rede feita
        - FOLDER_SYNC: Listando pastas (única etapa que pode falhar de vez)
        - CHECK_SENT: Lendo o From de uma mensagem em Itens Enviados
        - CHECK_INBOX: Lendo o To de uma mensagem na Caixa de Entrada
        - ROUND_TRIP: Enviando mensagem de teste para si mesmo

    Estados terminais:
        - SUCCESS: Endereço aceito (por evidência ou por fallback)
        - MISMATCH: Evidência contradiz o endereço digitado
        - ERROR: Falha de transporte no FolderSync
    """

    # Estados não-terminais
    START = "START"
    FOLDER_SYNC = "FOLDER_SYNC"
    CHECK_SENT = "CHECK_SENT"
    CHECK_INBOX = "CHECK_INBOX"
    ROUND_TRIP = "ROUND_TRIP"

    # Estados terminais
    SUCCESS = "SUCCESS"
    MISMATCH = "MISMATCH"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


# Uma vez em estado terminal, a tentativa não transita mais
TERMINAL_STATES: frozenset[VerificationState] = frozenset({
    VerificationState.SUCCESS,
    VerificationState.MISMATCH,
    VerificationState.ERROR,
})

DEFAULT_INITIAL_STATE: VerificationState = VerificationState.START


def is_terminal(state: VerificationState) -> bool:
    """Verifica se o estado encerra a tentativa."""
    return state in TERMINAL_STATES


def is_valid_state(state: VerificationState) -> bool:
    """Verifica se o valor é um estado válido do enum."""
    return isinstance(state, VerificationState)
