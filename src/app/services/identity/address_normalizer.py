"""Normalização de endereços vindos dos cabeçalhos EAS.

O servidor devolve From/To em formatos variados: `Nome <user@dominio>`,
endereço puro, ou um DN X.500 (`/O=ORG/OU=.../CN=JOAO`) sem SMTP
resolvível. Tudo é reduzido a uma forma comparável, em minúsculas.

`extract_address` é idempotente: todo endereço extraído é um token
único `local@dominio` (sem espaços, colchetes ou separadores), e um
token nesse formato é devolvido como está. Endereços internacionais
(`иван@почта.рф`) e domínios com `_` passam pelo formato entre
colchetes sem restrição de alfabeto.
"""

from __future__ import annotations

import re

# Qualquer coisa exceto espaço, colchetes, @ e separadores de lista
_TOKEN = r"""[^\s<>@,;:"'()\[\]]+"""

_ADDRESS_TOKEN_RE = re.compile(rf"{_TOKEN}@{_TOKEN}")

_BRACKETED_RE = re.compile(rf"<\s*({_TOKEN}@{_TOKEN})\s*>")

_LOCAL_PART = r"[a-z0-9._%+-]+"

_BARE_RE = re.compile(
    rf"(?<![a-z0-9._%+-])({_LOCAL_PART}@(?:[a-z0-9-]+\.)+[a-z]{{2,}})(?!\.?[a-z0-9-])"
)


def extract_address(raw: str) -> str:
    """Extrai o endereço canônico de um cabeçalho livre.

    Ordem:
        0. o texto já é um endereço único: devolve como está
        1. endereço entre `<...>`
        2. `local@dominio.tld` solto no texto
        3. o próprio texto em minúsculas, sem espaços nas pontas

    No caso 3 o resultado não é um endereço utilizável (ex: DN X.500
    ou cabeçalho malformado); quem chama deve checar com
    `is_usable_address`.
    """
    text = raw.lower().strip()

    if _ADDRESS_TOKEN_RE.fullmatch(text):
        return text

    match = _BRACKETED_RE.search(text)
    if match:
        return match.group(1)

    match = _BARE_RE.search(text)
    if match:
        return match.group(1)

    return text


def addresses_match(a: str, b: str) -> bool:
    """Compara dois cabeçalhos pela identidade do endereço extraído."""
    return extract_address(a) == extract_address(b)


def is_usable_address(value: str) -> bool:
    """Só um endereço normalizado (token único com `@`) serve como evidência.

    O texto bruto devolvido no último recurso de `extract_address`
    pode conter `@` e mesmo assim não ser comparável.
    """
    return _ADDRESS_TOKEN_RE.fullmatch(value) is not None


def address_domain(value: str) -> str:
    """Domínio do endereço, para logs sem PII (vazio se não houver)."""
    _, sep, domain = value.rpartition("@")
    return domain if sep else ""
