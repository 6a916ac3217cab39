"""Testes para a normalização de endereços dos cabeçalhos EAS."""

from __future__ import annotations

import itertools

import pytest

from app.services.identity.address_normalizer import (
    address_domain,
    addresses_match,
    extract_address,
    is_usable_address,
)

# Amostra variada de cabeçalhos reais e malformados
HEADER_SAMPLES = [
    "Jane <jane@corp.com>",
    '"Doe, Jane" <Jane.Doe@Corp.COM>',
    "< spaced@corp.com >",
    "bob@corp.com",
    "  BOB@CORP.COM  ",
    "Contato: bob+tag@mail.corp.com.br, obrigado.",
    "/O=CORP/OU=EXCHANGE ADMINISTRATIVE GROUP/CN=RECIPIENTS/CN=JANE",
    "Jane </O=CORP/OU=FIRST/CN=RECIPIENTS/CN=JANE>",
    "<user@localhost>",
    "<a@b.com x>",
    "x@foo.com.1",
    "jöe@corp.com",
    "two@corp.com, three@corp.com",
    "",
    "   ",
    "K@corp.com",
    "not an address",
    "Иван <Иван@Почта.РФ>",
    "Jane <jane@my_corp.com>",
    "jane <jane@corp.com",
    "a@b@c",
    "Ä.b@corp.com",
]


class TestExtractAddress:
    """Testes para extract_address."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Jane <jane@corp.com>", "jane@corp.com"),
            ('"Doe, Jane" <Jane.Doe@Corp.COM>', "jane.doe@corp.com"),
            ("< spaced@corp.com >", "spaced@corp.com"),
            ("bob@corp.com", "bob@corp.com"),
            ("  BOB@CORP.COM  ", "bob@corp.com"),
            ("Contato: bob+tag@mail.corp.com.br, obrigado.", "bob+tag@mail.corp.com.br"),
            ("<user@localhost>", "user@localhost"),
            ("two@corp.com, three@corp.com", "two@corp.com"),
            ("Иван <иван@почта.рф>", "иван@почта.рф"),
            ("Jane <jane@my_corp.com>", "jane@my_corp.com"),
            ("jöe@corp.com", "jöe@corp.com"),
        ],
    )
    def test_extracts_canonical_address(self, raw: str, expected: str) -> None:
        assert extract_address(raw) == expected

    def test_bracketed_address_wins_over_bare_text(self) -> None:
        """Endereço entre colchetes tem prioridade sobre texto solto."""
        assert extract_address("alias@other.com <real@corp.com>") == "real@corp.com"

    def test_distinguished_name_falls_back_to_lowercase_text(self) -> None:
        """DN X.500 sem SMTP vira texto em minúsculas, sem @."""
        raw = " /O=CORP/OU=EXCHANGE/CN=RECIPIENTS/CN=JANE "
        result = extract_address(raw)
        assert result == "/o=corp/ou=exchange/cn=recipients/cn=jane"
        assert "@" not in result

    def test_bracketed_dn_is_not_an_address(self) -> None:
        result = extract_address("Jane </O=CORP/OU=FIRST/CN=RECIPIENTS/CN=JANE>")
        assert "@" not in result

    def test_empty_input(self) -> None:
        assert extract_address("") == ""
        assert extract_address("   ") == ""

    @pytest.mark.parametrize("raw", HEADER_SAMPLES)
    def test_is_idempotent(self, raw: str) -> None:
        once = extract_address(raw)
        assert extract_address(once) == once

    @pytest.mark.parametrize("raw", HEADER_SAMPLES)
    def test_result_is_lowercase_and_trimmed(self, raw: str) -> None:
        result = extract_address(raw)
        assert result == result.strip()
        assert result == result.lower()


class TestAddressesMatch:
    """Testes para addresses_match."""

    def test_case_insensitive_match_across_formats(self) -> None:
        assert addresses_match("Jane <jane@corp.com>", "JANE@CORP.COM") is True

    def test_different_addresses_do_not_match(self) -> None:
        assert addresses_match("bob@corp.com", "alice@corp.com") is False

    def test_display_name_is_ignored(self) -> None:
        assert addresses_match("Bob <bob@corp.com>", "Robert <BOB@corp.com>") is True

    @pytest.mark.parametrize(
        ("a", "b"),
        list(itertools.combinations(HEADER_SAMPLES, 2)),
    )
    def test_is_symmetric(self, a: str, b: str) -> None:
        assert addresses_match(a, b) == addresses_match(b, a)


class TestHelpers:
    """Testes para is_usable_address e address_domain."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("jane@corp.com", True),
            ("user@localhost", True),
            ("/o=corp/cn=jane", False),
            ("", False),
            ("jane <jane@corp.com", False),
            ("a@b@c", False),
        ],
    )
    def test_is_usable_address(self, value: str, expected: bool) -> None:
        assert is_usable_address(value) is expected

    def test_address_domain(self) -> None:
        assert address_domain("jane@corp.com") == "corp.com"
        assert address_domain("/o=corp/cn=jane") == ""
