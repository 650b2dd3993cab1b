"""Document and contact validation tests."""

from __future__ import annotations

import pytest

from app.utils.validation import (
    clean_digits,
    format_cep,
    format_cnpj,
    format_cpf,
    format_phone,
    validate_cep,
    validate_cnpj,
    validate_cpf,
    validate_name,
    validate_phone,
)


def test_clean_digits_strips_punctuation() -> None:
    assert clean_digits("529.982.247-25") == "52998224725"


@pytest.mark.parametrize(
    ("cpf", "expected"),
    [
        ("529.982.247-25", True),
        ("52998224725", True),
        ("529.982.247-26", False),
        ("111.111.111-11", False),
        ("123", False),
    ],
)
def test_validate_cpf(cpf: str, expected: bool) -> None:
    assert validate_cpf(cpf) is expected


@pytest.mark.parametrize(
    ("cnpj", "expected"),
    [
        ("11.222.333/0001-81", True),
        ("11.222.333/0001-82", False),
        ("00.000.000/0000-00", False),
        ("1122233300018", False),
    ],
)
def test_validate_cnpj(cnpj: str, expected: bool) -> None:
    assert validate_cnpj(cnpj) is expected


def test_validate_cep_and_phone() -> None:
    assert validate_cep("01310-100")
    assert not validate_cep("0131010")
    assert validate_phone("(11) 98888-8888")
    assert validate_phone("1133334444")
    assert not validate_phone("98888-888")


def test_validate_name() -> None:
    assert validate_name("Ana Souza")
    assert not validate_name("Al")
    assert not validate_name("R2D2 Silva")


def test_formatters() -> None:
    assert format_cpf("52998224725") == "529.982.247-25"
    assert format_cnpj("11222333000181") == "11.222.333/0001-81"
    assert format_cep("01310100") == "01310-100"
    assert format_phone("11988888888") == "(11) 98888-8888"
