"""Brazilian document, postal code and contact validators."""

from __future__ import annotations

import re

_NON_DIGIT = re.compile(r"\D")
_REPEATED = re.compile(r"^(\d)\1+$")


def clean_digits(value: str) -> str:
    """Strip every non-numeric character."""
    return _NON_DIGIT.sub("", value or "")


def _cpf_digit(digits: str, weight_start: int) -> int:
    total = sum(int(char) * weight for char, weight in zip(digits, range(weight_start, 1, -1)))
    rest = (total * 10) % 11
    return 0 if rest == 10 else rest


def validate_cpf(cpf: str) -> bool:
    """Validate an 11-digit CPF including both check digits."""
    clean = clean_digits(cpf)
    if len(clean) != 11 or _REPEATED.match(clean):
        return False
    if _cpf_digit(clean[:9], 10) != int(clean[9]):
        return False
    return _cpf_digit(clean[:10], 11) == int(clean[10])


def _cnpj_digit(digits: str) -> int:
    weights = list(range(len(digits) - 7, 1, -1)) + list(range(9, 1, -1))
    total = sum(int(char) * weight for char, weight in zip(digits, weights))
    rest = total % 11
    return 0 if rest < 2 else 11 - rest


def validate_cnpj(cnpj: str) -> bool:
    """Validate a 14-digit CNPJ including both check digits."""
    clean = clean_digits(cnpj)
    if len(clean) != 14 or _REPEATED.match(clean):
        return False
    if _cnpj_digit(clean[:12]) != int(clean[12]):
        return False
    return _cnpj_digit(clean[:13]) == int(clean[13])


def validate_cep(cep: str) -> bool:
    """CEP must carry exactly eight digits."""
    return len(clean_digits(cep)) == 8


def validate_phone(phone: str) -> bool:
    """Accept landline (10 digits) or mobile (11 digits) numbers."""
    return len(clean_digits(phone)) in {10, 11}


def validate_name(name: str) -> bool:
    """Names need at least three characters and no digits."""
    if not name:
        return False
    return len(name.strip()) >= 3 and not re.search(r"\d", name)


def format_cpf(value: str) -> str:
    """Format as ``000.000.000-00`` (partial input is formatted progressively)."""
    clean = clean_digits(value)[:11]
    parts = [clean[:3], clean[3:6], clean[6:9]]
    head = ".".join(part for part in parts if part)
    return f"{head}-{clean[9:]}" if len(clean) > 9 else head


def format_cnpj(value: str) -> str:
    """Format as ``00.000.000/0000-00``."""
    clean = clean_digits(value)[:14]
    head = ".".join(part for part in (clean[:2], clean[2:5], clean[5:8]) if part)
    if len(clean) > 8:
        head = f"{head}/{clean[8:12]}"
    if len(clean) > 12:
        head = f"{head}-{clean[12:]}"
    return head


def format_cep(value: str) -> str:
    """Format as ``00000-000``."""
    clean = clean_digits(value)[:8]
    return f"{clean[:5]}-{clean[5:]}" if len(clean) > 5 else clean


def format_phone(value: str) -> str:
    """Format as ``(11) 99999-9999`` for mobiles or ``(11) 9999-9999`` for landlines."""
    clean = clean_digits(value)
    if len(clean) > 10:
        return f"({clean[:2]}) {clean[2:7]}-{clean[7:11]}"
    if len(clean) > 5:
        return f"({clean[:2]}) {clean[2:6]}-{clean[6:10]}"
    if len(clean) > 2:
        return f"({clean[:2]}) {clean[2:]}"
    return clean
