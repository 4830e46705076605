"""Input validation for account data."""

import re

from mini_ledger.exceptions import InvalidAmountError, InvalidNameError, InvalidTaxIdError

CPF_PATTERN = re.compile(r"[0-9]{11}")


def validate_name(name: str) -> str:
    """Return the stripped name, rejecting blank names."""
    if name is None or not name.strip():
        raise InvalidNameError()
    return name.strip()


def validate_cpf(cpf: str) -> str:
    """Return the CPF unchanged if it is exactly 11 ASCII digits."""
    if cpf is None or not CPF_PATTERN.fullmatch(cpf):
        raise InvalidTaxIdError()
    return cpf


def validate_balance(balance: int) -> int:
    """Opening balances are unsigned cents."""
    if balance < 0:
        raise InvalidAmountError("the balance entered is invalid: it cannot be negative")
    return balance


def normalize_cpf(raw: str) -> str:
    """Strip the ``XXX.XXX.XXX-XX`` punctuation from a formatted CPF."""
    return re.sub(r"[^0-9]", "", raw)
