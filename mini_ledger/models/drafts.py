"""Unpersisted inputs for accounts and transfers."""

from dataclasses import dataclass


@dataclass
class AccountDraft:
    """Data needed to open an account."""

    name: str
    cpf: str
    balance: int  # cents


@dataclass
class TransferDraft:
    """Data needed to request a transfer."""

    origin_account_id: int
    destination_account_id: int
    amount: int  # cents
