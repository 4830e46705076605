"""Account model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Account:
    """Ledger account.

    ``balance`` is held in cents and never goes negative. Only the balance
    changes over the account's life; a new record is written back to the
    ledger for each change.
    """

    account_id: int
    name: str
    cpf: str  # 11 digits, no punctuation
    balance: int
    created_at: datetime
