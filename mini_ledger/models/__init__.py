"""Domain models for the ledger."""

from mini_ledger.models.account import Account
from mini_ledger.models.base import Event
from mini_ledger.models.drafts import AccountDraft, TransferDraft
from mini_ledger.models.enums import TransferStatus, status_text
from mini_ledger.models.transfer import Transfer

__all__ = [
    "Account",
    "AccountDraft",
    "Event",
    "Transfer",
    "TransferDraft",
    "TransferStatus",
    "status_text",
]
