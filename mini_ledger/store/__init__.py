"""In-memory stores for accounts and transfers."""

from mini_ledger.store.accounts import AccountLedger
from mini_ledger.store.sequence import IdSequence
from mini_ledger.store.transfers import CHARGEBACK_WINDOW, TransferEngine

__all__ = ["AccountLedger", "CHARGEBACK_WINDOW", "IdSequence", "TransferEngine"]
