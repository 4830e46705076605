"""Synthetic account and transfer generators."""

from mini_ledger.generators.account import AccountGenerator
from mini_ledger.generators.transfer import TransferGenerator

__all__ = ["AccountGenerator", "TransferGenerator"]
