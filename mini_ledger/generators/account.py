"""Account draft generator."""

from typing import Iterator

from mini_ledger.generators.base import BaseGenerator
from mini_ledger.models import AccountDraft
from mini_ledger.validation import normalize_cpf


class AccountGenerator(BaseGenerator):
    """Generate valid account drafts with Brazilian names and CPFs.

    Opening balances are drawn log-normally (median around R$ 2.000,00)
    and expressed in cents.
    """

    MIN_BALANCE = 0
    MAX_BALANCE = 10_000_000  # R$ 100.000,00

    def generate(self) -> AccountDraft:
        """Generate a single account draft."""
        balance = int(self.rng.lognormvariate(mu=12.2, sigma=1.0))
        balance = max(self.MIN_BALANCE, min(balance, self.MAX_BALANCE))

        return AccountDraft(
            name=self.fake.name(),
            cpf=normalize_cpf(self.fake.cpf()),
            balance=balance,
        )

    def generate_batch(self, count: int) -> Iterator[AccountDraft]:
        """Generate multiple account drafts.

        Parameters
        ----------
        count : int
            Number of drafts to generate.

        Yields
        ------
        AccountDraft
            Generated drafts.
        """
        for _ in range(count):
            yield self.generate()
