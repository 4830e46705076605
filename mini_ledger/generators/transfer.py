"""Transfer draft generator."""

from typing import Iterator, Sequence

from mini_ledger.generators.base import BaseGenerator
from mini_ledger.models import TransferDraft


class TransferGenerator(BaseGenerator):
    """Generate transfer drafts between existing accounts.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    max_amount : int
        Upper bound for generated amounts, in cents.
    """

    def __init__(self, seed: int | None = None, max_amount: int = 500_000) -> None:
        super().__init__(seed)
        if max_amount < 1:
            raise ValueError(f"max_amount must be >= 1, got {max_amount}")
        self.max_amount = max_amount

    def generate(self, account_ids: Sequence[int]) -> TransferDraft:
        """Pick two distinct accounts and an amount.

        Raises
        ------
        ValueError
            If fewer than two account IDs are given.
        """
        if len(account_ids) < 2:
            raise ValueError("At least two accounts are needed to generate a transfer")

        origin, destination = self.rng.sample(list(account_ids), 2)
        # Round amounts (whole reais) are far more common than odd cents
        if self.rng.random() < 0.7:
            amount = self.rng.randint(1, max(1, self.max_amount // 100)) * 100
        else:
            amount = self.rng.randint(1, self.max_amount)

        return TransferDraft(
            origin_account_id=origin,
            destination_account_id=destination,
            amount=min(amount, self.max_amount),
        )

    def generate_stream(
        self,
        account_ids: Sequence[int],
        count: int,
        duplicate_rate: float = 0.0,
    ) -> Iterator[TransferDraft]:
        """Generate ``count`` drafts, re-sending the previous one at ``duplicate_rate``.

        Duplicates mimic a client double-submitting the same request.
        """
        if not 0.0 <= duplicate_rate <= 1.0:
            raise ValueError(f"duplicate_rate must be in [0, 1], got {duplicate_rate}")

        previous: TransferDraft | None = None
        for _ in range(count):
            if previous is not None and self.rng.random() < duplicate_rate:
                draft = TransferDraft(
                    origin_account_id=previous.origin_account_id,
                    destination_account_id=previous.destination_account_id,
                    amount=previous.amount,
                )
            else:
                draft = self.generate(account_ids)
            previous = draft
            yield draft
