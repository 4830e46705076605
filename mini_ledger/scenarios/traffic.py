"""Transfer traffic scenario: random transfers with double submissions."""

import logging
from collections import Counter

from mini_ledger.exceptions import AuthorizationError
from mini_ledger.generators import AccountGenerator, TransferGenerator
from mini_ledger.ledger import Ledger
from mini_ledger.sinks import EventSink

logger = logging.getLogger(__name__)


class TransferTrafficScenario:
    """Open accounts and push a stream of transfers through a ledger.

    This scenario creates:
    - ``num_accounts`` accounts with generated holders and balances
    - ``num_transfers`` transfer requests between them, a share of which
      are immediate re-submissions of the previous request

    Re-submissions of a confirmed transfer land inside the chargeback
    window and are rejected, so ``outcomes["ChargebackRiskError"]`` tracks
    the duplicate rate closely.
    """

    def __init__(
        self,
        num_accounts: int = 20,
        num_transfers: int = 200,
        duplicate_rate: float = 0.05,
        seed: int | None = None,
        sink: EventSink | None = None,
        ledger: Ledger | None = None,
    ) -> None:
        """Initialize transfer traffic scenario.

        Parameters
        ----------
        num_accounts : int
            Number of accounts to open (at least 2).
        num_transfers : int
            Number of transfer requests to submit.
        duplicate_rate : float
            Probability that a request repeats the previous one (0.0 to 1.0).
        seed : int | None
            Random seed for reproducibility.
        sink : EventSink | None
            Audit sink for a ledger built by the scenario.
        ledger : Ledger | None
            Ledger to drive; a new one is built when omitted.
        """
        if num_accounts < 2:
            raise ValueError(f"num_accounts must be >= 2, got {num_accounts}")

        self.num_accounts = num_accounts
        self.num_transfers = num_transfers
        self.duplicate_rate = duplicate_rate
        self.seed = seed

        self.ledger = ledger if ledger is not None else Ledger(sink=sink)
        self._account_gen = AccountGenerator(seed=seed)
        self._transfer_gen = TransferGenerator(seed=seed)

        self.outcomes: Counter[str] = Counter()

    def generate(self) -> Ledger:
        """Run the scenario.

        Returns
        -------
        Ledger
            Ledger holding the resulting accounts and transfers.
        """
        logger.info(
            "Starting transfer traffic scenario: %d accounts, %d transfers, %.1f%% duplicates",
            self.num_accounts,
            self.num_transfers,
            self.duplicate_rate * 100,
        )

        account_ids = self.ledger.open_accounts(self._account_gen.generate_batch(self.num_accounts))
        logger.info("Opened %d accounts", len(account_ids))

        for draft in self._transfer_gen.generate_stream(
            account_ids, self.num_transfers, self.duplicate_rate
        ):
            try:
                self.ledger.execute_transfer(
                    draft.origin_account_id,
                    draft.destination_account_id,
                    draft.amount,
                )
            except AuthorizationError as e:
                self.outcomes[type(e).__name__] += 1
            else:
                self.outcomes["confirmed"] += 1

        logger.info("Scenario complete: %s", dict(self.outcomes))
        return self.ledger
