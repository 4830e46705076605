#!/usr/bin/env python3
"""Push synthetic transfer traffic through an in-memory ledger.

Opens a batch of generated accounts, submits random transfers (a share
of them immediate re-submissions) and prints the resulting counts.
With ``--snapshot`` the final accounts and transfers are written through
the configured sink as well.
"""

import argparse
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mini_ledger.config import LedgerConfig
from mini_ledger.exceptions import EmptyResultError
from mini_ledger.ledger import Ledger
from mini_ledger.logging import get_logger, setup_logging_from_config
from mini_ledger.scenarios import TransferTrafficScenario
from mini_ledger.sinks import build_sink

logger = get_logger(__name__)


def write_snapshot(ledger: Ledger, sink) -> None:
    """Write the current accounts and transfers as two batches."""
    for entity, lister in (("accounts", ledger.list_accounts), ("transfers", ledger.list_transfers)):
        try:
            records = lister()
        except EmptyResultError:
            records = []
        sink.write_batch(entity, records)
        logger.info("Wrote %d %s", len(records), entity)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Simulate transfer traffic on a mini-ledger")
    parser.add_argument(
        "--accounts",
        type=int,
        default=20,
        help="Number of accounts to open (default: 20)",
    )
    parser.add_argument(
        "--transfers",
        type=int,
        default=200,
        help="Number of transfer requests to submit (default: 200)",
    )
    parser.add_argument(
        "--duplicate-rate",
        type=float,
        default=0.05,
        help="Share of requests that repeat the previous one (default: 0.05)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED env or none)",
    )
    parser.add_argument(
        "--snapshot",
        action="store_true",
        help="Write final accounts and transfers through the configured sink",
    )
    args = parser.parse_args()

    config = LedgerConfig.from_env()
    setup_logging_from_config(config)

    sink = build_sink(config)
    ledger = Ledger.from_config(config, sink=sink)
    scenario = TransferTrafficScenario(
        num_accounts=args.accounts,
        num_transfers=args.transfers,
        duplicate_rate=args.duplicate_rate,
        seed=args.seed if args.seed is not None else config.seed,
        ledger=ledger,
    )

    t0 = time.perf_counter()
    try:
        scenario.generate()
        if args.snapshot:
            if sink is None:
                logger.warning("--snapshot given but EVENT_SINK is 'none'; nothing written")
            else:
                write_snapshot(ledger, sink)
    finally:
        if sink is not None:
            sink.close()
    elapsed = time.perf_counter() - t0

    print(f"\nSimulation finished in {elapsed:.2f}s")
    for key, value in ledger.summary().items():
        print(f"  {key}: {value}")
    print("\nOutcomes:")
    for outcome, count in scenario.outcomes.most_common():
        print(f"  {outcome}: {count}")


if __name__ == "__main__":
    main()
