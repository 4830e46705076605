#!/usr/bin/env python3
"""Serve the mini-ledger HTTP API.

Configuration comes from the environment (see ``LedgerConfig.from_env``);
command-line flags override the listen address.
"""

import argparse
import sys
from pathlib import Path

import uvicorn

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from mini_ledger.api import create_app
from mini_ledger.config import LedgerConfig
from mini_ledger.ledger import Ledger
from mini_ledger.logging import get_logger, setup_logging_from_config
from mini_ledger.sinks import build_sink

logger = get_logger(__name__)


def main() -> None:
    """Main entry point."""
    config = LedgerConfig.from_env()

    parser = argparse.ArgumentParser(description="Serve the mini-ledger HTTP API")
    parser.add_argument(
        "--host",
        type=str,
        default=config.server.host,
        help=f"Interface to bind (default: {config.server.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.server.port,
        help=f"Port to listen on (default: {config.server.port})",
    )
    args = parser.parse_args()

    setup_logging_from_config(config)
    ledger = Ledger.from_config(config, sink=build_sink(config))
    app = create_app(ledger)

    logger.info(
        "Listening on %s:%d (event sink: %s)", args.host, args.port, config.event_sink
    )
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
