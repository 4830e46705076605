"""HTTP request layer over the ledger."""

from mini_ledger.api.app import create_app

__all__ = ["create_app"]
