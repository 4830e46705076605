from fastapi import Request

from mini_ledger.ledger import Ledger


def get_ledger(request: Request) -> Ledger:
    """
    Ledger dependency for FastAPI routes; one instance per application.
    """
    return request.app.state.ledger
