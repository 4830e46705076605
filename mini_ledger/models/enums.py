"""Enumeration types for ledger entities."""

from enum import Enum


class TransferStatus(str, Enum):
    CREATED = "CREATED"
    AUTHORIZING = "AUTHORIZING"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    AUTHORIZED = "AUTHORIZED"
    CANCELLED = "CANCELLED"
    CONFIRMED = "CONFIRMED"

    @property
    def is_terminal(self) -> bool:
        """No further engine-driven transition is expected from this status."""
        return self in _TERMINAL


_TERMINAL = frozenset(
    {TransferStatus.NOT_AUTHORIZED, TransferStatus.CANCELLED, TransferStatus.CONFIRMED}
)


def status_text(status: TransferStatus) -> str:
    """Return the display text for a transfer status."""
    if status is TransferStatus.CREATED:
        return "Created"
    if status is TransferStatus.AUTHORIZING:
        return "Authorizing"
    if status is TransferStatus.NOT_AUTHORIZED:
        return "Not Authorized"
    if status is TransferStatus.AUTHORIZED:
        return "Authorized"
    if status is TransferStatus.CANCELLED:
        return "Cancelled"
    if status is TransferStatus.CONFIRMED:
        return "Confirmed"
    raise ValueError(f"Unknown transfer status: {status!r}")
