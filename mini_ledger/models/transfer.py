"""Transfer model."""

from dataclasses import dataclass
from datetime import datetime

from mini_ledger.models.enums import TransferStatus, status_text


@dataclass(frozen=True)
class Transfer:
    """Money movement between two accounts.

    Records are never deleted; a rejected transfer stays in the engine
    with status ``NOT_AUTHORIZED``.
    """

    transfer_id: int
    origin_account_id: int
    destination_account_id: int
    amount: int  # cents
    created_at: datetime
    status: TransferStatus = TransferStatus.CREATED

    @property
    def status_text(self) -> str:
        """Display text for the current status."""
        return status_text(self.status)
