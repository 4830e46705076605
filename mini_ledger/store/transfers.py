"""Transfer store: authorization rules, chargeback guard and status lifecycle."""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime, timedelta

from mini_ledger.exceptions import (
    AuthorizationError,
    ChargebackRiskError,
    InsufficientBalanceError,
    InvalidAmountError,
    NoTransfersError,
    SameAccountError,
    TransferNotFoundError,
)
from mini_ledger.models import Account, Transfer, TransferStatus
from mini_ledger.store.sequence import IdSequence

logger = logging.getLogger(__name__)

# A confirmed transfer blocks identical ones created within this window
CHARGEBACK_WINDOW = timedelta(seconds=10)


class TransferEngine:
    """In-memory store that creates, judges and tracks transfers.

    The engine never reads or writes account balances. It only receives
    account records from the caller and marks transfers accordingly.

    Parameters
    ----------
    starting_id : int
        Seed for transfer IDs; the first created transfer gets ``starting_id + 1``.
    transfers : Iterable[Transfer]
        Records to pre-load, keyed by their own ``transfer_id``. No ID may
        exceed ``starting_id``, otherwise ``ValueError`` is raised.
    clock : Callable[[], datetime]
        Source of the current time, for ``created_at`` and the chargeback window.
    """

    def __init__(
        self,
        starting_id: int = 0,
        transfers: Iterable[Transfer] = (),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._ids = IdSequence(starting_id)
        self._clock = clock
        self._lock = threading.Lock()
        self._transfers: dict[int, Transfer] = {t.transfer_id: t for t in transfers}
        if self._transfers and max(self._transfers) > starting_id:
            raise ValueError(
                f"preloaded transfer ID {max(self._transfers)} is above starting_id {starting_id}"
            )

    def create_transfer(self, origin_id: int, destination_id: int, amount: int) -> int:
        """Record a new transfer in status ``CREATED`` and return its ID.

        No business rule is checked here; see :meth:`authorize_transfer`.
        """
        transfer_id = self._ids.next()
        transfer = Transfer(
            transfer_id=transfer_id,
            origin_account_id=origin_id,
            destination_account_id=destination_id,
            amount=amount,
            created_at=self._clock(),
            status=TransferStatus.CREATED,
        )
        with self._lock:
            self._transfers[transfer_id] = transfer
        return transfer_id

    def authorize_transfer(
        self,
        origin: Account,
        destination: Account,
        amount: int,
        transfer_id: int,
    ) -> None:
        """Judge a transfer against the business rules.

        Rules are evaluated in order and the first failure wins:

        1. origin and destination must differ
        2. amount must be positive
        3. origin balance must cover the amount
        4. no identical transfer may have been confirmed within
           :data:`CHARGEBACK_WINDOW`

        The transfer passes through ``AUTHORIZING`` and ends in
        ``AUTHORIZED`` or ``NOT_AUTHORIZED``. Balances are left untouched.

        Raises
        ------
        SameAccountError, InvalidAmountError, InsufficientBalanceError, ChargebackRiskError
            When the corresponding rule rejects the transfer.
        TransferNotFoundError
            If ``transfer_id`` is unknown.
        """
        self._change_status(transfer_id, TransferStatus.AUTHORIZING)

        try:
            if origin.account_id == destination.account_id:
                raise SameAccountError()
            if amount <= 0:
                raise InvalidAmountError()
            if origin.balance < amount:
                raise InsufficientBalanceError()
            if self.is_chargeback_risk(origin.account_id, destination.account_id, amount):
                raise ChargebackRiskError()
        except AuthorizationError as e:
            self._change_status(transfer_id, TransferStatus.NOT_AUTHORIZED)
            logger.warning(
                "Transfer %d not authorized: %s",
                transfer_id,
                e,
                extra={"transfer_id": transfer_id, "status": TransferStatus.NOT_AUTHORIZED.value},
            )
            raise

        self._change_status(transfer_id, TransferStatus.AUTHORIZED)

    def is_chargeback_risk(self, origin_id: int, destination_id: int, amount: int) -> bool:
        """Whether an identical transfer was confirmed within the chargeback window."""
        now = self._clock()
        with self._lock:
            transfers = list(self._transfers.values())

        for transfer in transfers:
            if (
                transfer.origin_account_id == origin_id
                and transfer.destination_account_id == destination_id
                and transfer.amount == amount
                and transfer.status == TransferStatus.CONFIRMED
                and now < transfer.created_at + CHARGEBACK_WINDOW
            ):
                return True
        return False

    def confirm(self, transfer_id: int) -> None:
        """Set the status to ``CONFIRMED`` regardless of the current one."""
        self._change_status(transfer_id, TransferStatus.CONFIRMED)

    def cancel(self, transfer_id: int) -> None:
        """Set the status to ``CANCELLED`` regardless of the current one."""
        self._change_status(transfer_id, TransferStatus.CANCELLED)

    def get_transfer(self, transfer_id: int) -> Transfer:
        """Return the transfer with the given ID."""
        with self._lock:
            transfer = self._transfers.get(transfer_id)
        if transfer is None:
            raise TransferNotFoundError(transfer_id)
        return transfer

    def list_all(self) -> list[Transfer]:
        """Return every transfer sorted by ID.

        Raises
        ------
        NoTransfersError
            If no transfer was ever recorded.
        """
        with self._lock:
            transfers = list(self._transfers.values())
        if not transfers:
            raise NoTransfersError()
        return sorted(transfers, key=lambda t: t.transfer_id)

    def count_by_status(self) -> dict[TransferStatus, int]:
        """Number of transfers currently in each status."""
        counts = {status: 0 for status in TransferStatus}
        with self._lock:
            for transfer in self._transfers.values():
                counts[transfer.status] += 1
        return counts

    @property
    def max_id(self) -> int:
        """Last issued transfer ID."""
        return self._ids.current

    def __len__(self) -> int:
        with self._lock:
            return len(self._transfers)

    def _change_status(self, transfer_id: int, status: TransferStatus) -> None:
        with self._lock:
            transfer = self._transfers.get(transfer_id)
            if transfer is None:
                raise TransferNotFoundError(transfer_id)
            self._transfers[transfer_id] = replace(transfer, status=status)
