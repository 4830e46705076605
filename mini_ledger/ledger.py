"""Ledger facade: one critical section for authorize, apply and confirm."""

import logging
import threading
import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from mini_ledger.exceptions import AuthorizationError, SinkError
from mini_ledger.models import Account, AccountDraft, Event, Transfer, TransferStatus
from mini_ledger.sinks.serialization import to_dict
from mini_ledger.store import AccountLedger, TransferEngine

if TYPE_CHECKING:
    from mini_ledger.config import LedgerConfig
    from mini_ledger.sinks import EventSink

logger = logging.getLogger(__name__)

EVENT_SOURCE = "mini-ledger"


class Ledger:
    """Combined account and transfer store.

    Owns an :class:`AccountLedger` and a :class:`TransferEngine` and
    serializes every transfer so that a second transfer from the same
    origin can never be authorized against a stale balance.

    Parameters
    ----------
    accounts : AccountLedger | None
        Account store; a fresh one starting at ID 0 when omitted.
    transfers : TransferEngine | None
        Transfer store; a fresh one starting at ID 0 when omitted.
    sink : EventSink | None
        Receives the audit trail (account and transfer events).
    topic_prefix : str
        Events go to ``<prefix>.accounts`` and ``<prefix>.transfers``.
    clock : Callable[[], datetime]
        Time source for event timestamps and for stores built here.
    """

    def __init__(
        self,
        accounts: AccountLedger | None = None,
        transfers: TransferEngine | None = None,
        sink: "EventSink | None" = None,
        topic_prefix: str = "ledger",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.accounts = accounts if accounts is not None else AccountLedger(clock=clock)
        self.transfers = transfers if transfers is not None else TransferEngine(clock=clock)
        self.sink = sink
        self.topic_prefix = topic_prefix
        self._clock = clock
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: "LedgerConfig", sink: "EventSink | None" = None) -> "Ledger":
        """Build a ledger with stores seeded from the configured starting IDs."""
        return cls(
            accounts=AccountLedger(starting_id=config.account_starting_id),
            transfers=TransferEngine(starting_id=config.transfer_starting_id),
            sink=sink,
            topic_prefix=config.kafka.topic_prefix,
        )

    # Accounts

    def create_account(self, name: str, cpf: str, balance: int) -> int:
        """Open an account and publish ``account.created``."""
        account_id = self.accounts.create_account(name, cpf, balance)
        logger.info("Account %d created", account_id, extra={"account_id": account_id})
        self._publish("accounts", "account.created", str(account_id), self.accounts.get_account(account_id))
        return account_id

    def open_accounts(self, drafts: Iterable[AccountDraft]) -> list[int]:
        """Open one account per draft, returning the new IDs in order."""
        return [self.create_account(d.name, d.cpf, d.balance) for d in drafts]

    def get_account(self, account_id: int) -> Account:
        return self.accounts.get_account(account_id)

    def get_balance(self, account_id: int) -> int:
        return self.accounts.get_balance(account_id)

    def list_accounts(self) -> list[Account]:
        return self.accounts.list_all()

    # Transfers

    def execute_transfer(self, origin_id: int, destination_id: int, amount: int) -> int:
        """Create, authorize and settle a transfer as one atomic unit.

        Both accounts are looked up first; a missing account aborts before
        any transfer record exists. A rejected transfer stays recorded as
        ``NOT_AUTHORIZED`` and the rule's error propagates. On success the
        origin is debited, the destination credited and the transfer
        confirmed.

        Returns
        -------
        int
            ID of the confirmed transfer.

        Raises
        ------
        AccountNotFoundError
            If either account does not exist.
        AuthorizationError
            If a business rule rejects the transfer. A failure to publish the
            rejection event is chained as ``__cause__``.
        SinkError
            If the transfer was confirmed but its event could not be
            published; ``subject`` carries the transfer ID.
        """
        with self._lock:
            origin = self.accounts.get_account(origin_id)
            destination = self.accounts.get_account(destination_id)

            transfer_id = self.transfers.create_transfer(origin_id, destination_id, amount)
            try:
                self.transfers.authorize_transfer(origin, destination, amount, transfer_id)
            except AuthorizationError as e:
                try:
                    self._publish_transfer("transfer.not_authorized", transfer_id)
                except SinkError as sink_error:
                    raise e from sink_error
                raise

            # Same-account transfers were rejected above, so the two records are distinct
            self.accounts.set_account(replace(origin, balance=origin.balance - amount))
            self.accounts.set_account(replace(destination, balance=destination.balance + amount))
            self.transfers.confirm(transfer_id)

        logger.info(
            "Transfer %d confirmed: %d -> %d amount=%d",
            transfer_id,
            origin_id,
            destination_id,
            amount,
            extra={
                "transfer_id": transfer_id,
                "origin_account_id": origin_id,
                "destination_account_id": destination_id,
                "amount": amount,
                "status": TransferStatus.CONFIRMED.value,
            },
        )
        self._publish_transfer("transfer.confirmed", transfer_id)
        return transfer_id

    def cancel_transfer(self, transfer_id: int) -> None:
        """Mark a transfer as cancelled; balances are not touched."""
        with self._lock:
            self.transfers.cancel(transfer_id)
        logger.info("Transfer %d cancelled", transfer_id, extra={"transfer_id": transfer_id})
        self._publish_transfer("transfer.cancelled", transfer_id)

    def get_transfer(self, transfer_id: int) -> Transfer:
        return self.transfers.get_transfer(transfer_id)

    def list_transfers(self) -> list[Transfer]:
        return self.transfers.list_all()

    def summary(self) -> dict[str, int]:
        """Return counts of accounts, transfers and transfers per status."""
        by_status = self.transfers.count_by_status()
        return {
            "accounts": len(self.accounts),
            "transfers": len(self.transfers),
            **{f"transfers_{status.value.lower()}": count for status, count in by_status.items()},
        }

    # Audit trail

    def _publish_transfer(self, event_type: str, transfer_id: int) -> None:
        transfer = self.transfers.get_transfer(transfer_id)
        self._publish("transfers", event_type, str(transfer_id), transfer)

    def _publish(self, entity: str, event_type: str, subject: str, record: Any) -> None:
        if self.sink is None:
            return

        event = Event(
            event_id=uuid.uuid4().hex,
            event_type=event_type,
            event_time=self._clock(),
            source=EVENT_SOURCE,
            subject=subject,
            data=_event_data(record, to_dict(record)),
        )
        try:
            self.sink.send(f"{self.topic_prefix}.{entity}", event)
        except SinkError as e:
            # Ledger state is already committed at this point
            logger.exception("Failed to publish %s for %s", event_type, subject)
            raise SinkError(
                f"failed to publish {event_type} for {subject}: {e}", subject=subject
            ) from e


def _event_data(record: Any, public: dict) -> dict:
    """Event payload: the public record plus the raw IDs sinks key messages by."""
    data = dict(public)
    if isinstance(record, Account):
        data["account_id"] = record.account_id
    elif isinstance(record, Transfer):
        data["transfer_id"] = record.transfer_id
        data["origin_account_id"] = record.origin_account_id
    return data
