"""Tests for TransferEngine: rules, chargeback window and status lifecycle."""

from datetime import datetime, timedelta

import pytest

from mini_ledger.exceptions import (
    ChargebackRiskError,
    InsufficientBalanceError,
    InvalidAmountError,
    NoTransfersError,
    SameAccountError,
    TransferNotFoundError,
)
from mini_ledger.models import Account, Transfer, TransferStatus, status_text
from mini_ledger.store import CHARGEBACK_WINDOW, TransferEngine


def make_account(account_id: int, balance: int) -> Account:
    return Account(
        account_id=account_id,
        name=f"Holder {account_id}",
        cpf="12345678901",
        balance=balance,
        created_at=datetime(2024, 1, 1),
    )


@pytest.fixture
def origin() -> Account:
    return make_account(1, 70000)


@pytest.fixture
def destination() -> Account:
    return make_account(2, 51000)


class TestCreateTransfer:
    """Tests for TransferEngine.create_transfer."""

    def test_ids_start_at_one(self, engine: TransferEngine) -> None:
        assert engine.create_transfer(1, 2, 100) == 1
        assert engine.create_transfer(1, 2, 100) == 2
        assert engine.max_id == 2

    def test_starting_id(self) -> None:
        engine = TransferEngine(starting_id=10)

        assert engine.create_transfer(1, 2, 100) == 11

    def test_new_transfer_is_created(self, engine: TransferEngine, clock) -> None:
        """No rule is checked at creation, even for nonsense input."""
        transfer_id = engine.create_transfer(5, 5, 0)
        transfer = engine.get_transfer(transfer_id)

        assert transfer.status == TransferStatus.CREATED
        assert transfer.created_at == clock.now
        assert transfer.origin_account_id == 5
        assert transfer.amount == 0


class TestAuthorizeTransfer:
    """Tests for TransferEngine.authorize_transfer."""

    def test_success(self, engine: TransferEngine, origin: Account, destination: Account) -> None:
        transfer_id = engine.create_transfer(1, 2, 4000)

        engine.authorize_transfer(origin, destination, 4000, transfer_id)

        assert engine.get_transfer(transfer_id).status == TransferStatus.AUTHORIZED

    def test_balances_untouched(
        self, engine: TransferEngine, origin: Account, destination: Account
    ) -> None:
        transfer_id = engine.create_transfer(1, 2, 4000)

        engine.authorize_transfer(origin, destination, 4000, transfer_id)

        assert origin.balance == 70000
        assert destination.balance == 51000

    def test_exact_balance_allowed(self, engine: TransferEngine, destination: Account) -> None:
        origin = make_account(1, 4000)
        transfer_id = engine.create_transfer(1, 2, 4000)

        engine.authorize_transfer(origin, destination, 4000, transfer_id)

        assert engine.get_transfer(transfer_id).status == TransferStatus.AUTHORIZED

    def test_same_account(self, engine: TransferEngine, origin: Account) -> None:
        transfer_id = engine.create_transfer(1, 1, 100)

        with pytest.raises(SameAccountError):
            engine.authorize_transfer(origin, origin, 100, transfer_id)

        assert engine.get_transfer(transfer_id).status == TransferStatus.NOT_AUTHORIZED

    @pytest.mark.parametrize("amount", [0, -1])
    def test_invalid_amount(
        self, engine: TransferEngine, origin: Account, destination: Account, amount: int
    ) -> None:
        transfer_id = engine.create_transfer(1, 2, amount)

        with pytest.raises(InvalidAmountError):
            engine.authorize_transfer(origin, destination, amount, transfer_id)

        assert engine.get_transfer(transfer_id).status == TransferStatus.NOT_AUTHORIZED

    def test_insufficient_balance(self, engine: TransferEngine, destination: Account) -> None:
        origin = make_account(1, 205000)
        transfer_id = engine.create_transfer(1, 2, 300000)

        with pytest.raises(InsufficientBalanceError):
            engine.authorize_transfer(origin, destination, 300000, transfer_id)

        assert engine.get_transfer(transfer_id).status == TransferStatus.NOT_AUTHORIZED

    def test_same_account_checked_before_amount(self, engine: TransferEngine, origin: Account) -> None:
        transfer_id = engine.create_transfer(1, 1, 0)

        with pytest.raises(SameAccountError):
            engine.authorize_transfer(origin, origin, 0, transfer_id)

    def test_amount_checked_before_balance(self, engine: TransferEngine, destination: Account) -> None:
        origin = make_account(1, 0)
        transfer_id = engine.create_transfer(1, 2, 0)

        with pytest.raises(InvalidAmountError):
            engine.authorize_transfer(origin, destination, 0, transfer_id)

    def test_balance_checked_before_chargeback(
        self, engine: TransferEngine, origin: Account, destination: Account
    ) -> None:
        first = engine.create_transfer(1, 2, 4000)
        engine.confirm(first)
        poor = make_account(1, 100)
        second = engine.create_transfer(1, 2, 4000)

        with pytest.raises(InsufficientBalanceError):
            engine.authorize_transfer(poor, destination, 4000, second)

    def test_status_is_authorizing_while_rules_run(
        self, origin: Account, destination: Account
    ) -> None:
        """The chargeback lookup reads the clock while the transfer is mid-authorization."""
        seen: list[TransferStatus] = []
        watched: list[int] = []

        def clock() -> datetime:
            if watched:
                seen.append(engine.get_transfer(watched[0]).status)
            return datetime(2024, 1, 15, 12, 0, 0)

        engine = TransferEngine(clock=clock)
        watched.append(engine.create_transfer(1, 2, 4000))

        engine.authorize_transfer(origin, destination, 4000, watched[0])

        assert seen == [TransferStatus.AUTHORIZING]
        assert engine.get_transfer(watched[0]).status == TransferStatus.AUTHORIZED

    def test_unknown_transfer_id(
        self, engine: TransferEngine, origin: Account, destination: Account
    ) -> None:
        with pytest.raises(TransferNotFoundError):
            engine.authorize_transfer(origin, destination, 100, 42)


class TestChargebackWindow:
    """Tests for the duplicate-transfer guard."""

    def test_window_is_ten_seconds(self) -> None:
        assert CHARGEBACK_WINDOW == timedelta(seconds=10)

    def test_duplicate_within_window_rejected(
        self, engine: TransferEngine, clock, origin: Account, destination: Account
    ) -> None:
        first = engine.create_transfer(1, 2, 4000)
        engine.confirm(first)
        clock.advance(5)
        second = engine.create_transfer(1, 2, 4000)

        with pytest.raises(ChargebackRiskError):
            engine.authorize_transfer(origin, destination, 4000, second)

        assert engine.get_transfer(second).status == TransferStatus.NOT_AUTHORIZED

    def test_just_inside_window(self, engine: TransferEngine, clock) -> None:
        engine.confirm(engine.create_transfer(1, 2, 4000))
        clock.advance(9.999)

        assert engine.is_chargeback_risk(1, 2, 4000) is True

    def test_window_boundary_not_blocked(self, engine: TransferEngine, clock) -> None:
        """At exactly created_at + 10s the previous transfer no longer blocks."""
        engine.confirm(engine.create_transfer(1, 2, 4000))
        clock.advance(10)

        assert engine.is_chargeback_risk(1, 2, 4000) is False

    def test_only_confirmed_transfers_block(self, engine: TransferEngine) -> None:
        pending = engine.create_transfer(1, 2, 4000)
        cancelled = engine.create_transfer(1, 2, 4000)
        engine.cancel(cancelled)
        engine.create_transfer(1, 2, 4000)

        assert engine.get_transfer(pending).status == TransferStatus.CREATED
        assert engine.is_chargeback_risk(1, 2, 4000) is False

    @pytest.mark.parametrize(
        ("origin_id", "destination_id", "amount"),
        [(2, 1, 4000), (1, 3, 4000), (1, 2, 4001)],
    )
    def test_different_triple_not_blocked(
        self, engine: TransferEngine, origin_id: int, destination_id: int, amount: int
    ) -> None:
        engine.confirm(engine.create_transfer(1, 2, 4000))

        assert engine.is_chargeback_risk(origin_id, destination_id, amount) is False

    def test_window_measured_from_creation(self, engine: TransferEngine, clock) -> None:
        """A late confirmation does not extend the window."""
        first = engine.create_transfer(1, 2, 4000)
        clock.advance(8)
        engine.confirm(first)
        clock.advance(3)

        assert engine.is_chargeback_risk(1, 2, 4000) is False


class TestStatusLifecycle:
    """Tests for confirm, cancel and lookups."""

    def test_confirm(self, engine: TransferEngine) -> None:
        transfer_id = engine.create_transfer(1, 2, 100)
        engine.confirm(transfer_id)

        assert engine.get_transfer(transfer_id).status == TransferStatus.CONFIRMED

    def test_cancel(self, engine: TransferEngine) -> None:
        transfer_id = engine.create_transfer(1, 2, 100)
        engine.cancel(transfer_id)

        assert engine.get_transfer(transfer_id).status == TransferStatus.CANCELLED

    def test_terminal_status_can_be_overwritten(self, engine: TransferEngine) -> None:
        transfer_id = engine.create_transfer(1, 2, 100)
        engine.confirm(transfer_id)
        engine.cancel(transfer_id)

        assert engine.get_transfer(transfer_id).status == TransferStatus.CANCELLED

        engine.confirm(transfer_id)
        assert engine.get_transfer(transfer_id).status == TransferStatus.CONFIRMED

    def test_confirm_unknown(self, engine: TransferEngine) -> None:
        with pytest.raises(TransferNotFoundError) as exc_info:
            engine.confirm(5)

        assert exc_info.value.transfer_id == 5

    def test_cancel_unknown(self, engine: TransferEngine) -> None:
        with pytest.raises(TransferNotFoundError):
            engine.cancel(5)

    def test_list_all_empty(self, engine: TransferEngine) -> None:
        with pytest.raises(NoTransfersError):
            engine.list_all()

    def test_list_all_sorted(self) -> None:
        now = datetime(2024, 1, 1)
        engine = TransferEngine(
            starting_id=2,
            transfers=[Transfer(2, 1, 2, 10, now), Transfer(1, 1, 2, 10, now)],
        )

        assert [t.transfer_id for t in engine.list_all()] == [1, 2]
        assert len(engine) == 2
        assert engine.create_transfer(1, 2, 10) == 3

    def test_preloaded_id_above_seed_rejected(self) -> None:
        """A new ID may never land on a preloaded transfer."""
        preloaded = [Transfer(5, 1, 2, 10, datetime(2024, 1, 1))]

        with pytest.raises(ValueError, match="above starting_id"):
            TransferEngine(starting_id=4, transfers=preloaded)

    def test_count_by_status(self, engine: TransferEngine) -> None:
        engine.confirm(engine.create_transfer(1, 2, 100))
        engine.cancel(engine.create_transfer(1, 2, 100))
        engine.create_transfer(1, 2, 100)

        counts = engine.count_by_status()

        assert counts[TransferStatus.CONFIRMED] == 1
        assert counts[TransferStatus.CANCELLED] == 1
        assert counts[TransferStatus.CREATED] == 1
        assert counts[TransferStatus.AUTHORIZING] == 0


class TestTransferStatus:
    """Tests for status display text."""

    @pytest.mark.parametrize(
        ("status", "text"),
        [
            (TransferStatus.CREATED, "Created"),
            (TransferStatus.AUTHORIZING, "Authorizing"),
            (TransferStatus.NOT_AUTHORIZED, "Not Authorized"),
            (TransferStatus.AUTHORIZED, "Authorized"),
            (TransferStatus.CANCELLED, "Cancelled"),
            (TransferStatus.CONFIRMED, "Confirmed"),
        ],
    )
    def test_status_text(self, status: TransferStatus, text: str) -> None:
        assert status_text(status) == text

    def test_transfer_status_text_property(self) -> None:
        transfer = Transfer(1, 1, 2, 10, datetime(2024, 1, 1), TransferStatus.NOT_AUTHORIZED)

        assert transfer.status_text == "Not Authorized"

    def test_unknown_status(self) -> None:
        with pytest.raises(ValueError):
            status_text("BOGUS")  # type: ignore[arg-type]

    def test_terminal_statuses(self) -> None:
        terminal = {s for s in TransferStatus if s.is_terminal}

        assert terminal == {
            TransferStatus.NOT_AUTHORIZED,
            TransferStatus.CANCELLED,
            TransferStatus.CONFIRMED,
        }
