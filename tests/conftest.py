"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta

import pytest

from mini_ledger.ledger import Ledger
from mini_ledger.store import AccountLedger, TransferEngine


class FakeClock:
    """Manually advanced time source for window tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 15, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class RecordingSink:
    """Sink that keeps every event in memory."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []
        self.batches: dict[str, list] = {}
        self.closed = False

    def send(self, topic: str, record: object) -> None:
        self.events.append((topic, record))

    def write_batch(self, entity_type: str, records: list) -> None:
        self.batches[entity_type] = list(records)

    def close(self) -> None:
        self.closed = True

    def event_types(self) -> list[str]:
        return [record.event_type for _, record in self.events]


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def valid_cpf() -> str:
    """Eleven-digit CPF."""
    return "12345678901"


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at a fixed instant until advanced."""
    return FakeClock()


@pytest.fixture
def accounts(clock: FakeClock) -> AccountLedger:
    """Empty account store on the fake clock."""
    return AccountLedger(clock=clock)


@pytest.fixture
def engine(clock: FakeClock) -> TransferEngine:
    """Empty transfer engine on the fake clock."""
    return TransferEngine(clock=clock)


@pytest.fixture
def sink() -> RecordingSink:
    """In-memory event sink."""
    return RecordingSink()


@pytest.fixture
def ledger(clock: FakeClock, sink: RecordingSink) -> Ledger:
    """Ledger on the fake clock publishing to the recording sink."""
    return Ledger(sink=sink, clock=clock)
