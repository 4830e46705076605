"""Base models shared across the ledger."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Standard event envelope for the audit stream."""

    event_id: str
    event_type: str  # entity.action (e.g., transfer.confirmed)
    event_time: datetime
    source: str  # Service/system that generated
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)
