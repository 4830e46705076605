"""Console sink for debugging and development."""

import json
from typing import Any

from mini_ledger.sinks.serialization import to_dict


class ConsoleSink:
    """Print ledger events and snapshots to stdout."""

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        """
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def send(self, topic: str, record: Any) -> None:
        """Print a single event tagged with its topic."""
        print(f"[{topic}] {self._dumps(to_dict(record))}")
        self._counts[topic] = self._counts.get(topic, 0) + 1

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch of records to console."""
        print(f"\n{'='*60}")
        print(f"Entity: {entity_type} ({len(records)} records)")
        print("=" * 60)

        display_records = records[: self.max_records] if self.max_records else records

        for record in display_records:
            print(self._dumps(to_dict(record)))

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for name, count in self._counts.items():
            print(f"  {name}: {count} records")

    def _dumps(self, data: dict) -> str:
        if self.pretty:
            return json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return json.dumps(data, ensure_ascii=False, default=str)
