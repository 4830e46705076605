"""JSON file sink for exporting ledger events and snapshots."""

import json
import threading
from pathlib import Path
from typing import Any

from mini_ledger.exceptions import SinkError
from mini_ledger.sinks.serialization import to_dict


class JsonFileSink:
    """Append events to JSON Lines files and write snapshots as JSON arrays."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print snapshot files.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}
        self._lock = threading.Lock()

    def send(self, topic: str, record: Any) -> None:
        """Append one event to ``<topic>.jsonl`` (dots become underscores)."""
        file_path = self.output_dir / (topic.replace(".", "_") + ".jsonl")
        line = json.dumps(to_dict(record), ensure_ascii=False, default=str)
        try:
            with self._lock, open(file_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            raise SinkError(f"Failed to append to {file_path}: {e}") from e
        self._counts[topic] = self._counts.get(topic, 0) + 1

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a snapshot of records to ``<entity_type>.json``."""
        file_path = self.output_dir / f"{entity_type}.json"

        data = [to_dict(record) for record in records]

        try:
            with open(file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False, default=str)
                else:
                    json.dump(data, f, ensure_ascii=False, default=str)
        except OSError as e:
            raise SinkError(f"Failed to write {file_path}: {e}") from e

        self._counts[entity_type] = len(records)

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for name, count in self._counts.items():
            print(f"  {name}: {count} records")
