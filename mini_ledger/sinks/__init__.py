"""Output sinks for the ledger audit trail and snapshots."""

from typing import Any, Protocol

from mini_ledger.config import LedgerConfig
from mini_ledger.sinks.console import ConsoleSink
from mini_ledger.sinks.json_file import JsonFileSink


class EventSink(Protocol):
    """What the ledger needs from a sink."""

    def send(self, topic: str, record: Any) -> None: ...

    def write_batch(self, entity_type: str, records: list[Any]) -> None: ...

    def close(self) -> None: ...


def build_sink(config: LedgerConfig) -> EventSink | None:
    """Return the sink selected by ``config.event_sink`` (None for ``"none"``)."""
    if config.event_sink == "console":
        return ConsoleSink(pretty=False)
    if config.event_sink == "json":
        return JsonFileSink(config.output.json_output_dir, pretty=config.output.pretty_json)
    if config.event_sink == "kafka":
        # Imported lazily so confluent-kafka is only loaded when selected
        from mini_ledger.sinks.kafka import KafkaSink

        return KafkaSink(config.kafka)
    return None


__all__ = ["ConsoleSink", "EventSink", "JsonFileSink", "build_sink"]
