"""Kafka sink for streaming the ledger audit trail to Kafka topics."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from mini_ledger.config import KafkaConfig
from mini_ledger.exceptions import SinkError
from mini_ledger.models import Event
from mini_ledger.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaSink:
    """Publish ledger events and snapshots to Kafka topics."""

    # Topic suffix to message key field
    KEY_FIELDS = {
        "accounts": "account_id",
        "transfers": "origin_account_id",
    }

    def __init__(self, config: KafkaConfig | str, producer: Producer | None = None) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        producer : Producer | None
            Pre-built producer (tests inject a mock here).
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.producer = producer if producer is not None else Producer(config.to_dict())
        self.stats = ProducerStats()

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def _get_key(self, topic: str, record: Any) -> str | None:
        """Extract the message key from a record based on the topic suffix."""
        key_field = self.KEY_FIELDS.get(topic.rsplit(".", 1)[-1])
        if not key_field:
            return None

        if isinstance(record, Event):
            value = record.data.get(key_field, record.subject)
        elif isinstance(record, dict):
            value = record.get(key_field)
        else:
            value = getattr(record, key_field, None)
        return str(value) if value is not None else None

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Send a single record to a Kafka topic as JSON."""
        value = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")

        if key is None:
            key = self._get_key(topic, record)

        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key else None,
                value=value,
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as e:
            raise SinkError(f"Failed to produce to {topic}: {e}") from e
        self.stats.sent += 1
        self.producer.poll(0)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a snapshot of records to ``<topic_prefix>.<entity_type>``."""
        topic = f"{self.config.topic_prefix}.{entity_type}"
        logger.info("Writing batch to %s: %d records", topic, len(records))

        for record in records:
            self.send(topic, record)

        self.flush()
        logger.info("Batch complete: sent=%d, delivered=%d, failed=%d",
                    self.stats.sent, self.stats.delivered, self.stats.failed)

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d, success_rate=%.1f%%",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
            self.stats.success_rate * 100,
        )
