"""Configuration management for mini-ledger."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mini_ledger.exceptions import ConfigurationError

EVENT_SINKS = ("none", "console", "json", "kafka")
LOG_FORMATS = ("standard", "json")


@dataclass
class KafkaConfig:
    """Kafka producer configuration for the audit event stream."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic_prefix: str = "ledger"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class ServerConfig:
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class OutputConfig:
    """Output configuration for file-based sinks."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class LedgerConfig:
    """Main configuration for mini-ledger."""

    account_starting_id: int = 0
    transfer_starting_id: int = 0
    server: ServerConfig = field(default_factory=ServerConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    event_sink: str = "none"
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check value ranges and enumerated options.

        Raises
        ------
        ConfigurationError
            If a starting ID is negative or an option is unknown.
        """
        if self.account_starting_id < 0:
            raise ConfigurationError(
                f"account_starting_id must be >= 0, got {self.account_starting_id}"
            )
        if self.transfer_starting_id < 0:
            raise ConfigurationError(
                f"transfer_starting_id must be >= 0, got {self.transfer_starting_id}"
            )
        if self.event_sink not in EVENT_SINKS:
            raise ConfigurationError(
                f"event_sink must be one of {', '.join(EVENT_SINKS)}, got {self.event_sink!r}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"log_format must be one of {', '.join(LOG_FORMATS)}, got {self.log_format!r}"
            )

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        server = ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", "3000"),
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic_prefix=os.getenv("TOPIC_PREFIX", "ledger"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            account_starting_id=_int_env("LEDGER_ACCOUNT_START_ID", "0"),
            transfer_starting_id=_int_env("LEDGER_TRANSFER_START_ID", "0"),
            server=server,
            kafka=kafka,
            output=output,
            event_sink=os.getenv("EVENT_SINK", "none").lower(),
            seed=_int_env("SEED", None) if os.getenv("SEED") else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard").lower(),
        )


def _int_env(name: str, default: str | None) -> int:
    """Read an integer environment variable, raising ConfigurationError on junk."""
    import os

    raw = os.getenv(name, default)
    try:
        return int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
