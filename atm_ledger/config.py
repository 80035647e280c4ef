"""Configuration management for atm-ledger."""

from dataclasses import dataclass, field
from pathlib import Path

from atm_ledger.exceptions import ConfigurationError
from atm_ledger.logging import LOG_LEVELS


@dataclass
class StorageConfig:
    """Location of the ledger CSV files."""

    data_dir: Path = field(default_factory=lambda: Path("."))
    accounts_file: str = "accounts.csv"
    transactions_file: str = "transactions.csv"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format_type: str = "standard"

    def __post_init__(self) -> None:
        if self.level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.level}")
        if self.format_type not in ("standard", "json"):
            raise ConfigurationError(f"Unknown log format: {self.format_type}")


@dataclass
class AtmConfig:
    """Main configuration for atm-ledger."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "AtmConfig":
        """Create config from environment variables."""
        import os

        storage = StorageConfig(
            data_dir=Path(os.getenv("ATM_DATA_DIR", ".")),
            accounts_file=os.getenv("ATM_ACCOUNTS_FILE", "accounts.csv"),
            transactions_file=os.getenv("ATM_TRANSACTIONS_FILE", "transactions.csv"),
        )

        logging_config = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format_type=os.getenv("LOG_FORMAT", "standard"),
        )

        return cls(storage=storage, logging=logging_config)
