"""Configuration management for property-sim."""

from dataclasses import dataclass, field
from pathlib import Path

from property_sim.exceptions import ConfigurationError
from property_sim.models.base import GameDate

DEFAULT_STORAGE_KEY = "property-game-state"


@dataclass
class StorageConfig:
    """Persistence configuration."""

    directory: Path = field(default_factory=lambda: Path("saves"))
    key: str = DEFAULT_STORAGE_KEY
    pretty_json: bool = False


@dataclass
class SimConfig:
    """Main configuration for property-sim."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    seed: int | None = None
    log_level: str = "INFO"
    starting_cash: float = 50000.0
    start_date: GameDate = field(default_factory=lambda: GameDate(2025, 1, 1))
    locale: str = "en_GB"

    def __post_init__(self) -> None:
        if self.starting_cash < 0:
            raise ConfigurationError(f"starting_cash must be non-negative, got {self.starting_cash}")

    @classmethod
    def from_env(cls) -> "SimConfig":
        """Create config from environment variables."""
        import os

        storage = StorageConfig(
            directory=Path(os.getenv("PROPERTY_SIM_STORAGE_DIR", "saves")),
            key=os.getenv("PROPERTY_SIM_STORAGE_KEY", DEFAULT_STORAGE_KEY),
            pretty_json=os.getenv("PROPERTY_SIM_PRETTY_JSON", "false").lower() == "true",
        )

        seed_str = os.getenv("PROPERTY_SIM_SEED")
        cash_str = os.getenv("PROPERTY_SIM_STARTING_CASH", "50000")
        try:
            seed = int(seed_str) if seed_str else None
            starting_cash = float(cash_str)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        return cls(
            storage=storage,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            starting_cash=starting_cash,
            locale=os.getenv("PROPERTY_SIM_LOCALE", "en_GB"),
        )
