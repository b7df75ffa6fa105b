"""Configuration management for loan-tracker."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from loan_tracker.exceptions import ConfigurationError


@dataclass(frozen=True)
class EngineConfig:
    """Calculation engine tunables."""

    epsilon: Decimal = Decimal("0.01")  # currency minor unit
    days_per_month: int = 30
    weeks_per_month: int = 4

    def __post_init__(self) -> None:
        if self.epsilon < 0:
            raise ConfigurationError(f"epsilon must be non-negative, got {self.epsilon}")
        if self.days_per_month <= 0 or self.weeks_per_month <= 0:
            raise ConfigurationError("period divisors must be positive")


@dataclass
class CacheConfig:
    """Metrics cache configuration."""

    enabled: bool = True
    max_entries: int = 4096


@dataclass
class LoanTrackerConfig:
    """Main configuration for loan-tracker."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LoanTrackerConfig":
        """Create config from environment variables."""
        import os

        try:
            engine = EngineConfig(
                epsilon=Decimal(os.getenv("LOAN_TRACKER_EPSILON", "0.01")),
                days_per_month=int(os.getenv("LOAN_TRACKER_DAYS_PER_MONTH", "30")),
                weeks_per_month=int(os.getenv("LOAN_TRACKER_WEEKS_PER_MONTH", "4")),
            )
            cache = CacheConfig(
                enabled=os.getenv("LOAN_TRACKER_CACHE", "true").lower() == "true",
                max_entries=int(os.getenv("LOAN_TRACKER_CACHE_SIZE", "4096")),
            )
        except (InvalidOperation, ValueError) as exc:
            raise ConfigurationError(f"Invalid loan-tracker environment setting: {exc}") from exc

        if cache.max_entries <= 0:
            raise ConfigurationError(f"LOAN_TRACKER_CACHE_SIZE must be positive, got {cache.max_entries}")

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            engine=engine,
            cache=cache,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )
