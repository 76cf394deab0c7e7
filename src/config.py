"""
Centralized configuration with environment variable overrides.

Business hours, tier thresholds, slot classification cut-offs and the
intent classification policy are configurable here. Scoring weight tables
live next to the scoring code because they define the score itself.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from src.logging_context import CustomerIdFilter

load_dotenv()

logger = logging.getLogger(__name__)

CLASSIFICATION_POLICIES = ("branching", "indicator")

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [customer=%(customer_id)s]: %(message)s"


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class DealershipConfig:
    """Showroom settings loaded from environment or defaults."""

    name: str = os.getenv("DEALERSHIP_NAME", "Metro Auto Mall")
    open_hour: int = _safe_int("BUSINESS_OPEN_HOUR", "9")
    close_hour: int = _safe_int("BUSINESS_CLOSE_HOUR", "17")
    slot_interval_minutes: int = _safe_int("SLOT_INTERVAL_MINUTES", "30")


@dataclass(frozen=True)
class ScoringConfig:
    """Intent classification settings."""

    classification_policy: str = os.getenv("CLASSIFICATION_POLICY", "branching").lower()


@dataclass(frozen=True)
class QueueConfig:
    """Adjusted-score boundaries for the queue interleave tiers."""

    high_tier_threshold: float = _safe_float("HIGH_TIER_THRESHOLD", "0.6")
    low_tier_threshold: float = _safe_float("LOW_TIER_THRESHOLD", "0.3")


@dataclass(frozen=True)
class SchedulingConfig:
    """Slot weighting cut-offs."""

    recommended_threshold: float = _safe_float("RECOMMENDED_THRESHOLD", "1.2")
    available_threshold: float = _safe_float("AVAILABLE_THRESHOLD", "0.5")
    priority_window_end_hour: int = _safe_int("PRIORITY_WINDOW_END_HOUR", "14")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    dealership: DealershipConfig = field(default_factory=DealershipConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)
    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "smart-queue")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    dealership = config.dealership
    if not 0 <= dealership.open_hour < 24:
        raise ValueError(
            f"BUSINESS_OPEN_HOUR must be between 0 and 23, got {dealership.open_hour}"
        )
    if not dealership.open_hour < dealership.close_hour <= 24:
        raise ValueError(
            "BUSINESS_CLOSE_HOUR must be after BUSINESS_OPEN_HOUR and <= 24, "
            f"got {dealership.close_hour}"
        )
    if not 0 < dealership.slot_interval_minutes <= 240:
        raise ValueError(
            "SLOT_INTERVAL_MINUTES must be between 1 and 240, "
            f"got {dealership.slot_interval_minutes}"
        )

    if config.scoring.classification_policy not in CLASSIFICATION_POLICIES:
        raise ValueError(
            f"CLASSIFICATION_POLICY must be one of {list(CLASSIFICATION_POLICIES)}, "
            f"got {config.scoring.classification_policy!r}"
        )

    for name, value in [
        ("HIGH_TIER_THRESHOLD", config.queue.high_tier_threshold),
        ("LOW_TIER_THRESHOLD", config.queue.low_tier_threshold),
    ]:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"{name} must be between 0.0 and 1.0, got {value}")
    if config.queue.low_tier_threshold >= config.queue.high_tier_threshold:
        raise ValueError(
            "LOW_TIER_THRESHOLD must be below HIGH_TIER_THRESHOLD, "
            f"got {config.queue.low_tier_threshold} >= {config.queue.high_tier_threshold}"
        )

    scheduling = config.scheduling
    if scheduling.available_threshold >= scheduling.recommended_threshold:
        raise ValueError(
            "AVAILABLE_THRESHOLD must be below RECOMMENDED_THRESHOLD, "
            f"got {scheduling.available_threshold} >= {scheduling.recommended_threshold}"
        )
    if not 0 <= scheduling.priority_window_end_hour <= 24:
        raise ValueError(
            "PRIORITY_WINDOW_END_HOUR must be between 0 and 24, "
            f"got {scheduling.priority_window_end_hour}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    # The filter sits on the handler so records from every logger carry customer_id
    handler = logging.StreamHandler()
    handler.addFilter(CustomerIdFilter())
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler],
    )
    logger.info("Configuration loaded for '%s'", config.dealership.name)
    return config


# Singleton instance
settings = load_config()
