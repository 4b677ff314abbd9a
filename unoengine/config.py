"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field
from typing import Optional


def _parse_seed() -> Optional[int]:
    """Parse UNO_SEED environment variable."""
    raw = os.getenv("UNO_SEED", "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class MatchConfig:
    """Defaults for new matches."""

    target_score: int = field(default_factory=lambda: int(os.getenv("UNO_TARGET_SCORE", "500")))
    cards_per_player: int = field(
        default_factory=lambda: int(os.getenv("UNO_CARDS_PER_PLAYER", "7"))
    )
    max_turns: int = field(default_factory=lambda: int(os.getenv("UNO_MAX_TURNS", "5000")))
    seed: Optional[int] = field(default_factory=_parse_seed)


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    log_level: str = field(default_factory=lambda: os.getenv("UNO_LOG_LEVEL", "WARNING").upper())
    match: MatchConfig = field(default_factory=MatchConfig)


def load_config() -> AppConfig:
    """Read configuration from the current environment."""
    return AppConfig()
