from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "RoyaleDeck"
    debug: bool = False

    # Player lookup (RoyaleAPI proxy in front of the official API)
    royaleapi_key: str = ""
    royaleapi_base_url: str = "https://proxy.royaleapi.dev/v1"
    lookup_timeout_seconds: float = 10.0

    # Override for the bundled card catalog
    catalog_path: Path | None = None

    # Elixir target rejection sampling
    max_elixir_attempts: int = Field(default=1000, ge=1)
    elixir_tolerance: float = 0.2

    # Fixed seed for reproducible decks (None = system entropy)
    random_seed: int | None = None


settings = Settings()


# =============================================================================
# DECK RULES
# =============================================================================

DECK_SIZE = 8

# Per-slider upper bound for rarity and archetype counts
MAX_SELECTION_COUNT = 8

# Game rule: one champion per deck
MAX_CHAMPIONS = 1

MAX_TARGET_ELIXIR = 8.0

MAX_MASTERY_LEVEL = 10

# Player badges carrying card mastery start with this prefix
MASTERY_BADGE_PREFIX = "Mastery"
