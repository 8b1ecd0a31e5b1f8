"""
Card catalog service.

Loads and caches the card catalog used for deck generation.
"""

from functools import lru_cache
from pathlib import Path

from royaledeck.config import settings
from royaledeck.models.card import Card
from royaledeck.parsers.catalog import load_catalog

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "cards.csv"


def catalog_path() -> Path:
    """Configured catalog path, falling back to the bundled catalog."""
    return settings.catalog_path or DEFAULT_CATALOG_PATH


@lru_cache(maxsize=1)
def get_catalog() -> tuple[Card, ...]:
    """
    Get the cached card catalog.

    Returns:
        Cards in catalog order. Cached after first load.

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        CatalogParseError: If the catalog is malformed
    """
    return tuple(load_catalog(catalog_path()))


def mastery_name_mapping(catalog: tuple[Card, ...] | list[Card]) -> dict[str, str]:
    """Build mastery badge name -> card name mapping."""
    return {card.mastery_name: card.name for card in catalog if card.mastery_name}
