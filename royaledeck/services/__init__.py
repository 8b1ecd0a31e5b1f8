"""
RoyaleDeck services.

Business logic for deck generation and player lookup.
"""

from royaledeck.services.card_catalog import get_catalog, mastery_name_mapping
from royaledeck.services.deck_builder import (
    build_deck,
    format_deck,
    generate_deck,
    make_rng,
)
from royaledeck.services.deck_link import build_copy_deck_url
from royaledeck.services.deck_sampler import assemble_deck, average_elixir, sample_deck
from royaledeck.services.player_lookup import (
    PlayerProfile,
    fetch_player,
    lookup_player,
    normalize_tag,
    parse_mastery_badges,
)

__all__ = [
    # Catalog
    "get_catalog",
    "mastery_name_mapping",
    # Deck generation
    "assemble_deck",
    "average_elixir",
    "build_deck",
    "format_deck",
    "generate_deck",
    "make_rng",
    "sample_deck",
    # Output rendering
    "build_copy_deck_url",
    # Player lookup
    "PlayerProfile",
    "fetch_player",
    "lookup_player",
    "normalize_tag",
    "parse_mastery_badges",
]
