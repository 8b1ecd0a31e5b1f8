"""
Deck link formatter.

THIS MODULE HANDLES OUTPUT RENDERING ONLY.

Builds the in-game "copy deck" deep link for a generated deck. It trusts
its input is already a complete, valid deck.
"""

from urllib.parse import urlencode

from royaledeck.models.deck import GeneratedDeck

COPY_DECK_BASE = "https://link.clashroyale.com/en/?clashroyale://copyDeck"

DEFAULT_DECK_LABEL = "Royals"

# King tower icon
DEFAULT_DECK_THUMBNAIL = "159000000"


def build_copy_deck_url(
    deck: GeneratedDeck,
    label: str = DEFAULT_DECK_LABEL,
    thumbnail: str = DEFAULT_DECK_THUMBNAIL,
) -> str:
    """
    Format a deck as a copy-deck link.

    Args:
        deck: A complete generated deck

    Returns:
        URL that opens the deck in the game client
    """
    query = urlencode(
        {"deck": ";".join(deck.card_ids), "l": label, "tt": thumbnail},
        safe=";",
    )
    return f"{COPY_DECK_BASE}?{query}"
