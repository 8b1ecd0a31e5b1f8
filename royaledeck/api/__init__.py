from royaledeck.api.cards import router as cards_router
from royaledeck.api.decks import router as decks_router
from royaledeck.api.health import router as health_router
from royaledeck.api.player import router as player_router

__all__ = [
    "cards_router",
    "decks_router",
    "health_router",
    "player_router",
]
