"""
Renderer-facing payloads.

Serializable shapes handed to the HTTP API and the CLI. The core deck
types stay plain dataclasses; these models are built from them.
"""

from pydantic import BaseModel, Field

from royaledeck.models.card import Archetype, Card, Rarity
from royaledeck.models.deck import GeneratedDeck
from royaledeck.models.mastery import MasteryRecord


class CardPayload(BaseModel):
    """A card as shown to the user."""

    name: str
    elixir_cost: float
    rarity: Rarity
    id: str
    archetype: Archetype
    mastery_name: str = ""
    image: str

    @classmethod
    def from_card(cls, card: Card) -> "CardPayload":
        return cls(
            name=card.name,
            elixir_cost=card.elixir_cost,
            rarity=card.rarity,
            id=card.id,
            archetype=card.archetype,
            mastery_name=card.mastery_name,
            image=card.image_path,
        )


class DeckPayload(BaseModel):
    """A generated deck plus its summary statistic."""

    cards: list[CardPayload]
    average_elixir: float = Field(description="Sum of elixir costs divided by deck size")
    attempts: int = Field(default=1, description="Assembly attempts used")
    copy_deck_url: str = Field(default="", description="In-game copy deck link")

    @classmethod
    def from_deck(cls, deck: GeneratedDeck, copy_deck_url: str = "") -> "DeckPayload":
        return cls(
            cards=[CardPayload.from_card(card) for card in deck.cards],
            average_elixir=deck.average_elixir,
            attempts=deck.attempts,
            copy_deck_url=copy_deck_url,
        )


class MasteryPayload(BaseModel):
    """One mastery record."""

    card_name: str
    level: int = Field(ge=0)
    max_level: int = Field(ge=0)

    @classmethod
    def from_record(cls, record: MasteryRecord) -> "MasteryPayload":
        return cls(card_name=record.card_name, level=record.level, max_level=record.max_level)

    def to_record(self) -> MasteryRecord:
        return MasteryRecord(card_name=self.card_name, level=self.level, max_level=self.max_level)
