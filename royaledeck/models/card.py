from dataclasses import dataclass
from enum import Enum


class Rarity(str, Enum):
    """Card rarity tiers."""

    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    CHAMPION = "champion"


class Archetype(str, Enum):
    """
    Functional card category.

    TROOP_AIR and TROOP_GROUND are subtypes of TROOP: a TROOP filter
    matches all three.
    """

    TROOP = "troop"
    TROOP_AIR = "troop-air"
    TROOP_GROUND = "troop-ground"
    SPELL = "spell"
    BUILDING = "building"

    def matches(self, other: "Archetype") -> bool:
        """True if a card of archetype `other` satisfies a filter on self."""
        if self is Archetype.TROOP:
            return other.value.startswith(Archetype.TROOP.value)
        return self is other


@dataclass(frozen=True, slots=True)
class Card:
    """
    A catalog card.

    Attributes:
        name: Card name as shown in game
        elixir_cost: Elixir cost (may be fractional, e.g. Mirror)
        rarity: Rarity tier
        id: Game card ID, the identity key
        archetype: Functional category
        mastery_name: Mastery badge identifier, empty if the card has none
    """

    name: str
    elixir_cost: float
    rarity: Rarity
    id: str
    archetype: Archetype
    mastery_name: str = ""

    @property
    def is_champion(self) -> bool:
        return self.rarity is Rarity.CHAMPION

    @property
    def image_path(self) -> str:
        """Relative path of the card art."""
        return f"card_images/{self.id}.png"
