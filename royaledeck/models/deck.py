from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from royaledeck.models.card import Archetype, Card, Rarity

# "No constraint" selection; distinct from 0, which excludes
RANDOM: Literal["random"] = "random"

SelectionCount = int | Literal["random"]


class RequirementKind(str, Enum):
    """Which card attribute a requirement selects on."""

    RARITY = "rarity"
    ARCHETYPE = "archetype"


@dataclass(frozen=True, slots=True)
class RequirementSpec:
    """Select `want_count` cards matching `key` before the random fill."""

    kind: RequirementKind
    key: Rarity | Archetype
    want_count: int

    def matches(self, card: Card) -> bool:
        if self.kind is RequirementKind.RARITY:
            return card.rarity is self.key
        return isinstance(self.key, Archetype) and self.key.matches(card.archetype)


@dataclass(frozen=True)
class DeckConstraints:
    """
    Raw deck generation inputs.

    Attributes:
        rarity_counts: Rarity -> count (0 excludes, RANDOM or absent = free)
        archetype_counts: Archetype -> count, same convention
        target_elixir: Desired average elixir; None or <= 0 = unconstrained
        mastery_bound: Inclusive upper mastery level; None = unbounded
    """

    rarity_counts: Mapping[Rarity, SelectionCount] = field(default_factory=dict)
    archetype_counts: Mapping[Archetype, SelectionCount] = field(default_factory=dict)
    target_elixir: float | None = None
    mastery_bound: int | None = None

    def explicit_counts(self) -> Iterator[tuple[RequirementKind, Rarity | Archetype, int]]:
        """Every non-random count, rarities first, each group in input order."""
        for rarity, count in self.rarity_counts.items():
            if count != RANDOM:
                yield RequirementKind.RARITY, rarity, int(count)
        for archetype, count in self.archetype_counts.items():
            if count != RANDOM:
                yield RequirementKind.ARCHETYPE, archetype, int(count)


@dataclass(frozen=True)
class ResolvedConstraints:
    """Filtered pool and ordered requirements for the sampler."""

    pool: tuple[Card, ...]
    requirements: tuple[RequirementSpec, ...]


@dataclass(frozen=True)
class GeneratedDeck:
    """
    A generated deck.

    Attributes:
        cards: Cards in pick order, unique by id
        average_elixir: Sum of elixir costs over deck size
        attempts: Assembly attempts used (> 1 only with an elixir target)
    """

    cards: tuple[Card, ...]
    average_elixir: float
    attempts: int = 1

    @property
    def card_ids(self) -> list[str]:
        return [card.id for card in self.cards]

    def champion_count(self) -> int:
        return sum(1 for card in self.cards if card.is_champion)
