from collections.abc import Iterable
from dataclasses import dataclass

from royaledeck.models.card import Card


@dataclass(frozen=True, slots=True)
class MasteryRecord:
    """
    A player's mastery progress on one card.

    Attributes:
        card_name: Card name, or the raw badge name when no card maps to it
        level: Current mastery level
        max_level: Highest mastery level for the card
    """

    card_name: str
    level: int
    max_level: int


class MasteryIndex:
    """Card name -> mastery level lookup over a player's badges."""

    def __init__(self, records: Iterable[MasteryRecord]):
        self._levels: dict[str, int] = {}
        for record in records:
            self._levels[record.card_name] = record.level

    def level_of(self, card: Card) -> int:
        """
        Mastery level for a card.

        Records are keyed by card name, falling back to the badge name for
        badges the catalog could not map. Cards without a record are level 0.
        """
        if card.name in self._levels:
            return self._levels[card.name]
        if card.mastery_name:
            return self._levels.get(card.mastery_name, 0)
        return 0
