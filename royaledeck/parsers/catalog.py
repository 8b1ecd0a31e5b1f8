"""
Card catalog parser.

Parses the delimited catalog resource into Card records.

Columns (header row skipped):
    name, elixirCost, rarity, id, archetype, masteryName

masteryName may be empty or missing entirely.
"""

import csv
from io import StringIO
from pathlib import Path

from royaledeck.models.card import Archetype, Card, Rarity

CATALOG_COLUMNS = ("name", "elixirCost", "rarity", "id", "archetype", "masteryName")


class CatalogParseError(ValueError):
    """Raised when a catalog row cannot be parsed."""

    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Catalog line {line_number}: {reason}")


def _parse_row(row: list[str], line_number: int) -> Card:
    fields = [value.strip() for value in row]
    if len(fields) < 5:
        raise CatalogParseError(line_number, f"expected at least 5 columns, got {len(fields)}")

    name, elixir, rarity, card_id, archetype = fields[:5]
    mastery_name = fields[5] if len(fields) > 5 else ""

    if not name:
        raise CatalogParseError(line_number, "empty card name")
    if not card_id:
        raise CatalogParseError(line_number, f"empty id for {name!r}")

    try:
        elixir_cost = float(elixir)
    except ValueError as e:
        raise CatalogParseError(line_number, f"invalid elixir cost {elixir!r}") from e
    if elixir_cost < 0:
        raise CatalogParseError(line_number, f"negative elixir cost {elixir_cost}")

    try:
        card_rarity = Rarity(rarity.lower())
    except ValueError as e:
        raise CatalogParseError(line_number, f"unknown rarity {rarity!r}") from e

    try:
        card_archetype = Archetype(archetype.lower())
    except ValueError as e:
        raise CatalogParseError(line_number, f"unknown archetype {archetype!r}") from e

    return Card(
        name=name,
        elixir_cost=elixir_cost,
        rarity=card_rarity,
        id=card_id,
        archetype=card_archetype,
        mastery_name=mastery_name,
    )


def parse_catalog(text: str) -> list[Card]:
    """
    Parse catalog text into cards, preserving file order.

    Args:
        text: Raw catalog content including the header row

    Returns:
        Cards in catalog order

    Raises:
        CatalogParseError: On malformed rows or duplicate ids
    """
    cards: list[Card] = []
    seen_ids: set[str] = set()

    reader = csv.reader(StringIO(text.strip()))

    for line_number, row in enumerate(reader, start=1):
        # Header
        if line_number == 1:
            continue
        if not row or not any(value.strip() for value in row):
            continue

        card = _parse_row(row, line_number)
        if card.id in seen_ids:
            raise CatalogParseError(line_number, f"duplicate card id {card.id}")
        seen_ids.add(card.id)
        cards.append(card)

    return cards


def load_catalog(path: Path) -> list[Card]:
    """
    Load and parse a catalog file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogParseError: On malformed content
    """
    with open(path, encoding="utf-8") as f:
        return parse_catalog(f.read())
