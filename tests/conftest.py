import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from royaledeck.models import failure as failure_module
from royaledeck.models.card import Archetype, Card, Rarity
from royaledeck.parsers.catalog import load_catalog

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture
def catalog_path() -> Path:
    return FIXTURES_DIR / "catalog_sample.csv"


@pytest.fixture
def sample_catalog(catalog_path: Path) -> tuple[Card, ...]:
    """28-card catalog: 8 common, 6 rare, 6 epic, 5 legendary, 3 champion."""
    return tuple(load_catalog(catalog_path))


@pytest.fixture
def player_json() -> dict[str, Any]:
    return json.loads((FIXTURES_DIR / "player_sample.json").read_text())


@pytest.fixture
def make_card() -> Callable[..., Card]:
    """Factory for ad hoc cards with unique ids."""
    counter = iter(range(1, 10_000))

    def _make(
        name: str | None = None,
        elixir: float = 3,
        rarity: Rarity = Rarity.COMMON,
        archetype: Archetype = Archetype.TROOP_GROUND,
        mastery_name: str = "",
    ) -> Card:
        n = next(counter)
        return Card(
            name=name or f"Card {n}",
            elixir_cost=elixir,
            rarity=rarity,
            id=str(90_000_000 + n),
            archetype=archetype,
            mastery_name=mastery_name,
        )

    return _make
