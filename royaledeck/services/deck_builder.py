"""
Deck building service.

Validates deck settings, resolves constraints and samples a deck.

`build_deck` raises typed KnownErrors. `generate_deck` is the
discriminated-result entry point: it always returns a finalized
ApiResponse, a deck on success or a tagged failure otherwise.
"""

import logging
import random
from collections.abc import Sequence
from typing import Any

from royaledeck.config import DECK_SIZE, settings
from royaledeck.filtering.constraints import (
    resolve_constraints,
    validate_budget,
    validate_constraints,
)
from royaledeck.models.card import Card
from royaledeck.models.deck import DeckConstraints, GeneratedDeck
from royaledeck.models.failure import (
    ApiResponse,
    FailureKind,
    KnownError,
    create_known_failure,
    create_success,
)
from royaledeck.models.mastery import MasteryRecord
from royaledeck.models.payload import DeckPayload
from royaledeck.services.deck_link import build_copy_deck_url
from royaledeck.services.deck_sampler import sample_deck

logger = logging.getLogger(__name__)


def make_rng(seed: int | None = None) -> random.Random:
    """Random source for one generation call; falls back to settings.random_seed."""
    return random.Random(seed if seed is not None else settings.random_seed)


def build_deck(
    constraints: DeckConstraints,
    catalog: Sequence[Card],
    mastery: Sequence[MasteryRecord] | None = None,
    rng: random.Random | None = None,
    max_attempts: int | None = None,
    tolerance: float | None = None,
) -> GeneratedDeck:
    """
    Build a deck satisfying the constraints.

    Strategy:
    1. Validate ranges and the selection budget (no sampling on failure)
    2. Resolve the filtered pool and ordered requirements
    3. Sample, retrying for the elixir target if one is set

    Args:
        constraints: Selection counts, elixir target and mastery bound
        catalog: The full card catalog
        mastery: Player mastery records, None if no lookup has succeeded
        rng: Random source (a fresh one per call if omitted)
        max_attempts: Elixir target attempt budget
        tolerance: Elixir target tolerance

    Returns:
        GeneratedDeck with exactly DECK_SIZE cards

    Raises:
        KnownError: Any classified generation failure
    """
    if max_attempts is not None and max_attempts < 1:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Attempt budget must be at least 1.",
            detail=f"max_attempts={max_attempts}",
            status_code=422,
        )
    validate_constraints(constraints)
    validate_budget(constraints, DECK_SIZE)

    resolved = resolve_constraints(catalog, constraints, mastery, DECK_SIZE)

    return sample_deck(
        resolved,
        rng if rng is not None else make_rng(),
        target_elixir=constraints.target_elixir,
        max_attempts=max_attempts,
        tolerance=tolerance,
        deck_size=DECK_SIZE,
    )


def generate_deck(
    constraints: DeckConstraints,
    catalog: Sequence[Card],
    mastery: Sequence[MasteryRecord] | None = None,
    rng: random.Random | None = None,
    max_attempts: int | None = None,
    tolerance: float | None = None,
) -> ApiResponse[Any]:
    """
    Generate a deck and wrap the outcome in the response envelope.

    Known failures come back as finalized known-failure responses carrying
    the failure kind and message. No partial deck is ever included.
    """
    try:
        deck = build_deck(constraints, catalog, mastery, rng, max_attempts, tolerance)
    except KnownError as e:
        logger.info(
            "deck_generation_failed",
            extra={"kind": e.kind.value, "detail": e.detail},
        )
        return create_known_failure(e)

    payload = DeckPayload.from_deck(deck, copy_deck_url=build_copy_deck_url(deck))
    return create_success(payload)


def format_deck(deck: GeneratedDeck) -> str:
    """Format a deck as plain text."""
    lines = [f"Deck ({len(deck.cards)} cards):"]
    for card in deck.cards:
        lines.append(f"  {card.elixir_cost:g}  {card.name} ({card.rarity.value})")
    lines.append(f"Average elixir cost: {deck.average_elixir:.1f}")
    return "\n".join(lines)
