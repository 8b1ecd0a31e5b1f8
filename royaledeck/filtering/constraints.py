"""
Constraint Resolver: Slider Inputs to Pool and Requirements.

Turns raw selection counts into:
- a filtered card pool (mastery bound, explicit exclusions)
- an ordered list of selection requirements for the sampler

INVARIANTS:
- Filtering is monotonic (only removes cards, never adds)
- Each step returns a new pool; nothing is mutated in place
- A count of 0 excludes; RANDOM (or an absent key) constrains nothing
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from royaledeck.config import (
    DECK_SIZE,
    MAX_CHAMPIONS,
    MAX_MASTERY_LEVEL,
    MAX_SELECTION_COUNT,
    MAX_TARGET_ELIXIR,
)
from royaledeck.models.card import Card, Rarity
from royaledeck.models.deck import (
    RANDOM,
    DeckConstraints,
    RequirementKind,
    RequirementSpec,
    ResolvedConstraints,
)
from royaledeck.models.failure import (
    BudgetExceededError,
    FailureKind,
    InsufficientPoolError,
    KnownError,
    MissingMasteryDataError,
)
from royaledeck.models.mastery import MasteryIndex, MasteryRecord

logger = logging.getLogger(__name__)


@dataclass
class ResolverMetrics:
    """Pool sizes recorded after each filtering step."""

    total_cards: int = 0
    after_mastery_filter: int = 0
    after_rarity_exclusion: int = 0
    after_archetype_exclusion: int = 0
    requirement_count: int = 0


def _invalid(message: str, detail: str) -> KnownError:
    return KnownError(
        kind=FailureKind.INVALID_INPUT,
        message=message,
        detail=detail,
        suggestion="Adjust the deck settings and try again.",
        status_code=422,
    )


def validate_constraints(constraints: DeckConstraints) -> None:
    """
    Check every input lies in its configuration range.

    Counts: 0..8 or RANDOM. Target elixir: must be finite; anything <= 0
    means unset, otherwise at most 8. Mastery bound: 0..10.

    Raises:
        KnownError: INVALID_INPUT on the first out-of-range value
    """
    counts = [*constraints.rarity_counts.items(), *constraints.archetype_counts.items()]
    for key, count in counts:
        if count == RANDOM:
            continue
        if not isinstance(count, int) or isinstance(count, bool):
            raise _invalid(f"Invalid count for {key.value}.", f"{key.value}={count!r}")
        if not 0 <= count <= MAX_SELECTION_COUNT:
            raise _invalid(
                f"Count for {key.value} must be between 0 and {MAX_SELECTION_COUNT}.",
                f"{key.value}={count}",
            )

    target = constraints.target_elixir
    if target is not None and not math.isfinite(target):
        raise _invalid("Target elixir must be a number.", f"target_elixir={target}")
    if target is not None and target > MAX_TARGET_ELIXIR:
        raise _invalid(
            f"Target elixir must be at most {MAX_TARGET_ELIXIR}.",
            f"target_elixir={target}",
        )

    bound = constraints.mastery_bound
    if bound is not None and not 0 <= bound <= MAX_MASTERY_LEVEL:
        raise _invalid(
            f"Mastery limit must be between 0 and {MAX_MASTERY_LEVEL}.",
            f"mastery_bound={bound}",
        )


def validate_budget(constraints: DeckConstraints, deck_size: int = DECK_SIZE) -> None:
    """
    Reject selections whose explicit counts overflow the deck.

    Runs before any sampling.

    Raises:
        BudgetExceededError: If the explicit counts sum past deck_size
    """
    requested = sum(count for _, _, count in constraints.explicit_counts() if count > 0)
    if requested > deck_size:
        raise BudgetExceededError(requested=requested, deck_size=deck_size)


def _filter_by_mastery(
    pool: tuple[Card, ...],
    constraints: DeckConstraints,
    mastery: Sequence[MasteryRecord] | None,
) -> tuple[Card, ...]:
    """
    Keep cards at or below the mastery bound.

    Unmapped cards count as level 0. A bound without mastery data is an
    error, never a silently ignored filter.
    """
    bound = constraints.mastery_bound
    if bound is None:
        return pool

    if mastery is None:
        raise MissingMasteryDataError(mastery_bound=bound)

    index = MasteryIndex(mastery)
    return tuple(card for card in pool if index.level_of(card) <= bound)


def _exclude_rarities(pool: tuple[Card, ...], constraints: DeckConstraints) -> tuple[Card, ...]:
    excluded = {rarity for rarity, count in constraints.rarity_counts.items() if count == 0}
    if not excluded:
        return pool
    return tuple(card for card in pool if card.rarity not in excluded)


def _exclude_archetypes(pool: tuple[Card, ...], constraints: DeckConstraints) -> tuple[Card, ...]:
    """Drop excluded archetypes; excluding TROOP drops every troop subtype."""
    excluded = [arch for arch, count in constraints.archetype_counts.items() if count == 0]
    if not excluded:
        return pool
    return tuple(
        card for card in pool if not any(arch.matches(card.archetype) for arch in excluded)
    )


def build_requirements(constraints: DeckConstraints) -> tuple[RequirementSpec, ...]:
    """
    Build the ordered requirement list.

    Order (authoritative):
    1. Archetype requirements, then rarity requirements
    2. Within a group, larger counts first
    3. Ties keep input order (stable sort)

    Champion requests are capped at one.
    """
    archetype_reqs: list[RequirementSpec] = []
    rarity_reqs: list[RequirementSpec] = []

    for kind, key, count in constraints.explicit_counts():
        if count <= 0:
            continue
        if kind is RequirementKind.ARCHETYPE:
            archetype_reqs.append(RequirementSpec(kind, key, count))
        else:
            if key is Rarity.CHAMPION:
                count = min(count, MAX_CHAMPIONS)
            rarity_reqs.append(RequirementSpec(kind, key, count))

    archetype_reqs.sort(key=lambda req: -req.want_count)
    rarity_reqs.sort(key=lambda req: -req.want_count)

    return tuple(archetype_reqs + rarity_reqs)


def resolve_constraints(
    catalog: Sequence[Card],
    constraints: DeckConstraints,
    mastery: Sequence[MasteryRecord] | None = None,
    deck_size: int = DECK_SIZE,
) -> ResolvedConstraints:
    """
    Resolve raw constraints into a filtered pool and ordered requirements.

    Applies filters in order (authoritative):
    1. Mastery bound
    2. Rarity exclusions
    3. Archetype exclusions

    Args:
        catalog: The full card catalog
        constraints: Raw selection counts and bounds
        mastery: Player mastery records; None if no lookup has succeeded
        deck_size: Cards per deck

    Returns:
        ResolvedConstraints with the filtered pool and requirement list

    Raises:
        MissingMasteryDataError: Mastery bound set without mastery data
        InsufficientPoolError: Fewer than deck_size cards survive filtering
    """
    metrics = ResolverMetrics()

    pool = tuple(catalog)
    metrics.total_cards = len(pool)

    pool = _filter_by_mastery(pool, constraints, mastery)
    metrics.after_mastery_filter = len(pool)

    pool = _exclude_rarities(pool, constraints)
    metrics.after_rarity_exclusion = len(pool)

    pool = _exclude_archetypes(pool, constraints)
    metrics.after_archetype_exclusion = len(pool)

    if len(pool) < deck_size:
        logger.info(
            "constraints_pool_too_small",
            extra={"pool_size": len(pool), "deck_size": deck_size},
        )
        raise InsufficientPoolError(pool_size=len(pool), deck_size=deck_size)

    requirements = build_requirements(constraints)
    metrics.requirement_count = len(requirements)

    logger.info(
        "constraints_resolved",
        extra={
            "total": metrics.total_cards,
            "after_mastery": metrics.after_mastery_filter,
            "after_rarity": metrics.after_rarity_exclusion,
            "after_archetype": metrics.after_archetype_exclusion,
            "requirements": metrics.requirement_count,
        },
    )

    return ResolvedConstraints(pool=pool, requirements=requirements)
