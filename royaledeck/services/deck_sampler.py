"""
Deck Sampler: Greedy Requirement Satisfaction Plus Random Fill.

One assembly attempt:
1. Walk the ordered requirements, sampling matching cards without
   replacement (capped by what is available and the free slots)
2. Fill the remaining slots uniformly at random from what is left

With an elixir target the whole attempt is repeated (rejection sampling)
until the average lands within tolerance or the attempt budget runs out.

INVARIANTS:
- A returned deck has exactly deck_size cards, unique by id
- At most one champion per deck
- Every attempt starts from the full resolved pool
- Sampling is uniform over the candidate set; no weighting
"""

import logging
import random
from collections.abc import Sequence

from royaledeck.config import DECK_SIZE, settings
from royaledeck.models.card import Card
from royaledeck.models.deck import GeneratedDeck, RequirementSpec, ResolvedConstraints
from royaledeck.models.failure import ElixirTargetUnsatisfiableError, InsufficientFillError

logger = logging.getLogger(__name__)

# Absorbs float error in sums like 25.6 / 8 when comparing to the tolerance
_ELIXIR_EPSILON = 1e-9


def average_elixir(cards: Sequence[Card], deck_size: int = DECK_SIZE) -> float:
    """Average elixir cost over the full deck size."""
    return sum(card.elixir_cost for card in cards) / deck_size


def _without_champions(pool: Sequence[Card]) -> list[Card]:
    return [card for card in pool if not card.is_champion]


def _pick_for_requirement(
    requirement: RequirementSpec,
    pool: Sequence[Card],
    free_slots: int,
    champion_present: bool,
    rng: random.Random,
) -> list[Card]:
    """
    Choose the cards satisfying one requirement.

    Non-champions are sampled first; a single champion tops up a shortfall
    only if no champion is in the deck yet.
    """
    candidates = [card for card in pool if requirement.matches(card)]
    if champion_present:
        candidates = _without_champions(candidates)

    take = min(requirement.want_count, len(candidates), free_slots)
    if take <= 0:
        return []

    regular = [card for card in candidates if not card.is_champion]
    champions = [card for card in candidates if card.is_champion]

    chosen = rng.sample(regular, min(take, len(regular)))
    if len(chosen) < take and champions and not champion_present:
        chosen.append(rng.choice(champions))

    return chosen


def _draw_fill(pool: Sequence[Card], needed: int, rng: random.Random) -> list[Card]:
    """
    Draw `needed` cards one at a time, uniform over what is still available.

    Drawing a champion removes the other champions from the candidates.

    Raises:
        InsufficientFillError: If the pool runs dry first
    """
    available = list(pool)
    drawn: list[Card] = []

    while len(drawn) < needed:
        if not available:
            raise InsufficientFillError(available=len(drawn), needed=needed)
        card = available.pop(rng.randrange(len(available)))
        drawn.append(card)
        if card.is_champion:
            available = _without_champions(available)

    return drawn


def assemble_deck(
    resolved: ResolvedConstraints,
    rng: random.Random,
    deck_size: int = DECK_SIZE,
) -> tuple[Card, ...]:
    """
    Run one assembly attempt.

    Args:
        resolved: Filtered pool and ordered requirements
        rng: Random source
        deck_size: Cards per deck

    Returns:
        Exactly deck_size unique cards, requirement picks first

    Raises:
        InsufficientFillError: If too few cards remain for the random fill
    """
    pool: list[Card] = list(resolved.pool)
    deck: list[Card] = []
    champion_present = False

    for requirement in resolved.requirements:
        free_slots = deck_size - len(deck)
        if free_slots <= 0:
            break

        chosen = _pick_for_requirement(requirement, pool, free_slots, champion_present, rng)
        if not chosen:
            continue

        deck.extend(chosen)
        chosen_ids = {card.id for card in chosen}
        pool = [card for card in pool if card.id not in chosen_ids]

        if any(card.is_champion for card in chosen):
            champion_present = True
            pool = _without_champions(pool)

    if len(deck) < deck_size:
        if champion_present:
            pool = _without_champions(pool)

        remaining = deck_size - len(deck)
        if len(pool) < remaining:
            raise InsufficientFillError(available=len(pool), needed=remaining)

        deck.extend(_draw_fill(pool, remaining, rng))

    return tuple(deck)


def sample_deck(
    resolved: ResolvedConstraints,
    rng: random.Random,
    target_elixir: float | None = None,
    max_attempts: int | None = None,
    tolerance: float | None = None,
    deck_size: int = DECK_SIZE,
) -> GeneratedDeck:
    """
    Assemble a deck, retrying until the elixir target is met.

    Without a target (None or <= 0) a single attempt is made. With a target,
    each attempt restarts from the full resolved pool and is discarded if
    its average misses the target by more than the tolerance.

    Args:
        resolved: Filtered pool and ordered requirements
        rng: Random source
        target_elixir: Desired average elixir
        max_attempts: Attempt budget (defaults to settings.max_elixir_attempts)
        tolerance: Allowed distance from target (defaults to settings.elixir_tolerance)
        deck_size: Cards per deck

    Returns:
        GeneratedDeck with the number of attempts used

    Raises:
        InsufficientFillError: Never retried
        ElixirTargetUnsatisfiableError: If the attempt budget is exhausted
    """
    if target_elixir is None or target_elixir <= 0:
        cards = assemble_deck(resolved, rng, deck_size)
        return GeneratedDeck(cards=cards, average_elixir=average_elixir(cards, deck_size))

    if max_attempts is None:
        max_attempts = settings.max_elixir_attempts
    if tolerance is None:
        tolerance = settings.elixir_tolerance

    for attempt in range(1, max_attempts + 1):
        cards = assemble_deck(resolved, rng, deck_size)
        average = average_elixir(cards, deck_size)

        if abs(average - target_elixir) <= tolerance + _ELIXIR_EPSILON:
            logger.info(
                "deck_sampled",
                extra={"attempts": attempt, "average_elixir": round(average, 3)},
            )
            return GeneratedDeck(cards=cards, average_elixir=average, attempts=attempt)

    logger.info(
        "elixir_target_unsatisfiable",
        extra={"target": target_elixir, "attempts": max_attempts, "tolerance": tolerance},
    )
    raise ElixirTargetUnsatisfiableError(
        target=target_elixir,
        attempts=max_attempts,
        tolerance=tolerance,
    )
