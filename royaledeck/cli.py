"""Generate a deck from the command line.

Usage:
    royaledeck-generate --common 4 --rare 2 --champion 0 --elixir 3.5
    royaledeck-generate --mastery-max 5 --tag 2PP
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from royaledeck.models.card import Archetype, Card, Rarity
from royaledeck.models.deck import RANDOM, DeckConstraints, SelectionCount
from royaledeck.models.failure import KnownError
from royaledeck.models.mastery import MasteryRecord
from royaledeck.parsers.catalog import CatalogParseError, load_catalog
from royaledeck.services.card_catalog import get_catalog
from royaledeck.services.deck_builder import build_deck, format_deck, make_rng
from royaledeck.services.deck_link import build_copy_deck_url
from royaledeck.services.player_lookup import lookup_player

logger = logging.getLogger(__name__)


def _selection_count(value: str) -> SelectionCount:
    """Parse a count argument: an integer or "random"."""
    if value.lower() == RANDOM:
        return RANDOM
    try:
        return int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer or 'random', got {value!r}") from e


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a random 8-card deck")

    rarity_group = parser.add_argument_group("rarity counts (0 excludes, 'random' = free)")
    for rarity in Rarity:
        rarity_group.add_argument(
            f"--{rarity.value}",
            dest=f"rarity_{rarity.name.lower()}",
            type=_selection_count,
            default=RANDOM,
            metavar="N",
        )

    archetype_group = parser.add_argument_group("archetype counts (0 excludes, 'random' = free)")
    for archetype in Archetype:
        archetype_group.add_argument(
            f"--{archetype.value}",
            dest=f"archetype_{archetype.name.lower()}",
            type=_selection_count,
            default=RANDOM,
            metavar="N",
        )

    parser.add_argument("--elixir", type=float, default=None, help="Target average elixir")
    parser.add_argument(
        "--mastery-max", type=int, default=None, help="Only cards at or below this mastery level"
    )
    parser.add_argument("--tag", default=None, help="Player tag for mastery lookup")
    parser.add_argument("--catalog", type=Path, default=None, help="Card catalog CSV")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--max-attempts", type=_positive_int, default=None, help="Elixir target attempt budget"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def constraints_from_args(args: argparse.Namespace) -> DeckConstraints:
    return DeckConstraints(
        rarity_counts={r: getattr(args, f"rarity_{r.name.lower()}") for r in Rarity},
        archetype_counts={a: getattr(args, f"archetype_{a.name.lower()}") for a in Archetype},
        target_elixir=args.elixir,
        mastery_bound=args.mastery_max,
    )


def run(args: argparse.Namespace) -> int:
    """Generate and print one deck. Returns the process exit code."""
    try:
        catalog: tuple[Card, ...] = (
            tuple(load_catalog(args.catalog)) if args.catalog else get_catalog()
        )
    except (OSError, CatalogParseError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        mastery: list[MasteryRecord] | None = None
        if args.tag and args.mastery_max is not None:
            profile = asyncio.run(lookup_player(args.tag, catalog))
            mastery = profile.mastery
            print(f"Player: {profile.name} ({profile.tag}), {len(mastery)} mastery badges")

        deck = build_deck(
            constraints_from_args(args),
            catalog,
            mastery,
            rng=make_rng(args.seed),
            max_attempts=args.max_attempts,
        )
    except KnownError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.suggestion:
            print(e.suggestion, file=sys.stderr)
        return 1

    print(format_deck(deck))
    print(f"Copy deck: {build_copy_deck_url(deck)}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
