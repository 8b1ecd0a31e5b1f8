"""Tests for the deck generation CLI."""

from pathlib import Path
from typing import Any

import httpx
import pytest
import respx

from royaledeck.cli import build_parser, constraints_from_args, main, run
from royaledeck.models.card import Archetype, Rarity
from royaledeck.models.deck import RANDOM
from royaledeck.services.player_lookup import player_url


class TestParser:
    def test_defaults_are_random(self) -> None:
        args = build_parser().parse_args([])

        constraints = constraints_from_args(args)

        assert all(count == RANDOM for count in constraints.rarity_counts.values())
        assert all(count == RANDOM for count in constraints.archetype_counts.values())
        assert constraints.target_elixir is None
        assert constraints.mastery_bound is None

    def test_counts_and_options(self) -> None:
        args = build_parser().parse_args(
            [
                "--common", "4",
                "--champion", "0",
                "--troop-air", "2",
                "--spell", "random",
                "--elixir", "3.5",
                "--mastery-max", "6",
            ]
        )

        constraints = constraints_from_args(args)

        assert constraints.rarity_counts[Rarity.COMMON] == 4
        assert constraints.rarity_counts[Rarity.CHAMPION] == 0
        assert constraints.archetype_counts[Archetype.TROOP_AIR] == 2
        assert constraints.archetype_counts[Archetype.SPELL] == RANDOM
        assert constraints.target_elixir == 3.5
        assert constraints.mastery_bound == 6

    def test_rejects_non_numeric_count(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--rare", "lots"])

        assert exc_info.value.code == 2

    @pytest.mark.parametrize("value", ["0", "-3", "many"])
    def test_rejects_non_positive_attempt_budget(self, value: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--max-attempts", value])

        assert exc_info.value.code == 2

    def test_accepts_attempt_budget(self) -> None:
        assert build_parser().parse_args(["--max-attempts", "50"]).max_attempts == 50


class TestRun:
    def test_prints_deck_and_link(
        self, catalog_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        args = build_parser().parse_args(["--catalog", str(catalog_path), "--seed", "1"])

        assert run(args) == 0

        out = capsys.readouterr().out
        assert "Deck (8 cards):" in out
        assert "Average elixir cost:" in out
        assert "Copy deck: https://link.clashroyale.com/" in out

    def test_budget_error(self, catalog_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        args = build_parser().parse_args(
            ["--catalog", str(catalog_path), "--common", "5", "--spell", "4"]
        )

        assert run(args) == 1

        err = capsys.readouterr().err
        assert "Error: Total cards cannot exceed 8." in err

    def test_mastery_without_tag(
        self, catalog_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        args = build_parser().parse_args(["--catalog", str(catalog_path), "--mastery-max", "3"])

        assert run(args) == 1
        assert "Look up a player" in capsys.readouterr().err

    def test_missing_catalog_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        args = build_parser().parse_args(["--catalog", str(tmp_path / "missing.csv")])

        assert run(args) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_malformed_catalog_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        catalog = tmp_path / "cards.csv"
        catalog.write_text("name,elixirCost,rarity,id,archetype\nKnight,three,common,1,troop\n")
        args = build_parser().parse_args(["--catalog", str(catalog)])

        assert run(args) == 1
        assert "Error: Catalog line" in capsys.readouterr().err

    @respx.mock
    def test_tag_lookup(
        self,
        catalog_path: Path,
        player_json: dict[str, Any],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        respx.get(player_url("#2PP")).mock(return_value=httpx.Response(200, json=player_json))
        args = build_parser().parse_args(
            ["--catalog", str(catalog_path), "--tag", "2PP", "--mastery-max", "5", "--seed", "3"]
        )

        assert run(args) == 0

        out = capsys.readouterr().out
        assert "Player: Test Player (#2PP), 4 mastery badges" in out
        assert "  3  Knight (common)" not in out


class TestMain:
    def test_exits_with_run_status(self, catalog_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--catalog", str(catalog_path), "--seed", "2"])

        assert exc_info.value.code == 0
