"""Tests for the deck generation endpoint."""

from collections import Counter
from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import respx
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError

from royaledeck.api.decks import DeckGenerationRequest
from royaledeck.main import app
from royaledeck.models.card import Card
from royaledeck.services.card_catalog import get_catalog
from royaledeck.services.player_lookup import player_url


@pytest.fixture
async def client(sample_catalog: tuple[Card, ...]) -> AsyncIterator[AsyncClient]:
    """Async test client serving the fixture catalog."""
    app.dependency_overrides[get_catalog] = lambda: sample_catalog

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def _names(body: dict[str, Any]) -> set[str]:
    return {card["name"] for card in body["data"]["cards"]}


class TestGenerateDeck:
    async def test_unconstrained(self, client: AsyncClient) -> None:
        response = await client.post("/decks/generate", json={})

        assert response.status_code == 200
        body = response.json()
        assert body["outcome"] == "success"
        assert body["failure"] is None
        assert len(body["data"]["cards"]) == 8
        assert body["data"]["attempts"] == 1
        assert body["data"]["copy_deck_url"].startswith("https://link.clashroyale.com/")

    async def test_rarity_split(self, client: AsyncClient) -> None:
        payload = {
            "rarities": {"common": 4, "rare": 2, "epic": 1, "legendary": 1, "champion": 0},
        }

        response = await client.post("/decks/generate", json=payload)

        assert response.status_code == 200
        counts = Counter(card["rarity"] for card in response.json()["data"]["cards"])
        assert counts == {"common": 4, "rare": 2, "epic": 1, "legendary": 1}

    async def test_random_values_accepted(self, client: AsyncClient) -> None:
        payload = {
            "rarities": {"common": "random", "champion": 1},
            "archetypes": {"spell": "random", "troop": 3},
        }

        response = await client.post("/decks/generate", json=payload)

        assert response.status_code == 200
        cards = response.json()["data"]["cards"]
        assert sum(1 for card in cards if card["rarity"] == "champion") == 1

    async def test_elixir_target(self, client: AsyncClient) -> None:
        response = await client.post("/decks/generate", json={"target_elixir": 3.5})

        assert response.status_code == 200
        assert abs(response.json()["data"]["average_elixir"] - 3.5) <= 0.2 + 1e-9


class TestGenerationFailures:
    async def test_budget_exceeded(self, client: AsyncClient) -> None:
        payload = {"rarities": {"common": 5}, "archetypes": {"spell": 4}}

        response = await client.post("/decks/generate", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["outcome"] == "known_failure"
        assert body["data"] is None
        assert body["failure"]["kind"] == "budget_exceeded"
        assert body["failure"]["message"] == "Total cards cannot exceed 8."

    async def test_insufficient_pool(self, client: AsyncClient) -> None:
        payload = {"archetypes": {"troop": 0, "building": 0}}

        response = await client.post("/decks/generate", json=payload)

        assert response.status_code == 422
        assert response.json()["failure"]["kind"] == "insufficient_pool"

    async def test_unreachable_elixir_target(self, client: AsyncClient) -> None:
        """The fixture catalog cannot average 8 elixir."""
        response = await client.post("/decks/generate", json={"target_elixir": 8.0})

        assert response.status_code == 422
        failure = response.json()["failure"]
        assert failure["kind"] == "elixir_target_unsatisfiable"
        assert failure["message"] == "Couldn't match target elixir (8.0) after 1000 tries."

    async def test_out_of_range_count(self, client: AsyncClient) -> None:
        response = await client.post("/decks/generate", json={"rarities": {"epic": 9}})

        assert response.status_code == 422
        assert response.json()["failure"]["kind"] == "invalid_input"

    async def test_unknown_rarity_is_request_error(self, client: AsyncClient) -> None:
        response = await client.post("/decks/generate", json={"rarities": {"mythic": 1}})

        assert response.status_code == 422
        assert "detail" in response.json()

    @pytest.mark.parametrize("target", [float("nan"), float("inf")])
    def test_non_finite_target_rejected_by_schema(self, target: float) -> None:
        with pytest.raises(ValidationError):
            DeckGenerationRequest(target_elixir=target)


class TestMasteryFilter:
    async def test_bound_without_mastery(self, client: AsyncClient) -> None:
        response = await client.post("/decks/generate", json={"mastery_bound": 5})

        assert response.status_code == 422
        assert response.json()["failure"]["kind"] == "missing_mastery_data"

    async def test_inline_mastery(self, client: AsyncClient) -> None:
        payload = {
            "mastery_bound": 5,
            "mastery": [
                {"card_name": "Knight", "level": 7, "max_level": 10},
                {"card_name": "P.E.K.K.A", "level": 10, "max_level": 10},
            ],
        }

        for _ in range(10):
            response = await client.post("/decks/generate", json=payload)

            assert response.status_code == 200
            assert not {"Knight", "P.E.K.K.A"} & _names(response.json())

    async def test_negative_mastery_level_rejected(self, client: AsyncClient) -> None:
        payload = {
            "mastery_bound": 5,
            "mastery": [{"card_name": "Knight", "level": -1, "max_level": 10}],
        }

        response = await client.post("/decks/generate", json=payload)

        assert response.status_code == 422

    @respx.mock
    async def test_player_tag_lookup(
        self, client: AsyncClient, player_json: dict[str, Any]
    ) -> None:
        route = respx.get(player_url("#2PP")).mock(
            return_value=httpx.Response(200, json=player_json)
        )

        response = await client.post(
            "/decks/generate",
            json={"player_tag": "2PP", "mastery_bound": 5},
        )

        assert response.status_code == 200
        assert route.called
        assert not {"Knight", "P.E.K.K.A"} & _names(response.json())

    @respx.mock(assert_all_called=False)
    async def test_player_tag_ignored_without_bound(self, client: AsyncClient) -> None:
        route = respx.get(player_url("#2PP")).mock(return_value=httpx.Response(500))

        response = await client.post("/decks/generate", json={"player_tag": "2PP"})

        assert response.status_code == 200
        assert not route.called

    @respx.mock
    async def test_player_lookup_failure(self, client: AsyncClient) -> None:
        respx.get(player_url("#2PP")).mock(
            return_value=httpx.Response(404, json={"reason": "notFound"})
        )

        response = await client.post(
            "/decks/generate",
            json={"player_tag": "#2PP", "mastery_bound": 5},
        )

        assert response.status_code == 404
        body = response.json()
        assert body["outcome"] == "known_failure"
        assert body["failure"]["kind"] == "lookup_failed"
        assert body["data"] is None
