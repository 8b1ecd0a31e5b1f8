"""
Deck generation endpoint.

Generates a random deck from slider-style constraints. Every outcome is
returned in the ApiResponse envelope.
"""

from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from royaledeck.models.card import Archetype, Card, Rarity
from royaledeck.models.deck import DeckConstraints
from royaledeck.models.failure import ApiResponse
from royaledeck.models.mastery import MasteryRecord
from royaledeck.models.payload import DeckPayload, MasteryPayload
from royaledeck.services.card_catalog import get_catalog
from royaledeck.services.deck_builder import generate_deck
from royaledeck.services.player_lookup import lookup_player

router = APIRouter(prefix="/decks", tags=["decks"])

CountValue = int | Literal["random"]


class DeckGenerationRequest(BaseModel):
    """Request model for deck generation."""

    rarities: dict[Rarity, CountValue] = Field(
        default_factory=dict,
        description="Rarity -> count. 0 excludes the rarity; 'random' or absent leaves it free.",
        examples=[{"common": 4, "rare": 2, "epic": 1, "legendary": 1, "champion": 0}],
    )
    archetypes: dict[Archetype, CountValue] = Field(
        default_factory=dict,
        description="Archetype -> count. 'troop' also covers troop-air and troop-ground.",
        examples=[{"spell": 2, "building": 0}],
    )
    target_elixir: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Desired average elixir; unset or 0 disables the target",
    )
    mastery_bound: int | None = Field(
        default=None,
        description="Only cards at or below this mastery level (0-10)",
    )
    mastery: list[MasteryPayload] | None = Field(
        default=None,
        description="Mastery records from an earlier player lookup",
    )
    player_tag: str | None = Field(
        default=None,
        description="Player to look up when mastery records are not supplied",
    )

    def to_constraints(self) -> DeckConstraints:
        return DeckConstraints(
            rarity_counts=dict(self.rarities),
            archetype_counts=dict(self.archetypes),
            target_elixir=self.target_elixir,
            mastery_bound=self.mastery_bound,
        )


@router.post("/generate", response_model=ApiResponse[DeckPayload])
async def generate(
    request: DeckGenerationRequest,
    response: Response,
    catalog: Annotated[tuple[Card, ...], Depends(get_catalog)],
) -> ApiResponse[Any]:
    """
    Generate an 8-card deck.

    Mastery data comes from the request body, or from a player lookup when
    only a tag is given. Generation failures return 422 with the failure
    kind; no partial deck is returned.
    """
    mastery: list[MasteryRecord] | None = None
    if request.mastery is not None:
        mastery = [record.to_record() for record in request.mastery]
    elif request.player_tag and request.mastery_bound is not None:
        profile = await lookup_player(request.player_tag, catalog)
        mastery = profile.mastery

    result = generate_deck(request.to_constraints(), catalog, mastery)

    if not result.is_success:
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    return result
