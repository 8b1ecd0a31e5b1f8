"""
Player lookup endpoint.

Thin proxy in front of the RoyaleAPI player endpoint. Returns the player's
name and card mastery levels rather than the raw upstream payload.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from royaledeck.models.card import Card
from royaledeck.models.payload import MasteryPayload
from royaledeck.services.card_catalog import get_catalog
from royaledeck.services.player_lookup import lookup_player

router = APIRouter(prefix="/player", tags=["player"])


class PlayerResponse(BaseModel):
    """Response model for a player lookup."""

    tag: str
    name: str
    mastery: list[MasteryPayload] = Field(default_factory=list)


@router.get("", response_model=PlayerResponse)
async def get_player(
    catalog: Annotated[tuple[Card, ...], Depends(get_catalog)],
    tag: str | None = None,
) -> PlayerResponse:
    """
    Look up a player by tag.

    The "#" prefix is optional. A missing tag returns 400; upstream
    failures return the upstream status with a lookup_failed envelope.
    """
    profile = await lookup_player(tag or "", catalog)
    return PlayerResponse(
        tag=profile.tag,
        name=profile.name,
        mastery=[MasteryPayload.from_record(record) for record in profile.mastery],
    )
