"""
Card catalog endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from royaledeck.models.card import Card
from royaledeck.models.payload import CardPayload
from royaledeck.services.card_catalog import get_catalog

router = APIRouter(prefix="/cards", tags=["cards"])


class CardListResponse(BaseModel):
    """Response model for the card catalog."""

    cards: list[CardPayload]
    count: int


@router.get("", response_model=CardListResponse)
async def list_cards(
    catalog: Annotated[tuple[Card, ...], Depends(get_catalog)],
) -> CardListResponse:
    """List every catalog card in catalog order."""
    cards = [CardPayload.from_card(card) for card in catalog]
    return CardListResponse(cards=cards, count=len(cards))
