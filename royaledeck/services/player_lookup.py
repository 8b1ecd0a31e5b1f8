"""
Player lookup service.

Fetches a player profile through the RoyaleAPI proxy and extracts the
card mastery badges used by the mastery filter.

API docs: https://developer.clashroyale.com/#/documentation
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from royaledeck.config import MASTERY_BADGE_PREFIX, settings
from royaledeck.models.card import Card
from royaledeck.models.failure import FailureKind, KnownError, LookupFailedError
from royaledeck.models.mastery import MasteryRecord
from royaledeck.services.card_catalog import mastery_name_mapping

logger = logging.getLogger(__name__)


@dataclass
class PlayerProfile:
    """The parts of a player profile the deck builder uses."""

    tag: str
    name: str
    mastery: list[MasteryRecord] = field(default_factory=list)


def normalize_tag(tag: str | None) -> str:
    """
    Normalize a player tag to "#UPPERCASE".

    Raises:
        KnownError: MISSING_REQUIRED if the tag is empty
    """
    cleaned = (tag or "").strip().upper()
    if not cleaned or cleaned == "#":
        raise KnownError(
            kind=FailureKind.MISSING_REQUIRED,
            message="Missing player tag",
            suggestion="Enter the tag shown on the player's profile, e.g. #2PP.",
            status_code=400,
        )
    if not cleaned.startswith("#"):
        cleaned = "#" + cleaned
    return cleaned


def player_url(tag: str) -> str:
    """Build the lookup URL for a normalized tag."""
    return f"{settings.royaleapi_base_url}/players/{quote(tag, safe='')}"


def _upstream_reason(response: httpx.Response) -> str:
    """Best-effort error reason from an upstream error body."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict):
        reason = body.get("reason") or body.get("message") or body.get("error")
        if reason:
            return f"HTTP {response.status_code}: {reason}"
    return f"HTTP {response.status_code}"


async def fetch_player(tag: str, client: httpx.AsyncClient | None = None) -> dict[str, Any]:
    """
    Fetch raw player JSON.

    Args:
        tag: Player tag, with or without "#"
        client: Optional httpx client for connection reuse

    Returns:
        Decoded player JSON

    Raises:
        KnownError: If the tag is empty
        LookupFailedError: On transport errors, non-success status or bad JSON
    """
    normalized = normalize_tag(tag)
    url = player_url(normalized)
    headers = {"Authorization": f"Bearer {settings.royaleapi_key}"}

    logger.debug("player_lookup_request", extra={"tag": normalized, "url": url})

    try:
        if client:
            response = await client.get(url, headers=headers)
        else:
            async with httpx.AsyncClient(timeout=settings.lookup_timeout_seconds) as own_client:
                response = await own_client.get(url, headers=headers)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        reason = _upstream_reason(e.response)
        logger.warning("player_lookup_failed", extra={"tag": normalized, "reason": reason})
        raise LookupFailedError(normalized, reason, status_code=e.response.status_code) from e
    except httpx.RequestError as e:
        logger.warning("player_lookup_failed", extra={"tag": normalized, "reason": str(e)})
        raise LookupFailedError(normalized, f"Request failed: {e}", status_code=502) from e

    try:
        data = response.json()
    except ValueError as e:
        raise LookupFailedError(normalized, "Invalid JSON from upstream", status_code=502) from e

    if not isinstance(data, dict):
        raise LookupFailedError(normalized, "Unexpected player payload", status_code=502)

    return data


def parse_mastery_badges(player: dict[str, Any], catalog: Sequence[Card]) -> list[MasteryRecord]:
    """
    Extract card mastery records from a player's badges.

    Only badges named with the mastery prefix count. The badge name is
    mapped to a card name through the catalog; unmapped badges keep the
    badge name. Malformed badges are skipped.
    """
    mapping = mastery_name_mapping(catalog)
    records: list[MasteryRecord] = []

    for badge in player.get("badges") or []:
        if not isinstance(badge, dict):
            continue
        name = badge.get("name")
        if not isinstance(name, str) or not name.startswith(MASTERY_BADGE_PREFIX):
            continue
        try:
            level = int(badge.get("level", 0))
            max_level = int(badge.get("maxLevel", 0))
        except (TypeError, ValueError):
            logger.debug("mastery_badge_skipped", extra={"badge": name})
            continue
        records.append(
            MasteryRecord(card_name=mapping.get(name, name), level=level, max_level=max_level)
        )

    return records


async def lookup_player(
    tag: str,
    catalog: Sequence[Card],
    client: httpx.AsyncClient | None = None,
) -> PlayerProfile:
    """
    Fetch a player and parse their mastery badges.

    Raises:
        KnownError: If the tag is empty
        LookupFailedError: If the fetch fails
    """
    data = await fetch_player(tag, client=client)
    mastery = parse_mastery_badges(data, catalog)

    logger.info(
        "player_lookup_succeeded",
        extra={"tag": data.get("tag"), "mastery_badges": len(mastery)},
    )

    return PlayerProfile(
        tag=str(data.get("tag") or normalize_tag(tag)),
        name=str(data.get("name", "")),
        mastery=mastery,
    )
