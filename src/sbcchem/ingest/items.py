"""Normalize intercepted club/market item payloads into Player records."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from sbcchem.models import InvalidInput, Player, Rarity


logger = logging.getLogger(__name__)

_ID_KEYS = ("id", "pid", "resourceId", "defId", "definitionId", "assetId")
_RATING_KEYS = ("rating", "ovr", "overall")
_POSITION_KEYS = ("preferredPosition", "position")
_POSITION_LIST_KEYS = ("possiblePositions", "basePossiblePositions", "positions")
_CLUB_KEYS = ("teamid", "teamId", "clubId", "club")
_NATION_KEYS = ("nation", "nationId")
_LEAGUE_KEYS = ("leagueId", "league")
_NAME_KEYS = ("name", "commonName")

_RARITY_NAMES = {rarity.value: rarity for rarity in Rarity}


def _first(item: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = item.get(key)
        if value not in (None, ""):
            return value
    return None


def _position(item: Mapping[str, Any]) -> Any:
    value = _first(item, _POSITION_KEYS)
    if value is not None:
        return value
    for key in _POSITION_LIST_KEYS:
        options = item.get(key)
        if isinstance(options, list) and options:
            return options[0]
    return None


def _rarity(item: Mapping[str, Any]) -> Rarity:
    flag = item.get("rareflag")
    if isinstance(flag, int) and not isinstance(flag, bool):
        if flag <= 0:
            return Rarity.COMMON
        return Rarity.RARE if flag == 1 else Rarity.SPECIAL

    text = str(item.get("rarity") or "").strip().lower()
    if not text or text == "none":
        return Rarity.COMMON
    # Named promo tiers ("totw", "if", ...) count as special cards.
    return _RARITY_NAMES.get(text, Rarity.SPECIAL)


def _name(item: Mapping[str, Any]) -> Optional[str]:
    value = _first(item, _NAME_KEYS)
    if value is not None:
        return str(value)
    parts = [str(item[key]).strip() for key in ("firstName", "lastName") if item.get(key)]
    return " ".join(parts) if parts else None


def extract_items(payload: Any) -> Optional[List[Any]]:
    """Pull the list of items out of a web app response body."""

    if isinstance(payload, list):
        return payload
    if not isinstance(payload, Mapping):
        return None
    if isinstance(payload.get("items"), list):
        return payload["items"]
    item_data = payload.get("itemData")
    if isinstance(item_data, list):
        return item_data
    if isinstance(item_data, Mapping):
        return [item_data]
    if isinstance(payload.get("players"), list):
        return payload["players"]
    return None


def player_from_item(item: Mapping[str, Any]) -> Player:
    """Map one raw item onto a Player; raises ValidationError for bad fields."""

    if not isinstance(item, Mapping):
        raise InvalidInput(f"Item must be an object, got {type(item).__name__}")
    return Player(
        id=_first(item, _ID_KEYS),
        name=_name(item),
        rating=_first(item, _RATING_KEYS),
        position=_position(item),
        club=_first(item, _CLUB_KEYS),
        nation=_first(item, _NATION_KEYS),
        league=_first(item, _LEAGUE_KEYS),
        quality=item.get("quality"),
        rarity=_rarity(item),
    )


def players_from_payload(payload: Any) -> List[Player]:
    """Map every usable item in ``payload``; unusable items are logged and skipped."""

    items = extract_items(payload)
    if items is None:
        logger.warning("Payload has no recognizable item list")
        return []

    players: List[Player] = []
    skipped = 0
    for position, item in enumerate(items):
        try:
            players.append(player_from_item(item))
        except (ValidationError, InvalidInput) as exc:
            skipped += 1
            logger.warning("Skipping item %d: %s", position, exc)

    logger.info("Ingested %d player(s) from %d item(s)", len(players), len(items))
    if skipped:
        logger.info("Skipped %d item(s) that could not be mapped", skipped)
    return players
