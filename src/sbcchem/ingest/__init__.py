"""Input adapters that normalize raw item payloads and squad documents."""

from .items import extract_items, player_from_item, players_from_payload
from .squads import SquadDocument

__all__ = ["SquadDocument", "extract_items", "player_from_item", "players_from_payload"]
