# app/services/ranking.py
from __future__ import annotations
from typing import Any, Iterable, List, Optional, Sequence

from app.types import PlayerRecord, RankedEntry

PRIZE_TABLE = (100, 90, 60, 50, 40, 20, 10)
LEADERBOARD_SIZE = 7
PERIODS = ("today", "this_week", "this_month", "all_time")


class MalformedPayloadError(ValueError):
    pass


def extract_players(payload: Any) -> List[PlayerRecord]:
    """
    Pull the player list out of an upstream body.
    Accepts {data: [...]} and {success, data: [...]}. A missing `data` is an empty board.
    """
    if not isinstance(payload, dict):
        raise MalformedPayloadError(f"expected a JSON object, got {type(payload).__name__}")
    data = payload.get("data")
    if data is None:
        return []
    if not isinstance(data, list):
        raise MalformedPayloadError(f"`data` must be a list, got {type(data).__name__}")
    return [p for p in data if isinstance(p, dict)]


def wager_for(player: PlayerRecord, period: str) -> Optional[float]:
    wagered = player.get("wagered")
    if not isinstance(wagered, dict):
        return None
    value = wagered.get(period)
    # bool is an int subclass; never a wager
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def prize_for(index: int, prizes: Sequence[int] = PRIZE_TABLE) -> int:
    """Prize for a 0-based rank; anything past the table pays 0."""
    if 0 <= index < len(prizes):
        return prizes[index]
    return 0


def mask_name(name: Optional[str]) -> str:
    """'Nottingham' -> 'NOT***AM'. Names of 5 chars or fewer are shown as-is."""
    if not name:
        return ""
    name = str(name)
    if len(name) <= 5:
        return name
    return f"{name[:3].upper()}***{name[-2:].upper()}"


def top_players(
    players: Iterable[PlayerRecord],
    period: str = "this_week",
    limit: int = LEADERBOARD_SIZE,
) -> List[PlayerRecord]:
    """Drop missing/non-positive wagers, sort descending (stable on ties), keep the first `limit`."""
    qualified = []
    for p in players:
        w = wager_for(p, period)
        if w is not None and w > 0:
            qualified.append((w, p))
    qualified.sort(key=lambda pair: -pair[0])
    return [p for _, p in qualified[: max(0, limit)]]


def rank_players(
    players: Iterable[PlayerRecord],
    period: str = "this_week",
    limit: int = LEADERBOARD_SIZE,
    prizes: Sequence[int] = PRIZE_TABLE,
) -> List[RankedEntry]:
    rows: List[RankedEntry] = []
    for index, p in enumerate(top_players(players, period, limit)):
        rows.append({
            "place": index + 1,
            "uid": p.get("uid"),
            "masked_name": mask_name(p.get("name")),
            "wager": wager_for(p, period) or 0.0,
            "prize": prize_for(index, prizes),
        })
    return rows
