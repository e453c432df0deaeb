# types.py
from typing import Any, Dict, TypedDict

class PlayerRecord(TypedDict, total=False):
    uid: str
    name: str
    wagered: Dict[str, Any]

class RankedEntry(TypedDict):
    place: int
    uid: str | None
    masked_name: str
    wager: float
    prize: int
