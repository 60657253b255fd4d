"""Preset down-and-distance situations."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..reveal.core.situation import Situation, format_yards


SITUATIONS: List[Situation] = [
    Situation(
        id="first-and-10",
        down=1,
        yards_required=10.0,
        ball_spot_yard=35.0,
        description="Standard down-and-distance from your own 35.",
    ),
    Situation(
        id="third-and-6",
        down=3,
        yards_required=6.0,
        ball_spot_yard=45.0,
        description="Need six yards and a clear window to convert.",
    ),
    Situation(
        id="red-zone",
        down=2,
        yards_required=8.0,
        ball_spot_yard=88.0,
        description="Compressed spacing inside the red zone.",
    ),
]

SITUATIONS_BY_ID: Dict[str, Situation] = {s.id: s for s in SITUATIONS}

DEFAULT_SITUATION = SITUATIONS[0]


def get_situation(situation_id: str) -> Optional[Situation]:
    return SITUATIONS_BY_ID.get(situation_id)


def format_down_label(down: int) -> str:
    """Ordinal label for a down: 1st, 2nd, 3rd, 4th, 11th..."""
    if 11 <= down % 100 <= 13:
        return f"{down}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(down % 10, "th")
    return f"{down}{suffix}"


def down_and_distance_label(situation: Situation) -> str:
    return f"{format_down_label(situation.down)} & {format_yards(situation.yards_required)}"
