"""Core layer - foundational types and utilities."""

from .point import Point
from .field import (
    FIELD_WIDTH,
    FIELD_LENGTH,
    PLAYABLE_START_YARD,
    PLAYABLE_END_YARD,
    clamp_to_field,
    is_in_bounds,
    snap_point_to_yard,
)
from .entities import (
    Assignment,
    BallFrame,
    ELIGIBLE_ROLES,
    Player,
    PlayPhase,
    Team,
)
from .config import RevealConfig, DEFAULT_CONFIG
from .events import Event, EventType, EventBus
from .hashing import fnv1a_32, seeded_index, jitter_offset
from .situation import Situation

__all__ = [
    "Point",
    "FIELD_WIDTH",
    "FIELD_LENGTH",
    "PLAYABLE_START_YARD",
    "PLAYABLE_END_YARD",
    "clamp_to_field",
    "is_in_bounds",
    "snap_point_to_yard",
    "Assignment",
    "BallFrame",
    "ELIGIBLE_ROLES",
    "Player",
    "PlayPhase",
    "Team",
    "RevealConfig",
    "DEFAULT_CONFIG",
    "Event",
    "EventType",
    "EventBus",
    "fnv1a_32",
    "seeded_index",
    "jitter_offset",
    "Situation",
]
