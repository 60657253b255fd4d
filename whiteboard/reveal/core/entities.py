"""Core entities - Player, Ball frame and supporting enums.

Entities are pure data containers. Behavior is implemented in systems.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .point import Point


# =============================================================================
# Enums
# =============================================================================

class Team(str, Enum):
    """Which side a player is on."""
    OFFENSE = "offense"
    DEFENSE = "defense"


class Assignment(str, Enum):
    """Per-down assignment. Determines which resolver owns the player."""
    # Offense
    RUN = "run"
    PASS_ROUTE = "pass-route"
    BLOCK = "block"

    # Defense
    MAN = "man"
    ZONE = "zone"
    BLITZ = "blitz"
    CONTAIN = "contain"

    # Either side
    NONE = "none"


OFFENSE_ASSIGNMENTS = frozenset({
    Assignment.RUN,
    Assignment.PASS_ROUTE,
    Assignment.BLOCK,
    Assignment.NONE,
})

DEFENSE_ASSIGNMENTS = frozenset({
    Assignment.MAN,
    Assignment.ZONE,
    Assignment.BLITZ,
    Assignment.CONTAIN,
    Assignment.NONE,
})

# Assignments that never carry a drawn route
PATHLESS_ASSIGNMENTS = frozenset({Assignment.MAN, Assignment.BLITZ})

# Skill positions allowed to gain yards downfield
ELIGIBLE_ROLES = frozenset({"WR", "TE", "RB"})

# Role that holds the ball at the snap
QUARTERBACK_ROLE = "QB"


class PlayPhase(str, Enum):
    """Ball and play-type state machine."""
    PRE_SNAP = "pre_snap"
    RUN_PLAY = "run_play"
    PASS_PLAY = "pass_play"
    BALL_IN_AIR = "ball_in_air"
    AFTER_CATCH = "after_catch"
    TACKLE = "tackle"
    SACK = "sack"
    SETTLED = "settled"     # After-catch effort used up
    COMPLETE = "complete"   # Full duration elapsed

    @property
    def is_terminal(self) -> bool:
        return self in (PlayPhase.TACKLE, PlayPhase.SACK, PlayPhase.SETTLED, PlayPhase.COMPLETE)


# =============================================================================
# Player
# =============================================================================

@dataclass
class Player:
    """A piece on the whiteboard.

    Attributes:
        id: Unique identifier within the roster
        label: Display label (e.g. "WR1", "CB2")
        team: Offense or defense
        role: Position group ("QB", "WR", "DL", "DB", ...)
        position: Locked position on the field
        assignment: What the player does this down
        path: Drawn waypoints in field coordinates, walked from position
        man_target_id: Offensive player to cover (man assignment only)
    """
    id: str
    label: str = ""
    team: Team = Team.OFFENSE
    role: str = ""
    position: Point = field(default_factory=Point.zero)
    assignment: Assignment = Assignment.NONE
    path: List[Point] = field(default_factory=list)
    man_target_id: Optional[str] = None

    def __post_init__(self):
        if not self.label:
            self.label = self.id.upper()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def is_offense(self) -> bool:
        return self.team == Team.OFFENSE

    @property
    def is_defense(self) -> bool:
        return self.team == Team.DEFENSE

    @property
    def is_eligible(self) -> bool:
        """Skill position that may catch a pass."""
        return self.is_offense and self.role in ELIGIBLE_ROLES

    @property
    def is_quarterback(self) -> bool:
        return self.is_offense and self.role == QUARTERBACK_ROLE

    # =========================================================================
    # Mutation helpers (return new state)
    # =========================================================================

    def with_position(self, position: Point) -> Player:
        """Return copy with new position."""
        new = self.clone()
        new.position = position
        return new

    def clone(self) -> Player:
        """Copy that shares no mutable state with this player."""
        new = copy.copy(self)
        new.path = list(self.path)
        return new

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "team": self.team.value,
            "role": self.role,
            "position": self.position.to_dict(),
            "assignment": self.assignment.value,
            "path": [p.to_dict() for p in self.path],
            "man_target_id": self.man_target_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Player:
        """Build a player from a dict. Raises KeyError/ValueError on bad data."""
        return cls(
            id=str(data["id"]),
            label=str(data.get("label") or ""),
            team=Team(data["team"]),
            role=str(data.get("role", "")),
            position=Point.from_dict(data["position"]),
            assignment=Assignment(data.get("assignment", Assignment.NONE.value)),
            path=[Point.from_dict(p) for p in data.get("path", [])],
            man_target_id=data.get("man_target_id"),
        )

    def format_brief(self) -> str:
        """Brief one-line format."""
        target = f" -> {self.man_target_id}" if self.man_target_id else ""
        return f"{self.label}({self.role}) @ {self.position} [{self.assignment.value}{target}]"

    def __repr__(self) -> str:
        return f"Player({self.id}, {self.role}, pos={self.position})"


def clone_players(players: List[Player]) -> List[Player]:
    """Deep enough copy of a roster for snapshots."""
    return [p.clone() for p in players]


# =============================================================================
# Ball
# =============================================================================

@dataclass(frozen=True)
class BallFrame:
    """Ball state exposed to the renderer for one frame."""
    position: Point
    carrier_id: Optional[str] = None

    @property
    def is_held(self) -> bool:
        return self.carrier_id is not None

    def __repr__(self) -> str:
        if self.carrier_id:
            return f"Ball(held by {self.carrier_id})"
        return f"Ball(loose @ {self.position})"
