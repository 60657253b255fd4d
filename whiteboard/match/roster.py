"""Roster creation and formation editing.

The duel always uses the same 22 pieces. Editing helpers return new player
lists and never modify their inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from ..reveal.core.point import Point
from ..reveal.core.entities import (
    Assignment,
    ELIGIBLE_ROLES,
    PATHLESS_ASSIGNMENTS,
    Player,
    Team,
    clone_players,
)
from ..reveal.core.field import clamp_to_field, snap_point_to_yard
from ..reveal.core.situation import Situation
from .validation import RosterError, check_assignment_for_team


# =============================================================================
# Alignment Table
# =============================================================================

@dataclass(frozen=True)
class Alignment:
    """Default spot for a piece, relative to the line of scrimmage.

    dy is positive toward the offense's own end zone, so offensive pieces
    have dy > 0 and defensive pieces dy < 0.
    """
    id: str
    label: str
    team: Team
    role: str
    x: float
    dy: float


DEFAULT_ALIGNMENTS: tuple[Alignment, ...] = (
    # Offense
    Alignment("qb", "QB", Team.OFFENSE, "QB", 26.0, 4.0),
    Alignment("rb", "RB", Team.OFFENSE, "RB", 29.0, 6.0),
    Alignment("lt", "LT", Team.OFFENSE, "LT", 22.0, 1.0),
    Alignment("lg", "LG", Team.OFFENSE, "LG", 24.0, 1.0),
    Alignment("c", "C", Team.OFFENSE, "C", 26.0, 1.0),
    Alignment("rg", "RG", Team.OFFENSE, "RG", 28.0, 1.0),
    Alignment("rt", "RT", Team.OFFENSE, "RT", 30.0, 1.0),
    Alignment("wr1", "WR1", Team.OFFENSE, "WR", 8.0, 2.0),
    Alignment("wr2", "WR2", Team.OFFENSE, "WR", 44.0, 2.0),
    Alignment("wr3", "WR3", Team.OFFENSE, "WR", 4.0, 4.0),
    Alignment("te", "TE", Team.OFFENSE, "TE", 36.0, 1.0),
    # Defense
    Alignment("dl1", "DE", Team.DEFENSE, "DL", 20.0, -1.0),
    Alignment("dl2", "DT1", Team.DEFENSE, "DL", 24.0, -1.0),
    Alignment("dl3", "DT2", Team.DEFENSE, "DL", 28.0, -1.0),
    Alignment("dl4", "DE2", Team.DEFENSE, "DL", 32.0, -1.0),
    Alignment("lb1", "LB1", Team.DEFENSE, "LB", 20.0, -4.0),
    Alignment("lb2", "LB2", Team.DEFENSE, "LB", 26.0, -4.0),
    Alignment("lb3", "LB3", Team.DEFENSE, "LB", 32.0, -4.0),
    Alignment("db1", "CB1", Team.DEFENSE, "DB", 8.0, -7.0),
    Alignment("db2", "S1", Team.DEFENSE, "DB", 20.0, -7.0),
    Alignment("db3", "S2", Team.DEFENSE, "DB", 32.0, -7.0),
    Alignment("db4", "CB2", Team.DEFENSE, "DB", 44.0, -7.0),
)


def create_roster(situation: Situation) -> List[Player]:
    """The 22 pieces lined up on the situation's ball spot, no assignments."""
    los = situation.line_of_scrimmage
    return [
        Player(
            id=a.id,
            label=a.label,
            team=a.team,
            role=a.role,
            position=clamp_to_field(Point(a.x, los + a.dy)),
        )
        for a in DEFAULT_ALIGNMENTS
    ]


# =============================================================================
# Geometry Helpers
# =============================================================================

def clamp_to_los_side(player: Player, point: Point, line_of_scrimmage: float) -> Point:
    """Keep a piece on its own side of the line of scrimmage."""
    if player.is_offense:
        y = max(point.y, line_of_scrimmage)
    else:
        y = min(point.y, line_of_scrimmage)
    return clamp_to_field(Point(point.x, y))


def translate_to_line(point: Point, from_los: float, to_los: float) -> Point:
    """Move a point with the line of scrimmage, keeping its depth."""
    return clamp_to_field(Point(point.x, to_los + (point.y - from_los)))


def _index(players: Sequence[Player]) -> Dict[str, Player]:
    return {p.id: p for p in players}


def _replace(players: Sequence[Player], updated: Player) -> List[Player]:
    return [updated if p.id == updated.id else p.clone() for p in players]


def _require(players: Sequence[Player], player_id: str) -> Player:
    player = _index(players).get(player_id)
    if player is None:
        raise RosterError(f"Unknown player: {player_id}")
    return player


# =============================================================================
# Editing
# =============================================================================

def move_player(
    players: Sequence[Player],
    player_id: str,
    point: Point,
    line_of_scrimmage: float,
) -> List[Player]:
    """Drag a piece to a snapped point on its side of the line."""
    player = _require(players, player_id)
    position = clamp_to_los_side(player, snap_point_to_yard(point), line_of_scrimmage)
    return _replace(players, player.with_position(position))


def append_path_point(players: Sequence[Player], player_id: str, point: Point) -> List[Player]:
    """Add a waypoint to a piece's drawn path."""
    player = _require(players, player_id)
    if player.assignment in PATHLESS_ASSIGNMENTS:
        raise RosterError(f"{player.label} cannot draw a path while on {player.assignment.value}")
    updated = player.clone()
    updated.path.append(snap_point_to_yard(point))
    return _replace(players, updated)


def clear_path(players: Sequence[Player], player_id: str) -> List[Player]:
    player = _require(players, player_id)
    updated = player.clone()
    updated.path = []
    return _replace(players, updated)


def first_eligible_receiver(players: Iterable[Player]) -> Optional[str]:
    """Default man coverage target: first eligible offensive piece."""
    for player in players:
        if player.is_offense and player.role in ELIGIBLE_ROLES:
            return player.id
    return None


def set_assignment(
    players: Sequence[Player],
    player_id: str,
    assignment: Assignment,
) -> List[Player]:
    """Give a piece its assignment for the down.

    Man coverage defaults to the first eligible receiver. Assignments that
    forbid a drawn route drop the current path.
    """
    player = _require(players, player_id)
    check_assignment_for_team(player, assignment)

    updated = player.clone()
    updated.assignment = assignment
    updated.man_target_id = first_eligible_receiver(players) if assignment == Assignment.MAN else None
    if assignment in PATHLESS_ASSIGNMENTS:
        updated.path = []
    return _replace(players, updated)


def set_man_target(players: Sequence[Player], player_id: str, target_id: str) -> List[Player]:
    player = _require(players, player_id)
    if player.assignment != Assignment.MAN:
        raise RosterError(f"{player.label} is not in man coverage")
    target = _require(players, target_id)
    if not target.is_offense:
        raise RosterError(f"Man target {target_id} is not an offensive player")
    updated = player.clone()
    updated.man_target_id = target_id
    return _replace(players, updated)


# =============================================================================
# Round Transitions
# =============================================================================

def project_formation(
    players: Sequence[Player],
    from_los: float,
    to_los: float,
) -> List[Player]:
    """Carry the last formation to a new ball spot for the next round.

    Positions keep their depth relative to the line. Assignments, paths and
    man targets are cleared.
    """
    projected = []
    for player in players:
        moved = player.clone()
        moved.position = clamp_to_los_side(player, translate_to_line(player.position, from_los, to_los), to_los)
        moved.assignment = Assignment.NONE
        moved.path = []
        moved.man_target_id = None
        projected.append(moved)
    return projected


def apply_saved_team_play(
    players: Sequence[Player],
    saved: Sequence[Player],
    team: Team,
    saved_los: float,
    line_of_scrimmage: float,
) -> List[Player]:
    """Run the same play again for one side, moved to the current ball spot."""
    saved_by_id = _index(saved)
    result = []
    for player in players:
        source = saved_by_id.get(player.id)
        if player.team != team or source is None:
            result.append(player.clone())
            continue

        updated = player.clone()
        updated.position = clamp_to_los_side(
            player,
            translate_to_line(source.position, saved_los, line_of_scrimmage),
            line_of_scrimmage,
        )
        updated.assignment = source.assignment
        updated.man_target_id = source.man_target_id
        updated.path = [translate_to_line(p, saved_los, line_of_scrimmage) for p in source.path]
        result.append(updated)
    return result


def team_players(players: Sequence[Player], team: Team) -> List[Player]:
    return clone_players([p for p in players if p.team == team])
