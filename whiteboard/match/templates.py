"""Play templates - one-click game plans for either side.

Template paths are built relative to where each piece currently stands, so a
template works from any ball spot and any alignment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from ..reveal.core.point import Point
from ..reveal.core.entities import Assignment, Player, Team
from ..reveal.core.field import FIELD_CENTER_X, clamp_to_field

logger = logging.getLogger(__name__)


@dataclass
class TemplateAssignment:
    """What a template tells one piece to do."""
    assignment: Assignment
    path: List[Point] = field(default_factory=list)
    man_target_id: Optional[str] = None


AssignmentBuilder = Callable[[Dict[str, Player]], Dict[str, TemplateAssignment]]


@dataclass(frozen=True)
class PlayTemplate:
    id: str
    team: Team
    label: str
    description: str
    build: AssignmentBuilder

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "team": self.team.value,
            "label": self.label,
            "description": self.description,
        }


def _from(player: Optional[Player], dx: float, dy: float) -> Point:
    """Waypoint offset from a piece's current spot."""
    base = player.position if player else Point.zero()
    return clamp_to_field(Point(base.x + dx, base.y + dy))


def _route(p: Dict[str, Player], player_id: str, *offsets: tuple[float, float]) -> List[Point]:
    return [_from(p.get(player_id), dx, dy) for dx, dy in offsets]


# =============================================================================
# Offense
# =============================================================================

def _quick_slants(p: Dict[str, Player]) -> Dict[str, TemplateAssignment]:
    block = Assignment.BLOCK
    route = Assignment.PASS_ROUTE
    return {
        "qb": TemplateAssignment(Assignment.NONE),
        "rb": TemplateAssignment(block, _route(p, "rb", (0, -1.4))),
        "lt": TemplateAssignment(block, _route(p, "lt", (-0.8, -1.2))),
        "lg": TemplateAssignment(block, _route(p, "lg", (-0.5, -1.2))),
        "c": TemplateAssignment(block, _route(p, "c", (0, -1.2))),
        "rg": TemplateAssignment(block, _route(p, "rg", (0.5, -1.2))),
        "rt": TemplateAssignment(block, _route(p, "rt", (0.8, -1.2))),
        "wr1": TemplateAssignment(route, _route(p, "wr1", (3.5, -5.5))),
        "wr2": TemplateAssignment(route, _route(p, "wr2", (-3.5, -5.5))),
        "wr3": TemplateAssignment(route, _route(p, "wr3", (2.8, -4.8))),
        "te": TemplateAssignment(route, _route(p, "te", (-2.5, -5))),
    }


def _inside_zone(p: Dict[str, Player]) -> Dict[str, TemplateAssignment]:
    block = Assignment.BLOCK
    route = Assignment.PASS_ROUTE
    return {
        "qb": TemplateAssignment(Assignment.NONE),
        "rb": TemplateAssignment(Assignment.RUN, _route(p, "rb", (-0.6, -3.2), (-0.5, -7.2))),
        "lt": TemplateAssignment(block, _route(p, "lt", (-0.4, -1.2))),
        "lg": TemplateAssignment(block, _route(p, "lg", (-0.2, -1.4))),
        "c": TemplateAssignment(block, _route(p, "c", (0, -1.4))),
        "rg": TemplateAssignment(block, _route(p, "rg", (0.2, -1.4))),
        "rt": TemplateAssignment(block, _route(p, "rt", (0.4, -1.2))),
        "wr1": TemplateAssignment(route, _route(p, "wr1", (0.6, -5.5))),
        "wr2": TemplateAssignment(route, _route(p, "wr2", (-0.6, -5.5))),
        "wr3": TemplateAssignment(block, _route(p, "wr3", (2.2, -1))),
        "te": TemplateAssignment(block, _route(p, "te", (1.2, -1.2))),
    }


# =============================================================================
# Defense
# =============================================================================

def _cover_3(p: Dict[str, Player]) -> Dict[str, TemplateAssignment]:
    zone = Assignment.ZONE
    middle = p.get("db2")
    middle_drop = clamp_to_field(Point(FIELD_CENTER_X, (middle.position.y if middle else 0.0) - 11))
    return {
        "dl1": TemplateAssignment(Assignment.BLITZ),
        "dl2": TemplateAssignment(Assignment.BLITZ),
        "dl3": TemplateAssignment(Assignment.BLITZ),
        "dl4": TemplateAssignment(Assignment.BLITZ),
        "lb1": TemplateAssignment(zone, _route(p, "lb1", (-5.5, 2.4))),
        "lb2": TemplateAssignment(zone, _route(p, "lb2", (0, 2.6))),
        "lb3": TemplateAssignment(zone, _route(p, "lb3", (5.5, 2.4))),
        "db1": TemplateAssignment(zone, _route(p, "db1", (0, -12))),
        "db2": TemplateAssignment(zone, [middle_drop]),
        "db3": TemplateAssignment(zone, _route(p, "db3", (0, 2.2))),
        "db4": TemplateAssignment(zone, _route(p, "db4", (0, -12))),
    }


def _cover_1_blitz(p: Dict[str, Player]) -> Dict[str, TemplateAssignment]:
    man = Assignment.MAN
    return {
        "dl1": TemplateAssignment(Assignment.BLITZ),
        "dl2": TemplateAssignment(Assignment.BLITZ),
        "dl3": TemplateAssignment(Assignment.BLITZ),
        "dl4": TemplateAssignment(Assignment.BLITZ),
        "lb1": TemplateAssignment(Assignment.BLITZ),
        "lb2": TemplateAssignment(man, man_target_id="te"),
        "lb3": TemplateAssignment(man, man_target_id="rb"),
        "db1": TemplateAssignment(man, man_target_id="wr1"),
        "db2": TemplateAssignment(Assignment.ZONE, _route(p, "db2", (0, -10))),
        "db3": TemplateAssignment(man, man_target_id="wr3"),
        "db4": TemplateAssignment(man, man_target_id="wr2"),
    }


PLAY_TEMPLATES: List[PlayTemplate] = [
    PlayTemplate(
        id="quick-slants",
        team=Team.OFFENSE,
        label="Quick Slants",
        description="Fast inside-breaking routes with six-man protection.",
        build=_quick_slants,
    ),
    PlayTemplate(
        id="inside-zone",
        team=Team.OFFENSE,
        label="Inside Zone",
        description="Core run concept with downhill RB path and line drive blocks.",
        build=_inside_zone,
    ),
    PlayTemplate(
        id="cover-3",
        team=Team.DEFENSE,
        label="Cover 3",
        description="3 deep zones, 4 underneath zones, 4-man rush.",
        build=_cover_3,
    ),
    PlayTemplate(
        id="cover-1-blitz",
        team=Team.DEFENSE,
        label="Cover 1 Blitz",
        description="Single-high man coverage with extra pressure.",
        build=_cover_1_blitz,
    ),
]


def templates_for_team(team: Team) -> List[PlayTemplate]:
    return [t for t in PLAY_TEMPLATES if t.team == team]


def get_template(template_id: str, team: Optional[Team] = None) -> Optional[PlayTemplate]:
    for template in PLAY_TEMPLATES:
        if template.id == template_id and (team is None or template.team == team):
            return template
    return None


def apply_play_template(
    players: Sequence[Player],
    team: Team,
    template_id: str,
) -> List[Player]:
    """Apply a template to one side.

    Pieces the template does not mention are reset to no assignment. An
    unknown template leaves the roster unchanged.
    """
    template = get_template(template_id, team)
    if template is None:
        logger.warning("Unknown %s template: %s", team.value, template_id)
        return [p.clone() for p in players]

    updates = template.build({p.id: p for p in players})
    result = []
    for player in players:
        updated = player.clone()
        if player.team == team:
            update = updates.get(player.id)
            if update is None:
                updated.assignment = Assignment.NONE
                updated.path = []
                updated.man_target_id = None
            else:
                updated.assignment = update.assignment
                updated.path = list(update.path)
                updated.man_target_id = update.man_target_id
        result.append(updated)
    return result
