"""Roster validation for locked formations."""

from __future__ import annotations

import logging
from typing import Sequence

from ..reveal.core.entities import (
    Assignment,
    DEFENSE_ASSIGNMENTS,
    OFFENSE_ASSIGNMENTS,
    PATHLESS_ASSIGNMENTS,
    Player,
)

logger = logging.getLogger(__name__)


class RosterError(ValueError):
    """Raised when a roster cannot be revealed as authored."""


def check_assignment_for_team(player: Player, assignment: Assignment) -> None:
    allowed = OFFENSE_ASSIGNMENTS if player.is_offense else DEFENSE_ASSIGNMENTS
    if assignment not in allowed:
        raise RosterError(
            f"{player.label} ({player.team.value}) cannot take assignment '{assignment.value}'"
        )


def validate_roster(players: Sequence[Player]) -> None:
    """Check a locked roster before it is revealed.

    Raises:
        RosterError: duplicate ids, an assignment from the other side's set,
            a drawn path on man or blitz, or a man target that is missing,
            not on offense, or set on a non-man assignment
    """
    by_id = {}
    for player in players:
        if player.id in by_id:
            raise RosterError(f"Duplicate player id: {player.id}")
        by_id[player.id] = player

    for player in players:
        check_assignment_for_team(player, player.assignment)

        if player.assignment in PATHLESS_ASSIGNMENTS and player.path:
            raise RosterError(
                f"{player.label} has a drawn path but '{player.assignment.value}' forbids one"
            )

        if player.man_target_id is None:
            continue
        if player.assignment != Assignment.MAN:
            raise RosterError(f"{player.label} has a man target without a man assignment")
        target = by_id.get(player.man_target_id)
        if target is None or not target.is_offense:
            raise RosterError(
                f"{player.label} man target '{player.man_target_id}' is not an offensive player"
            )

    logger.debug("Roster validated: %d players", len(players))
