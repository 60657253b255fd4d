"""Shared pytest fixtures for Whiteboard tests."""

from typing import List, Optional

import pytest

from whiteboard.match.roster import create_roster
from whiteboard.match.situations import DEFAULT_SITUATION
from whiteboard.match.templates import apply_play_template
from whiteboard.reveal import RevealOrchestrator
from whiteboard.reveal.core.config import RevealConfig
from whiteboard.reveal.core.entities import Assignment, Player, Team
from whiteboard.reveal.core.point import Point
from whiteboard.reveal.core.situation import Situation


# =============================================================================
# Situation Fixtures
# =============================================================================


@pytest.fixture
def situation() -> Situation:
    """First and ten at the 35."""
    return DEFAULT_SITUATION


@pytest.fixture
def config() -> RevealConfig:
    return RevealConfig()


# =============================================================================
# Player Fixtures
# =============================================================================


@pytest.fixture
def make_player():
    """Factory for a single piece."""

    def _make(
        player_id: str,
        team: Team,
        role: str,
        x: float,
        y: float,
        assignment: Assignment = Assignment.NONE,
        path: Optional[List[Point]] = None,
        man_target_id: Optional[str] = None,
    ) -> Player:
        return Player(
            id=player_id,
            team=team,
            role=role,
            position=Point(x, y),
            assignment=assignment,
            path=list(path or []),
            man_target_id=man_target_id,
        )

    return _make


@pytest.fixture
def roster(situation) -> List[Player]:
    """The 22 default pieces on the 35, no assignments."""
    return create_roster(situation)


def _game_plan(situation: Situation, offense: str, defense: str) -> List[Player]:
    players = create_roster(situation)
    players = apply_play_template(players, Team.OFFENSE, offense)
    return apply_play_template(players, Team.DEFENSE, defense)


@pytest.fixture
def slants_vs_cover3(situation) -> List[Player]:
    return _game_plan(situation, "quick-slants", "cover-3")


@pytest.fixture
def zone_run_vs_cover3(situation) -> List[Player]:
    return _game_plan(situation, "inside-zone", "cover-3")


@pytest.fixture
def slants_vs_cover1(situation) -> List[Player]:
    return _game_plan(situation, "quick-slants", "cover-1-blitz")


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def orchestrator() -> RevealOrchestrator:
    return RevealOrchestrator()
