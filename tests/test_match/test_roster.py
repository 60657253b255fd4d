"""Tests for roster creation, formation editing and validation."""

import pytest

from whiteboard.match.roster import (
    append_path_point,
    apply_saved_team_play,
    clear_path,
    create_roster,
    first_eligible_receiver,
    move_player,
    project_formation,
    set_assignment,
    set_man_target,
    team_players,
)
from whiteboard.match.validation import RosterError, validate_roster
from whiteboard.reveal.core.entities import Assignment, Team
from whiteboard.reveal.core.point import Point
from whiteboard.reveal.core.situation import Situation


def by_id(players):
    return {p.id: p for p in players}


# =============================================================================
# Creation
# =============================================================================


class TestCreateRoster:
    """Tests for the default 22-piece alignment."""

    def test_eleven_a_side(self, roster):
        assert len(roster) == 22
        assert len(team_players(roster, Team.OFFENSE)) == 11
        assert len(team_players(roster, Team.DEFENSE)) == 11
        assert len({p.id for p in roster}) == 22

    def test_each_side_on_its_half(self, roster, situation):
        los = situation.line_of_scrimmage
        for player in roster:
            if player.is_offense:
                assert player.position.y > los
            else:
                assert player.position.y < los

    def test_aligned_to_ball_spot(self):
        players = by_id(create_roster(Situation(ball_spot_yard=45)))
        assert players["qb"].position == Point(26.0, 49.0)
        assert players["db1"].position == Point(8.0, 38.0)

    def test_no_assignments(self, roster):
        assert all(p.assignment == Assignment.NONE and not p.path for p in roster)


# =============================================================================
# Editing
# =============================================================================


class TestEditing:
    """Tests for the formation editing helpers."""

    def test_move_snaps_and_stays_on_side(self, roster):
        moved = by_id(move_player(roster, "wr1", Point(10.13, 30.0), 35.0))
        assert moved["wr1"].position.x == pytest.approx(10.2)
        assert moved["wr1"].position.y == pytest.approx(35.0)

    def test_move_defender_stays_on_side(self, roster):
        moved = by_id(move_player(roster, "lb2", Point(26, 41), 35.0))
        assert moved["lb2"].position.y == pytest.approx(35.0)

    def test_edits_do_not_modify_input(self, roster):
        before = roster[7].position
        move_player(roster, "wr1", Point(12, 40), 35.0)
        assert roster[7].position == before

    def test_unknown_player(self, roster):
        with pytest.raises(RosterError, match="Unknown player"):
            move_player(roster, "k", Point(10, 40), 35.0)

    def test_append_and_clear_path(self, roster):
        players = append_path_point(roster, "wr1", Point(12, 30))
        players = append_path_point(players, "wr1", Point(16.05, 26))
        path = by_id(players)["wr1"].path
        assert len(path) == 2
        assert path[1].x == pytest.approx(16.0)

        cleared = by_id(clear_path(players, "wr1"))
        assert cleared["wr1"].path == []

    def test_man_cannot_draw_a_path(self, roster):
        players = set_assignment(roster, "db1", Assignment.MAN)
        with pytest.raises(RosterError, match="cannot draw a path"):
            append_path_point(players, "db1", Point(8, 20))

    def test_man_defaults_to_first_eligible(self, roster):
        assert first_eligible_receiver(roster) == "rb"
        players = by_id(set_assignment(roster, "db1", Assignment.MAN))
        assert players["db1"].man_target_id == "rb"

    def test_blitz_drops_the_path(self, roster):
        players = set_assignment(roster, "lb1", Assignment.ZONE)
        players = append_path_point(players, "lb1", Point(14, 33))
        players = by_id(set_assignment(players, "lb1", Assignment.BLITZ))
        assert players["lb1"].path == []
        assert players["lb1"].man_target_id is None

    def test_wrong_side_assignment(self, roster):
        with pytest.raises(RosterError):
            set_assignment(roster, "wr1", Assignment.BLITZ)
        with pytest.raises(RosterError):
            set_assignment(roster, "lb1", Assignment.RUN)

    def test_set_man_target(self, roster):
        players = set_assignment(roster, "db1", Assignment.MAN)
        players = by_id(set_man_target(players, "db1", "wr1"))
        assert players["db1"].man_target_id == "wr1"

    def test_man_target_must_be_offense(self, roster):
        players = set_assignment(roster, "db1", Assignment.MAN)
        with pytest.raises(RosterError):
            set_man_target(players, "db1", "db2")

    def test_man_target_needs_man_assignment(self, roster):
        with pytest.raises(RosterError, match="not in man coverage"):
            set_man_target(roster, "db1", "wr1")


# =============================================================================
# Round Transitions
# =============================================================================


class TestRoundTransitions:
    """Tests for carrying formations between rounds."""

    def test_project_keeps_depth_and_clears_plans(self, slants_vs_cover3):
        projected = by_id(project_formation(slants_vs_cover3, 35.0, 45.0))
        assert projected["qb"].position.y == pytest.approx(49.0)
        assert projected["dl1"].position.y == pytest.approx(44.0)
        assert all(p.assignment == Assignment.NONE and not p.path for p in projected.values())

    def test_apply_saved_team_play(self, slants_vs_cover3):
        current = create_roster(Situation(ball_spot_yard=45))
        players = by_id(apply_saved_team_play(current, slants_vs_cover3, Team.OFFENSE, 35.0, 45.0))

        saved = by_id(slants_vs_cover3)
        assert players["wr1"].assignment == Assignment.PASS_ROUTE
        assert players["wr1"].path[0].y == pytest.approx(saved["wr1"].path[0].y + 10)
        assert players["wr1"].path[0].x == pytest.approx(saved["wr1"].path[0].x)
        # Defense untouched
        assert players["lb1"].assignment == Assignment.NONE


# =============================================================================
# Validation
# =============================================================================


class TestValidateRoster:
    """Tests for validate_roster()."""

    def test_template_plans_are_valid(self, slants_vs_cover3, zone_run_vs_cover3, slants_vs_cover1):
        validate_roster(slants_vs_cover3)
        validate_roster(zone_run_vs_cover3)
        validate_roster(slants_vs_cover1)

    def test_duplicate_ids(self, roster):
        with pytest.raises(RosterError, match="Duplicate"):
            validate_roster(roster + [roster[0].clone()])

    def test_wrong_side_assignment(self, roster):
        roster[0].assignment = Assignment.ZONE
        with pytest.raises(RosterError):
            validate_roster(roster)

    def test_path_on_blitz(self, roster):
        roster[11].assignment = Assignment.BLITZ
        roster[11].path = [Point(20, 38)]
        with pytest.raises(RosterError, match="forbids"):
            validate_roster(roster)

    def test_dangling_man_target(self, roster):
        roster[18].assignment = Assignment.MAN
        roster[18].man_target_id = "ghost"
        with pytest.raises(RosterError, match="not an offensive player"):
            validate_roster(roster)

    def test_man_target_without_man(self, roster):
        roster[18].assignment = Assignment.ZONE
        roster[18].man_target_id = "wr1"
        with pytest.raises(RosterError, match="without a man assignment"):
            validate_roster(roster)

    def test_man_without_target_allowed(self, roster):
        roster[18].assignment = Assignment.MAN
        validate_roster(roster)
