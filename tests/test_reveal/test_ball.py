"""Tests for play classification, ball state and receiver selection."""

import pytest

from whiteboard.reveal.core.entities import Assignment, Player, Team
from whiteboard.reveal.core.field import FIELD_CENTER_X
from whiteboard.reveal.core.point import Point
from whiteboard.reveal.systems.ball import (
    RevealBallPlan,
    after_catch_exhausted,
    after_catch_step,
    classify_play,
    dead_ball_frame,
    find_quarterback,
    flight_fraction,
    rank_open_receivers,
    run_ball_frame,
)


QB = ("qb", Point(26, 39))
RUNNER = ("rb", Point(30, 41))


class TestClassification:
    """Tests for run/pass classification."""

    def test_runner_makes_a_run(self, make_player):
        players = [
            make_player("qb", Team.OFFENSE, "QB", 26, 39),
            make_player("wr1", Team.OFFENSE, "WR", 8, 37, Assignment.RUN),
            make_player("rb", Team.OFFENSE, "RB", 29, 41, Assignment.RUN),
        ]
        plan = classify_play(players)
        assert plan.is_run_play
        assert plan.run_carrier_id == "wr1"

    def test_no_runner_is_a_pass(self, make_player):
        players = [
            make_player("qb", Team.OFFENSE, "QB", 26, 39),
            make_player("wr1", Team.OFFENSE, "WR", 8, 37, Assignment.PASS_ROUTE),
        ]
        plan = classify_play(players)
        assert not plan.is_run_play
        assert plan.completion_target_id is None
        assert not plan.has_throw

    def test_find_quarterback(self, make_player):
        players = [
            make_player("lb1", Team.DEFENSE, "QB", 20, 31),
            make_player("qb", Team.OFFENSE, "QB", 26, 39),
        ]
        assert find_quarterback(players).id == "qb"
        assert find_quarterback([]) is None


class TestBallPlan:
    """Tests for the pass plan record."""

    def test_commit_throw(self):
        plan = RevealBallPlan()
        plan.commit_throw("wr2", 0.3, Point(26, 39))
        assert plan.has_throw
        assert plan.completion_target_id == "wr2"

    def test_copy_is_independent(self):
        plan = RevealBallPlan()
        copied = plan.copy()
        copied.commit_throw("wr2", 0.3, Point(26, 39))
        assert not plan.has_throw

    def test_dict_round_trip(self):
        plan = RevealBallPlan()
        plan.commit_throw("te", 0.3125, Point(26.1, 39.2))
        assert RevealBallPlan.from_dict(plan.to_dict()) == plan


class TestRunBall:
    """Tests for the handoff blend."""

    def test_qb_holds_before_handoff(self, config):
        ball = run_ball_frame(0.0, QB, RUNNER, config)
        assert ball.carrier_id == "qb"
        assert ball.position == QB[1]

    def test_ball_loose_during_handoff(self, config):
        ball = run_ball_frame(0.12, QB, RUNNER, config)
        assert ball.carrier_id is None
        assert not ball.is_held
        assert ball.position.x == pytest.approx(28.0)
        assert ball.position.y == pytest.approx(40.0)

    def test_runner_carries_after_handoff(self, config):
        ball = run_ball_frame(0.18, QB, RUNNER, config)
        assert ball.carrier_id == "rb"
        assert ball.position == RUNNER[1]

    def test_quarterback_keeper(self, config):
        ball = run_ball_frame(0.1, QB, QB, config)
        assert ball.carrier_id == "qb"

    def test_no_quarterback(self, config):
        ball = run_ball_frame(0.0, None, RUNNER, config)
        assert ball.carrier_id == "rb"

    def test_dead_ball(self):
        ball = dead_ball_frame(35.0)
        assert ball.carrier_id is None
        assert ball.position == Point(FIELD_CENTER_X, 35.0)


class TestFlight:
    """Tests for ball flight timing."""

    def test_flight_fraction(self, config):
        assert flight_fraction(0.2, 0.3, config) == 0.0
        assert flight_fraction(0.36, 0.3, config) == pytest.approx(0.5)
        assert flight_fraction(0.5, 0.3, config) == 1.0


class TestReceiverRanking:
    """Tests for picking the most open receiver."""

    def test_fewest_nearby_defenders_first(self, config):
        candidates = [("wr1", Point(10, 25)), ("wr2", Point(40, 30)), ("te", Point(30, 30))]
        ranked = rank_open_receivers(candidates, [Point(11, 25)], 35.0, config)
        assert ranked[-1] == "wr1"

    def test_depth_breaks_ties(self, config):
        candidates = [("wr2", Point(40, 27)), ("te", Point(30, 30))]
        assert rank_open_receivers(candidates, [], 35.0, config) == ["wr2", "te"]

    def test_id_breaks_remaining_ties(self, config):
        candidates = [("wr2", Point(40, 30)), ("te", Point(30, 30))]
        assert rank_open_receivers(candidates, [], 35.0, config) == ["te", "wr2"]


class TestAfterCatch:
    """Tests for the bounded after-catch effort."""

    def test_heads_for_the_sticks(self, config):
        moved, travelled = after_catch_step(Point(20, 30), 25.0, 0.0, config)
        step = config.yac_rate / config.planning_steps
        assert moved.x == pytest.approx(20.0)
        assert moved.y == pytest.approx(30.0 - step)
        assert travelled == pytest.approx(step)

    def test_keeps_going_past_the_sticks(self, config):
        moved, _ = after_catch_step(Point(20, 24), 25.0, 0.0, config)
        assert moved.y < 24

    def test_effort_is_capped(self, config):
        moved, travelled = after_catch_step(Point(20, 30), 25.0, 5.99, config)
        assert travelled == pytest.approx(6.0)
        assert moved.y == pytest.approx(29.99)

        same, total = after_catch_step(moved, 25.0, config.yac_max_yards, config)
        assert same == moved
        assert total == config.yac_max_yards

    def test_exhausted(self, config):
        assert after_catch_exhausted(6.0, config)
        assert not after_catch_exhausted(5.5, config)
