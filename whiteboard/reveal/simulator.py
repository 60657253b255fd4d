"""Fixed-step reveal pipeline.

Advances a SimulationContext one step at a time. Every step runs the same
stages in the same order:

    1. path/progress
    2. zone coverage
    3. man coverage
    4. ball, run blocking, pursuit, pass protection, after-catch effort
    5. overlap resolution
    6. tackle/sack detection

The planning pass and the visible loop both drive this pipeline; only the
context's mode differs.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from .core.point import Point
from .core.entities import Assignment, BallFrame, PlayPhase
from .core.events import EventType
from .core.field import clamp_to_field
from .context import SimulationContext
from .systems import ball as ball_system
from .systems.coverage import (
    is_in_any_zone,
    pull_toward_receiver,
    receivers_near_man_defenders,
    resolve_man_coverage,
    select_zone_targets,
)
from .systems.paths import resolve_path_position
from .systems.protection import freeze_offset, protection_anchor, should_freeze
from .resolution.blocking import discover_run_blocks, pinned_position, pursue
from .resolution.separation import resolve_overlaps
from .resolution.tackle import RunTackleResult, find_first_contact, separate_tackler

logger = logging.getLogger(__name__)


class RevealSimulator:
    """Runs the per-step pipeline against a context.

    Usage:
        simulator = RevealSimulator()
        simulator.snap(ctx)
        while not ctx.phase.is_terminal:
            simulator.advance(ctx)
    """

    # =========================================================================
    # Entry Points
    # =========================================================================

    def snap(self, ctx: SimulationContext) -> None:
        """Put the context at step 0: raw start positions, ball at the snap."""
        ctx.step = 0
        ctx.positions = dict(ctx.start_positions)
        ctx.frozen_ids = frozenset()

        if ctx.ball_plan.is_run_play:
            ctx.phase = PlayPhase.RUN_PLAY
            ctx.ball = self._run_ball(ctx, ctx.positions, 0.0)
        else:
            ctx.phase = PlayPhase.PASS_PLAY
            ctx.ball = self._held_ball(ctx, ctx.positions)

        ctx.emit(
            EventType.SNAP,
            player_id=ctx.ball.carrier_id,
            description=f"{'Run' if ctx.ball_plan.is_run_play else 'Pass'} play snapped",
            phase=ctx.phase.value,
        )

    def advance(self, ctx: SimulationContext) -> None:
        """Advance the context by one step. No-op once the play is over."""
        if ctx.phase.is_terminal or ctx.step >= ctx.config.planning_steps:
            return

        ctx.step += 1
        progress = ctx.progress

        # 1. Path/progress
        positions = self._resolve_paths(ctx, progress)
        frozen: set[str] = set()

        if ctx.ball_plan.is_run_play:
            ball = self._resolve_run(ctx, positions, frozen, progress)
        else:
            if not ctx.completed:
                # 2. Zone coverage
                self._resolve_zone(ctx, positions)
                # 3. Man coverage
                self._resolve_man(ctx, positions, progress)
            # 4. Ball, protection, after-catch
            ball = self._resolve_pass(ctx, positions, frozen, progress)

        positions = {pid: clamp_to_field(pos) for pid, pos in positions.items()}

        # 5. Overlap resolution
        positions = resolve_overlaps(
            positions,
            ctx.order,
            frozen,
            ctx.config.min_separation,
            ctx.config.overlap_passes,
        )
        if ball.carrier_id is not None:
            ball = BallFrame(position=positions[ball.carrier_id], carrier_id=ball.carrier_id)

        ctx.positions = positions
        ctx.ball = ball
        ctx.frozen_ids = frozenset(frozen)

        # 6. Tackle/sack detection
        self._resolve_contact(ctx, frozen, progress)

        if not ctx.phase.is_terminal and ctx.step >= ctx.config.planning_steps:
            ctx.phase = PlayPhase.COMPLETE

    # =========================================================================
    # Stage 1: Paths
    # =========================================================================

    def _resolve_paths(self, ctx: SimulationContext, progress: float) -> Dict[str, Point]:
        budget = ctx.config.travel_budget_yards
        return {
            p.id: resolve_path_position(p, ctx.start_positions[p.id], progress, budget)
            for p in ctx.players
        }

    # =========================================================================
    # Stage 2-3: Coverage
    # =========================================================================

    def _resolve_zone(self, ctx: SimulationContext, positions: Dict[str, Point]) -> None:
        if not ctx.zone_areas:
            return

        receivers = [(p.id, positions[p.id]) for p in ctx.route_runners()]
        areas = [ctx.zone_areas[pid] for pid in ctx.order if pid in ctx.zone_areas]
        ctx.zone_commitments = select_zone_targets(areas, receivers)

        step_budget = ctx.config.step_budget
        for defender_id in ctx.zone_areas:
            base = positions[defender_id]
            offset = ctx.zone_pulls.get(defender_id, Point.zero())
            target_id = ctx.zone_commitments.get(defender_id)
            if target_id is not None:
                offset = pull_toward_receiver(
                    offset,
                    base,
                    positions[target_id],
                    ctx.config.zone_pull_fraction,
                    step_budget,
                )
                ctx.zone_pulls[defender_id] = offset
            positions[defender_id] = clamp_to_field(base + offset)

    def _resolve_man(self, ctx: SimulationContext, positions: Dict[str, Point], progress: float) -> None:
        for defender in ctx.defense():
            if defender.assignment != Assignment.MAN:
                continue

            target = ctx.get_player(defender.man_target_id)
            target_pos = positions.get(target.id) if target and target.is_offense else None
            result = resolve_man_coverage(
                defender.id,
                ctx.start_positions[defender.id],
                target_pos,
                progress,
                ctx.config,
            )
            positions[defender.id] = result.position

            if result.is_tight:
                ctx.covered_target_ids.add(target.id)
                if ctx.announce_once(f"tight:{defender.id}"):
                    ctx.emit(
                        EventType.TIGHT_COVERAGE,
                        player_id=defender.id,
                        target_id=target.id,
                        description=f"{defender.label} blankets {target.label}",
                    )

    # =========================================================================
    # Stage 4: Run Play
    # =========================================================================

    def _run_ball(self, ctx: SimulationContext, positions: Dict[str, Point], progress: float) -> BallFrame:
        runner_id = ctx.ball_plan.run_carrier_id
        qb_id = ctx.quarterback_id
        qb = (qb_id, positions[qb_id]) if qb_id is not None else None
        return ball_system.run_ball_frame(progress, qb, (runner_id, positions[runner_id]), ctx.config)

    def _resolve_run(
        self,
        ctx: SimulationContext,
        positions: Dict[str, Point],
        frozen: set[str],
        progress: float,
    ) -> BallFrame:
        ball = self._run_ball(ctx, positions, progress)

        if (
            not ctx.handoff_done
            and ball.carrier_id is not None
            and ball.carrier_id == ctx.ball_plan.run_carrier_id
            and ball.carrier_id != ctx.quarterback_id
        ):
            ctx.handoff_done = True
            ctx.emit(EventType.HANDOFF, player_id=ctx.quarterback_id, target_id=ball.carrier_id,
                     description="Handoff complete")

        step_budget = ctx.config.step_budget
        for defender in ctx.defense():
            engagement = ctx.engagements.get(defender.id)
            if engagement is not None and engagement.is_active(progress):
                positions[defender.id] = pinned_position(positions[engagement.blocker_id], engagement)
                frozen.add(defender.id)
            elif defender.assignment == Assignment.NONE:
                continue
            else:
                positions[defender.id] = pursue(ctx.positions[defender.id], ball.position, step_budget)

        if ctx.is_discovering:
            found = discover_run_blocks(
                [(p.id, positions[p.id]) for p in ctx.blockers()],
                [(p.id, positions[p.id]) for p in ctx.defense()],
                ctx.engagements,
                progress,
                ctx.config.block_engage_radius,
            )
            for defender_id, engagement in found.items():
                logger.debug("Block engaged: %s on %s at %.3f", engagement.blocker_id, defender_id, progress)
                ctx.engagements[defender_id] = engagement
                positions[defender_id] = pinned_position(positions[engagement.blocker_id], engagement)
                frozen.add(defender_id)

        for defender_id, engagement in ctx.engagements.items():
            if engagement.is_active(progress) and ctx.announce_once(f"block:{defender_id}"):
                ctx.emit(EventType.BLOCK_ENGAGED, player_id=engagement.blocker_id, target_id=defender_id,
                         description="Block engaged")

        return ball

    # =========================================================================
    # Stage 4: Pass Play
    # =========================================================================

    def _held_ball(self, ctx: SimulationContext, positions: Dict[str, Point]) -> BallFrame:
        qb_id = ctx.quarterback_id
        if qb_id is None:
            return ball_system.dead_ball_frame(ctx.situation.line_of_scrimmage)
        return BallFrame(position=positions[qb_id], carrier_id=qb_id)

    def _resolve_pass(
        self,
        ctx: SimulationContext,
        positions: Dict[str, Point],
        frozen: set[str],
        progress: float,
    ) -> BallFrame:
        if ctx.completed:
            return self._resolve_after_catch(ctx, positions)

        ball = self._pass_ball(ctx, positions, progress)
        self._resolve_protection(ctx, positions, frozen, ball)

        if ctx.quarterback_id is not None and not ctx.throw_started and progress >= ctx.config.read_time:
            self._evaluate_throw(ctx, positions, frozen, progress)

        return ball

    def _pass_ball(self, ctx: SimulationContext, positions: Dict[str, Point], progress: float) -> BallFrame:
        plan = ctx.ball_plan
        if not ctx.throw_started:
            return self._held_ball(ctx, positions)

        target_id = plan.completion_target_id
        fraction = ball_system.flight_fraction(progress, plan.pass_throw_start_progress, ctx.config)
        if fraction < 1.0:
            ctx.phase = PlayPhase.BALL_IN_AIR
            return BallFrame(
                position=ball_system.flight_position(plan.pass_throw_start_point, positions[target_id], fraction)
            )

        ctx.completed = True
        ctx.phase = PlayPhase.AFTER_CATCH
        target = ctx.players_by_id[target_id]
        logger.debug("Pass caught by %s at %.3f", target_id, progress)
        ctx.emit(EventType.CATCH, player_id=target_id, description=f"{target.label} makes the catch")
        return BallFrame(position=positions[target_id], carrier_id=target_id)

    def _resolve_protection(
        self,
        ctx: SimulationContext,
        positions: Dict[str, Point],
        frozen: set[str],
        ball: BallFrame,
    ) -> None:
        cfg = ctx.config
        step_budget = cfg.step_budget
        los = ctx.situation.line_of_scrimmage
        qb_pos = positions[ctx.quarterback_id] if ctx.quarterback_id else None

        # Blockers set up between their rusher and the quarterback
        if qb_pos is not None:
            for blocker_id, rusher_id in ctx.protection_claims.items():
                anchor = protection_anchor(qb_pos, ctx.positions[rusher_id], los, cfg)
                positions[blocker_id] = pursue(ctx.positions[blocker_id], anchor, step_budget)

        for rusher in ctx.defense():
            if rusher.assignment != Assignment.BLITZ:
                continue

            blocker_id = ctx.rusher_blocker(rusher.id)
            held = not ctx.rushers_released and blocker_id is not None and qb_pos is not None

            if held and rusher.id in ctx.rusher_freezes:
                positions[rusher.id] = positions[blocker_id] + ctx.rusher_freezes[rusher.id]
                frozen.add(rusher.id)
                continue

            position = pursue(ctx.positions[rusher.id], ball.position, step_budget)
            if held and should_freeze(positions[blocker_id], position, cfg):
                offset = freeze_offset(positions[blocker_id], position, cfg)
                ctx.rusher_freezes[rusher.id] = offset
                position = positions[blocker_id] + offset
                frozen.add(rusher.id)
                ctx.emit(EventType.RUSHER_FROZEN, player_id=blocker_id, target_id=rusher.id,
                         description="Rusher stood up")
            positions[rusher.id] = position

    def _evaluate_throw(
        self,
        ctx: SimulationContext,
        positions: Dict[str, Point],
        frozen: set[str],
        progress: float,
    ) -> None:
        plan = ctx.ball_plan

        if ctx.is_discovering:
            target_id = self._pick_open_receiver(ctx, positions, frozen)
            if target_id is None:
                return
            plan.commit_throw(target_id, progress, positions[ctx.quarterback_id])
        elif not plan.has_throw or progress < plan.pass_throw_start_progress:
            return

        ctx.throw_started = True
        ctx.rushers_released = True
        logger.debug("Throw to %s at %.3f", plan.completion_target_id, progress)
        ctx.emit(EventType.THROW, player_id=ctx.quarterback_id, target_id=plan.completion_target_id,
                 description="Pass thrown")

    def _pick_open_receiver(
        self,
        ctx: SimulationContext,
        positions: Dict[str, Point],
        frozen: set[str],
    ) -> Optional[str]:
        cfg = ctx.config
        receivers = [(p.id, positions[p.id]) for p in ctx.route_runners()]
        man_positions = [positions[p.id] for p in ctx.defense() if p.assignment == Assignment.MAN]
        near_man = receivers_near_man_defenders(receivers, man_positions, cfg.tight_coverage_radius)
        areas = list(ctx.zone_areas.values())

        candidates = [
            (rid, pos) for rid, pos in receivers
            if rid not in ctx.covered_target_ids
            and rid not in near_man
            and not is_in_any_zone(pos, areas)
        ]
        if not candidates:
            return None

        defenders = [positions[p.id] for p in ctx.defense() if p.id not in frozen]
        ranked = ball_system.rank_open_receivers(candidates, defenders, ctx.situation.line_of_scrimmage, cfg)
        return ranked[0]

    # =========================================================================
    # Stage 4: After The Catch
    # =========================================================================

    def _resolve_after_catch(self, ctx: SimulationContext, positions: Dict[str, Point]) -> BallFrame:
        cfg = ctx.config
        carrier_id = ctx.ball_plan.completion_target_id

        carrier_pos, ctx.yac_travelled = ball_system.after_catch_step(
            ctx.positions[carrier_id],
            ctx.situation.line_to_gain,
            ctx.yac_travelled,
            cfg,
        )
        positions[carrier_id] = carrier_pos

        for blocker in ctx.blockers():
            positions[blocker.id] = ctx.positions[blocker.id]

        rate = cfg.yac_rate / cfg.planning_steps
        for defender in ctx.defense():
            positions[defender.id] = pursue(ctx.positions[defender.id], carrier_pos, rate)

        if ball_system.after_catch_exhausted(ctx.yac_travelled, cfg):
            ctx.phase = PlayPhase.SETTLED

        return BallFrame(position=carrier_pos, carrier_id=carrier_id)

    # =========================================================================
    # Stage 6: Contact
    # =========================================================================

    def _resolve_contact(self, ctx: SimulationContext, frozen: set[str], progress: float) -> None:
        if ctx.is_discovering:
            self._detect_contact(ctx, frozen, progress)
        elif ctx.tackle is not None and progress >= ctx.tackle.stop_progress:
            self._apply_tackle(ctx, ctx.tackle)

    def _detect_contact(self, ctx: SimulationContext, frozen: set[str], progress: float) -> None:
        carrier_id = ctx.ball.carrier_id
        if carrier_id is None:
            return

        is_sack = not ctx.ball_plan.is_run_play and not ctx.completed
        if is_sack and (ctx.throw_started or carrier_id != ctx.quarterback_id):
            return

        carrier_pos = ctx.positions[carrier_id]
        tackler_id = find_first_contact(
            carrier_pos,
            [(p.id, ctx.positions[p.id]) for p in ctx.defense()],
            frozen,
            ctx.config.tackle_radius,
        )
        if tackler_id is None:
            return

        positions = dict(ctx.positions)
        positions[tackler_id] = separate_tackler(carrier_pos, positions[tackler_id], ctx.config.tackle_radius)
        positions = resolve_overlaps(
            positions,
            ctx.order,
            frozen | {carrier_id, tackler_id},
            ctx.config.min_separation,
            ctx.config.overlap_passes,
        )

        result = RunTackleResult(
            ball_carrier_id=carrier_id,
            tackler_id=tackler_id,
            stop_progress=progress,
            stop_point=carrier_pos,
            frozen_positions=positions,
            is_sack=is_sack,
        )
        ctx.tackle = result
        logger.debug("%s: %s on %s at %.3f", "Sack" if is_sack else "Tackle", tackler_id, carrier_id, progress)
        self._apply_tackle(ctx, result)

    def _apply_tackle(self, ctx: SimulationContext, result: RunTackleResult) -> None:
        ctx.positions = dict(result.frozen_positions)
        ctx.ball = BallFrame(position=result.stop_point, carrier_id=result.ball_carrier_id)
        ctx.frozen_ids = ctx.frozen_ids | {result.ball_carrier_id, result.tackler_id}
        ctx.phase = PlayPhase.SACK if result.is_sack else PlayPhase.TACKLE

        tackler = ctx.players_by_id.get(result.tackler_id)
        carrier = ctx.players_by_id.get(result.ball_carrier_id)
        ctx.emit(
            EventType.SACK if result.is_sack else EventType.TACKLE,
            player_id=result.tackler_id,
            target_id=result.ball_carrier_id,
            description=(
                f"{tackler.label if tackler else result.tackler_id} brings down "
                f"{carrier.label if carrier else result.ball_carrier_id}"
            ),
            stop_point=result.stop_point.to_dict(),
        )
