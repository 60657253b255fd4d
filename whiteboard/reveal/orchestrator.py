"""Reveal orchestrator - drives a reveal from locked roster to outcome.

Reveal Lifecycle:
    1. Pre-snap check - alignment fouls end the rep before anything moves
    2. Lock - roster and start positions are copied into a snapshot
    3. Planning pass - the full play is simulated once, discovering blocks,
       the throw and the terminal contact
    4. Visible loop - the same pipeline is replayed with the plan fixed,
       yielding one frame per animation tick
    5. Outcome - the frozen final state is scored

Usage:
    orchestrator = RevealOrchestrator()
    result = orchestrator.reveal(players, situation)
    for frame in result.frames:
        render(frame)

    # Same reveal again, bit for bit
    again = orchestrator.replay(result.snapshot)
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from .core.point import Point
from .core.entities import BallFrame, Player, PlayPhase, clone_players
from .core.config import DEFAULT_CONFIG, RevealConfig
from .core.events import Event, EventBus, EventType
from .core.situation import Situation
from .context import SimulationContext, SimulationMode
from .outcome import PlayOutcome, detect_pre_snap_penalty, evaluate_outcome, penalty_outcome
from .simulator import RevealSimulator
from .snapshot import RevealSnapshot
from .systems.ball import classify_play

logger = logging.getLogger(__name__)


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class Frame:
    """One animation tick.

    Attributes:
        index: Frame number within the reveal (0 is the snap)
        step: Simulation step the frame was taken at
        progress: Play progress (0-1)
        positions: Player id -> position
        ball: Ball position and carrier
        phase: Play phase at this frame
        frozen_ids: Players held in place this frame
    """
    index: int
    step: int
    progress: float
    positions: Dict[str, Point]
    ball: BallFrame
    phase: PlayPhase
    frozen_ids: frozenset[str] = frozenset()

    @property
    def is_terminal(self) -> bool:
        return self.phase.is_terminal


@dataclass
class RevealResult:
    """Everything a reveal produced.

    A penalty result has no frames and no snapshot.
    """
    frames: List[Frame]
    outcome: PlayOutcome
    snapshot: Optional[RevealSnapshot] = None
    covered_target_ids: List[str] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)

    @property
    def final_frame(self) -> Optional[Frame]:
        return self.frames[-1] if self.frames else None

    def format_summary(self) -> str:
        """Format a one-line summary."""
        outcome = self.outcome
        return f"{outcome.cause.value}: {outcome.gained_yards:+.1f} yards - {outcome.message}"


FrameCallback = Callable[[Frame], None]


# =============================================================================
# Orchestrator
# =============================================================================

class RevealOrchestrator:
    """Runs reveals and replays.

    One orchestrator owns at most one live animation. Starting a new reveal,
    replay or animation bumps the generation counter and clears the event
    history; an animation loop from an older generation stops before its next
    tick.
    """

    def __init__(
        self,
        config: Optional[RevealConfig] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.event_bus = event_bus or EventBus()
        self.simulator = RevealSimulator()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    # =========================================================================
    # Public API
    # =========================================================================

    def reveal(self, players: Sequence[Player], situation: Situation) -> RevealResult:
        """Run a full reveal from a locked roster."""
        self._start_run()

        logger.info("Reveal started: %s at ball spot %.1f", situation.display, situation.ball_spot_yard)

        penalty = detect_pre_snap_penalty(players, situation.line_of_scrimmage)
        if penalty is not None:
            outcome = penalty_outcome(penalty, situation, self.config.penalty_yards)
            self.event_bus.emit_simple(
                EventType.PENALTY,
                0,
                0.0,
                player_id=penalty.player_id,
                description=outcome.message,
                team=penalty.team.value,
            )
            return RevealResult(
                frames=[],
                outcome=outcome,
                events=list(self.event_bus.history),
            )

        snapshot = self.plan(players, situation)
        return self._run_visible(snapshot)

    def replay(self, snapshot: RevealSnapshot) -> RevealResult:
        """Re-run the visible loop of a captured reveal."""
        self._start_run()
        logger.info("Replaying reveal at ball spot %.1f", snapshot.situation.ball_spot_yard)
        return self._run_visible(snapshot)

    def plan(self, players: Sequence[Player], situation: Situation) -> RevealSnapshot:
        """Run the planning pass and capture the snapshot.

        No events are emitted; the pass only discovers decisions.
        """
        start_players = clone_players(list(players))
        ball_plan = classify_play(start_players)
        logger.info(
            "Play classified as %s%s",
            "run" if ball_plan.is_run_play else "pass",
            f" (carrier {ball_plan.run_carrier_id})" if ball_plan.is_run_play else "",
        )

        ctx = SimulationContext.create(
            start_players,
            situation,
            self.config,
            ball_plan=ball_plan,
            mode=SimulationMode.DISCOVERING,
        )
        self.simulator.snap(ctx)
        while not ctx.phase.is_terminal:
            self.simulator.advance(ctx)

        logger.debug(
            "Planning finished at step %d (%s), %d blocks, throw=%s",
            ctx.step,
            ctx.phase.value,
            len(ctx.engagements),
            ball_plan.completion_target_id,
        )

        return RevealSnapshot(
            start_players=start_players,
            start_positions=dict(ctx.start_positions),
            run_block_engagements=dict(ctx.engagements),
            ball_plan=ball_plan,
            run_tackle_result=ctx.tackle,
            situation=situation,
        )

    def iter_frames(self, snapshot: RevealSnapshot) -> Iterator[Frame]:
        """Yield the visible frames of a snapshot, one per animation tick."""
        ctx = self._fixed_context(snapshot, event_bus=None)
        yield from self._frames(ctx)

    async def animate(
        self,
        snapshot: RevealSnapshot,
        on_frame: FrameCallback,
    ) -> Optional[RevealResult]:
        """Play a snapshot back in real time.

        Calls on_frame once per tick, sleeping frame_interval between ticks.
        Returns None if a newer reveal or animation started in the meantime.
        """
        generation = self._start_run()

        ctx = self._fixed_context(snapshot, event_bus=self.event_bus)
        frames: List[Frame] = []
        ticks = self._frames(ctx)
        while True:
            # Checked before stepping so a superseded loop emits nothing more
            if generation != self._generation:
                logger.debug("Animation superseded after frame %d", len(frames) - 1)
                return None
            frame = next(ticks, None)
            if frame is None:
                break
            frames.append(frame)
            on_frame(frame)
            if not frame.is_terminal:
                await asyncio.sleep(self.config.frame_interval)

        if generation != self._generation:
            return None
        return self._finish(ctx, snapshot, frames)

    # =========================================================================
    # Visible Loop
    # =========================================================================

    def _start_run(self) -> int:
        """Supersede any live animation and start a fresh event history."""
        self._generation += 1
        self.event_bus.clear_history()
        return self._generation

    def _fixed_context(
        self,
        snapshot: RevealSnapshot,
        event_bus: Optional[EventBus],
    ) -> SimulationContext:
        return SimulationContext.create(
            snapshot.copy_players(),
            snapshot.situation,
            self.config,
            ball_plan=snapshot.ball_plan.copy(),
            mode=SimulationMode.FIXED,
            engagements=snapshot.run_block_engagements,
            tackle=snapshot.run_tackle_result,
            event_bus=event_bus,
            start_positions=snapshot.start_positions,
        )

    def _frames(self, ctx: SimulationContext) -> Iterator[Frame]:
        steps_per_frame = self.config.steps_per_frame
        self.simulator.snap(ctx)
        index = 0
        yield self._capture(ctx, index)

        while not ctx.phase.is_terminal:
            self.simulator.advance(ctx)
            if ctx.step % steps_per_frame == 0 or ctx.phase.is_terminal:
                index += 1
                yield self._capture(ctx, index)

    def _capture(self, ctx: SimulationContext, index: int) -> Frame:
        return Frame(
            index=index,
            step=ctx.step,
            progress=ctx.progress,
            positions=dict(ctx.positions),
            ball=ctx.ball,
            phase=ctx.phase,
            frozen_ids=ctx.frozen_ids,
        )

    def _run_visible(self, snapshot: RevealSnapshot) -> RevealResult:
        ctx = self._fixed_context(snapshot, event_bus=self.event_bus)
        frames = list(self._frames(ctx))
        return self._finish(ctx, snapshot, frames)

    def _finish(
        self,
        ctx: SimulationContext,
        snapshot: RevealSnapshot,
        frames: List[Frame],
    ) -> RevealResult:
        outcome = self._evaluate(ctx)
        ctx.emit(
            EventType.PLAY_END,
            player_id=outcome.ball_carrier_id,
            description=outcome.message,
            cause=outcome.cause.value,
            gained_yards=outcome.gained_yards,
        )
        logger.info("Reveal finished: %s", outcome.message)

        return RevealResult(
            frames=frames,
            outcome=outcome,
            snapshot=snapshot,
            covered_target_ids=sorted(ctx.covered_target_ids),
            events=list(self.event_bus.history),
        )

    # =========================================================================
    # Outcome
    # =========================================================================

    def _evaluate(self, ctx: SimulationContext) -> PlayOutcome:
        plan = ctx.ball_plan
        tackle = ctx.tackle if ctx.phase in (PlayPhase.TACKLE, PlayPhase.SACK) else None

        if tackle is not None:
            carrier_id = tackle.ball_carrier_id
        elif plan.is_run_play:
            carrier_id = ctx.ball.carrier_id or plan.run_carrier_id
        elif ctx.completed:
            carrier_id = plan.completion_target_id
        else:
            carrier_id = None

        carrier = ctx.get_player(carrier_id)
        final_y = ctx.positions[carrier_id].y if carrier_id is not None else None

        return evaluate_outcome(
            ctx.situation,
            is_run_play=plan.is_run_play,
            completed=ctx.completed,
            is_sack=tackle is not None and tackle.is_sack,
            carrier=carrier,
            final_y=final_y,
            tackler_id=tackle.tackler_id if tackle else None,
        )
