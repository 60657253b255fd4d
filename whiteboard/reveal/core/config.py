"""Reveal configuration.

Every tunable of the reveal engine lives here so a reveal is fully described
by (roster, situation, config).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RevealConfig:
    """Tunables for the reveal engine.

    Distances are yards. Times are fractions of play progress (0-1) unless
    suffixed otherwise.
    """
    # Timeline
    duration_ms: int = 3000
    frame_count: int = 160           # Visible animation ticks
    planning_steps: int = 480        # Fixed simulation steps per play

    # Movement
    travel_budget_yards: float = 18.0   # Max travel over a full play

    # Man coverage
    man_vicinity_radius: float = 1.5
    jitter_min: float = 0.4
    jitter_max: float = 1.2
    jitter_mix: float = 0.5
    tight_coverage_radius: float = 2.0

    # Zone coverage
    zone_flat_max_depth: float = 8.0
    zone_flat_radius_y: float = 2.5
    zone_deep_min_depth: float = 10.0
    zone_deep_radius_x: float = 4.2
    zone_deep_radius_y: float = 4.8
    zone_circle_base: float = 2.8
    zone_circle_growth: float = 0.28
    zone_circle_min: float = 3.0
    zone_circle_max: float = 6.5
    zone_pull_fraction: float = 0.05

    # Run blocking
    block_engage_radius: float = 1.8

    # Pass protection
    protection_anchor_fraction: float = 0.6
    protection_max_depth: float = 1.0
    protection_qb_buffer: float = 1.5
    protection_engage_radius: float = 1.4
    protection_standoff: float = 1.1

    # Ball
    handoff_start: float = 0.06
    handoff_end: float = 0.18
    read_time: float = 0.3
    throw_window: float = 0.12
    nearby_radius: float = 4.0
    yac_rate: float = 10.0
    yac_max_yards: float = 6.0

    # Contact
    tackle_radius: float = 1.1
    min_separation: float = 0.9
    overlap_passes: int = 6

    # Rules
    penalty_yards: float = 5.0
    rounds_to_win: int = 3

    def __post_init__(self):
        if self.frame_count <= 0 or self.planning_steps <= 0:
            raise ValueError("frame_count and planning_steps must be positive")
        if self.planning_steps % self.frame_count != 0:
            raise ValueError(
                f"planning_steps ({self.planning_steps}) must be a multiple "
                f"of frame_count ({self.frame_count})"
            )
        if not 0.0 <= self.handoff_start <= self.handoff_end <= 1.0:
            raise ValueError("handoff window must satisfy 0 <= start <= end <= 1")

    @property
    def step_size(self) -> float:
        """Progress covered by one simulation step."""
        return 1.0 / self.planning_steps

    @property
    def steps_per_frame(self) -> int:
        return self.planning_steps // self.frame_count

    @property
    def step_budget(self) -> float:
        """Max yards any pursuer may travel in one step."""
        return self.travel_budget_yards / self.planning_steps

    @property
    def frame_interval(self) -> float:
        """Seconds between animation frames."""
        return self.duration_ms / 1000.0 / self.frame_count

    def progress_at(self, step: int) -> float:
        """Progress (0-1) at a simulation step index."""
        return step / self.planning_steps


DEFAULT_CONFIG = RevealConfig()
