"""Reveal engine - deterministic resolution of two locked game plans.

- Single coordinate system (yards, offense attacks toward -Y)
- Fixed-step timeline shared by planning, animation and replay
- Stable hashing instead of randomness, so every reveal replays bit-for-bit
"""

from .orchestrator import Frame, RevealOrchestrator, RevealResult
from .outcome import OutcomeCause, PlayOutcome, PreSnapPenalty
from .snapshot import RevealSnapshot, SnapshotError

__all__ = [
    "Frame",
    "RevealOrchestrator",
    "RevealResult",
    "OutcomeCause",
    "PlayOutcome",
    "PreSnapPenalty",
    "RevealSnapshot",
    "SnapshotError",
]
