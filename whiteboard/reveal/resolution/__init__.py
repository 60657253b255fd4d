"""Resolution layer for the reveal engine.

Resolves physical encounters: blocks, overlaps, tackles.
"""

from .blocking import RunBlockEngagement, discover_run_blocks
from .separation import resolve_overlaps
from .tackle import RunTackleResult, find_first_contact

__all__ = [
    "RunBlockEngagement",
    "discover_run_blocks",
    "resolve_overlaps",
    "RunTackleResult",
    "find_first_contact",
]
