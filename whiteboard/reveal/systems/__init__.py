"""Systems - per-step movement and ball logic."""

from .ball import RevealBallPlan, classify_play
from .coverage import ZoneArea, ZoneKind, derive_zone_area, resolve_man_coverage
from .paths import point_along_path, resolve_path_position

__all__ = [
    "RevealBallPlan",
    "classify_play",
    "ZoneArea",
    "ZoneKind",
    "derive_zone_area",
    "resolve_man_coverage",
    "point_along_path",
    "resolve_path_position",
]
