"""Stable hashing for deterministic pseudo-randomness.

Coverage jitter and zone tie-breaks are derived from player ids instead of a
random generator, so a reveal replays bit-for-bit. The hash is part of the
replay contract: FNV-1a, 32 bit, over the UTF-8 bytes of the seed.
"""

from __future__ import annotations

from .point import Point

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
_MASK_32 = 0xFFFFFFFF


def fnv1a_32(seed: str) -> int:
    """FNV-1a 32-bit hash of a string."""
    value = FNV_OFFSET_BASIS
    for byte in seed.encode("utf-8"):
        value ^= byte
        value = (value * FNV_PRIME) & _MASK_32
    return value


def seeded_index(seed: str, length: int) -> int:
    """Pick a stable index in [0, length) for a seed."""
    if length <= 1:
        return 0
    return fnv1a_32(seed) % length


def jitter_offset(seed: str, min_magnitude: float, max_magnitude: float) -> Point:
    """Stable offset vector for a seed.

    Angle comes from the low bits (tenths of a degree), magnitude from the
    bits above them.
    """
    value = fnv1a_32(seed)
    angle = (value % 3600) / 10.0
    fraction = ((value >> 12) % 1000) / 999.0
    magnitude = min_magnitude + fraction * (max_magnitude - min_magnitude)
    return Point.from_angle(angle, magnitude)
