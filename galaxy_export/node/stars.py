"""Deterministic star systems for development nodes.

Everything about a system derives from its UUID: a salted SHA-256 of the
UUID bytes seeds each property, so a node always reports the same star.
"""
import hashlib
from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import UUID

from galaxy_export.models.schemas import MultiStarSystem, StarSystem, StarType

# Only the seed node at the galactic core may be a black hole.
GENESIS_BLACK_HOLE_ID = UUID("f467e75d-00b8-5ac7-9f0f-4e7cd1c8eb20")

_UINT64_MASK = 2 ** 64 - 1
_MAX_UINT64 = float(_UINT64_MASK)

# (upper roll bound out of 100000, class, description, color, base temp, temp span)
_STAR_TABLE = [
    (500, "O", "Blue Supergiant", "#9bb0ff", 30000, 20000),
    (2500, "B", "Blue Giant", "#aabfff", 10000, 10000),
    (7500, "A", "White Star", "#cad7ff", 7500, 2500),
    (17500, "F", "Yellow-White Star", "#f8f7ff", 6000, 1500),
    (35000, "G", "Yellow Dwarf", "#fff4ea", 5200, 800),
    (60000, "K", "Orange Dwarf", "#ffd2a1", 3700, 1500),
    (100000, "M", "Red Dwarf", "#ffcc6f", 2400, 1300),
]


def _luminosity(star_class: str, seed: int) -> float:
    if star_class == "O":
        return 30000.0 + seed % 20000
    if star_class == "B":
        return 25.0 + seed % 1000
    if star_class == "A":
        return 5.0 + seed % 20
    if star_class == "F":
        return 1.5 + (seed % 10) / 10.0
    if star_class == "G":
        return 0.6 + (seed % 10) / 10.0
    if star_class == "K":
        return 0.08 + (seed % 50) / 100.0
    return 0.001 + (seed % 80) / 1000.0


def deterministic_seed(system_id: UUID, salt: str) -> int:
    digest = hashlib.sha256(system_id.bytes + salt.encode()).digest()
    return int.from_bytes(digest[:8], "big")


def generate_single_star(seed: int) -> StarType:
    seed &= _UINT64_MASK
    roll = seed % 100000
    for bound, star_class, description, color, base_temp, temp_span in _STAR_TABLE:
        if roll < bound:
            break
    return StarType(
        star_class=star_class,
        description=description,
        color=color,
        temperature=base_temp + seed % temp_span,
        luminosity=_luminosity(star_class, seed),
    )


def generate_multi_star_system(system_id: UUID) -> MultiStarSystem:
    if system_id == GENESIS_BLACK_HOLE_ID:
        black_hole = StarType(star_class="X", description="Supermassive Black Hole", color="#000000",
                              temperature=0, luminosity=0)
        return MultiStarSystem(primary=black_hole, count=1)

    roll = deterministic_seed(system_id, "system_type") % 100
    primary = generate_single_star(deterministic_seed(system_id, "primary_star"))

    if roll < 50:
        return MultiStarSystem(primary=primary, count=1)

    secondary_seed = deterministic_seed(system_id, "secondary_star")
    secondary = generate_single_star(secondary_seed)

    if roll < 90:
        # companions skew towards small, cool stars
        if secondary.star_class in ("O", "B", "A"):
            secondary = generate_single_star((secondary_seed ^ 0xFFFFFFFF) + 50000)
        return MultiStarSystem(primary=primary, secondary=secondary, is_binary=True, count=2)

    tertiary_seed = deterministic_seed(system_id, "tertiary_star")
    tertiary = generate_single_star(tertiary_seed + 70000)
    if secondary.star_class in ("O", "B"):
        secondary = generate_single_star(secondary_seed + 50000)
    if tertiary.star_class in ("O", "B", "A"):
        tertiary = generate_single_star(tertiary_seed + 80000)
    return MultiStarSystem(primary=primary, secondary=secondary, tertiary=tertiary, is_trinary=True, count=3)


def deterministic_coordinates(system_id: UUID) -> Tuple[float, float, float]:
    """Coordinates in [-10000, 10000] on each axis."""
    if system_id == GENESIS_BLACK_HOLE_ID:
        return 0.0, 0.0, 0.0
    digest = hashlib.sha256(system_id.bytes).digest()
    axes = (int.from_bytes(digest[i:i + 8], "big") for i in (0, 8, 16))
    x, y, z = (seed / _MAX_UINT64 * 20000 - 10000 for seed in axes)
    return x, y, z


def generate_system(name: str, system_id: UUID, address: Optional[str] = None,
                    created_at: Optional[datetime] = None) -> StarSystem:
    stars = generate_multi_star_system(system_id)
    x, y, z = deterministic_coordinates(system_id)
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return StarSystem(
        id=system_id,
        name=name,
        star_type=stars.primary,
        stars=stars,
        x=x,
        y=y,
        z=z,
        created_at=created_at or now,
        last_seen_at=now,
        address=address,
    )
