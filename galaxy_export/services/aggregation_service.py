from collections import Counter
from itertools import combinations
from typing import List, Optional, Sequence

import tabulate

from galaxy_export.models.schemas import (
    STAR_CLASSES,
    ClassShare,
    GalaxySnapshot,
    GalaxyStatistics,
    StarSystem,
)
from galaxy_export.utils.errors import EmptyResultError


def format_timestamp(system: StarSystem) -> str:
    """Wall-clock fields of last_seen_at as reported, with a literal Z suffix."""
    seen = system.last_seen_at
    return (f"{seen.year:04d}-{seen.month:02d}-{seen.day:02d}"
            f"T{seen.hour:02d}:{seen.minute:02d}:{seen.second:02d}Z")


def build_snapshot(systems: Sequence[StarSystem]) -> GalaxySnapshot:
    """Snapshot of the systems in collection order.

    The timestamp is the first collected system's last_seen_at, not the time
    of aggregation.
    """
    if not systems:
        raise EmptyResultError()
    return GalaxySnapshot(
        systems=list(systems),
        timestamp=format_timestamp(systems[0]),
        node_count=len(systems),
    )


def class_histogram(systems: Sequence[StarSystem]) -> List[ClassShare]:
    total = len(systems)
    counts = Counter(system.star_type.star_class for system in systems)
    return [
        ClassShare(star_class=star_class, count=counts[star_class], percentage=counts[star_class] / total * 100)
        for star_class in STAR_CLASSES
        if counts[star_class] > 0
    ]


def mean_pairwise_distance(systems: Sequence[StarSystem]) -> Optional[float]:
    if len(systems) < 2:
        return None
    distances = [a.distance_to(b) for a, b in combinations(systems, 2)]
    return sum(distances) / len(distances)


def summarize(systems: Sequence[StarSystem]) -> GalaxyStatistics:
    return GalaxyStatistics(
        total=len(systems),
        classes=class_histogram(systems),
        mean_distance=mean_pairwise_distance(systems),
    )


def render_report(stats: GalaxyStatistics) -> str:
    lines = ["Galaxy Statistics:", "=================="]
    for share in stats.classes:
        lines.append(f"{share.star_class}: {share.count} ({share.percentage:.1f}%)")
    if stats.mean_distance is not None:
        lines.append("")
        lines.append(f"Average inter-system distance: {stats.mean_distance:.2f} units")
    return "\n".join(lines)


def render_systems_table(systems: Sequence[StarSystem]) -> str:
    rows = [
        [
            system.name,
            system.star_type.star_class,
            system.star_type.description,
            f"{system.x:.1f}",
            f"{system.y:.1f}",
            f"{system.z:.1f}",
        ]
        for system in systems
    ]
    headers = ["System", "Class", "Description", "X", "Y", "Z"]
    return tabulate.tabulate(rows, headers=headers, tablefmt="grid", disable_numparse=True)
