from __future__ import annotations

from typing import Sequence

from studydeck.models.item import ItemWithProgress
from studydeck.models.subject import SubjectStats


def summarize(items: Sequence[ItemWithProgress]) -> SubjectStats:
    """Aggregate review counters and the latest review time over ``items``."""
    stats = SubjectStats()
    for item in items:
        progress = item.progress
        stats.easy += progress.easy_count
        stats.medium += progress.medium_count
        stats.hard += progress.hard_count
        stats.seen += progress.times_seen
        if progress.last_seen and (stats.last_studied is None or progress.last_seen > stats.last_studied):
            stats.last_studied = progress.last_seen
    return stats
