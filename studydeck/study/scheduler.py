"""Review scheduling for study items.

Two pure functions make up the scheduler:

* :func:`select_next` picks the item to present from a caller-owned list.
* :func:`apply_evaluation` turns a difficulty grade into a new progress
  record and an advisory queue offset.

Neither function keeps state or touches storage. ``now`` and ``rng`` are
injectable so callers (and tests) control the clock and the randomness.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence, Tuple

from studydeck.models.item import ItemWithProgress
from studydeck.models.progress import EvaluationLevel, StudyItemProgress, ensure_utc

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Shared production generator; pass ``rng`` to make a call deterministic.
default_rng = random.Random()

# level -> (delay until due again, inclusive queue offset bounds)
REVIEW_TABLE: dict[EvaluationLevel, Tuple[timedelta, Tuple[int, int]]] = {
    EvaluationLevel.HARD: (timedelta(minutes=1), (2, 4)),
    EvaluationLevel.MEDIUM: (timedelta(minutes=15), (6, 10)),
    EvaluationLevel.EASY: (timedelta(minutes=60), (12, 20)),
}

_COUNTER_FIELDS = {
    EvaluationLevel.EASY: "easy_count",
    EvaluationLevel.MEDIUM: "medium_count",
    EvaluationLevel.HARD: "hard_count",
}


@dataclass(frozen=True)
class EvaluationResult:
    progress: StudyItemProgress
    queue_offset: int


def resolve_now(now: Optional[datetime] = None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    return ensure_utc(now)


def is_due(item: ItemWithProgress, now: datetime) -> bool:
    """Items never reviewed count as due since the epoch."""
    due = ensure_utc(item.progress.next_due) or EPOCH
    return due <= now


def _fallback_key(item: ItemWithProgress) -> Tuple[bool, datetime]:
    # a missing due time sorts after every real one
    due = ensure_utc(item.progress.next_due)
    return (due is None, due or EPOCH)


def select_next(
    items: Sequence[ItemWithProgress],
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> Optional[ItemWithProgress]:
    """Pick the next item to study, or ``None`` when there is nothing to study.

    A uniformly random due item wins. When nothing is due, the item that
    becomes due soonest is returned, the first one in input order on ties.
    """
    if not items:
        return None
    current = resolve_now(now)
    due_items = [item for item in items if is_due(item, current)]
    if due_items:
        return (rng or default_rng).choice(due_items)
    # min() keeps the first of several equal keys
    return min(items, key=_fallback_key)


def apply_evaluation(
    item: ItemWithProgress,
    level: EvaluationLevel | str,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> EvaluationResult:
    """Record one grading of ``item`` and schedule its next review.

    Raises ``ValueError`` for a level outside easy/medium/hard.
    """
    level = EvaluationLevel(level)
    current = resolve_now(now)
    delay, (low, high) = REVIEW_TABLE[level]
    counter = _COUNTER_FIELDS[level]
    previous = item.progress
    progress = previous.model_copy(
        update={
            "last_seen": current,
            "last_result": level,
            "times_seen": previous.times_seen + 1,
            counter: getattr(previous, counter) + 1,
            "next_due": current + delay,
        }
    )
    return EvaluationResult(progress=progress, queue_offset=(rng or default_rng).randint(low, high))
