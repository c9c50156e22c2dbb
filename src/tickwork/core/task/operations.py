"""Task ordering and extraction operations."""

from __future__ import annotations

import random
from datetime import timedelta
from itertools import islice, takewhile

from tickwork.core.task.models import PendingTasks, Task

TIE_BREAK_POOL_SIZE = 10
"""Max number of same-instant tasks considered when picking the next one to run."""


def compare_tasks(a: Task, b: Task) -> int:
    """Three-way comparison: by runs_at, then by id.

    Returns:
        Negative if a runs first, positive if b runs first, 0 only for the same task.
    """
    if a.sort_key < b.sort_key:
        return -1
    if a.sort_key > b.sort_key:
        return 1
    return 0


def same_instant_candidates(
    pending: PendingTasks, pool_size: int = TIE_BREAK_POOL_SIZE
) -> list[Task]:
    """Collect up to pool_size leading tasks that share the earliest runs_at."""
    head = pending.first()
    if head is None:
        return []
    first_tick = head.runs_at
    return list(islice(takewhile(lambda t: t.runs_at == first_tick, pending), pool_size))


def extract_one(
    pending: PendingTasks,
    target: timedelta,
    rng: random.Random,
    pool_size: int = TIE_BREAK_POOL_SIZE,
) -> tuple[Task, PendingTasks] | None:
    """Pick the next task eligible at `target` and remove it from the set.

    Tasks that share the earliest runs_at are shuffled: one of the first
    `pool_size` of them is chosen uniformly at random, simulating the
    interleaving a real thread pool would produce. Tasks with distinct
    runs_at are never reordered.

    Args:
        pending: Current pending set.
        target: Latest runs_at considered eligible.
        rng: Source of randomness for the tie-break.
        pool_size: Bound on the tie-break pool.

    Returns:
        (extracted task, remaining set), or None if nothing is eligible.
    """
    head = pending.first()
    if head is None or head.runs_at > target:
        return None

    candidates = same_instant_candidates(pending, pool_size)
    chosen = candidates[rng.randrange(len(candidates))]
    return chosen, pending.discard(chosen)
