"""
Personal-record detection.

A set is a PR when its estimated one-rep max (Brzycki) beats every other set
ever logged for the same exercise name. Inside one session only one set per
exercise keeps the flag: a later, better set takes it over from the earlier
holder instead of both staying flagged.

Exercises whose name contains "assisted" are scored the other way round,
since less assistance weight means a stronger lift.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Optional

log = logging.getLogger(__name__)

ASSISTED_MARKER = "assisted"

@dataclass(slots=True)
class SetRecord:
    """A logged set together with the exercise name and session it belongs to."""
    entry: Any  # anything with id / weight / reps / is_pr, normally a SetEntry
    exercise_name: str
    session_id: int

def estimated_1rm(weight: float, reps: int) -> float:
    """Brzycki estimate: weight * 36 / (37 - reps).

    The denominator is clamped to 1 so unrealistic rep counts (>= 37) give a
    large finite value instead of dividing by zero or flipping sign.
    """
    if reps <= 0:
        return 0.0
    return weight * 36 / max(37 - reps, 1)

def is_assisted(exercise_name: str) -> bool:
    return ASSISTED_MARKER in exercise_name.lower()

def _better(candidate: float, reference: float, assisted: bool) -> bool:
    # strict in both directions: ties never crown a new PR
    return candidate < reference if assisted else candidate > reference

def _same_entry(a: Any, b: Any) -> bool:
    if a is b:
        return True
    a_id, b_id = getattr(a, "id", None), getattr(b, "id", None)
    return a_id is not None and a_id == b_id

def historical_best(
    exercise_name: str,
    history: Iterable[SetRecord],
    *,
    exclude: Any = None,
) -> float:
    """Best estimated 1RM on record for ``exercise_name``.

    Returns the no-history sentinel (0, or +inf for assisted exercises) when
    nothing matches, so any real set compares as better.
    """
    assisted = is_assisted(exercise_name)
    values = [
        estimated_1rm(r.entry.weight, r.entry.reps)
        for r in history
        if r.exercise_name == exercise_name and not (exclude is not None and _same_entry(r.entry, exclude))
    ]
    if not values:
        return math.inf if assisted else 0.0
    return min(values) if assisted else max(values)

def evaluate_and_mark(
    new_set: Any,
    exercise_name: str,
    session_id: int,
    history: Iterable[SetRecord],
) -> Optional[Any]:
    """Decide whether ``new_set`` is a PR and set ``new_set.is_pr``.

    ``history`` may include ``new_set`` itself; it is skipped. If another set
    of the same exercise in the same session currently holds the flag, the
    new set only competes with that holder and, when strictly better, takes
    the flag away from it. Otherwise the new set is compared with the best
    set across all sessions.

    Returns the set that lost its PR flag, if any.
    """
    history = list(history)
    assisted = is_assisted(exercise_name)
    current = estimated_1rm(new_set.weight, new_set.reps)

    holder = next(
        (
            r.entry for r in history
            if r.exercise_name == exercise_name
            and r.session_id == session_id
            and r.entry.is_pr
            and not _same_entry(r.entry, new_set)
        ),
        None,
    )

    if holder is not None:
        if _better(current, estimated_1rm(holder.weight, holder.reps), assisted):
            holder.is_pr = False
            new_set.is_pr = True
            log.info("PR moved within session=%s exercise=%r e1rm=%.2f", session_id, exercise_name, current)
            return holder
        new_set.is_pr = False
        return None

    best = historical_best(exercise_name, history, exclude=new_set)
    new_set.is_pr = _better(current, best, assisted)
    if new_set.is_pr:
        log.info("new PR session=%s exercise=%r e1rm=%.2f (previous best %.2f)",
                 session_id, exercise_name, current, best)
    return None
