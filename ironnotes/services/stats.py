from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Optional

from ironnotes.models import WorkoutSession
from ironnotes.schemas.analytics import AnalyticsOverview, E1RMPoint, VolumePoint
from ironnotes.schemas.session import SessionSummary
from ironnotes.services.pr_engine import estimated_1rm, is_assisted

def session_summary(session: WorkoutSession) -> SessionSummary:
    """Numbers shown when a workout is finished."""
    sets = [s for ex in session.exercises for s in ex.sets]
    groups: list = []
    for ex in session.exercises:
        if ex.muscle_group not in groups:
            groups.append(ex.muscle_group)
    return SessionSummary(
        session_id=session.id,
        total_sets=len(sets),
        total_volume=sum(s.weight * s.reps for s in sets),
        muscle_groups=groups,
        pr_count=sum(1 for s in sets if s.is_pr),
        duration=session.duration,
    )

def analytics_overview(sessions: Iterable[WorkoutSession]) -> AnalyticsOverview:
    sessions = list(sessions)
    completed = [s for s in sessions if s.is_completed]

    volume_by_group: dict = defaultdict(float)
    total_volume = 0.0
    total_prs = 0
    names: set[str] = set()
    for sess in sessions:
        for ex in sess.exercises:
            names.add(ex.exercise_name)
            ex_volume = sum(s.weight * s.reps for s in ex.sets)
            volume_by_group[ex.muscle_group] += ex_volume
            total_volume += ex_volume
            total_prs += sum(1 for s in ex.sets if s.is_pr)

    avg_duration = sum(s.duration for s in completed) // len(completed) if completed else 0
    volume_points = sorted(
        (VolumePoint(muscle_group=g, volume=int(v)) for g, v in volume_by_group.items()),
        key=lambda p: p.volume,
        reverse=True,
    )
    return AnalyticsOverview(
        total_workouts=len(completed),
        total_volume=total_volume,
        total_prs=total_prs,
        average_duration=avg_duration,
        volume_by_muscle_group=volume_points,
        exercises=sorted(names),
    )

def e1rm_history(sessions: Iterable[WorkoutSession], exercise_name: str) -> list[E1RMPoint]:
    """Estimated 1RM of every set of ``exercise_name``, oldest first."""
    points = [
        E1RMPoint(date=s.timestamp, est_1rm=round(estimated_1rm(s.weight, s.reps), 2))
        for sess in sessions
        for ex in sess.exercises
        if ex.exercise_name == exercise_name
        for s in ex.sets
    ]
    return sorted(points, key=lambda p: p.date)

def best_e1rm(points: list[E1RMPoint], exercise_name: str) -> Optional[E1RMPoint]:
    if not points:
        return None
    pick = min if is_assisted(exercise_name) else max
    return pick(points, key=lambda p: p.est_1rm)
