from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ironnotes.models import SetEntry, WorkoutSession, ExerciseLog, MuscleGroup
from ironnotes.repositories.base import Page
from ironnotes.repositories.exercise_repo import ExerciseRepository
from ironnotes.repositories.session_repo import SessionRepository
from ironnotes.repositories.set_repo import SetRepository
from ironnotes.schemas.analytics import AnalyticsOverview, E1RMPoint
from ironnotes.schemas.exercise import ExerciseCreate
from ironnotes.schemas.session import SessionCreate, SessionRead, SessionSummary
from ironnotes.services.notation import parse
from ironnotes.services.pr_engine import evaluate_and_mark
from ironnotes.services.rest_timer import RestTimer
from ironnotes.services.stats import analytics_overview, e1rm_history, session_summary
from ironnotes.utils.clock import utcnow

log = logging.getLogger(__name__)

KG_PER_LB = 0.45359237

def convert_weight(weight: float, from_unit: str, to_unit: str) -> float:
    if from_unit == to_unit:
        return weight
    if from_unit == "lb" and to_unit == "kg":
        return round(weight * KG_PER_LB, 2)
    if from_unit == "kg" and to_unit == "lb":
        return round(weight / KG_PER_LB, 2)
    raise ValueError(f"unknown unit conversion {from_unit!r} -> {to_unit!r}")

class WorkoutLog:
    """Capture flow: shorthand text in, persisted and PR-checked sets out, rest timer running."""

    def __init__(
        self,
        db: Session,
        *,
        timer: Optional[RestTimer] = None,
        preferred_unit: str = "kg",
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.timer = timer
        self.preferred_unit = preferred_unit
        self._clock = clock
        self.sessions = SessionRepository(db)
        self.exercises = ExerciseRepository(db)
        self.sets = SetRepository(db)

    def start_session(self, notes: str = "", *, clone_last: bool = False) -> WorkoutSession:
        payload = SessionCreate(notes=notes, clone_last=clone_last)
        now = self._clock()
        if payload.clone_last:
            sess = self.sessions.clone_last(notes=payload.notes, date=now)
        else:
            sess = self.sessions.create(notes=payload.notes, date=now)
        log.info("session=%s started (%d exercises carried over)", sess.id, len(sess.exercises))
        return sess

    def add_exercise(self, session_id: int, name: str, muscle_group: MuscleGroup | str) -> ExerciseLog:
        payload = ExerciseCreate(exercise_name=name, muscle_group=muscle_group)
        return self.exercises.create(
            session_id, exercise_name=payload.exercise_name, muscle_group=payload.muscle_group,
        )

    def log_set(self, exercise_id: int, text: str) -> list[SetEntry]:
        """Parse ``text`` and record it against the exercise.

        "100x10x3" records three sets; each continues the exercise's set
        numbering and is PR-checked in order. Raises ParseFailure without
        touching the database when the text cannot be read.
        """
        parsed = parse(text)
        exercise = self.exercises.require(exercise_id)
        weight = convert_weight(parsed.weight, parsed.unit or self.preferred_unit, self.preferred_unit)

        now = self._clock()
        first = len(exercise.sets) + 1
        created: list[SetEntry] = []
        for i in range(parsed.set_count):
            entry = SetEntry(
                weight=weight,
                reps=parsed.reps,
                set_count=first + i,
                is_single_arm=parsed.is_single_arm,
                # distinct instants keep history ordering stable
                timestamp=now + timedelta(microseconds=i),
                is_pr=False,
            )
            self.sets.add(exercise, entry)
            evaluate_and_mark(
                entry, exercise.exercise_name, exercise.session_id,
                self.sets.history(exercise.exercise_name),
            )
            created.append(entry)
        self.sets.commit()

        log.info("session=%s exercise=%r logged %d set(s) of %sx%s pr=%s",
                 exercise.session_id, exercise.exercise_name, len(created), weight, parsed.reps,
                 any(s.is_pr for s in created))
        if self.timer is not None:
            self.timer.start()
        return created

    def get_session(self, session_id: int) -> SessionRead:
        """Read-only snapshot of a session with its exercises and sets."""
        return SessionRead.model_validate(self.sessions.require(session_id))

    def previous_sets(self, session_id: int, exercise_name: str) -> list[SetEntry]:
        return self.exercises.previous_sets(session_id, exercise_name)

    def history(self, *, limit: int = 50, offset: int = 0) -> Page[WorkoutSession]:
        """Past sessions, newest first."""
        return self.sessions.list(limit=limit, offset=offset)

    def analytics(self) -> AnalyticsOverview:
        return analytics_overview(self.sessions.list_all())

    def e1rm_history(self, exercise_name: str) -> list[E1RMPoint]:
        return e1rm_history(self.sessions.list_all(), exercise_name)

    def finish_session(self, session_id: int) -> SessionSummary:
        sess = self.sessions.complete(session_id, now=self._clock())
        if self.timer is not None:
            self.timer.stop()
        summary = session_summary(sess)
        log.info("session=%s finished in %ss, %d sets, %d PRs",
                 sess.id, sess.duration, summary.total_sets, summary.pr_count)
        return summary

    def delete_session(self, session_id: int) -> bool:
        deleted = self.sessions.delete(session_id)
        if deleted:
            log.info("session=%s deleted", session_id)
        return deleted
