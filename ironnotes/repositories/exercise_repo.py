from __future__ import annotations
from sqlalchemy import select
from ironnotes.exceptions import NotFoundError
from ironnotes.models import ExerciseLog, MuscleGroup, SetEntry, WorkoutSession
from ironnotes.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[ExerciseLog]):
    model = ExerciseLog

    def require(self, exercise_id: int) -> ExerciseLog:
        ex = self.get(exercise_id)
        if ex is None:
            raise NotFoundError(f"exercise {exercise_id} not found")
        return ex

    def create(self, session_id: int, *, exercise_name: str, muscle_group: MuscleGroup) -> ExerciseLog:
        sess = self.db.get(WorkoutSession, session_id)
        if sess is None:
            raise NotFoundError(f"session {session_id} not found")
        # attach through the parent so an already loaded collection stays current
        ex = ExerciseLog(exercise_name=exercise_name, muscle_group=muscle_group, position=len(sess.exercises))
        sess.exercises.append(ex)
        self.add_and_refresh(ex)
        self.commit()
        return ex

    def previous_sets(self, session_id: int, exercise_name: str) -> list[SetEntry]:
        """Sets of ``exercise_name`` from the most recent other session that has it."""
        stmt = (
            select(ExerciseLog)
            .join(WorkoutSession, ExerciseLog.session_id == WorkoutSession.id)
            .where(ExerciseLog.exercise_name == exercise_name, ExerciseLog.session_id != session_id)
            .order_by(WorkoutSession.date.desc(), WorkoutSession.id.desc(), ExerciseLog.position.asc())
            .limit(1)
        )
        ex = self.db.execute(stmt).scalar_one_or_none()
        return list(ex.sets) if ex is not None else []
