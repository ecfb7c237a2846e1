from __future__ import annotations
from typing import Optional
from sqlalchemy import select
from ironnotes.models import SetEntry, ExerciseLog
from ironnotes.repositories.base import BaseRepository
from ironnotes.services.pr_engine import SetRecord

class SetRepository(BaseRepository[SetEntry]):
    model = SetEntry

    def history(self, exercise_name: Optional[str] = None) -> list[SetRecord]:
        """Every logged set with its exercise name and session id, newest first."""
        stmt = (
            select(SetEntry, ExerciseLog.exercise_name, ExerciseLog.session_id)
            .join(ExerciseLog, SetEntry.exercise_id == ExerciseLog.id)
            .order_by(SetEntry.timestamp.desc(), SetEntry.id.desc())
        )
        if exercise_name is not None:
            stmt = stmt.where(ExerciseLog.exercise_name == exercise_name)
        return [SetRecord(entry=row[0], exercise_name=row[1], session_id=row[2]) for row in self.db.execute(stmt).all()]

    def add(self, exercise: ExerciseLog, entry: SetEntry) -> SetEntry:
        """Attach a new set to its exercise and flush, so later history reads in this unit of work see it."""
        exercise.sets.append(entry)
        return self.add_and_refresh(entry)
