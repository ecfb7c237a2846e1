from __future__ import annotations
from datetime import datetime
from typing import Optional
from sqlalchemy import select
from ironnotes.exceptions import NotFoundError
from ironnotes.models import WorkoutSession, ExerciseLog
from ironnotes.repositories.base import BaseRepository, Page
from ironnotes.utils.clock import ensure_aware, utcnow

class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    # READS
    def require(self, session_id: int) -> WorkoutSession:
        sess = self.get(session_id)
        if sess is None:
            raise NotFoundError(f"session {session_id} not found")
        return sess

    def latest(self, *, exclude_id: Optional[int] = None) -> Optional[WorkoutSession]:
        stmt = select(WorkoutSession).order_by(WorkoutSession.date.desc(), WorkoutSession.id.desc())
        if exclude_id is not None:
            stmt = stmt.where(WorkoutSession.id != exclude_id)
        return self.db.execute(stmt.limit(1)).scalar_one_or_none()

    def list(self, *, limit: int = 50, offset: int = 0) -> Page[WorkoutSession]:
        stmt = select(WorkoutSession).order_by(WorkoutSession.date.desc(), WorkoutSession.id.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def list_all(self) -> list[WorkoutSession]:
        stmt = select(WorkoutSession).order_by(WorkoutSession.date.asc(), WorkoutSession.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    # WRITES
    def create(self, *, notes: str = "", date: Optional[datetime] = None) -> WorkoutSession:
        sess = WorkoutSession(notes=notes, date=date or utcnow(), duration=0, is_completed=False)
        self.add_and_refresh(sess)
        self.commit()
        return sess

    def clone_last(self, *, notes: str = "", date: Optional[datetime] = None) -> WorkoutSession:
        """New session carrying over the exercise list (no sets) of the most recent one."""
        source = self.latest()
        sess = WorkoutSession(notes=notes, date=date or utcnow(), duration=0, is_completed=False)
        if source is not None:
            for pos, ex in enumerate(source.exercises):
                sess.exercises.append(
                    ExerciseLog(exercise_name=ex.exercise_name, muscle_group=ex.muscle_group, position=pos)
                )
        self.add_and_refresh(sess)
        self.commit()
        return sess

    def complete(self, session_id: int, *, now: Optional[datetime] = None) -> WorkoutSession:
        sess = self.require(session_id)
        if not sess.is_completed:
            end = now or utcnow()
            sess.duration = max(0, int((end - ensure_aware(sess.date)).total_seconds()))
            sess.is_completed = True
            self.commit()
        return sess

    def delete(self, session_id: int) -> bool:
        sess = self.get(session_id)
        if sess is None:
            return False
        self.db.delete(sess)
        self.commit()
        return True
