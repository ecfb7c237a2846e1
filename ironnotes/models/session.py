from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, Boolean, Text
from ironnotes.db import Base, UTCDateTime
from ironnotes.utils.clock import utcnow

class WorkoutSession(Base):
    __tablename__ = "workout_sessions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, index=True)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # seconds, set on completion
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    exercises = relationship(
        "ExerciseLog",
        cascade="all, delete-orphan",
        order_by="ExerciseLog.position",
        passive_deletes=True,
    )
