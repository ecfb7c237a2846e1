from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, Float, Boolean, ForeignKey
from ironnotes.db import Base, UTCDateTime
from ironnotes.utils.clock import utcnow
from ironnotes.services.pr_engine import estimated_1rm

class SetEntry(Base):
    __tablename__ = "set_entries"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # only a key back to the owner; ExerciseLog.sets is the one-way collection
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercise_logs.id", ondelete="CASCADE"), index=True)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    set_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_single_arm: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    timestamp: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, index=True)
    is_pr: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def estimated_1rm(self) -> float:
        return estimated_1rm(self.weight, self.reps)

    @property
    def volume(self) -> float:
        return self.weight * self.reps
