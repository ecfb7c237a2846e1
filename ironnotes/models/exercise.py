from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, Enum as SAEnum
from ironnotes.db import Base

class MuscleGroup(str, Enum):
    chest = "Chest"
    back = "Back"
    legs = "Legs"
    shoulders = "Shoulders"
    arms = "Arms"
    core = "Core"
    full_body = "Full Body"

    @classmethod
    def selectable(cls) -> list["MuscleGroup"]:
        """Groups an exercise can be filed under (Full Body is a split, not a muscle)."""
        return [g for g in cls if g is not cls.full_body]

class ExerciseLog(Base):
    __tablename__ = "exercise_logs"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[int] = mapped_column(ForeignKey("workout_sessions.id", ondelete="CASCADE"), index=True)
    exercise_name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    muscle_group: Mapped[MuscleGroup] = mapped_column(
        SAEnum(MuscleGroup, name="muscle_group", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    sets = relationship(
        "SetEntry",
        cascade="all, delete-orphan",
        order_by="SetEntry.set_count",
        passive_deletes=True,
    )

    @property
    def estimated_1rm(self) -> float:
        return max((s.estimated_1rm for s in self.sets), default=0.0)
