from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, StringConstraints
from ironnotes.models.exercise import MuscleGroup
from ironnotes.schemas.exercise import ExerciseRead

# Notes: trimmed, up to 500 chars
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class SessionCreate(BaseModel):
    notes: NotesStr = ""
    clone_last: bool = False

class SessionRead(BaseModel):
    id: int
    date: datetime
    notes: str = ""
    duration: int = 0
    is_completed: bool = False
    exercises: list[ExerciseRead] = []

    model_config = {"from_attributes": True}

class SessionSummary(BaseModel):
    session_id: int
    total_sets: int
    total_volume: float
    muscle_groups: list[MuscleGroup]
    pr_count: int
    duration: int
