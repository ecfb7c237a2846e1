from typing import Annotated
from pydantic import BaseModel, Field, field_validator
from ironnotes.models.exercise import MuscleGroup
from ironnotes.schemas.set_entry import SetRead

# Keep max length via Field
ExerciseStr = Annotated[str, Field(max_length=120)]

class ExerciseCreate(BaseModel):
    exercise_name: ExerciseStr
    muscle_group: MuscleGroup

    @field_validator("exercise_name")
    @classmethod
    def exercise_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("exercise name cannot be blank")
        return v2

    @field_validator("muscle_group")
    @classmethod
    def muscle_group_selectable(cls, v: MuscleGroup) -> MuscleGroup:
        if v not in MuscleGroup.selectable():
            raise ValueError(f"{v.value} is a split, not a muscle group")
        return v

class ExerciseRead(BaseModel):
    id: int
    session_id: int
    exercise_name: str
    muscle_group: MuscleGroup
    position: int
    sets: list[SetRead] = []

    model_config = {"from_attributes": True}
