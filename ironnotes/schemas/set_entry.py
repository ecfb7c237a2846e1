from typing import Annotated, Literal
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

PosInt = Annotated[int, Field(ge=1)]
NonNegFloat = Annotated[float, Field(ge=0)]

class ParsedSet(BaseModel):
    """Structured result of reading one line of set shorthand."""
    weight: NonNegFloat
    reps: PosInt
    set_count: PosInt = 1
    is_single_arm: bool = False
    # unit written in the input, None when the caller's preferred unit applies
    unit: Literal["kg", "lb"] | None = None

    model_config = ConfigDict(frozen=True)

class SetRead(BaseModel):
    id: int
    exercise_id: int
    weight: float
    reps: int
    set_count: int
    is_single_arm: bool
    timestamp: datetime
    is_pr: bool
    estimated_1rm: float

    model_config = {"from_attributes": True}
