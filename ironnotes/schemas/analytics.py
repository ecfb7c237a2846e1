from datetime import datetime
from pydantic import BaseModel
from ironnotes.models.exercise import MuscleGroup

class VolumePoint(BaseModel):
    muscle_group: MuscleGroup
    volume: int

class E1RMPoint(BaseModel):
    date: datetime
    est_1rm: float

class AnalyticsOverview(BaseModel):
    total_workouts: int
    total_volume: float
    total_prs: int
    average_duration: int
    volume_by_muscle_group: list[VolumePoint]
    exercises: list[str]
