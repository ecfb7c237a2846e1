from ironnotes.models.session import WorkoutSession
from ironnotes.models.exercise import ExerciseLog, MuscleGroup
from ironnotes.models.set_entry import SetEntry

__all__ = ["WorkoutSession", "ExerciseLog", "MuscleGroup", "SetEntry"]
