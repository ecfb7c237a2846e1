from ironnotes.schemas.set_entry import ParsedSet, SetRead
from ironnotes.schemas.exercise import ExerciseCreate, ExerciseRead
from ironnotes.schemas.session import SessionCreate, SessionRead, SessionSummary
from ironnotes.schemas.analytics import AnalyticsOverview, E1RMPoint, VolumePoint

__all__ = [
    "ParsedSet", "SetRead",
    "ExerciseCreate", "ExerciseRead",
    "SessionCreate", "SessionRead", "SessionSummary",
    "AnalyticsOverview", "E1RMPoint", "VolumePoint",
]
