import pytest

from ironnotes.models import MuscleGroup
from ironnotes.repositories.session_repo import SessionRepository
from ironnotes.services.pr_engine import estimated_1rm
from ironnotes.services.stats import analytics_overview, best_e1rm, e1rm_history, session_summary
from ironnotes.utils.formatting import format_clock, format_duration, format_volume, format_weight


@pytest.fixture
def two_weeks(workout, clock):
    """Two finished sessions and one still open."""
    s1 = workout.start_session()
    bench = workout.add_exercise(s1.id, "Bench Press", MuscleGroup.chest)
    workout.log_set(bench.id, "100x5x2")
    squat = workout.add_exercise(s1.id, "Squat", MuscleGroup.legs)
    workout.log_set(squat.id, "150x5")
    clock.advance(3000)
    workout.finish_session(s1.id)

    clock.advance(7 * 86400)
    s2 = workout.start_session()
    bench2 = workout.add_exercise(s2.id, "Bench Press", MuscleGroup.chest)
    workout.log_set(bench2.id, "105x5")
    clock.advance(4000)
    workout.finish_session(s2.id)

    clock.advance(86400)
    s3 = workout.start_session()
    workout.add_exercise(s3.id, "Assisted Dip", MuscleGroup.arms)
    return SessionRepository(workout.db).list_all()


def test_analytics_overview(two_weeks):
    o = analytics_overview(two_weeks)
    assert o.total_workouts == 2
    assert o.total_volume == pytest.approx(100 * 5 * 2 + 150 * 5 + 105 * 5)
    # first bench, squat, then the heavier bench in week two
    assert o.total_prs == 3
    assert o.average_duration == 3500
    assert [p.muscle_group for p in o.volume_by_muscle_group] == [MuscleGroup.chest, MuscleGroup.legs, MuscleGroup.arms]
    assert o.volume_by_muscle_group[0].volume == 1525
    assert o.exercises == ["Assisted Dip", "Bench Press", "Squat"]

def test_analytics_on_empty_history():
    o = analytics_overview([])
    assert o.total_workouts == 0 and o.average_duration == 0
    assert o.volume_by_muscle_group == []

def test_e1rm_history_is_chronological(two_weeks):
    points = e1rm_history(two_weeks, "Bench Press")
    assert len(points) == 3
    assert [p.date for p in points] == sorted(p.date for p in points)
    assert points[-1].est_1rm == pytest.approx(round(estimated_1rm(105, 5), 2))
    assert best_e1rm(points, "Bench Press") == points[-1]
    assert best_e1rm([], "Bench Press") is None

def test_session_summary_for_open_session(two_weeks):
    open_session = two_weeks[-1]
    summary = session_summary(open_session)
    assert summary.total_sets == 0
    assert summary.duration == 0
    assert summary.muscle_groups == [MuscleGroup.arms]


# --- formatting ---
def test_format_clock():
    assert format_clock(90) == "01:30"
    assert format_clock(0) == "00:00"
    assert format_clock(-4) == "00:00"

def test_format_duration():
    assert format_duration(59) == "0:59"
    assert format_duration(3725) == "1:02:05"

def test_format_volume_and_weight():
    assert format_volume(12345.6) == "12,346 kg"
    assert format_weight(62.5, "lb") == "62.5 lb"
    assert format_weight(100.0) == "100 kg"

def test_workout_log_reads_history_and_analytics(workout, two_weeks):
    page = workout.history(limit=2)
    assert page.total == 3
    assert [s.id for s in page.items] == [two_weeks[2].id, two_weeks[1].id]

    assert workout.analytics() == analytics_overview(two_weeks)
    assert [p.est_1rm for p in workout.e1rm_history("Bench Press")] == [
        p.est_1rm for p in e1rm_history(two_weeks, "Bench Press")
    ]
