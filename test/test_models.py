"""Test chuyển đổi bản ghi Supabase sang data class."""

from unival.models.course import Course
from unival.models.evaluation import Evaluation
from unival.models.profile import StudentProfile
from unival.models.room import Room, short_time
from unival.models.schedule import ScheduleEntry
from unival.models.user import User


def test_user_role_normalized():
    user = User.from_record({"id": 12, "email": "a@b.c", "name": "A", "role": " Student ", "year": "3"})
    assert user.user_id == "12"
    assert user.role == "student"
    assert user.is_student and not user.can_schedule_evaluations
    assert User("1", "x", "X", "Faculty").can_schedule_evaluations


def test_short_time():
    assert short_time("09:05:00") == "09:05"
    assert short_time("9:5") == "09:05"
    assert short_time(None) == ""
    assert short_time("noon") == "noon"


def test_evaluation_record_round_trip_fields():
    evaluation = Evaluation.from_record({
        "id": 5, "title": "Quiz", "date": "2025-03-03T00:00:00", "start_time": "09:00:00",
        "end_time": "10:00:00", "type": "Quiz", "is_published": None,
    })
    assert evaluation.evaluation_id == "5"
    assert evaluation.date == "2025-03-03"
    assert str(evaluation) == "Quiz (2025-03-03 09:00-10:00)"
    record = evaluation.to_record()
    assert "evaluation_id" not in record
    assert record["is_published"] is False


def test_catalog_records_accept_alternate_columns():
    course = Course.from_record({"id": "c1", "course_code": "CS101", "course_name": "Intro"})
    assert str(course) == "CS101 - Intro"
    room = Room.from_record({"room_id": "r1", "room_number": "A101", "capacity": "30"})
    assert room.name == "A101"
    assert room.can_accommodate(30) and not room.can_accommodate(31)


def test_schedule_and_profile_records():
    entry = ScheduleEntry.from_record({"schedule_id": "s1", "course_id": "c1", "faculty_id": "f1",
                                       "cohort_id": "h1", "room_id": "r1", "slot_id": "t1"})
    assert entry.is_active
    assert "schedule_id" not in entry.to_record()
    profile = StudentProfile.from_record({"student_id": "s1", "gpa": "3.5"})
    assert profile.gpa == 3.5
    assert "student_id" not in profile.to_record()
