"""Test ràng buộc lịch bài đánh giá: cuối tuần, giờ hợp lệ, 2 bài/ngày, chồng lấn."""

from datetime import date, datetime

import pytest

from unival.core.evaluation_rules import (
    DailyLimitReachedError, EvaluationCalendar, InvalidIntervalError, TimeConflictError,
    WeekendNotAllowedError, evaluations_between, intervals_overlap, strip_load_suffix,
    time_options, week_start,
)
from unival.models.evaluation import Evaluation

# 2025-03-03 là Thứ Hai
MONDAY = "2025-03-03"
TUESDAY = "2025-03-04"
SATURDAY = "2025-03-08"


def make(title, day=MONDAY, start="09:00", end="10:00", evaluation_id=None):
    return Evaluation(title=title, date=day, start_time=start, end_time=end, evaluation_id=evaluation_id)


def test_time_options_cover_working_hours():
    options = time_options()
    assert options[0] == "08:00"
    assert options[1] == "08:05"
    assert options[-1] == "17:55"
    assert len(options) == 10 * 12


def test_intervals_overlap_is_half_open():
    t = lambda h, m=0: datetime(2025, 3, 3, h, m)
    assert intervals_overlap(t(10), t(11), t(10, 30), t(11, 30))
    assert intervals_overlap(t(10), t(12), t(10, 30), t(11))
    assert not intervals_overlap(t(10), t(11), t(11), t(12))
    assert not intervals_overlap(t(11), t(12), t(10), t(11))


def test_strip_load_suffix():
    assert strip_load_suffix("Quiz 1 (2/2)") == "Quiz 1"
    assert strip_load_suffix("Quiz 1") == "Quiz 1"
    assert strip_load_suffix("") == ""


def test_week_start_returns_monday():
    assert week_start(date(2025, 3, 6)) == date(2025, 3, 3)
    assert week_start(date(2025, 3, 9)) == date(2025, 3, 3)
    assert week_start(date(2025, 3, 3)) == date(2025, 3, 3)


def test_add_two_evaluations_same_day():
    calendar = EvaluationCalendar()
    calendar.add(make("Quiz 1", start="09:00", end="10:00"))
    calendar.add(make("Lab 1", start="10:00", end="11:00"))
    assert calendar.count_on(date(2025, 3, 3)) == 2
    assert [e.title for e in calendar] == ["Quiz 1", "Lab 1"]


def test_third_evaluation_same_day_rejected():
    calendar = EvaluationCalendar([make("A", start="08:00", end="09:00"),
                                   make("B", start="13:00", end="14:00")])
    with pytest.raises(DailyLimitReachedError) as info:
        calendar.add(make("C", start="15:00", end="16:00"))
    assert info.value.message == "You cannot add more than two evaluations on the same day."
    assert len(calendar) == 2


def test_weekend_rejected_before_other_checks():
    calendar = EvaluationCalendar()
    # Giờ sai nhưng lỗi cuối tuần được báo trước
    with pytest.raises(WeekendNotAllowedError) as info:
        calendar.validate(make("Weekend", day=SATURDAY, start="11:00", end="10:00"))
    assert "Saturdays or Sundays" in info.value.message


def test_end_before_start_rejected():
    calendar = EvaluationCalendar()
    with pytest.raises(InvalidIntervalError):
        calendar.add(make("Bad", start="11:00", end="10:00"))
    with pytest.raises(InvalidIntervalError):
        calendar.add(make("Empty", start="10:00", end="10:00"))


def test_invalid_date_rejected():
    calendar = EvaluationCalendar()
    with pytest.raises(InvalidIntervalError):
        calendar.validate(make("Bad date", day="2025-13-45"))


def test_overlap_rejected_with_conflicts():
    existing = make("Quiz 1", start="10:00", end="11:00", evaluation_id="e1")
    calendar = EvaluationCalendar([existing])
    with pytest.raises(TimeConflictError) as info:
        calendar.add(make("Lab", start="10:30", end="11:30"))
    assert info.value.conflicts == [existing]
    assert "conflicts with an existing evaluation" in info.value.message


def test_touching_intervals_allowed():
    calendar = EvaluationCalendar([make("Quiz 1", start="10:00", end="11:00")])
    calendar.add(make("Quiz 2", start="11:00", end="12:00"))
    assert len(calendar) == 2


def test_same_time_other_day_allowed():
    calendar = EvaluationCalendar([make("Quiz 1")])
    calendar.add(make("Quiz 2", day=TUESDAY))
    assert calendar.count_on(date(2025, 3, 4)) == 1


def test_load_skips_malformed_records():
    calendar = EvaluationCalendar()
    calendar.load([make("Good"), make("Bad", start="xx")])
    assert [e.title for e in calendar] == ["Good"]


def test_load_labels_show_daily_count():
    first = make("Quiz 1 (1/2)", start="09:00", end="10:00")
    calendar = EvaluationCalendar([first])
    assert calendar.day_load(date(2025, 3, 3)) == "(1/2)"
    calendar.add(make("Lab 1", start="13:00", end="14:00"))
    assert calendar.load_label(first) == "Quiz 1 (2/2)"
    assert calendar.day_load(date(2025, 3, 4)) == "(0/2)"


def test_remove_and_group_by_week():
    calendar = EvaluationCalendar([
        make("A", evaluation_id="a"),
        make("B", day="2025-03-11", evaluation_id="b"),
    ])
    weeks = calendar.by_week()
    assert set(weeks) == {date(2025, 3, 3), date(2025, 3, 10)}
    assert [e.title for e in calendar.in_week(date(2025, 3, 12))] == ["B"]
    assert calendar.remove("a")
    assert not calendar.remove("missing")
    assert [e.title for e in calendar] == ["B"]


def test_evaluations_between_inclusive_range():
    items = [make("A", day="2025-03-03"), make("B", day="2025-03-10"), make("C", day="oops")]
    result = evaluations_between(items, date(2025, 3, 3), date(2025, 3, 7))
    assert [e.title for e in result] == ["A"]
    assert [e.title for e in evaluations_between(items)] == ["A", "B"]
