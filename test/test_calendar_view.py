"""Test lưới lịch bài đánh giá theo tuần và dialog thêm bài đánh giá."""

from datetime import date

import pytest

from unival.core.evaluation_rules import DailyLimitReachedError, EvaluationCalendar
from unival.models.course import Course
from unival.models.evaluation import Evaluation
from unival.ui.widgets.calendar_view import EvaluationCalendarView
from unival.ui.widgets.evaluation_dialog import AddEvaluationDialog

TODAY = date(2025, 3, 5)  # Thứ Tư


def ev(title, day, start, end, evaluation_id=None):
    return Evaluation(title, day, start, end, evaluation_id=evaluation_id)


@pytest.fixture
def view(qapp):
    widget = EvaluationCalendarView(can_edit=True, today=TODAY)
    widget.set_evaluations([
        ev("Quiz 1", "2025-03-03", "09:00", "10:00", "e1"),
        ev("Lab 1", "2025-03-03", "13:00", "14:00", "e2"),
        ev("Mid Sem", "2025-03-12", "10:00", "12:00", "e3"),
    ])
    return widget


def test_week_grid_and_headers(view):
    assert view.current_monday == date(2025, 3, 3)
    assert view.table.columnCount() == 5
    assert view.table.rowCount() == 2
    assert view.table.horizontalHeaderItem(0).text().endswith("(2/2)")
    assert view.table.horizontalHeaderItem(1).text().endswith("(0/2)")
    assert view.table.item(0, 0).text() == "Quiz 1 (2/2)\n09:00 - 10:00"
    assert view.evaluation_at(1, 0).evaluation_id == "e2"
    assert view.evaluation_at(0, 1) is None


def test_navigation_between_weeks(view):
    view.next_week()
    assert view.current_monday == date(2025, 3, 10)
    assert [e.title for e in view.week_evaluations()] == ["Mid Sem"]
    view.next_week()
    assert view.table.rowCount() == 0
    assert not view.empty_label.isHidden()
    view.go_to_week(TODAY)
    assert view.current_monday == date(2025, 3, 3)
    assert view.empty_label.isHidden()


def test_cell_click_emits_selection(view):
    selected = []
    view.evaluation_selected.connect(selected.append)
    view._on_cell_clicked(0, 0)
    view._on_cell_clicked(3, 3)
    assert [e.evaluation_id for e in selected] == ["e1"]


def test_add_button_depends_on_permission(qapp):
    assert not EvaluationCalendarView(can_edit=True, today=TODAY).add_btn.isHidden()
    assert EvaluationCalendarView(can_edit=False, today=TODAY).add_btn.isHidden()


def test_add_requested_uses_first_working_day_not_before_today(view):
    requested = []
    view.add_requested.connect(requested.append)
    view.add_btn.click()
    assert requested == [TODAY]


def test_add_evaluation_moves_to_its_week(view):
    view.add_evaluation(ev("Quiz 2", "2025-03-18", "09:00", "10:00"))
    assert view.current_monday == date(2025, 3, 17)
    assert view.table.item(0, 1).text().startswith("Quiz 2 (1/2)")


def test_add_evaluation_enforces_daily_limit(view):
    with pytest.raises(DailyLimitReachedError):
        view.add_evaluation(ev("Extra", "2025-03-03", "15:00", "16:00"))
    assert len(view.calendar) == 3


# ========== DIALOG ==========

def make_dialog(calendar, initial=date(2025, 3, 3)):
    return AddEvaluationDialog(calendar, courses=[Course("c1", "CS101", "Intro")],
                               initial_date=initial, faculty_id="f1")


def test_dialog_defaults(qapp):
    dialog = make_dialog(EvaluationCalendar())
    assert dialog.start_combo.currentText() == "09:00"
    assert dialog.end_combo.currentText() == "10:00"
    assert dialog.course_combo.itemData(0) is None
    assert dialog.course_combo.itemData(1) == "c1"


def test_dialog_moves_end_after_start(qapp):
    dialog = make_dialog(EvaluationCalendar())
    dialog.start_combo.setCurrentText("10:30")
    assert dialog.end_combo.currentText() == "10:35"


def test_dialog_accepts_valid_evaluation(qapp):
    dialog = make_dialog(EvaluationCalendar())
    dialog.title_edit.setText("Quiz 3")
    dialog.course_combo.setCurrentIndex(1)

    assert dialog.try_accept()

    evaluation = dialog.evaluation
    assert evaluation.title == "Quiz 3"
    assert evaluation.date == "2025-03-03"
    assert evaluation.course_id == "c1"
    assert evaluation.faculty_id == "f1"
    assert evaluation.type == "Quiz"


def test_dialog_title_falls_back_to_type(qapp):
    dialog = make_dialog(EvaluationCalendar())
    dialog.type_combo.setCurrentText("Lab")
    assert dialog.build_evaluation().title == "Lab"


def test_dialog_shows_conflict_message(qapp):
    calendar = EvaluationCalendar([ev("Quiz 1", "2025-03-03", "09:30", "10:30")])
    dialog = make_dialog(calendar)
    assert not dialog.try_accept()
    assert dialog.evaluation is None
    assert "conflicts with an existing evaluation" in dialog.error_label.text()


def test_dialog_rejects_weekend(qapp):
    dialog = make_dialog(EvaluationCalendar(), initial=date(2025, 3, 9))
    assert not dialog.try_accept()
    assert dialog.error_label.text() == "You cannot schedule evaluations on Saturdays or Sundays."
