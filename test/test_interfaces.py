"""Test các trang con: tổng quan, bài đánh giá và báo cáo (không chạy thread)."""

from datetime import date

import pytest
from PyQt5.QtCore import QDate

from unival.core.evaluation_rules import TimeConflictError
from unival.models.evaluation import Evaluation
from unival.models.user import User
from unival.services import Services
from unival.services.admin_service import AdminService
from unival.services.auth_service import AuthService
from unival.services.catalog_service import CatalogService
from unival.services.comment_service import CommentService
from unival.services.schedule_service import ScheduleService
from unival.ui.interfaces import EvaluationInterface, OverviewInterface, ReportsInterface

ADMIN = User("a1", "root@uni.edu", "Root", "admin")
FACULTY = User("f1", "ann@uni.edu", "Ann", "faculty", "d1")


@pytest.fixture
def services(fake_client):
    return Services(fake_client, AuthService(fake_client), CatalogService(fake_client),
                    ScheduleService(fake_client), CommentService(fake_client), AdminService(fake_client))


def test_overview_cards_for_admin(qapp, services):
    page = OverviewInterface(services, ADMIN)
    page.set_overview({"users": 5, "by_role": {"admin": 1, "faculty": 2, "student": 2},
                       "courses": 3, "schedules": 4, "evaluations": 6})
    assert page.cards["faculty"].value_label.text() == "2"
    assert page.cards["evaluations"].value_label.text() == "6"


def test_overview_has_no_cards_for_faculty(qapp, services):
    page = OverviewInterface(services, FACULTY)
    assert page.cards == {}
    page.reload()
    assert services.client.calls == []


def messages_of(page):
    messages = []
    page.message.connect(lambda text, ok: messages.append((text, ok)))
    return messages


def evaluation(title, start, end, day="2025-03-03", **kwargs):
    return Evaluation(title, day, start, end, faculty_id="f1", **kwargs)


def test_evaluation_page_saves_and_confirms(qapp, services, fake_client, deferred):
    page = EvaluationInterface(services, FACULTY)
    messages = messages_of(page)
    page._on_loaded(([], [], [evaluation("Quiz 1", "09:00", "10:00", evaluation_id="e1")]))

    page.save_evaluation(evaluation("Lab 1", "11:00", "12:00"))
    deferred.run()

    saved = [e for e in page.calendar_view.calendar if e.title == "Lab 1"]
    assert [e.evaluation_id for e in saved] == ["evaluations-1"]
    assert len(page.calendar_view.calendar) == 2
    assert page.pending == []
    assert messages == [("Evaluation 'Lab 1' added.", True)]


def test_pending_save_reserves_its_slot(qapp, services, fake_client, deferred):
    page = EvaluationInterface(services, FACULTY)
    messages = messages_of(page)
    page._on_loaded(([], [], []))

    first = evaluation("A", "09:00", "10:00")
    page.save_evaluation(first)
    assert len(deferred.jobs) == 1

    # Lần thêm thứ hai trong lúc lần đầu còn đang lưu
    second = evaluation("B", "09:30", "10:30")
    with pytest.raises(TimeConflictError):
        page.calendar_view.calendar.validate(second)
    page.save_evaluation(second)
    assert len(deferred.jobs) == 1
    assert messages[-1][1] is False

    # Tải lại lịch trong lúc lưu vẫn giữ chỗ
    page._on_loaded(([], [], []))
    assert list(page.calendar_view.calendar) == [first]

    deferred.run()
    assert len(fake_client.calls_to("insert", "evaluations")) == 1
    assert len(page.calendar_view.calendar) == 1


def test_save_rechecks_against_server(qapp, services, fake_client, deferred):
    page = EvaluationInterface(services, FACULTY)
    messages = messages_of(page)
    page._on_loaded(([], [], []))
    fake_client.rows["evaluations"] = [{"evaluation_id": "e7", "title": "Other", "date": "2025-03-03",
                                        "start_time": "09:30:00", "end_time": "10:30:00",
                                        "faculty_id": "f1"}]

    page.save_evaluation(evaluation("A", "09:00", "10:00"))
    deferred.run()

    assert fake_client.calls_to("insert", "evaluations") == []
    assert fake_client.calls_to("select", "evaluations")[0][2] == {"faculty_id": "eq.f1"}
    assert messages[-1][0].startswith("Failed to save evaluation: The selected time slot conflicts")
    assert len(page.calendar_view.calendar) == 0
    assert page.pending == []

    # Lỗi lưu kéo theo tải lại lịch từ server
    deferred.run()
    assert [e.evaluation_id for e in page.calendar_view.calendar] == ["e7"]


def test_saved_evaluation_conflicting_after_reload_triggers_reload(qapp, services, deferred):
    page = EvaluationInterface(services, FACULTY)
    messages = messages_of(page)
    page._on_loaded(([], [], [evaluation("Quiz 1", "09:00", "10:00", evaluation_id="e1")]))

    reserved = evaluation("Lab 1", "09:30", "10:30")
    page._on_saved(reserved, evaluation("Lab 1", "09:30", "10:30", evaluation_id="e2"))

    assert [e.evaluation_id for e in page.calendar_view.calendar] == ["e1"]
    assert messages == []
    assert len(deferred.jobs) == 1


def test_reports_filter_by_date_range(qapp, services):
    page = ReportsInterface(services)
    page.start_date.setDate(QDate(2025, 3, 1))
    page.end_date.setDate(QDate(2025, 3, 31))
    page.set_data({
        "overview": {"by_role": {"admin": 1}},
        "evaluations": [
            Evaluation("In", "2025-03-10", "09:00", "10:00", type="Quiz"),
            Evaluation("Out", "2025-04-10", "09:00", "10:00", type="Quiz"),
        ],
        "schedules": [], "courses": [], "departments": [],
    })
    assert [e.title for e in page.filtered_evaluations()] == ["In"]
    assert page.chart_widget.summary["total_evaluations"] == 1
    assert page.export_btn.isEnabled()
    assert page._range() == (date(2025, 3, 1), date(2025, 3, 31))
