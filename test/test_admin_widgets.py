"""Test các widget của admin: người dùng, môn học, lịch học, báo cáo."""

from unival.models.course import Cohort, Course, Department
from unival.models.room import Room
from unival.models.schedule import ScheduleEntry
from unival.models.evaluation import Evaluation
from unival.models.user import User
from unival.services.admin_service import AdminService
from unival.services.catalog_service import CatalogService
from unival.ui.widgets.chart_widget import ChartWidget
from unival.ui.widgets.course_manager import CourseManagerWidget
from unival.ui.widgets.data_viewer import DataViewerWidget
from unival.ui.widgets.schedule_table import ScheduleTable
from unival.ui.widgets.user_table import UserManagementWidget, filter_users

USERS = [
    User("1", "ann@uni.edu", "Ann Lee", "faculty", "d1"),
    User("2", "bob@uni.edu", "Bob Tran", "student", "d1", year=2),
    User("3", "root@uni.edu", "Root", "admin"),
]


def test_filter_users_by_text_and_role():
    assert [u.user_id for u in filter_users(USERS, "BOB")] == ["2"]
    assert [u.user_id for u in filter_users(USERS, "uni.edu", "faculty")] == ["1"]
    assert [u.user_id for u in filter_users(USERS)] == ["1", "2", "3"]
    assert filter_users(USERS, "nobody") == []


def test_user_widget_filter_and_selection(qapp, fake_client):
    widget = UserManagementWidget(AdminService(fake_client))
    widget.set_users(USERS)
    assert widget.count_label.text() == "3 / 3 users"

    widget.role_filter.setCurrentIndex(widget.role_filter.findData("student"))
    assert widget.count_label.text() == "1 / 3 users"
    widget.table.setCurrentCell(0, 0)
    assert widget.selected_user().email == "bob@uni.edu"


def test_user_widget_requires_selection(qapp, fake_client):
    widget = UserManagementWidget(AdminService(fake_client))
    messages = []
    widget.message.connect(lambda text, ok: messages.append((text, ok)))
    widget.set_users([])
    widget.change_role()
    assert messages == [("Please select a user first.", False)]
    assert fake_client.calls == []


def test_course_manager_form(qapp, fake_client):
    widget = CourseManagerWidget(CatalogService(fake_client))
    messages = []
    widget.message.connect(lambda text, ok: messages.append((text, ok)))
    widget.set_data([Course("c1", "CS101", "Intro", "d1")], [Department("d1", "Computer Science")])

    assert widget.table.item(0, 2).text() == "Computer Science"
    widget.table.setCurrentCell(0, 0)
    assert widget.code_edit.text() == "CS101"
    assert widget.department_combo.currentData() == "d1"

    widget.code_edit.clear()
    widget.create_course()
    assert messages == [("Please fill in all fields", False)]


def test_schedule_table_lookups(qapp):
    table = ScheduleTable()
    table.update_data(
        [ScheduleEntry("s1", "c1", "f1", "h1", "r1", "t1", "Fall", "2025-2026"),
         ScheduleEntry("s2", "c9", "f1", "h1", "r1", "t1", "Fall", "2025-2026", is_active=False)],
        courses={"c1": Course("c1", "CS101", "Intro")},
        rooms={"r1": Room("r1", "A101", building="Main")},
        cohorts={"h1": Cohort("h1", "CS 2025 - A")},
    )
    assert table.cell_text(0, 0) == "CS101 - Intro"
    assert table.cell_text(0, 2) == "A101 (Main)"
    assert table.cell_text(1, 0) == "c9"
    assert table.cell_text(1, 6) == "No"
    assert table.count_label.text() == "2 schedules (1 active)"


def test_data_viewer_counts(qapp):
    viewer = DataViewerWidget()
    viewer.set_courses([Course("c1", "CS101", "Intro")])
    viewer.set_rooms([])
    assert viewer.counts["courses"] == 1
    assert viewer.counts["rooms"] == 0
    assert viewer.rooms_table.item(0, 0).text() == "No rooms found"
    assert viewer.stats_label.text().startswith("1 courses")


def test_chart_summary(qapp):
    chart = ChartWidget()
    chart.update_report({"admin": 1, "faculty": 2, "student": 5}, [
        Evaluation("Quiz", "2025-03-03", "09:00", "10:00", type="Quiz"),
        Evaluation("Lab", "2025-03-05", "09:00", "10:00", type="Lab"),
        Evaluation("Quiz 2", "2025-03-05", "11:00", "12:00", type="Quiz"),
    ])
    assert chart.summary["total_evaluations"] == 3
    assert chart.summary["evaluations_by_type"] == {"Quiz": 2, "Lab": 1}
    assert chart.summary["evaluations_by_weekday"]["Wed"] == 2
    assert chart.stats_label.text() == "8 users | 3 evaluations"
    chart.clear()
    assert chart.summary == {}
