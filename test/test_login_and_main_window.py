"""Test cửa sổ đăng nhập, dialog đăng ký và menu theo vai trò của MainWindow."""

import threading

import pytest

from unival.core.workers import run_in_background
from unival.models.course import Department
from unival.models.user import User
from unival.services import Services
from unival.services.admin_service import AdminService
from unival.services.auth_service import AuthService
from unival.services.catalog_service import CatalogService
from unival.services.comment_service import CommentService
from unival.services.schedule_service import ScheduleService
from unival.ui.login_window import EMPTY_FIELDS, LoginWindow
from unival.ui.main_window import MainWindow
from unival.ui.registration_dialog import RegistrationDialog


@pytest.fixture
def services(fake_client):
    return Services(
        client=fake_client,
        auth=AuthService(fake_client),
        catalog=CatalogService(fake_client),
        schedules=ScheduleService(fake_client),
        comments=CommentService(fake_client),
        admin=AdminService(fake_client),
    )


def test_login_requires_both_fields(qapp, services, fake_client):
    window = LoginWindow(services)
    window.email_edit.setText("ann@uni.edu")
    window.attempt_login()
    assert window.status_label.text() == EMPTY_FIELDS
    assert window.login_btn.isEnabled()
    assert fake_client.calls == []


def test_login_failure_shows_message(qapp, services):
    window = LoginWindow(services)
    window.set_busy(True)
    window._on_failed("Invalid email or password")
    assert window.status_label.text() == "Invalid email or password"
    assert window.login_btn.isEnabled()


def test_login_success_emits_user(qapp, services):
    window = LoginWindow(services)
    received = []
    window.logged_in.connect(received.append)
    window.password_edit.setText("secret")
    user = User("u1", "ann@uni.edu", "Ann", "faculty")
    window._on_authenticated(user)
    assert received == [user]
    assert window.password_edit.text() == ""


# ========== REGISTRATION ==========

@pytest.fixture
def dialog(qapp, services):
    dlg = RegistrationDialog(services, load_departments=False)
    dlg.set_departments([Department("d1", "Physics")])
    dlg.name_edit.setText("Bob")
    dlg.email_edit.setText("bob@uni.edu")
    dlg.password_edit.setText("secret1")
    dlg.confirm_edit.setText("secret1")
    return dlg


def test_registration_valid_form(dialog):
    assert dialog.validate() is None


@pytest.mark.parametrize("field, value, error", [
    ("name_edit", "", "Please fill in all fields"),
    ("email_edit", "bob-at-uni", "Please enter a valid email address"),
    ("password_edit", "abc", "Password must be at least 6 characters"),
    ("confirm_edit", "other1", "Passwords do not match"),
])
def test_registration_validation_errors(dialog, field, value, error):
    getattr(dialog, field).setText(value)
    assert dialog.validate() == error


def test_registration_role_switches_profile(dialog):
    dialog.role_combo.setCurrentIndex(dialog.role_combo.findData("student"))
    assert dialog.profile_stack.currentIndex() == 1
    assert not dialog.year_spin.isHidden()
    dialog.role_combo.setCurrentIndex(dialog.role_combo.findData("faculty"))
    assert dialog.profile_stack.currentIndex() == 0
    assert dialog.year_spin.isHidden()


def test_registration_profiles(dialog):
    dialog.enrollment_edit.setText("E-1")
    dialog.advisor_edit.setText("")
    profile = dialog.student_profile()
    assert profile.enrollment_number == "E-1"
    assert profile.advisor_id is None
    dialog.specialization_edit.setText("Optics")
    assert dialog.faculty_profile().specialization == "Optics"


# ========== MAIN WINDOW ==========

def route_keys(window):
    return [page.objectName() for page in window.pages]


def test_admin_navigation(qapp, services):
    window = MainWindow(services, User("a1", "root@uni.edu", "Root", "admin"), auto_load=False)
    assert route_keys(window) == ["OverviewInterface", "UserManagementWidget", "CourseManagerWidget",
                                  "ScheduleInterface", "EvaluationInterface", "ReportsInterface"]
    assert not window.evaluation_interface.calendar_view.add_btn.isHidden()


def test_faculty_navigation(qapp, services):
    window = MainWindow(services, User("f1", "ann@uni.edu", "Ann", "faculty", "d1"), auto_load=False)
    assert route_keys(window) == ["OverviewInterface", "CatalogInterface", "ScheduleInterface",
                                  "EvaluationInterface"]


def test_student_navigation_is_read_only(qapp, services):
    window = MainWindow(services, User("s1", "sam@uni.edu", "Sam", "student", "d1", year=2), auto_load=False)
    assert route_keys(window) == ["OverviewInterface", "CatalogInterface", "EvaluationInterface"]
    assert window.evaluation_interface.calendar_view.add_btn.isHidden()


def test_logout_emits_signal(qapp, services):
    window = MainWindow(services, User("s1", "sam@uni.edu", "Sam", "student"), auto_load=False)
    emitted = []
    window.logged_out.connect(lambda: emitted.append(True))
    window.logout()
    assert emitted == [True]


def test_logout_waits_for_page_workers(qapp, services):
    window = MainWindow(services, User("s1", "sam@uni.edu", "Sam", "student"), auto_load=False)
    gate = threading.Event()
    results = []
    # Worker của widget lồng trong trang (panel bình luận)
    worker = run_in_background(window.evaluation_interface.comment_panel,
                               lambda: gate.wait(5), on_result=results.append)
    threading.Timer(0.05, gate.set).start()

    window.logout()

    assert worker.isFinished()
    qapp.processEvents()
    assert results == []
