"""
Các trang con (interface) của cửa sổ chính.

Mỗi trang tự tải dữ liệu qua run_in_background và báo lỗi / thành công
bằng signal `message(str, bool)`; MainWindow hiển thị thông báo bằng InfoBar.
"""

import logging
from datetime import date
from typing import Dict, List

from PyQt5.QtCore import QDate, Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QDateEdit, QFileDialog, QGridLayout, QHBoxLayout, QLabel, QSplitter, QVBoxLayout, QWidget
)
from qfluentwidgets import BodyLabel, CardWidget, FluentIcon as FIF, PrimaryPushButton, StrongBodyLabel

from unival.core.evaluation_rules import EvaluationCalendar, SchedulingError, evaluations_between
from unival.core.workers import run_in_background
from unival.models.user import User
from unival.ui.widgets.calendar_view import EvaluationCalendarView
from unival.ui.widgets.chart_widget import ChartWidget
from unival.ui.widgets.comment_panel import CommentPanel
from unival.ui.widgets.data_viewer import DataViewerWidget
from unival.ui.widgets.evaluation_dialog import AddEvaluationDialog
from unival.ui.widgets.schedule_table import ScheduleTable
from unival.utils.exporter import Exporter

logger = logging.getLogger(__name__)


class StatCard(CardWidget):
    """Thẻ số liệu: giá trị lớn + nhãn."""

    def __init__(self, title: str, value: str = "-", parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        self.value_label = StrongBodyLabel(value)
        self.value_label.setStyleSheet("font-size: 20pt; font-weight: bold; color: #1565C0;")
        layout.addWidget(self.value_label)
        self.title_label = BodyLabel(title)
        self.title_label.setStyleSheet("color: #666;")
        layout.addWidget(self.title_label)

    def set_value(self, value) -> None:
        self.value_label.setText(str(value))


# ========== OVERVIEW ==========

class OverviewInterface(QWidget):
    """Trang tổng quan: thông tin người dùng và thẻ số liệu (admin)."""

    message = pyqtSignal(str, bool)

    def __init__(self, services, user: User, parent=None):
        super().__init__(parent)
        self.setObjectName("OverviewInterface")
        self.services = services
        self.user = user
        self.cards: Dict[str, StatCard] = {}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(15)

        welcome = StrongBodyLabel(f"Welcome, {user.name}")
        welcome.setStyleSheet("font-size: 18pt; font-weight: bold;")
        layout.addWidget(welcome)

        profile = BodyLabel(
            f"Role: {user.role.capitalize()}    Department: {user.department or '-'}"
            + (f"    Year: {user.year}" if user.is_student and user.year else "")
            + f"\nEmail: {user.email}"
        )
        profile.setStyleSheet("color: #444;")
        layout.addWidget(profile)

        if user.is_admin:
            grid = QGridLayout()
            grid.setSpacing(15)
            for idx, (key, title) in enumerate([
                ("users", "Users"), ("faculty", "Faculty"), ("student", "Students"),
                ("courses", "Courses"), ("schedules", "Schedules"), ("evaluations", "Evaluations"),
            ]):
                card = StatCard(title)
                self.cards[key] = card
                grid.addWidget(card, idx // 3, idx % 3)
            layout.addLayout(grid)

        layout.addStretch()

    def reload(self) -> None:
        if not self.user.is_admin:
            return
        run_in_background(self, self.services.admin.get_overview,
                          on_result=self.set_overview,
                          on_error=lambda msg: self.message.emit(f"Failed to load overview: {msg}", False))

    def set_overview(self, overview: Dict) -> None:
        by_role = overview.get("by_role", {})
        values = {
            "users": overview.get("users", 0),
            "faculty": by_role.get("faculty", 0),
            "student": by_role.get("student", 0),
            "courses": overview.get("courses", 0),
            "schedules": overview.get("schedules", 0),
            "evaluations": overview.get("evaluations", 0),
        }
        for key, value in values.items():
            if key in self.cards:
                self.cards[key].set_value(value)


# ========== CATALOG ==========

class CatalogInterface(DataViewerWidget):
    """
    Danh mục chỉ đọc theo khoa của người dùng.
    Sinh viên chỉ thấy môn học và lớp (cohort), không thấy phòng / khung giờ.
    """

    message = pyqtSignal(str, bool)

    def __init__(self, services, user: User, parent=None):
        super().__init__("📚 Catalog", parent)
        self.setObjectName("CatalogInterface")
        self.services = services
        self.user = user
        if user.is_student:
            self.tab_widget.removeTab(self.tab_widget.indexOf(self.slots_table))
            self.tab_widget.removeTab(self.tab_widget.indexOf(self.rooms_table))

    def reload(self) -> None:
        catalog, user = self.services.catalog, self.user

        def fetch():
            if user.is_student:
                if not user.department_id:
                    return [], [], [], []
                return (catalog.get_courses_by_department(user.department_id),
                        catalog.get_cohorts_by_department(user.department_id), [], [])
            courses = catalog.get_courses_by_department(user.department_id) \
                if user.department_id else catalog.get_courses()
            return courses, catalog.get_cohorts(), catalog.get_rooms(), catalog.get_time_slots()

        run_in_background(self, fetch, on_result=self._on_loaded, on_error=self._on_failed)

    def _on_loaded(self, result) -> None:
        courses, cohorts, rooms, slots = result
        self.set_courses(courses)
        self.set_cohorts(cohorts)
        self.set_rooms(rooms)
        self.set_time_slots(slots)

    def _on_failed(self, message: str) -> None:
        self.show_error(message)
        self.message.emit(f"Failed to load catalog: {message}", False)


# ========== SCHEDULES ==========

class ScheduleInterface(ScheduleTable):
    """Lịch học: admin xem toàn bộ, giảng viên xem lịch của mình."""

    message = pyqtSignal(str, bool)

    def __init__(self, services, user: User, parent=None):
        super().__init__(parent)
        self.setObjectName("ScheduleInterface")
        self.services = services
        self.user = user

    def reload(self) -> None:
        services, user = self.services, self.user

        def fetch():
            if user.is_admin:
                schedules = services.admin.get_schedules()
            else:
                schedules = services.schedules.get_schedules_by_faculty(user.user_id)
            return {
                "schedules": schedules,
                "courses": {c.course_id: c for c in services.catalog.get_courses()},
                "rooms": {r.room_id: r for r in services.catalog.get_rooms()},
                "slots": {s.slot_id: s for s in services.catalog.get_time_slots()},
                "cohorts": {c.cohort_id: c for c in services.catalog.get_cohorts()},
            }

        run_in_background(self, fetch,
                          on_result=lambda d: self.update_data(d.pop("schedules"), **d),
                          on_error=lambda msg: self.message.emit(f"Failed to load schedules: {msg}", False))


# ========== EVALUATIONS ==========

class EvaluationInterface(QWidget):
    """
    Lịch bài đánh giá (trái) + bình luận của bài đang chọn (phải).

    - Giảng viên: bài đánh giá của mình, được thêm mới.
    - Admin: toàn bộ bài đánh giá, được thêm mới.
    - Sinh viên: bài đánh giá của các môn trong khoa, chỉ xem.
    """

    message = pyqtSignal(str, bool)

    def __init__(self, services, user: User, parent=None):
        super().__init__(parent)
        self.setObjectName("EvaluationInterface")
        self.services = services
        self.user = user
        self.courses = []
        self.rooms = []
        self.pending = []

        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)

        splitter = QSplitter(Qt.Horizontal)
        self.calendar_view = EvaluationCalendarView(can_edit=user.can_schedule_evaluations)
        self.comment_panel = CommentPanel(services.comments, user)
        splitter.addWidget(self.calendar_view)
        splitter.addWidget(self.comment_panel)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)
        layout.addWidget(splitter)

        self.calendar_view.evaluation_selected.connect(self.comment_panel.show_evaluation)
        self.calendar_view.add_requested.connect(self.open_add_dialog)

    def _fetch_evaluations(self):
        """Bài đánh giá mà lịch của người dùng hiện tại phải tôn trọng."""
        schedules = self.services.schedules
        if self.user.is_faculty:
            return schedules.get_evaluations_by_faculty(self.user.user_id)
        return schedules.get_evaluations()

    def reload(self) -> None:
        services, user = self.services, self.user

        def fetch():
            if user.is_student:
                courses = services.catalog.get_courses_by_department(user.department_id) \
                    if user.department_id else []
                evaluations = services.schedules.get_evaluations_by_courses(c.course_id for c in courses)
                rooms = []
            elif user.is_faculty:
                courses = services.catalog.get_courses_by_department(user.department_id) \
                    if user.department_id else services.catalog.get_courses()
                evaluations = self._fetch_evaluations()
                rooms = services.catalog.get_available_rooms()
            else:
                courses = services.catalog.get_courses()
                evaluations = self._fetch_evaluations()
                rooms = services.catalog.get_available_rooms()
            return courses, rooms, evaluations

        run_in_background(self, fetch, on_result=self._on_loaded,
                          on_error=lambda msg: self.message.emit(f"Failed to load evaluations: {msg}", False))

    def _on_loaded(self, result) -> None:
        self.courses, self.rooms, evaluations = result
        # Giữ chỗ cho các bài đang lưu
        self.calendar_view.set_evaluations(list(evaluations) + self.pending)

    def open_add_dialog(self, initial_date: date) -> None:
        dialog = AddEvaluationDialog(
            self.calendar_view.calendar,
            courses=self.courses,
            rooms=self.rooms,
            initial_date=initial_date,
            faculty_id=self.user.user_id,
            parent=self,
        )
        if dialog.exec_() and dialog.evaluation is not None:
            self.save_evaluation(dialog.evaluation)

    def save_evaluation(self, evaluation) -> None:
        """
        Giữ chỗ trên lịch rồi lưu lên server.

        Bài đang lưu nằm sẵn trong lịch nên lần thêm tiếp theo được kiểm tra
        với nó. Worker kiểm tra lại với dữ liệu mới nhất từ server trước khi insert.
        """
        try:
            self.calendar_view.add_evaluation(evaluation)
        except SchedulingError as exc:
            self.message.emit(exc.message, False)
            return
        self.pending.append(evaluation)

        def save():
            EvaluationCalendar(self._fetch_evaluations()).validate(evaluation)
            return self.services.schedules.create_evaluation(evaluation)

        run_in_background(
            self,
            save,
            on_result=lambda saved: self._on_saved(evaluation, saved),
            on_error=lambda msg: self._on_save_failed(evaluation, msg),
        )

    def _release(self, reserved) -> None:
        self.pending = [e for e in self.pending if e is not reserved]
        self.calendar_view.discard_evaluation(reserved)

    def _on_saved(self, reserved, saved) -> None:
        self._release(reserved)
        try:
            self.calendar_view.add_evaluation(saved)
        except SchedulingError as exc:
            # Lịch đã được nạp lại trong lúc lưu
            logger.warning(f"Bài đánh giá đã lưu nhưng xung đột với lịch hiện tại: {exc.message}")
            self.reload()
            return
        self.message.emit(f"Evaluation '{saved.title}' added.", True)

    def _on_save_failed(self, reserved, message: str) -> None:
        self._release(reserved)
        self.message.emit(f"Failed to save evaluation: {message}", False)
        self.reload()


# ========== REPORTS ==========

class ReportsInterface(QWidget):
    """Biểu đồ tổng quan + xuất báo cáo Excel (admin)."""

    message = pyqtSignal(str, bool)

    def __init__(self, services, parent=None):
        super().__init__(parent)
        self.setObjectName("ReportsInterface")
        self.services = services
        self.data: Dict[str, List] = {}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)

        toolbar = QHBoxLayout()
        toolbar.addWidget(QLabel("From:"))
        self.start_date = QDateEdit()
        self.start_date.setCalendarPopup(True)
        self.start_date.setDisplayFormat("yyyy-MM-dd")
        self.start_date.setDate(QDate.currentDate().addMonths(-3))
        toolbar.addWidget(self.start_date)
        toolbar.addWidget(QLabel("To:"))
        self.end_date = QDateEdit()
        self.end_date.setCalendarPopup(True)
        self.end_date.setDisplayFormat("yyyy-MM-dd")
        self.end_date.setDate(QDate.currentDate().addMonths(3))
        toolbar.addWidget(self.end_date)
        self.start_date.dateChanged.connect(self.redraw)
        self.end_date.dateChanged.connect(self.redraw)
        toolbar.addStretch()

        self.export_btn = PrimaryPushButton(FIF.SAVE, "Export to Excel")
        self.export_btn.clicked.connect(self.export_data)
        self.export_btn.setEnabled(False)
        toolbar.addWidget(self.export_btn)
        layout.addLayout(toolbar)

        self.chart_widget = ChartWidget()
        layout.addWidget(self.chart_widget)

    def reload(self) -> None:
        services = self.services

        def fetch():
            return {
                "overview": services.admin.get_overview(),
                "evaluations": services.schedules.get_evaluations(),
                "schedules": services.admin.get_schedules(),
                "courses": services.catalog.get_courses(),
                "departments": services.catalog.get_departments(),
            }

        run_in_background(self, fetch, on_result=self.set_data,
                          on_error=lambda msg: self.message.emit(f"Failed to load reports: {msg}", False))

    def set_data(self, data: Dict) -> None:
        self.data = data
        self.export_btn.setEnabled(True)
        self.redraw()

    def _range(self):
        return self.start_date.date().toPyDate(), self.end_date.date().toPyDate()

    def filtered_evaluations(self) -> List:
        start, end = self._range()
        return evaluations_between(self.data.get("evaluations", []), start, end)

    def redraw(self, *_args) -> None:
        if not self.data:
            return
        by_role = self.data.get("overview", {}).get("by_role", {})
        self.chart_widget.update_report(by_role, self.filtered_evaluations())

    def export_data(self) -> None:
        if not self.data:
            self.message.emit("No data to export yet.", False)
            return
        file_path, _ = QFileDialog.getSaveFileName(self, "Save Excel report", "UniVAL_Report.xlsx",
                                                   "Excel Files (*.xlsx)")
        if not file_path:
            return
        departments = {d.department_id: d.name for d in self.data.get("departments", [])}
        success = Exporter.export_report(
            file_path,
            evaluations=self.filtered_evaluations(),
            schedules=self.data.get("schedules", []),
            courses=self.data.get("courses", []),
            departments=departments,
        )
        if success:
            self.message.emit(f"Report saved to: {file_path}", True)
        else:
            self.message.emit("Failed to write the Excel file.", False)
