"""
Widget quản lý môn học (admin): tạo, sửa, xóa.
"""

import logging
from typing import List, Optional

from PyQt5.QtCore import pyqtSignal
from PyQt5.QtWidgets import (
    QComboBox, QHBoxLayout, QLineEdit, QMessageBox, QPushButton,
    QTableWidget, QVBoxLayout, QWidget
)

from unival.core.workers import run_in_background
from unival.models.course import Course, Department
from unival.ui.widgets.data_viewer import fill_table, setup_table

logger = logging.getLogger(__name__)


class CourseManagerWidget(QWidget):
    """
    Bảng môn học + form tạo / sửa.

    Signals:
        message(str, bool): Thông báo cho cửa sổ chính (nội dung, thành công?).
    """

    message = pyqtSignal(str, bool)

    def __init__(self, catalog_service, parent=None):
        super().__init__(parent)
        self.setObjectName("CourseManagerWidget")
        self.catalog_service = catalog_service
        self.courses: List[Course] = []
        self.departments: List[Department] = []
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        # ========== FORM ==========
        form = QHBoxLayout()
        self.code_edit = QLineEdit()
        self.code_edit.setPlaceholderText("Course Code")
        form.addWidget(self.code_edit)

        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Course Name")
        form.addWidget(self.name_edit, 2)

        self.department_combo = QComboBox()
        self.department_combo.addItem("Select Department", None)
        form.addWidget(self.department_combo)

        self.create_btn = QPushButton("➕ Add Course")
        self.create_btn.clicked.connect(self.create_course)
        form.addWidget(self.create_btn)

        self.update_btn = QPushButton("✏️ Update")
        self.update_btn.clicked.connect(self.update_selected)
        form.addWidget(self.update_btn)

        self.delete_btn = QPushButton("🗑️ Delete")
        self.delete_btn.clicked.connect(self.delete_selected)
        form.addWidget(self.delete_btn)
        layout.addLayout(form)

        # ========== TABLE ==========
        self.table = QTableWidget()
        setup_table(self.table)
        self.table.itemSelectionChanged.connect(self._load_selected_into_form)
        layout.addWidget(self.table)

    # ========== DATA ==========

    def reload(self) -> None:
        service = self.catalog_service
        run_in_background(self, lambda: (service.get_courses(), service.get_departments()),
                          on_result=lambda r: self.set_data(*r),
                          on_error=lambda msg: self.message.emit(f"Failed to load courses: {msg}", False))

    def set_data(self, courses: List[Course], departments: List[Department]) -> None:
        self.courses = list(courses)
        self.departments = list(departments)

        current = self.department_combo.currentData()
        self.department_combo.blockSignals(True)
        self.department_combo.clear()
        self.department_combo.addItem("Select Department", None)
        for dept in self.departments:
            self.department_combo.addItem(dept.name, dept.department_id)
        idx = self.department_combo.findData(current)
        self.department_combo.setCurrentIndex(max(idx, 0))
        self.department_combo.blockSignals(False)

        names = {d.department_id: d.name for d in self.departments}
        fill_table(self.table, ["Code", "Name", "Department"],
                   [(c.code, c.name, names.get(c.department_id, c.department_id or "")) for c in self.courses],
                   "No courses found", sortable=False)

    def selected_course(self) -> Optional[Course]:
        row = self.table.currentRow()
        if 0 <= row < len(self.courses):
            return self.courses[row]
        return None

    def _load_selected_into_form(self) -> None:
        course = self.selected_course()
        if course is None:
            return
        self.code_edit.setText(course.code)
        self.name_edit.setText(course.name)
        idx = self.department_combo.findData(course.department_id)
        self.department_combo.setCurrentIndex(max(idx, 0))

    # ========== ACTIONS ==========

    def _form_values(self):
        return (self.code_edit.text().strip(), self.name_edit.text().strip(),
                self.department_combo.currentData())

    def create_course(self) -> None:
        code, name, department_id = self._form_values()
        if not code or not name:
            self.message.emit("Please fill in all fields", False)
            return
        run_in_background(
            self,
            lambda: self.catalog_service.create_course(code, name, department_id),
            on_result=lambda course: self._after_write(f"Course {course} created."),
            on_error=lambda msg: self.message.emit(f"Failed to create course: {msg}", False),
        )

    def update_selected(self) -> None:
        course = self.selected_course()
        if course is None:
            self.message.emit("Please select a course first.", False)
            return
        code, name, department_id = self._form_values()
        if not code or not name:
            self.message.emit("Please fill in all fields", False)
            return
        updated = Course(course_id=course.course_id, code=code, name=name,
                         department_id=department_id or course.department_id)
        run_in_background(
            self,
            lambda: self.catalog_service.update_course(updated),
            on_result=lambda c: self._after_write(f"Course {c} updated."),
            on_error=lambda msg: self.message.emit(f"Failed to update course: {msg}", False),
        )

    def delete_selected(self) -> None:
        course = self.selected_course()
        if course is None:
            self.message.emit("Please select a course first.", False)
            return
        answer = QMessageBox.question(self, "Delete Course", f"Delete {course}?")
        if answer != QMessageBox.Yes:
            return
        run_in_background(
            self,
            lambda: self.catalog_service.delete_course(course.course_id),
            on_result=lambda _r: self._after_write(f"Course {course} deleted."),
            on_error=lambda msg: self.message.emit(f"Failed to delete course: {msg}", False),
        )

    def _after_write(self, text: str) -> None:
        logger.info(text)
        self.code_edit.clear()
        self.name_edit.clear()
        self.message.emit(text, True)
        self.reload()
