"""
Dialog thêm bài đánh giá vào lịch.
Kiểm tra ràng buộc (cuối tuần, giờ hợp lệ, tối đa 2 bài/ngày, chồng lấn) trước khi đóng.
"""

import logging
from datetime import date
from typing import Iterable, Optional

from PyQt5.QtCore import QDate
from PyQt5.QtWidgets import (
    QComboBox, QDateEdit, QDialog, QFormLayout, QHBoxLayout,
    QLabel, QLineEdit, QTextEdit, QVBoxLayout
)
from qfluentwidgets import BodyLabel, PrimaryPushButton, PushButton, StrongBodyLabel

from unival.core.evaluation_rules import EvaluationCalendar, SchedulingError, time_options
from unival.models.course import Course
from unival.models.evaluation import Evaluation, EVALUATION_TYPES
from unival.models.room import Room

logger = logging.getLogger(__name__)

DEFAULT_START = "09:00"
DEFAULT_END = "10:00"


class AddEvaluationDialog(QDialog):
    """
    Dialog nhập thông tin bài đánh giá.

    Sau khi accept(), bài đánh giá hợp lệ nằm ở `self.evaluation`
    (chưa được thêm vào calendar và chưa lưu lên server).
    """

    def __init__(self, calendar: EvaluationCalendar,
                 courses: Iterable[Course] = (),
                 rooms: Iterable[Room] = (),
                 initial_date: Optional[date] = None,
                 faculty_id: Optional[str] = None,
                 parent=None):
        super().__init__(parent)
        self.calendar = calendar
        self.courses = list(courses)
        self.rooms = list(rooms)
        self.faculty_id = faculty_id
        self.evaluation: Optional[Evaluation] = None
        self._times = time_options()

        self.setWindowTitle("Add Evaluation")
        self.setMinimumWidth(460)
        self.setModal(True)

        self._init_ui(initial_date or date.today())

    def _init_ui(self, initial_date: date):
        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        layout.setContentsMargins(20, 20, 20, 20)

        title_label = StrongBodyLabel("📝 New Evaluation")
        title_label.setStyleSheet("font-size: 14pt; font-weight: bold; padding: 6px;")
        layout.addWidget(title_label)

        hint = BodyLabel("Maximum two evaluations per day, Monday to Friday.")
        hint.setStyleSheet("color: #666;")
        layout.addWidget(hint)

        form = QFormLayout()
        form.setSpacing(10)

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("e.g. Quiz 1")
        form.addRow("Title:", self.title_edit)

        self.type_combo = QComboBox()
        self.type_combo.addItems(EVALUATION_TYPES)
        form.addRow("Type:", self.type_combo)

        self.date_edit = QDateEdit()
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDisplayFormat("yyyy-MM-dd")
        self.date_edit.setDate(QDate(initial_date.year, initial_date.month, initial_date.day))
        form.addRow("Date:", self.date_edit)

        self.start_combo = QComboBox()
        self.start_combo.addItems(self._times)
        self.start_combo.setCurrentText(DEFAULT_START)
        self.end_combo = QComboBox()
        self.end_combo.addItems(self._times)
        self.end_combo.setCurrentText(DEFAULT_END)
        self.start_combo.currentTextChanged.connect(self._on_start_changed)

        time_row = QHBoxLayout()
        time_row.addWidget(self.start_combo)
        time_row.addWidget(QLabel("to"))
        time_row.addWidget(self.end_combo)
        form.addRow("Time:", time_row)

        self.course_combo = QComboBox()
        self.course_combo.addItem("(none)", None)
        for course in self.courses:
            self.course_combo.addItem(str(course), course.course_id)
        form.addRow("Course:", self.course_combo)

        self.room_combo = QComboBox()
        self.room_combo.addItem("(none)", None)
        for room in self.rooms:
            self.room_combo.addItem(str(room), room.room_id)
        form.addRow("Room:", self.room_combo)

        self.description_edit = QTextEdit()
        self.description_edit.setFixedHeight(70)
        form.addRow("Description:", self.description_edit)

        layout.addLayout(form)

        self.error_label = QLabel("")
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("color: #D32F2F; font-weight: bold;")
        layout.addWidget(self.error_label)

        # ========== BUTTONS ==========
        button_layout = QHBoxLayout()
        button_layout.addStretch()

        cancel_btn = PushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        button_layout.addWidget(cancel_btn)

        self.save_btn = PrimaryPushButton("Save")
        self.save_btn.clicked.connect(self.try_accept)
        button_layout.addWidget(self.save_btn)

        layout.addLayout(button_layout)

    def _on_start_changed(self, start: str) -> None:
        """Giờ bắt đầu vượt qua giờ kết thúc thì đẩy giờ kết thúc lên mốc kế tiếp."""
        end = self.end_combo.currentText()
        if start >= end:
            idx = self._times.index(start) if start in self._times else -1
            next_idx = min(idx + 1, len(self._times) - 1)
            self.end_combo.setCurrentText(self._times[next_idx])

    def build_evaluation(self) -> Evaluation:
        qdate = self.date_edit.date()
        type_text = self.type_combo.currentText()
        return Evaluation(
            title=self.title_edit.text().strip() or type_text,
            date=f"{qdate.year():04d}-{qdate.month():02d}-{qdate.day():02d}",
            start_time=self.start_combo.currentText(),
            end_time=self.end_combo.currentText(),
            description=self.description_edit.toPlainText().strip(),
            subject=self.course_combo.currentText() if self.course_combo.currentData() else "",
            type=type_text,
            course_id=self.course_combo.currentData(),
            room_id=self.room_combo.currentData(),
            faculty_id=self.faculty_id,
            created_by=self.faculty_id,
        )

    def try_accept(self) -> bool:
        """Kiểm tra ràng buộc, đóng dialog nếu hợp lệ. Trả về True nếu đã accept."""
        candidate = self.build_evaluation()
        try:
            self.calendar.validate(candidate)
        except SchedulingError as exc:
            logger.info(f"Bài đánh giá không hợp lệ: {exc.message}")
            self.error_label.setText(exc.message)
            return False
        self.evaluation = candidate
        self.error_label.clear()
        self.accept()
        return True
