"""
Widget hiển thị bảng lịch học (schedules) kèm tên môn, phòng, khung giờ, nhóm.
"""

from typing import Dict, List, Optional

from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import QHeaderView, QHBoxLayout, QLabel, QTableWidgetItem, QVBoxLayout, QWidget
from qfluentwidgets import TableWidget

from unival.models.schedule import ScheduleEntry

HEADERS = ["Course", "Cohort", "Room", "Time Slot", "Semester", "Academic Year", "Active"]


class ScheduleTable(QWidget):
    """
    Bảng lịch học.

    Các dict tra cứu (id -> đối tượng có __str__) được dùng để hiển thị tên thay cho ID.
    """

    COLOR_INACTIVE = QColor("#9E9E9E")

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("ScheduleTable")
        self.schedules: List[ScheduleEntry] = []

        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        header = QHBoxLayout()
        self.title_label = QLabel("🗓️ Schedules")
        font = self.title_label.font()
        font.setPointSize(11)
        font.setBold(True)
        self.title_label.setFont(font)
        header.addWidget(self.title_label)
        header.addStretch()
        self.count_label = QLabel("")
        self.count_label.setStyleSheet("color: #666;")
        header.addWidget(self.count_label)
        layout.addLayout(header)

        self.table_widget = TableWidget()
        self.table_widget.setBorderVisible(True)
        self.table_widget.setBorderRadius(8)
        self.table_widget.setWordWrap(False)
        self.table_widget.setAlternatingRowColors(True)
        self.table_widget.setColumnCount(len(HEADERS))
        self.table_widget.setHorizontalHeaderLabels(HEADERS)
        self.table_widget.verticalHeader().hide()
        self.table_widget.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        layout.addWidget(self.table_widget)

    def update_data(self, schedules: List[ScheduleEntry],
                    courses: Optional[Dict] = None, rooms: Optional[Dict] = None,
                    slots: Optional[Dict] = None, cohorts: Optional[Dict] = None) -> None:
        """Hiển thị danh sách lịch học (lịch không còn hiệu lực tô xám)."""
        self.schedules = list(schedules)

        def name(mapping, key):
            value = (mapping or {}).get(key)
            return str(value) if value is not None else (key or "")

        self.table_widget.setRowCount(len(self.schedules))
        for row, entry in enumerate(self.schedules):
            values = [
                name(courses, entry.course_id),
                name(cohorts, entry.cohort_id),
                name(rooms, entry.room_id),
                name(slots, entry.slot_id),
                entry.semester,
                entry.academic_year,
                "Yes" if entry.is_active else "No",
            ]
            for col, value in enumerate(values):
                item = QTableWidgetItem(value)
                if not entry.is_active:
                    item.setForeground(self.COLOR_INACTIVE)
                self.table_widget.setItem(row, col, item)

        active = sum(1 for s in self.schedules if s.is_active)
        self.count_label.setText(f"{len(self.schedules)} schedules ({active} active)")

    def cell_text(self, row: int, col: int) -> str:
        item = self.table_widget.item(row, col)
        return item.text() if item else ""
