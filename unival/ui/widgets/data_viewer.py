"""
Data Viewer Widget - Hiển thị danh mục (môn học, nhóm sinh viên, phòng, khung giờ) dưới dạng bảng.
"""

from typing import Iterable, List, Sequence

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QBrush, QColor
from PyQt5.QtWidgets import (
    QHBoxLayout, QHeaderView, QLabel, QTableWidget, QTableWidgetItem,
    QTabWidget, QVBoxLayout, QWidget
)

from unival.models.course import Cohort, Course
from unival.models.room import Room, TimeSlot

TABLE_STYLE = """
    QTableWidget {
        gridline-color: #E0E0E0;
        background-color: #FFFFFF;
    }
    QHeaderView::section {
        background-color: #1976D2;
        color: white;
        padding: 5px;
        border: 1px solid #1565C0;
        font-weight: bold;
        font-size: 10pt;
    }
    QTableWidget::item {
        padding: 5px;
        border-bottom: 1px solid #EEEEEE;
    }
    QTableWidget::item:selected {
        background-color: #BBDEFB;
        color: #000;
    }
"""


def setup_table(table: QTableWidget) -> None:
    """Style chung cho các bảng dữ liệu."""
    table.setStyleSheet(TABLE_STYLE)
    table.setAlternatingRowColors(True)
    table.setEditTriggers(QTableWidget.NoEditTriggers)
    table.setSelectionBehavior(QTableWidget.SelectRows)
    table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
    table.verticalHeader().setDefaultSectionSize(35)


def fill_table(table: QTableWidget, columns: Sequence[str], rows: Iterable[Sequence],
               empty_text: str = "No data", sortable: bool = True) -> int:
    """
    Điền dữ liệu vào bảng.

    Args:
        table: Bảng cần điền.
        columns: Tiêu đề cột.
        rows: Các dòng (mỗi dòng có len(columns) giá trị).
        empty_text: Thông báo khi không có dữ liệu.
        sortable: Cho phép sắp xếp theo cột. Tắt khi thứ tự dòng phải khớp với danh sách nguồn.

    Returns:
        int: Số dòng dữ liệu đã điền.
    """
    rows = [list(r) for r in rows]
    table.setSortingEnabled(False)
    table.clearContents()
    table.setColumnCount(len(columns))
    table.setHorizontalHeaderLabels(list(columns))

    if not rows:
        table.setRowCount(1)
        item = QTableWidgetItem(empty_text)
        item.setForeground(QColor("#999"))
        table.setItem(0, 0, item)
        return 0

    table.setRowCount(len(rows))
    for row, values in enumerate(rows):
        for col, value in enumerate(values):
            item = QTableWidgetItem("" if value is None else str(value))
            if isinstance(value, (int, float)):
                item.setTextAlignment(Qt.AlignCenter)
            if row % 2 == 0:
                item.setBackground(QBrush(QColor("#F5F5F5")))
            table.setItem(row, col, item)
    table.setSortingEnabled(sortable)
    return len(rows)


class DataViewerWidget(QWidget):
    """
    Widget hiển thị danh mục theo tab: Courses / Cohorts / Rooms / Time Slots.
    """

    def __init__(self, title: str = "📚 Catalog", parent=None):
        super().__init__(parent)
        self.setObjectName("DataViewerWidget")
        self._init_ui(title)

    def _init_ui(self, title: str):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(10, 10, 10, 10)
        main_layout.setSpacing(10)

        # ========== HEADER ==========
        header_layout = QHBoxLayout()
        title_label = QLabel(title)
        title_font = title_label.font()
        title_font.setPointSize(11)
        title_font.setBold(True)
        title_label.setFont(title_font)
        header_layout.addWidget(title_label)
        header_layout.addStretch()

        self.stats_label = QLabel("Loading...")
        self.stats_label.setStyleSheet("color: #666; font-size: 9pt;")
        header_layout.addWidget(self.stats_label)
        main_layout.addLayout(header_layout)

        # ========== TAB WIDGET ==========
        self.tab_widget = QTabWidget()

        self.courses_table = QTableWidget()
        setup_table(self.courses_table)
        self.tab_widget.addTab(self.courses_table, "📚 Courses")

        self.cohorts_table = QTableWidget()
        setup_table(self.cohorts_table)
        self.tab_widget.addTab(self.cohorts_table, "👥 Cohorts")

        self.rooms_table = QTableWidget()
        setup_table(self.rooms_table)
        self.tab_widget.addTab(self.rooms_table, "🏫 Rooms")

        self.slots_table = QTableWidget()
        setup_table(self.slots_table)
        self.tab_widget.addTab(self.slots_table, "🕘 Time Slots")

        main_layout.addWidget(self.tab_widget)

        self.counts = {"courses": 0, "cohorts": 0, "rooms": 0, "slots": 0}

    def set_courses(self, courses: List[Course]) -> None:
        self.counts["courses"] = fill_table(
            self.courses_table, ["Code", "Name"],
            [(c.code, c.name) for c in courses], "No courses found")
        self._update_stats()

    def set_cohorts(self, cohorts: List[Cohort]) -> None:
        self.counts["cohorts"] = fill_table(
            self.cohorts_table, ["Cohort", "Year"],
            [(c.name, c.year) for c in cohorts], "No cohorts found")
        self._update_stats()

    def set_rooms(self, rooms: List[Room]) -> None:
        self.counts["rooms"] = fill_table(
            self.rooms_table, ["Room", "Building", "Capacity", "Available"],
            [(r.name, r.building or "", r.capacity, "✅" if r.is_available else "❌") for r in rooms],
            "No rooms found")
        self._update_stats()

    def set_time_slots(self, slots: List[TimeSlot]) -> None:
        self.counts["slots"] = fill_table(
            self.slots_table, ["Day", "Start", "End"],
            [(s.day_of_week, s.start_time, s.end_time) for s in slots], "No time slots found")
        self._update_stats()

    def _update_stats(self) -> None:
        self.stats_label.setText(
            f"{self.counts['courses']} courses | {self.counts['cohorts']} cohorts | "
            f"{self.counts['rooms']} rooms | {self.counts['slots']} time slots"
        )

    def show_error(self, message: str) -> None:
        self.stats_label.setText(f"⚠️ {message}")
        self.stats_label.setStyleSheet("color: #D32F2F; font-size: 9pt;")
