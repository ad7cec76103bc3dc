"""
Widget Evaluation Calendar - Hiển thị bài đánh giá dưới dạng lưới theo tuần.
Cột: Thứ Hai -> Thứ Sáu (kèm nhãn tải "(n/2)"), Hàng: bài đánh giá trong ngày theo giờ.
Có công cụ chuyển tuần trước / tuần sau và nút thêm bài đánh giá (giảng viên / admin).
"""

import logging
from datetime import date, timedelta
from typing import Iterable, List, Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QHBoxLayout, QHeaderView, QLabel, QPushButton, QTableWidget,
    QTableWidgetItem, QVBoxLayout, QWidget
)

from unival.core.evaluation_rules import EvaluationCalendar, week_start
from unival.models.evaluation import Evaluation

logger = logging.getLogger(__name__)

WORK_DAYS = 5

NAV_BUTTON_STYLE = """
    QPushButton {
        font-size: 11pt;
        font-weight: bold;
        padding: 6px 12px;
        background-color: #E3F2FD;
        border: 2px solid #1976D2;
        border-radius: 6px;
        color: #1565C0;
    }
    QPushButton:hover {
        background-color: #BBDEFB;
    }
    QPushButton:disabled {
        background-color: #F5F5F5;
        border-color: #BDBDBD;
        color: #9E9E9E;
    }
"""

# Màu ô theo số bài đánh giá trong ngày (1 bài / đủ 2 bài)
COLOR_PARTIAL = QColor(200, 230, 255)
COLOR_FULL = QColor(255, 230, 200)


class EvaluationCalendarView(QWidget):
    """
    Lưới bài đánh giá theo tuần (Thứ Hai - Thứ Sáu).

    Signals:
        evaluation_selected(object): Người dùng chọn một bài đánh giá (Evaluation).
        add_requested(object): Người dùng bấm "Add Evaluation" (ngày mặc định: date).

    Attributes:
        calendar (EvaluationCalendar): Danh sách bài đánh giá + ràng buộc.
        current_monday (date): Thứ Hai của tuần đang hiển thị.
        can_edit (bool): Hiện nút thêm bài đánh giá hay không.
    """

    evaluation_selected = pyqtSignal(object)
    add_requested = pyqtSignal(object)

    def __init__(self, can_edit: bool = False, today: Optional[date] = None, parent=None):
        super().__init__(parent)
        self.setObjectName("EvaluationCalendarView")
        self.calendar = EvaluationCalendar()
        self.can_edit = can_edit
        self.today = today or date.today()
        self.current_monday = week_start(self.today)
        # (row, col) -> Evaluation của tuần đang hiển thị
        self._cells = {}

        self._setup_ui()
        self._refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        # ========== TOOLBAR ==========
        toolbar_layout = QHBoxLayout()
        toolbar_layout.setSpacing(10)

        self.prev_btn = QPushButton("◄ Previous Week")
        self.prev_btn.setMinimumHeight(36)
        self.prev_btn.setStyleSheet(NAV_BUTTON_STYLE)
        self.prev_btn.clicked.connect(self.previous_week)
        toolbar_layout.addWidget(self.prev_btn)

        self.week_label = QLabel()
        self.week_label.setAlignment(Qt.AlignCenter)
        font = self.week_label.font()
        font.setPointSize(12)
        font.setBold(True)
        self.week_label.setFont(font)
        self.week_label.setStyleSheet("color: #1565C0; padding: 8px;")
        toolbar_layout.addWidget(self.week_label)

        self.next_btn = QPushButton("Next Week ►")
        self.next_btn.setMinimumHeight(36)
        self.next_btn.setStyleSheet(NAV_BUTTON_STYLE)
        self.next_btn.clicked.connect(self.next_week)
        toolbar_layout.addWidget(self.next_btn)

        self.today_btn = QPushButton("Today")
        self.today_btn.setMinimumHeight(36)
        self.today_btn.setStyleSheet(NAV_BUTTON_STYLE)
        self.today_btn.clicked.connect(lambda: self.go_to_week(self.today))
        toolbar_layout.addWidget(self.today_btn)

        toolbar_layout.addStretch()

        self.add_btn = QPushButton("+ Add Evaluation")
        self.add_btn.setMinimumHeight(36)
        self.add_btn.setStyleSheet(NAV_BUTTON_STYLE)
        self.add_btn.clicked.connect(lambda: self.add_requested.emit(self._default_add_date()))
        self.add_btn.setVisible(self.can_edit)
        toolbar_layout.addWidget(self.add_btn)

        layout.addLayout(toolbar_layout)

        # ========== TABLE ==========
        self.table = QTableWidget()
        self.table.setColumnCount(WORK_DAYS)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionMode(QTableWidget.SingleSelection)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.cellClicked.connect(self._on_cell_clicked)
        self.table.setStyleSheet("""
            QTableWidget {
                gridline-color: #BBDEFB;
                background-color: #FFFFFF;
                border: 2px solid #E0E0E0;
                border-radius: 5px;
            }
            QTableWidget::item {
                padding: 8px;
            }
            QTableWidget::item:selected {
                background-color: #1976D2;
                color: white;
            }
            QHeaderView::section {
                background-color: #1976D2;
                color: white;
                padding: 8px;
                border: 1px solid #1565C0;
                font-weight: bold;
            }
        """)
        layout.addWidget(self.table)

        self.empty_label = QLabel("No evaluations scheduled this week.")
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setStyleSheet("color: #999; font-style: italic;")
        layout.addWidget(self.empty_label)

    # ========== DATA ==========

    def set_evaluations(self, evaluations: Iterable[Evaluation]) -> None:
        """Nạp danh sách bài đánh giá từ server và vẽ lại tuần hiện tại."""
        self.calendar.load(evaluations)
        self._refresh()

    def add_evaluation(self, evaluation: Evaluation) -> Evaluation:
        """
        Thêm bài đánh giá (đã kiểm tra ràng buộc) và chuyển tới tuần của nó.

        Raises:
            SchedulingError: Vi phạm ràng buộc lịch.
        """
        self.calendar.add(evaluation)
        self.current_monday = week_start(evaluation.day)
        self._refresh()
        return evaluation

    def discard_evaluation(self, evaluation: Evaluation) -> None:
        if self.calendar.discard(evaluation):
            self._refresh()

    def week_evaluations(self) -> List[Evaluation]:
        return self.calendar.in_week(self.current_monday)

    # ========== NAVIGATION ==========

    def previous_week(self) -> None:
        self.current_monday -= timedelta(days=7)
        self._refresh()

    def next_week(self) -> None:
        self.current_monday += timedelta(days=7)
        self._refresh()

    def go_to_week(self, day: date) -> None:
        self.current_monday = week_start(day)
        self._refresh()

    def _default_add_date(self) -> date:
        # Ngày làm việc đầu tiên của tuần đang xem, không sớm hơn hôm nay
        candidate = max(self.current_monday, self.today)
        while candidate.weekday() >= 5:
            candidate += timedelta(days=1)
        return candidate

    # ========== RENDERING ==========

    def _refresh(self) -> None:
        friday = self.current_monday + timedelta(days=WORK_DAYS - 1)
        self.week_label.setText(
            f"Week: {self.current_monday.strftime('%d/%m')} - {friday.strftime('%d/%m/%Y')}"
        )

        days = [self.current_monday + timedelta(days=i) for i in range(WORK_DAYS)]
        per_day = [self.calendar.on_date(d) for d in days]

        self.table.clearContents()
        self._cells = {}
        self.table.setHorizontalHeaderLabels([
            f"{d.strftime('%a %d/%m')} {self.calendar.day_load(d)}" for d in days
        ])
        self.table.setRowCount(max((len(items) for items in per_day), default=0))

        for col, items in enumerate(per_day):
            for row, evaluation in enumerate(items):
                item = QTableWidgetItem(
                    f"{self.calendar.load_label(evaluation)}\n"
                    f"{evaluation.start_time} - {evaluation.end_time}"
                )
                item.setTextAlignment(Qt.AlignCenter)
                item.setFlags(item.flags() & ~Qt.ItemIsEditable)
                item.setBackground(COLOR_FULL if len(items) >= self.calendar.max_per_day else COLOR_PARTIAL)
                item.setForeground(QColor(0, 0, 0))
                if evaluation.type:
                    item.setToolTip(f"{evaluation.type}: {evaluation.description}".strip(": "))
                self.table.setItem(row, col, item)
                self._cells[(row, col)] = evaluation

        for row in range(self.table.rowCount()):
            self.table.setRowHeight(row, 64)

        self.empty_label.setVisible(not self._cells)

    def evaluation_at(self, row: int, col: int) -> Optional[Evaluation]:
        return self._cells.get((row, col))

    def _on_cell_clicked(self, row: int, col: int) -> None:
        evaluation = self.evaluation_at(row, col)
        if evaluation is not None:
            logger.debug(f"Chọn bài đánh giá: {evaluation}")
            self.evaluation_selected.emit(evaluation)
