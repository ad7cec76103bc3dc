"""
Widget biểu đồ báo cáo cho admin: người dùng theo vai trò, bài đánh giá theo loại
và theo thứ trong tuần.
"""

import warnings
from collections import Counter
from typing import Any, Dict, Iterable, List

import matplotlib
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
from PyQt5.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget

from unival.models.evaluation import Evaluation

matplotlib.rcParams['font.sans-serif'] = ['DejaVu Sans', 'Arial', 'Liberation Sans']
matplotlib.rcParams['axes.unicode_minus'] = False
matplotlib.rcParams['font.size'] = 10

# Tắt warning về missing glyph (emoji trong nhãn)
warnings.filterwarnings('ignore', category=UserWarning, module='matplotlib')

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri"]


class ChartWidget(QWidget):
    """
    Biểu đồ tổng quan.

    Attributes:
        fig, canvas: Figure matplotlib và canvas Qt.
        summary (Dict[str, Any]): Số liệu của lần vẽ gần nhất (dùng cho label và test).
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("ChartWidget")
        self.summary: Dict[str, Any] = {}
        self._init_ui()

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(10, 10, 10, 10)
        main_layout.setSpacing(10)

        # ========== HEADER ==========
        header_layout = QHBoxLayout()
        title_label = QLabel("📊 Reports")
        title_font = title_label.font()
        title_font.setPointSize(11)
        title_font.setBold(True)
        title_label.setFont(title_font)
        header_layout.addWidget(title_label)
        header_layout.addStretch()

        self.stats_label = QLabel("Waiting for data...")
        self.stats_label.setStyleSheet("color: #666; font-size: 10pt;")
        header_layout.addWidget(self.stats_label)
        main_layout.addLayout(header_layout)

        # ========== CANVAS ==========
        self.fig = Figure(figsize=(10, 5), dpi=100)
        self.canvas = FigureCanvas(self.fig)
        self.canvas.setMinimumHeight(320)
        main_layout.addWidget(self.canvas)

    def update_report(self, users_by_role: Dict[str, int], evaluations: Iterable[Evaluation]) -> None:
        """Vẽ lại 3 biểu đồ từ số liệu mới."""
        evaluations: List[Evaluation] = list(evaluations)
        by_type = Counter(e.type or "Other" for e in evaluations)
        by_weekday = Counter()
        for e in evaluations:
            try:
                weekday = e.day.weekday()
            except ValueError:
                continue
            if weekday < len(WEEKDAYS):
                by_weekday[WEEKDAYS[weekday]] += 1

        self.summary = {
            "users_by_role": dict(users_by_role),
            "evaluations_by_type": dict(by_type),
            "evaluations_by_weekday": {d: by_weekday.get(d, 0) for d in WEEKDAYS},
            "total_evaluations": len(evaluations),
        }
        self.stats_label.setText(
            f"{sum(users_by_role.values())} users | {len(evaluations)} evaluations"
        )
        self._redraw()

    def _redraw(self) -> None:
        self.fig.clear()
        ax1 = self.fig.add_subplot(1, 3, 1)
        ax2 = self.fig.add_subplot(1, 3, 2)
        ax3 = self.fig.add_subplot(1, 3, 3)

        # ========== SUBPLOT 1: Users by role ==========
        roles = self.summary.get("users_by_role", {})
        ax1.bar(list(roles.keys()), list(roles.values()), color=['#D32F2F', '#1976D2', '#388E3C'][:len(roles)])
        ax1.set_title('Users by role', fontsize=11, fontweight='bold')
        ax1.grid(True, axis='y', alpha=0.3)

        # ========== SUBPLOT 2: Evaluations by type ==========
        types = self.summary.get("evaluations_by_type", {})
        if types:
            ax2.pie(list(types.values()), labels=list(types.keys()), autopct='%1.0f%%', startangle=90)
        else:
            ax2.text(0.5, 0.5, 'No data', ha='center', va='center',
                     transform=ax2.transAxes, fontsize=10, color='#999')
        ax2.set_title('Evaluations by type', fontsize=11, fontweight='bold')

        # ========== SUBPLOT 3: Evaluations by weekday ==========
        weekdays = self.summary.get("evaluations_by_weekday", {})
        ax3.bar(list(weekdays.keys()), list(weekdays.values()), color='#FF6600', alpha=0.8)
        ax3.set_title('Evaluations by weekday', fontsize=11, fontweight='bold')
        ax3.grid(True, axis='y', alpha=0.3)

        self.fig.tight_layout()
        self.canvas.draw_idle()

    def clear(self) -> None:
        self.summary = {}
        self.fig.clear()
        self.canvas.draw_idle()
        self.stats_label.setText("Waiting for data...")
