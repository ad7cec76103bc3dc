"""
Cửa sổ chính của UniVAL sau khi đăng nhập.
Menu điều hướng được dựng theo vai trò của người dùng.
"""

import logging

from PyQt5.QtCore import QObject, pyqtSignal
from PyQt5.QtWidgets import QApplication
from qfluentwidgets import (
    FluentIcon as FIF,
    FluentWindow,
    InfoBar,
    InfoBarPosition,
    NavigationItemPosition,
)

from unival.core.workers import stop_workers
from unival.models.user import User
from unival.ui.interfaces import (
    CatalogInterface, EvaluationInterface, OverviewInterface, ReportsInterface, ScheduleInterface
)
from unival.ui.widgets.course_manager import CourseManagerWidget
from unival.ui.widgets.user_table import UserManagementWidget

logger = logging.getLogger(__name__)


class MainWindow(FluentWindow):
    """
    Dashboard theo vai trò.

    - Admin: Overview, Users, Courses, Schedules, Reports.
    - Giảng viên: Overview, Catalog, My Schedule, Evaluations.
    - Sinh viên: Overview, Courses, Evaluations (chỉ xem).

    Signals:
        logged_out(): Người dùng bấm Logout.
    """

    logged_out = pyqtSignal()

    def __init__(self, services, user: User, auto_load: bool = True):
        super().__init__()
        self.services = services
        self.user = user
        self.pages = []

        self.setWindowTitle(f"UniVAL - {user.name} ({user.role.capitalize()})")
        desktop = QApplication.desktop().availableGeometry()
        self.resize(int(desktop.width() * 0.8), int(desktop.height() * 0.85))
        self.setMinimumSize(1024, 640)
        self._center_window()

        self._init_navigation()
        if auto_load:
            self.reload_all()

    def _center_window(self):
        desktop = QApplication.desktop().availableGeometry()
        w, h = desktop.width(), desktop.height()
        self.move(max(0, w // 2 - self.width() // 2), max(0, h // 2 - self.height() // 2))

    def _add_page(self, page, icon, text: str, position=NavigationItemPosition.TOP):
        self.addSubInterface(page, icon, text, position)
        page.message.connect(self.notify)
        self.pages.append(page)
        return page

    def _init_navigation(self):
        """Thiết lập menu điều hướng theo vai trò."""
        services, user = self.services, self.user

        self.overview_interface = self._add_page(OverviewInterface(services, user), FIF.HOME, "Overview")

        if user.is_admin:
            self.user_interface = self._add_page(UserManagementWidget(services.admin), FIF.PEOPLE, "Users")
            self.course_interface = self._add_page(CourseManagerWidget(services.catalog), FIF.BOOK_SHELF, "Courses")
            self.schedule_interface = self._add_page(ScheduleInterface(services, user), FIF.CALENDAR, "Schedules")
            self.evaluation_interface = self._add_page(EvaluationInterface(services, user), FIF.EDIT, "Evaluations")
            self.reports_interface = self._add_page(ReportsInterface(services), FIF.PIE_SINGLE, "Reports")
        elif user.is_faculty:
            self.catalog_interface = self._add_page(CatalogInterface(services, user), FIF.LIBRARY, "Catalog")
            self.schedule_interface = self._add_page(ScheduleInterface(services, user), FIF.CALENDAR, "My Schedule")
            self.evaluation_interface = self._add_page(EvaluationInterface(services, user), FIF.EDIT, "Evaluations")
        else:
            self.catalog_interface = self._add_page(CatalogInterface(services, user), FIF.LIBRARY, "Courses")
            self.evaluation_interface = self._add_page(EvaluationInterface(services, user), FIF.EDIT, "Evaluations")

        self.navigationInterface.addItem(
            routeKey="logout",
            icon=FIF.RETURN,
            text="Logout",
            onClick=self.logout,
            selectable=False,
            position=NavigationItemPosition.BOTTOM,
        )

    def reload_all(self) -> None:
        for page in self.pages:
            page.reload()

    def notify(self, text: str, ok: bool = True) -> None:
        """Hiển thị thông báo góc trên bên phải."""
        if ok:
            InfoBar.success(title="Success", content=text, position=InfoBarPosition.TOP_RIGHT,
                            parent=self, duration=3000)
        else:
            logger.warning(text)
            InfoBar.error(title="Error", content=text, position=InfoBarPosition.TOP_RIGHT,
                          parent=self, duration=5000)

    def logout(self) -> None:
        logger.info(f"Đăng xuất: {self.user.email}")
        self.logged_out.emit()
        self.close()

    def closeEvent(self, event):
        # Các trang con có thể còn request đang chạy
        for owner in [self] + self.findChildren(QObject):
            stop_workers(owner)
        super().closeEvent(event)
