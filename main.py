# File: main.py
"""
Điểm khởi động UniVAL: đọc cấu hình, bật logging, mở cửa sổ đăng nhập.
Sau khi đăng nhập mở MainWindow theo vai trò; Logout quay lại màn hình đăng nhập.
"""

import logging
import sys

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import QApplication

from unival.config import configure_logging, load_config
from unival.services import Services
from unival.ui.login_window import LoginWindow
from unival.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


class UnivalApp:
    """Chuyển qua lại giữa cửa sổ đăng nhập và dashboard."""

    def __init__(self, services: Services):
        self.services = services
        self.main_window = None
        self.login_window = LoginWindow(services)
        self.login_window.logged_in.connect(self.open_dashboard)

    def start(self):
        self.login_window.show()

    def open_dashboard(self, user):
        self.main_window = MainWindow(self.services, user)
        self.main_window.logged_out.connect(self.back_to_login)
        self.login_window.hide()
        self.main_window.show()

    def back_to_login(self):
        self.main_window = None
        self.login_window.show()


def main():
    config = load_config()
    log_file = configure_logging(config)
    logger.info(f"UniVAL khởi động, log: {log_file}")

    # Hỗ trợ màn hình độ phân giải cao (High DPI)
    QApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.PassThrough)
    QApplication.setAttribute(Qt.AA_EnableHighDpiScaling)
    QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps)

    app = QApplication(sys.argv)

    unival_app = UnivalApp(Services.create(config))
    unival_app.start()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
