"""
Cửa sổ đăng nhập. Xác thực chạy trên QThread; khi thành công phát signal
`logged_in(User)` để mở dashboard theo vai trò.
"""

import logging

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import QHBoxLayout, QLabel, QVBoxLayout, QWidget
from qfluentwidgets import (
    BodyLabel, CardWidget, LineEdit, PrimaryPushButton, PushButton, StrongBodyLabel
)

from unival.core.workers import run_in_background
from unival.ui.registration_dialog import RegistrationDialog

logger = logging.getLogger(__name__)

EMPTY_FIELDS = "Please fill in all fields"


class LoginWindow(QWidget):
    """
    Form đăng nhập email / mật khẩu.

    Signals:
        logged_in(object): User đã xác thực.
    """

    logged_in = pyqtSignal(object)

    def __init__(self, services, parent=None):
        super().__init__(parent)
        self.services = services
        self.setWindowTitle("UniVAL - Login")
        self.resize(460, 420)
        self._init_ui()

    def _init_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(30, 30, 30, 30)

        card = CardWidget(self)
        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(12)

        title = StrongBodyLabel("🎓 UniVAL Faculty Scheduling")
        title.setStyleSheet("font-size: 16pt; font-weight: bold;")
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)

        subtitle = BodyLabel("Sign in to continue")
        subtitle.setAlignment(Qt.AlignCenter)
        subtitle.setStyleSheet("color: #666;")
        layout.addWidget(subtitle)

        self.email_edit = LineEdit()
        self.email_edit.setPlaceholderText("Email")
        self.email_edit.setClearButtonEnabled(True)
        layout.addWidget(self.email_edit)

        self.password_edit = LineEdit()
        self.password_edit.setPlaceholderText("Password")
        self.password_edit.setEchoMode(LineEdit.Password)
        self.password_edit.returnPressed.connect(self.attempt_login)
        layout.addWidget(self.password_edit)

        self.login_btn = PrimaryPushButton("Sign In")
        self.login_btn.clicked.connect(self.attempt_login)
        layout.addWidget(self.login_btn)

        self.status_label = QLabel("")
        self.status_label.setAlignment(Qt.AlignCenter)
        self.status_label.setWordWrap(True)
        self.status_label.setStyleSheet("color: #D32F2F;")
        layout.addWidget(self.status_label)

        register_row = QHBoxLayout()
        register_row.addStretch()
        register_row.addWidget(BodyLabel("No account yet?"))
        self.register_btn = PushButton("Register")
        self.register_btn.clicked.connect(self.open_registration)
        register_row.addWidget(self.register_btn)
        register_row.addStretch()
        layout.addLayout(register_row)

        outer.addStretch()
        outer.addWidget(card)
        outer.addStretch()

    def show_status(self, text: str, ok: bool = False) -> None:
        self.status_label.setStyleSheet("color: #388E3C;" if ok else "color: #D32F2F;")
        self.status_label.setText(text)

    def set_busy(self, busy: bool) -> None:
        self.login_btn.setEnabled(not busy)
        self.login_btn.setText("Signing in..." if busy else "Sign In")

    def attempt_login(self) -> None:
        email = self.email_edit.text().strip()
        password = self.password_edit.text()
        if not email or not password:
            self.show_status(EMPTY_FIELDS)
            return

        self.status_label.clear()
        self.set_busy(True)
        run_in_background(
            self,
            lambda: self.services.auth.authenticate(email, password),
            on_result=self._on_authenticated,
            on_error=self._on_failed,
        )

    def _on_authenticated(self, user) -> None:
        self.set_busy(False)
        self.password_edit.clear()
        logger.info(f"Đăng nhập thành công: {user.email} ({user.role})")
        self.logged_in.emit(user)

    def _on_failed(self, message: str) -> None:
        self.set_busy(False)
        self.show_status(message)

    def open_registration(self) -> None:
        dialog = RegistrationDialog(self.services, parent=self)
        if dialog.exec_():
            self.email_edit.setText(dialog.registered_email or "")
            self.show_status("Registration successful. You can sign in now.", ok=True)
