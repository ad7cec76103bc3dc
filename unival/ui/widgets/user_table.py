"""
Widget quản lý người dùng (admin): tìm kiếm, lọc theo vai trò, đổi vai trò, xóa.
"""

import logging
from typing import Iterable, List, Optional

from PyQt5.QtCore import pyqtSignal
from PyQt5.QtWidgets import (
    QComboBox, QHBoxLayout, QLabel, QLineEdit, QMessageBox,
    QPushButton, QTableWidget, QVBoxLayout, QWidget
)

from unival.core.workers import run_in_background
from unival.models.user import User, ROLES
from unival.ui.widgets.data_viewer import fill_table, setup_table

logger = logging.getLogger(__name__)

ALL_ROLES = "All roles"
COLUMNS = ["Name", "Email", "Role", "Department ID", "Year"]


def filter_users(users: Iterable[User], text: str = "", role: Optional[str] = None) -> List[User]:
    """Lọc người dùng theo chuỗi tìm kiếm (tên hoặc email) và vai trò."""
    needle = (text or "").strip().lower()
    result = []
    for user in users:
        if role and user.role != role:
            continue
        if needle and needle not in user.name.lower() and needle not in user.email.lower():
            continue
        result.append(user)
    return result


class UserManagementWidget(QWidget):
    """
    Bảng người dùng cho admin.

    Signals:
        message(str, bool): Thông báo cho cửa sổ chính (nội dung, thành công?).
    """

    message = pyqtSignal(str, bool)

    def __init__(self, admin_service, parent=None):
        super().__init__(parent)
        self.setObjectName("UserManagementWidget")
        self.admin_service = admin_service
        self.users: List[User] = []
        self.visible_users: List[User] = []
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(10)

        # ========== TOOLBAR ==========
        toolbar = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search users...")
        self.search_edit.textChanged.connect(self.apply_filter)
        toolbar.addWidget(self.search_edit, 1)

        self.role_filter = QComboBox()
        self.role_filter.addItem(ALL_ROLES, None)
        for role in ROLES:
            self.role_filter.addItem(role.capitalize(), role)
        self.role_filter.currentIndexChanged.connect(self.apply_filter)
        toolbar.addWidget(self.role_filter)

        refresh_btn = QPushButton("🔄 Refresh")
        refresh_btn.clicked.connect(self.reload)
        toolbar.addWidget(refresh_btn)
        layout.addLayout(toolbar)

        # ========== TABLE ==========
        self.table = QTableWidget()
        setup_table(self.table)
        layout.addWidget(self.table)

        # ========== ACTIONS ==========
        actions = QHBoxLayout()
        actions.addWidget(QLabel("New role:"))
        self.new_role_combo = QComboBox()
        for role in ROLES:
            self.new_role_combo.addItem(role.capitalize(), role)
        actions.addWidget(self.new_role_combo)

        self.change_role_btn = QPushButton("Change Role")
        self.change_role_btn.clicked.connect(self.change_role)
        actions.addWidget(self.change_role_btn)

        self.delete_btn = QPushButton("🗑️ Delete User")
        self.delete_btn.clicked.connect(self.delete_selected)
        actions.addWidget(self.delete_btn)
        actions.addStretch()

        self.count_label = QLabel("")
        self.count_label.setStyleSheet("color: #666;")
        actions.addWidget(self.count_label)
        layout.addLayout(actions)

    # ========== DATA ==========

    def reload(self) -> None:
        run_in_background(self, self.admin_service.get_all_users,
                          on_result=self.set_users,
                          on_error=lambda msg: self.message.emit(f"Failed to load users: {msg}", False))

    def set_users(self, users: List[User]) -> None:
        self.users = list(users)
        self.apply_filter()

    def apply_filter(self, *_args) -> None:
        self.visible_users = filter_users(self.users, self.search_edit.text(), self.role_filter.currentData())
        fill_table(self.table, COLUMNS,
                   [(u.name, u.email, u.role, u.department_id or "", u.year or "") for u in self.visible_users],
                   "No users found", sortable=False)
        self.count_label.setText(f"{len(self.visible_users)} / {len(self.users)} users")

    def selected_user(self) -> Optional[User]:
        row = self.table.currentRow()
        if 0 <= row < len(self.visible_users):
            return self.visible_users[row]
        return None

    # ========== ACTIONS ==========

    def change_role(self) -> None:
        user = self.selected_user()
        if user is None:
            self.message.emit("Please select a user first.", False)
            return
        new_role = self.new_role_combo.currentData()
        run_in_background(
            self,
            lambda: self.admin_service.update_user_role(user.user_id, new_role),
            on_result=lambda _r: self._after_write(f"Role of {user.name} changed to {new_role}."),
            on_error=lambda msg: self.message.emit(f"Failed to update role: {msg}", False),
        )

    def delete_selected(self) -> None:
        user = self.selected_user()
        if user is None:
            self.message.emit("Please select a user first.", False)
            return
        answer = QMessageBox.question(self, "Delete User", f"Delete {user.name} ({user.email})?")
        if answer != QMessageBox.Yes:
            return
        run_in_background(
            self,
            lambda: self.admin_service.delete_user(user.user_id),
            on_result=lambda _r: self._after_write(f"User {user.name} deleted."),
            on_error=lambda msg: self.message.emit(f"Failed to delete user: {msg}", False),
        )

    def _after_write(self, text: str) -> None:
        logger.info(text)
        self.message.emit(text, True)
        self.reload()
