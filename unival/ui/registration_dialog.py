"""
Dialog đăng ký tài khoản giảng viên / sinh viên.
Danh sách khoa được tải từ server; thông tin hồ sơ theo vai trò là tùy chọn.
"""

import logging
from typing import Optional

from PyQt5.QtCore import QDate
from PyQt5.QtWidgets import (
    QComboBox, QDateEdit, QDialog, QDoubleSpinBox, QFormLayout, QGroupBox,
    QHBoxLayout, QLabel, QLineEdit, QSpinBox, QStackedWidget, QVBoxLayout, QWidget
)
from qfluentwidgets import PrimaryPushButton, PushButton, StrongBodyLabel

from unival.core.workers import run_in_background
from unival.models.profile import FacultyProfile, StudentProfile
from unival.models.user import ROLE_FACULTY, ROLE_STUDENT

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

GROUP_STYLE = """
    QGroupBox {
        font-weight: bold;
        border: 2px solid #ddd;
        border-radius: 5px;
        margin-top: 10px;
        padding-top: 10px;
    }
    QGroupBox::title {
        subcontrol-origin: margin;
        left: 10px;
        padding: 0 5px;
    }
"""


class RegistrationDialog(QDialog):
    """
    Form đăng ký.

    Sau khi đăng ký thành công, dialog accept() và `registered_email` chứa email
    vừa đăng ký.
    """

    def __init__(self, services, parent=None, load_departments: bool = True):
        super().__init__(parent)
        self.services = services
        self.registered_email: Optional[str] = None

        self.setWindowTitle("UniVAL - Register")
        self.setMinimumWidth(520)
        self.setModal(True)

        self._init_ui()
        if load_departments:
            self.load_departments()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        layout.setContentsMargins(20, 20, 20, 20)

        title = StrongBodyLabel("📝 Create an account")
        title.setStyleSheet("font-size: 14pt; font-weight: bold; padding: 6px;")
        layout.addWidget(title)

        # ========== ACCOUNT ==========
        account_group = QGroupBox("Account")
        account_group.setStyleSheet(GROUP_STYLE)
        form = QFormLayout(account_group)
        form.setSpacing(10)

        self.role_combo = QComboBox()
        self.role_combo.addItem("Faculty", ROLE_FACULTY)
        self.role_combo.addItem("Student", ROLE_STUDENT)
        self.role_combo.currentIndexChanged.connect(self._on_role_changed)
        form.addRow("Role:", self.role_combo)

        self.name_edit = QLineEdit()
        form.addRow("Full name:", self.name_edit)

        self.email_edit = QLineEdit()
        form.addRow("Email:", self.email_edit)

        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Password:", self.password_edit)

        self.confirm_edit = QLineEdit()
        self.confirm_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Confirm password:", self.confirm_edit)

        self.department_combo = QComboBox()
        form.addRow("Department:", self.department_combo)

        self.year_spin = QSpinBox()
        self.year_spin.setRange(1, 6)
        self.year_label = QLabel("Year:")
        form.addRow(self.year_label, self.year_spin)

        layout.addWidget(account_group)

        # ========== PROFILE ==========
        profile_group = QGroupBox("Profile (optional)")
        profile_group.setStyleSheet(GROUP_STYLE)
        profile_layout = QVBoxLayout(profile_group)
        self.profile_stack = QStackedWidget()
        self.profile_stack.addWidget(self._build_faculty_form())
        self.profile_stack.addWidget(self._build_student_form())
        profile_layout.addWidget(self.profile_stack)
        layout.addWidget(profile_group)

        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        self.status_label.setStyleSheet("color: #D32F2F;")
        layout.addWidget(self.status_label)

        # ========== BUTTONS ==========
        buttons = QHBoxLayout()
        buttons.addStretch()
        cancel_btn = PushButton("Cancel")
        cancel_btn.clicked.connect(self.reject)
        buttons.addWidget(cancel_btn)
        self.submit_btn = PrimaryPushButton("Register")
        self.submit_btn.clicked.connect(self.submit)
        buttons.addWidget(self.submit_btn)
        layout.addLayout(buttons)

        self._on_role_changed()

    def _build_faculty_form(self) -> QWidget:
        page = QWidget()
        form = QFormLayout(page)
        self.specialization_edit = QLineEdit()
        form.addRow("Specialization:", self.specialization_edit)
        self.office_location_edit = QLineEdit()
        form.addRow("Office location:", self.office_location_edit)
        self.office_hours_edit = QLineEdit()
        form.addRow("Office hours:", self.office_hours_edit)
        self.qualification_edit = QLineEdit()
        form.addRow("Qualification:", self.qualification_edit)
        self.experience_spin = QSpinBox()
        self.experience_spin.setRange(0, 60)
        form.addRow("Experience (years):", self.experience_spin)
        self.research_edit = QLineEdit()
        form.addRow("Research interests:", self.research_edit)
        return page

    def _build_student_form(self) -> QWidget:
        page = QWidget()
        form = QFormLayout(page)
        self.enrollment_edit = QLineEdit()
        form.addRow("Enrollment number:", self.enrollment_edit)
        self.major_edit = QLineEdit()
        form.addRow("Major:", self.major_edit)
        self.minor_edit = QLineEdit()
        form.addRow("Minor:", self.minor_edit)
        self.gpa_spin = QDoubleSpinBox()
        self.gpa_spin.setRange(0.0, 10.0)
        self.gpa_spin.setDecimals(2)
        form.addRow("GPA:", self.gpa_spin)
        self.graduation_edit = QDateEdit()
        self.graduation_edit.setCalendarPopup(True)
        self.graduation_edit.setDisplayFormat("yyyy-MM-dd")
        self.graduation_edit.setDate(QDate.currentDate().addYears(4))
        form.addRow("Expected graduation:", self.graduation_edit)
        self.advisor_edit = QLineEdit()
        form.addRow("Advisor ID:", self.advisor_edit)
        return page

    # ========== DATA ==========

    def load_departments(self) -> None:
        self.department_combo.clear()
        self.department_combo.addItem("Loading...")
        self.department_combo.setEnabled(False)
        run_in_background(self, self.services.catalog.get_departments,
                          on_result=self.set_departments,
                          on_error=self._on_departments_failed)

    def set_departments(self, departments) -> None:
        self.department_combo.clear()
        for dept in departments:
            self.department_combo.addItem(dept.name, dept.department_id)
        self.department_combo.setEnabled(True)

    def _on_departments_failed(self, message: str) -> None:
        self.department_combo.clear()
        self.status_label.setText(f"Failed to load departments: {message}")

    @property
    def role(self) -> str:
        return self.role_combo.currentData()

    def _on_role_changed(self, *_args) -> None:
        is_student = self.role == ROLE_STUDENT
        self.year_spin.setVisible(is_student)
        self.year_label.setVisible(is_student)
        self.profile_stack.setCurrentIndex(1 if is_student else 0)

    # ========== VALIDATION ==========

    def validate(self) -> Optional[str]:
        """Trả về thông báo lỗi đầu tiên, hoặc None nếu form hợp lệ."""
        name = self.name_edit.text().strip()
        email = self.email_edit.text().strip()
        password = self.password_edit.text()
        if not name or not email or not password or not self.department_combo.currentText():
            return "Please fill in all fields"
        if "@" not in email or "." not in email.split("@")[-1]:
            return "Please enter a valid email address"
        if len(password) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        if password != self.confirm_edit.text():
            return "Passwords do not match"
        return None

    def faculty_profile(self) -> FacultyProfile:
        return FacultyProfile(
            faculty_id="",
            specialization=self.specialization_edit.text().strip(),
            office_location=self.office_location_edit.text().strip(),
            office_hours=self.office_hours_edit.text().strip(),
            qualification=self.qualification_edit.text().strip(),
            experience_years=self.experience_spin.value(),
            research_interests=self.research_edit.text().strip(),
        )

    def student_profile(self) -> StudentProfile:
        return StudentProfile(
            student_id="",
            enrollment_number=self.enrollment_edit.text().strip(),
            major=self.major_edit.text().strip(),
            minor=self.minor_edit.text().strip(),
            gpa=self.gpa_spin.value(),
            expected_graduation_date=self.graduation_edit.date().toString("yyyy-MM-dd"),
            advisor_id=self.advisor_edit.text().strip() or None,
        )

    def submit(self) -> None:
        error = self.validate()
        if error:
            self.status_label.setText(error)
            return

        name = self.name_edit.text().strip()
        email = self.email_edit.text().strip()
        password = self.password_edit.text()
        department = self.department_combo.currentText()
        auth = self.services.auth

        if self.role == ROLE_STUDENT:
            year, profile = self.year_spin.value(), self.student_profile()
            task = lambda: auth.register_student(name, email, password, department, year, profile)
        else:
            profile = self.faculty_profile()
            task = lambda: auth.register_faculty(name, email, password, department, profile)

        self.submit_btn.setEnabled(False)
        self.status_label.clear()
        run_in_background(self, task, on_result=self._on_registered, on_error=self._on_failed)

    def _on_registered(self, user) -> None:
        self.registered_email = user.email
        logger.info(f"Đăng ký thành công: {user.email}")
        self.accept()

    def _on_failed(self, message: str) -> None:
        self.submit_btn.setEnabled(True)
        self.status_label.setText(f"Registration failed: {message}")
