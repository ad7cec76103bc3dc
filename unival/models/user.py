"""
Data class đại diện cho người dùng của hệ thống (admin, giảng viên, sinh viên).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

ROLE_ADMIN = "admin"
ROLE_FACULTY = "faculty"
ROLE_STUDENT = "student"
ROLES = (ROLE_ADMIN, ROLE_FACULTY, ROLE_STUDENT)


def normalize_role(role: Optional[str]) -> str:
    """Chuẩn hóa role về chữ thường ("Faculty" -> "faculty")."""
    return (role or "").strip().lower()


@dataclass
class User:
    """
    Class đại diện cho một người dùng.

    Attributes:
        user_id (str): ID người dùng (cột `id` của bảng users).
        email (str): Email đăng nhập.
        name (str): Tên hiển thị.
        role (str): Vai trò: "admin", "faculty" hoặc "student".
        department_id (Optional[str]): ID khoa.
        department (Optional[str]): Tên khoa (được giải quyết khi đăng nhập).
        year (int): Năm học (chỉ có ý nghĩa với sinh viên, 0 cho các vai trò khác).
    """

    user_id: str
    email: str
    name: str
    role: str
    department_id: Optional[str] = None
    department: Optional[str] = None
    year: int = 0

    def __post_init__(self):
        self.role = normalize_role(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_faculty(self) -> bool:
        return self.role == ROLE_FACULTY

    @property
    def is_student(self) -> bool:
        return self.role == ROLE_STUDENT

    @property
    def can_schedule_evaluations(self) -> bool:
        """Chỉ giảng viên và admin được thêm bài đánh giá vào lịch."""
        return self.role in (ROLE_FACULTY, ROLE_ADMIN)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "User":
        """Tạo User từ một dòng của bảng users."""
        return cls(
            user_id=str(record.get("id") or record.get("user_id") or ""),
            email=record.get("email") or "",
            name=record.get("name") or "",
            role=record.get("role") or "",
            department_id=record.get("department_id"),
            department=record.get("department"),
            year=int(record.get("year") or 0),
        )

    def __str__(self) -> str:
        dept = f" - {self.department}" if self.department else ""
        return f"{self.name} <{self.email}> ({self.role}){dept}"
