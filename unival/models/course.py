"""
Data class cho khoa, môn học và nhóm sinh viên (cohort).
Các bản ghi là bản sao phẳng của bảng trên Supabase, không có ràng buộc phía client.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Department:
    """
    Class đại diện cho một khoa.

    Attributes:
        department_id (str): Mã khoa.
        name (str): Tên khoa.
    """

    department_id: str
    name: str

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Department":
        return cls(
            department_id=str(record.get("department_id") or record.get("id") or ""),
            name=record.get("name") or "",
        )

    def __str__(self) -> str:
        return self.name


@dataclass
class Course:
    """
    Class đại diện cho một môn học.

    Attributes:
        course_id (str): ID môn học.
        code (str): Mã môn (ví dụ: "CS101").
        name (str): Tên môn học.
        department_id (Optional[str]): ID khoa quản lý môn học.
    """

    course_id: str
    code: str
    name: str
    department_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Course":
        return cls(
            course_id=str(record.get("course_id") or record.get("id") or ""),
            code=record.get("code") or record.get("course_code") or "",
            name=record.get("name") or record.get("course_name") or "",
            department_id=record.get("department_id"),
        )

    def to_record(self) -> Dict[str, Any]:
        """Payload ghi lên bảng courses (không gồm khóa chính)."""
        return {
            "code": self.code,
            "name": self.name,
            "department_id": self.department_id,
        }

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"


@dataclass
class Cohort:
    """
    Nhóm sinh viên có tên (ví dụ: "CS 2025 - A").

    Attributes:
        cohort_id (str): ID nhóm.
        name (str): Tên nhóm.
        department_id (Optional[str]): ID khoa.
        year (int): Năm học của nhóm.
    """

    cohort_id: str
    name: str
    department_id: Optional[str] = None
    year: int = 0

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Cohort":
        return cls(
            cohort_id=str(record.get("cohort_id") or record.get("id") or ""),
            name=record.get("name") or record.get("cohort_name") or "",
            department_id=record.get("department_id"),
            year=int(record.get("year") or 0),
        )

    def __str__(self) -> str:
        return self.name
