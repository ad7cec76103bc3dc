"""
Hồ sơ mở rộng theo vai trò: bảng faculty và bảng students.
Khóa chính của hai bảng trùng với `users.id`.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class FacultyProfile:
    """
    Hồ sơ giảng viên.

    Attributes:
        faculty_id (str): ID giảng viên (= users.id).
        specialization (str): Chuyên ngành.
        office_location (str): Văn phòng.
        office_hours (str): Giờ tiếp sinh viên.
        qualification (str): Học vị.
        experience_years (int): Số năm kinh nghiệm.
        research_interests (str): Hướng nghiên cứu.
    """

    faculty_id: str
    specialization: str = ""
    office_location: str = ""
    office_hours: str = ""
    qualification: str = ""
    experience_years: int = 0
    research_interests: str = ""

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "FacultyProfile":
        return cls(
            faculty_id=str(record.get("faculty_id") or record.get("id") or ""),
            specialization=record.get("specialization") or "",
            office_location=record.get("office_location") or "",
            office_hours=record.get("office_hours") or "",
            qualification=record.get("qualification") or "",
            experience_years=int(record.get("experience_years") or 0),
            research_interests=record.get("research_interests") or "",
        )

    def to_record(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("faculty_id")
        return data


@dataclass
class StudentProfile:
    """
    Hồ sơ sinh viên.

    Attributes:
        student_id (str): ID sinh viên (= users.id).
        enrollment_number (str): Mã số sinh viên.
        major, minor (str): Ngành chính / phụ.
        gpa (float): Điểm trung bình.
        expected_graduation_date (Optional[str]): Ngày tốt nghiệp dự kiến "YYYY-MM-DD".
        advisor_id (Optional[str]): ID giảng viên cố vấn.
    """

    student_id: str
    enrollment_number: str = ""
    major: str = ""
    minor: str = ""
    gpa: float = 0.0
    expected_graduation_date: Optional[str] = None
    advisor_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "StudentProfile":
        return cls(
            student_id=str(record.get("student_id") or record.get("id") or ""),
            enrollment_number=record.get("enrollment_number") or "",
            major=record.get("major") or "",
            minor=record.get("minor") or "",
            gpa=float(record.get("gpa") or 0.0),
            expected_graduation_date=record.get("expected_graduation_date"),
            advisor_id=record.get("advisor_id"),
        )

    def to_record(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("student_id")
        return data
