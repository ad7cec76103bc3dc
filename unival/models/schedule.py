"""
Data class cho bản ghi lịch học: gán một môn học vào phòng và khung giờ.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ScheduleEntry:
    """
    Một bản ghi của bảng schedules.

    Attributes:
        schedule_id (str): ID bản ghi.
        course_id (str): ID môn học.
        faculty_id (str): ID giảng viên phụ trách.
        cohort_id (str): ID nhóm sinh viên.
        room_id (str): ID phòng.
        slot_id (str): ID khung giờ.
        semester (str): Học kỳ.
        academic_year (str): Năm học (ví dụ: "2025-2026").
        is_active (bool): Bản ghi còn hiệu lực không.
    """

    schedule_id: str
    course_id: str
    faculty_id: str
    cohort_id: str
    room_id: str
    slot_id: str
    semester: str = ""
    academic_year: str = ""
    is_active: bool = True

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ScheduleEntry":
        return cls(
            schedule_id=str(record.get("schedule_id") or record.get("id") or ""),
            course_id=str(record.get("course_id") or ""),
            faculty_id=str(record.get("faculty_id") or ""),
            cohort_id=str(record.get("cohort_id") or ""),
            room_id=str(record.get("room_id") or ""),
            slot_id=str(record.get("slot_id") or ""),
            semester=record.get("semester") or "",
            academic_year=record.get("academic_year") or "",
            is_active=bool(record.get("is_active", True)),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "course_id": self.course_id,
            "faculty_id": self.faculty_id,
            "cohort_id": self.cohort_id,
            "room_id": self.room_id,
            "slot_id": self.slot_id,
            "semester": self.semester,
            "academic_year": self.academic_year,
            "is_active": self.is_active,
        }
