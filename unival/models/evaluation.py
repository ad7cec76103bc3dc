"""
Data class đại diện cho một bài đánh giá (quiz, giữa kỳ, cuối kỳ...) trên lịch.

Ngày lưu dạng "YYYY-MM-DD", giờ dạng "HH:MM" (giống cách lưu assigned_date /
assigned_time trong lịch thi). Các property day/start/end trả về đối tượng
datetime để kiểm tra ràng buộc.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from .room import short_time

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

EVALUATION_TYPES = ["Quiz", "Assignment", "Lab", "Mid Sem", "End Sem", "Presentation"]


@dataclass
class Evaluation:
    """
    Class đại diện cho một bài đánh giá.

    Attributes:
        title (str): Tiêu đề.
        date (str): Ngày "YYYY-MM-DD".
        start_time (str): Giờ bắt đầu "HH:MM".
        end_time (str): Giờ kết thúc "HH:MM".
        evaluation_id (Optional[str]): ID (None khi chưa lưu lên server).
        description (str): Mô tả.
        subject (str): Môn/chủ đề.
        type (str): Loại bài đánh giá (xem EVALUATION_TYPES).
        course_id, faculty_id, room_id (Optional[str]): Liên kết tới các bảng khác.
        created_by (Optional[str]): ID người tạo.
        is_published (bool): Đã công bố cho sinh viên chưa.
    """

    title: str
    date: str
    start_time: str
    end_time: str
    evaluation_id: Optional[str] = None
    description: str = ""
    subject: str = ""
    type: str = ""
    course_id: Optional[str] = None
    faculty_id: Optional[str] = None
    room_id: Optional[str] = None
    created_by: Optional[str] = None
    is_published: bool = False

    @property
    def day(self) -> date:
        """Ngày dưới dạng `datetime.date` (ValueError nếu sai định dạng)."""
        return datetime.strptime(self.date, DATE_FORMAT).date()

    @property
    def start(self) -> datetime:
        return datetime.strptime(f"{self.date} {self.start_time}", f"{DATE_FORMAT} {TIME_FORMAT}")

    @property
    def end(self) -> datetime:
        return datetime.strptime(f"{self.date} {self.end_time}", f"{DATE_FORMAT} {TIME_FORMAT}")

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Evaluation":
        raw_id = record.get("evaluation_id") or record.get("id")
        return cls(
            evaluation_id=str(raw_id) if raw_id else None,
            title=record.get("title") or "",
            description=record.get("description") or "",
            subject=record.get("subject") or "",
            type=record.get("type") or "",
            date=str(record.get("date") or "")[:10],
            start_time=short_time(record.get("start_time")),
            end_time=short_time(record.get("end_time")),
            course_id=record.get("course_id"),
            faculty_id=record.get("faculty_id"),
            room_id=record.get("room_id"),
            created_by=record.get("created_by"),
            is_published=bool(record.get("is_published", False)),
        )

    def to_record(self) -> Dict[str, Any]:
        """Payload ghi lên bảng evaluations (không gồm khóa chính)."""
        return {
            "title": self.title,
            "description": self.description,
            "subject": self.subject,
            "type": self.type,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "course_id": self.course_id,
            "faculty_id": self.faculty_id,
            "room_id": self.room_id,
            "created_by": self.created_by,
            "is_published": self.is_published,
        }

    def __str__(self) -> str:
        return f"{self.title} ({self.date} {self.start_time}-{self.end_time})"
