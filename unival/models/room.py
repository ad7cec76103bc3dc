"""
Data class đại diện cho phòng học và khung giờ (time slot).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


def short_time(value: Optional[str]) -> str:
    """
    Rút gọn giờ từ "HH:MM:SS" (định dạng cột time của Postgres) về "HH:MM".

    Args:
        value (Optional[str]): Chuỗi giờ.

    Returns:
        str: "HH:MM" hoặc chuỗi rỗng nếu không có dữ liệu.
    """
    if not value:
        return ""
    parts = str(value).strip().split(":")
    if len(parts) >= 2:
        try:
            return f"{int(parts[0]):02d}:{int(parts[1]):02d}"
        except ValueError:
            pass
    return str(value).strip()


@dataclass
class Room:
    """
    Class đại diện cho một phòng.

    Attributes:
        room_id (str): ID phòng.
        name (str): Tên phòng (ví dụ: "A101").
        capacity (int): Sức chứa.
        building (Optional[str]): Tòa nhà.
        is_available (bool): Phòng có đang sử dụng được không.
    """

    room_id: str
    name: str
    capacity: int = 0
    building: Optional[str] = None
    is_available: bool = True

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Room":
        return cls(
            room_id=str(record.get("room_id") or record.get("id") or ""),
            name=record.get("name") or record.get("room_number") or "",
            capacity=int(record.get("capacity") or 0),
            building=record.get("building"),
            is_available=bool(record.get("is_available", True)),
        )

    def can_accommodate(self, student_count: int) -> bool:
        return self.capacity >= student_count

    def __str__(self) -> str:
        building = f" ({self.building})" if self.building else ""
        return f"{self.name}{building}"


@dataclass
class TimeSlot:
    """
    Khung giờ học cố định trong tuần.

    Attributes:
        slot_id (str): ID khung giờ.
        day_of_week (str): Thứ trong tuần ("Monday", ...).
        start_time (str): Giờ bắt đầu "HH:MM".
        end_time (str): Giờ kết thúc "HH:MM".
    """

    slot_id: str
    day_of_week: str
    start_time: str
    end_time: str

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "TimeSlot":
        return cls(
            slot_id=str(record.get("slot_id") or record.get("id") or ""),
            day_of_week=record.get("day_of_week") or "",
            start_time=short_time(record.get("start_time")),
            end_time=short_time(record.get("end_time")),
        )

    def __str__(self) -> str:
        return f"{self.day_of_week} {self.start_time}-{self.end_time}"
