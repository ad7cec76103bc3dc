"""
Service đọc/ghi danh mục: khoa, môn học, phòng, khung giờ và nhóm sinh viên.
"""

import logging
from typing import List, Optional

from unival.models.course import Cohort, Course, Department
from unival.models.room import Room, TimeSlot
from unival.services.supabase_client import SupabaseClient, eq

logger = logging.getLogger(__name__)


class CatalogService:
    """Truy cập các bảng danh mục (departments, courses, rooms, time_slots, cohorts)."""

    def __init__(self, client: SupabaseClient):
        self.client = client

    # ========== DEPARTMENTS ==========

    def get_departments(self) -> List[Department]:
        return [Department.from_record(r) for r in self.client.select("departments", order="name")]

    def get_department(self, department_id: str) -> Optional[Department]:
        record = self.client.select_one("departments", {"department_id": eq(department_id)})
        return Department.from_record(record) if record else None

    def get_department_by_name(self, name: str) -> Optional[Department]:
        record = self.client.select_one("departments", {"name": eq(name)})
        return Department.from_record(record) if record else None

    # ========== COURSES ==========

    def get_courses(self) -> List[Course]:
        return [Course.from_record(r) for r in self.client.select("courses", order="code")]

    def get_course(self, course_id: str) -> Optional[Course]:
        record = self.client.select_one("courses", {"course_id": eq(course_id)})
        return Course.from_record(record) if record else None

    def get_courses_by_department(self, department_id: str) -> List[Course]:
        rows = self.client.select("courses", {"department_id": eq(department_id)}, order="code")
        return [Course.from_record(r) for r in rows]

    def create_course(self, code: str, name: str, department_id: Optional[str] = None) -> Course:
        """
        Tạo môn học mới.

        Raises:
            ValueError: Thiếu mã hoặc tên môn.
        """
        code, name = (code or "").strip(), (name or "").strip()
        if not code or not name:
            raise ValueError("Course code and name are required")
        course = Course(course_id="", code=code, name=name, department_id=department_id)
        rows = self.client.insert("courses", course.to_record())
        logger.info(f"Đã tạo môn học: {course}")
        return Course.from_record(rows[0]) if rows else course

    def update_course(self, course: Course) -> Course:
        if not course.course_id:
            raise ValueError("Course has no id")
        rows = self.client.update("courses", {"course_id": eq(course.course_id)}, course.to_record())
        logger.info(f"Đã cập nhật môn học: {course}")
        return Course.from_record(rows[0]) if rows else course

    def delete_course(self, course_id: str) -> None:
        self.client.delete("courses", {"course_id": eq(course_id)})
        logger.info(f"Đã xóa môn học: {course_id}")

    # ========== ROOMS & TIME SLOTS ==========

    def get_rooms(self) -> List[Room]:
        return [Room.from_record(r) for r in self.client.select("rooms")]

    def get_room(self, room_id: str) -> Optional[Room]:
        record = self.client.select_one("rooms", {"room_id": eq(room_id)})
        return Room.from_record(record) if record else None

    def get_available_rooms(self) -> List[Room]:
        return [Room.from_record(r) for r in self.client.select("rooms", {"is_available": eq(True)})]

    def get_time_slots(self) -> List[TimeSlot]:
        return [TimeSlot.from_record(r) for r in self.client.select("time_slots")]

    def get_time_slots_by_day(self, day_of_week: str) -> List[TimeSlot]:
        rows = self.client.select("time_slots", {"day_of_week": eq(day_of_week)}, order="start_time")
        return [TimeSlot.from_record(r) for r in rows]

    # ========== COHORTS ==========

    def get_cohorts(self) -> List[Cohort]:
        return [Cohort.from_record(r) for r in self.client.select("cohorts")]

    def get_cohort(self, cohort_id: str) -> Optional[Cohort]:
        record = self.client.select_one("cohorts", {"cohort_id": eq(cohort_id)})
        return Cohort.from_record(record) if record else None

    def get_cohorts_by_department(self, department_id: str) -> List[Cohort]:
        rows = self.client.select("cohorts", {"department_id": eq(department_id)})
        return [Cohort.from_record(r) for r in rows]
