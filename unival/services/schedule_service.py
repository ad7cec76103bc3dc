"""
Service cho lịch học (schedules) và bài đánh giá (evaluations).
"""

import logging
from typing import Iterable, List, Optional

from unival.models.evaluation import Evaluation
from unival.models.schedule import ScheduleEntry
from unival.services.supabase_client import SupabaseClient, eq, in_

logger = logging.getLogger(__name__)

EVALUATION_ORDER = "date.asc,start_time.asc"


class ScheduleService:
    """Đọc/ghi bảng schedules và evaluations."""

    def __init__(self, client: SupabaseClient):
        self.client = client

    # ========== SCHEDULES ==========

    def get_schedules(self) -> List[ScheduleEntry]:
        return [ScheduleEntry.from_record(r) for r in self.client.select("schedules")]

    def get_schedule(self, schedule_id: str) -> Optional[ScheduleEntry]:
        record = self.client.select_one("schedules", {"schedule_id": eq(schedule_id)})
        return ScheduleEntry.from_record(record) if record else None

    def get_schedules_by_faculty(self, faculty_id: str) -> List[ScheduleEntry]:
        rows = self.client.select("schedules", {"faculty_id": eq(faculty_id)})
        return [ScheduleEntry.from_record(r) for r in rows]

    def get_schedules_by_cohort(self, cohort_id: str) -> List[ScheduleEntry]:
        rows = self.client.select("schedules", {"cohort_id": eq(cohort_id)})
        return [ScheduleEntry.from_record(r) for r in rows]

    def create_schedule(self, course_id: str, faculty_id: str, cohort_id: str, room_id: str,
                        slot_id: str, semester: str, academic_year: str) -> ScheduleEntry:
        """Tạo bản ghi lịch học mới (luôn is_active=True)."""
        entry = ScheduleEntry(
            schedule_id="",
            course_id=course_id,
            faculty_id=faculty_id,
            cohort_id=cohort_id,
            room_id=room_id,
            slot_id=slot_id,
            semester=semester,
            academic_year=academic_year,
            is_active=True,
        )
        rows = self.client.insert("schedules", entry.to_record())
        logger.info(f"Đã tạo lịch học cho môn {course_id} ({semester} {academic_year})")
        return ScheduleEntry.from_record(rows[0]) if rows else entry

    # ========== EVALUATIONS ==========

    def create_evaluation(self, evaluation: Evaluation) -> Evaluation:
        """
        Lưu bài đánh giá lên server. Bài đánh giá mới luôn ở trạng thái chưa công bố.

        Returns:
            Evaluation: Bản ghi đã tạo (có evaluation_id).
        """
        evaluation.is_published = False
        rows = self.client.insert("evaluations", evaluation.to_record())
        logger.info(f"Đã tạo bài đánh giá: {evaluation}")
        return Evaluation.from_record(rows[0]) if rows else evaluation

    def get_evaluations_by_faculty(self, faculty_id: str) -> List[Evaluation]:
        rows = self.client.select("evaluations", {"faculty_id": eq(faculty_id)}, order=EVALUATION_ORDER)
        return [Evaluation.from_record(r) for r in rows]

    def get_evaluations_by_course(self, course_id: str) -> List[Evaluation]:
        rows = self.client.select("evaluations", {"course_id": eq(course_id)}, order=EVALUATION_ORDER)
        return [Evaluation.from_record(r) for r in rows]

    def get_evaluations_by_courses(self, course_ids: Iterable[str]) -> List[Evaluation]:
        """Bài đánh giá của nhiều môn (sinh viên xem theo các môn của khoa)."""
        ids = [str(c) for c in course_ids if c]
        if not ids:
            return []
        rows = self.client.select("evaluations", {"course_id": in_(ids)}, order=EVALUATION_ORDER)
        return [Evaluation.from_record(r) for r in rows]

    def get_evaluations(self) -> List[Evaluation]:
        return [Evaluation.from_record(r) for r in self.client.select("evaluations", order=EVALUATION_ORDER)]
