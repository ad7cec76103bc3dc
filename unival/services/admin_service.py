"""
Service quản trị: danh sách người dùng, đổi vai trò, xóa tài khoản.
"""

import logging
from typing import Any, Dict, List

from unival.models.profile import FacultyProfile
from unival.models.schedule import ScheduleEntry
from unival.models.user import User, ROLE_ADMIN, ROLES, normalize_role
from unival.services.supabase_client import SupabaseClient, eq

logger = logging.getLogger(__name__)


class AdminService:
    """Các thao tác dành cho admin trên bảng users / faculty / schedules."""

    def __init__(self, client: SupabaseClient):
        self.client = client

    def is_user_admin(self, user_id: str) -> bool:
        record = self.client.select_one("users", {"id": eq(user_id)})
        return bool(record) and normalize_role(record.get("role")) == ROLE_ADMIN

    def get_all_users(self) -> List[User]:
        return [User.from_record(r) for r in self.client.select("users", order="name")]

    def update_user_role(self, user_id: str, new_role: str) -> None:
        """
        Đổi vai trò người dùng.

        Raises:
            ValueError: Vai trò không hợp lệ.
        """
        role = normalize_role(new_role)
        if role not in ROLES:
            raise ValueError(f"Invalid role: {new_role}")
        self.client.update("users", {"id": eq(user_id)}, {"role": role})
        logger.info(f"Đã đổi vai trò người dùng {user_id} thành {role}")

    def delete_user(self, user_id: str) -> None:
        self.client.delete("users", {"id": eq(user_id)})
        logger.info(f"Đã xóa người dùng {user_id}")

    def get_faculty_list(self) -> List[FacultyProfile]:
        return [FacultyProfile.from_record(r) for r in self.client.select("faculty")]

    def get_schedules(self) -> List[ScheduleEntry]:
        return [ScheduleEntry.from_record(r) for r in self.client.select("schedules")]

    def get_overview(self) -> Dict[str, Any]:
        """Số liệu tổng quan cho dashboard admin."""
        users = self.get_all_users()
        by_role = {role: 0 for role in ROLES}
        for user in users:
            if user.role in by_role:
                by_role[user.role] += 1
        return {
            "users": len(users),
            "by_role": by_role,
            "courses": len(self.client.select("courses")),
            "schedules": len(self.client.select("schedules")),
            "evaluations": len(self.client.select("evaluations")),
        }
