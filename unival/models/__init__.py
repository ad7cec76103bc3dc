"""
Package models - Tầng dữ liệu của UniVAL.

Các data class là bản sao phẳng của các bảng trên Supabase:
- User: Người dùng (admin / faculty / student)
- Department, Course, Cohort: Khoa, môn học, nhóm sinh viên
- Room, TimeSlot: Phòng và khung giờ
- ScheduleEntry: Bản ghi lịch học
- Evaluation: Bài đánh giá trên lịch
- Comment, Reaction: Bình luận dạng cây và emoji
- FacultyProfile, StudentProfile: Hồ sơ theo vai trò

Các class này độc lập với tầng service và giao diện.
"""

from .user import User, ROLE_ADMIN, ROLE_FACULTY, ROLE_STUDENT, ROLES
from .course import Department, Course, Cohort
from .room import Room, TimeSlot
from .schedule import ScheduleEntry
from .evaluation import Evaluation, EVALUATION_TYPES
from .comment import Comment, Reaction
from .profile import FacultyProfile, StudentProfile

__all__ = [
    'User', 'ROLE_ADMIN', 'ROLE_FACULTY', 'ROLE_STUDENT', 'ROLES',
    'Department', 'Course', 'Cohort',
    'Room', 'TimeSlot',
    'ScheduleEntry',
    'Evaluation', 'EVALUATION_TYPES',
    'Comment', 'Reaction',
    'FacultyProfile', 'StudentProfile',
]
