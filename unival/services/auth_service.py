"""
Đăng nhập và đăng ký người dùng.

Định dạng mật khẩu lưu trong cột users.password (giữ tương thích với dữ liệu có sẵn):

    base64(sha256(password + salt)) + salt

trong đó salt là base64 của 16 byte ngẫu nhiên. Phần hash luôn dài 44 ký tự.
Mật khẩu, salt và hash KHÔNG BAO GIỜ được ghi ra log.
"""

import base64
import hashlib
import hmac
import logging
import secrets
from typing import Optional

from unival.config import AppConfig
from unival.models.profile import FacultyProfile, StudentProfile
from unival.models.user import User, ROLE_ADMIN, ROLE_FACULTY, ROLE_STUDENT, ROLES, normalize_role
from unival.services.exceptions import AuthenticationError, DepartmentNotFoundError
from unival.services.supabase_client import SupabaseClient, eq

logger = logging.getLogger(__name__)

HASH_LENGTH = 44
SALT_BYTES = 16
OFFLINE_ADMIN_USERNAME = "admin"
UNKNOWN_DEPARTMENT = "Unknown Department"


def generate_salt() -> str:
    """Salt ngẫu nhiên (base64 của 16 byte)."""
    return base64.b64encode(secrets.token_bytes(SALT_BYTES)).decode("ascii")


def hash_password(password: str, salt: str) -> str:
    """base64(sha256(password + salt)), luôn dài 44 ký tự."""
    digest = hashlib.sha256((password + salt).encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def make_password_record(password: str, salt: Optional[str] = None) -> str:
    """Giá trị lưu vào cột password: hash + salt."""
    salt = salt if salt is not None else generate_salt()
    return hash_password(password, salt) + salt


def verify_password(password: str, stored: Optional[str]) -> bool:
    """So sánh mật khẩu nhập vào với giá trị đã lưu (hash 44 ký tự + salt)."""
    if not stored or len(stored) <= HASH_LENGTH:
        return False
    stored_hash, salt = stored[:HASH_LENGTH], stored[HASH_LENGTH:]
    return hmac.compare_digest(hash_password(password, salt), stored_hash)


class AuthService:
    """
    Service xác thực và đăng ký tài khoản.

    Attributes:
        client (SupabaseClient): Client REST dùng chung.
        config (AppConfig): Cấu hình (dùng cho chế độ admin offline).
    """

    def __init__(self, client: SupabaseClient, config: Optional[AppConfig] = None):
        self.client = client
        self.config = config or client.config

    # ========== ĐĂNG NHẬP ==========

    def _offline_admin(self, username: str, password: str) -> Optional[User]:
        expected = self.config.offline_admin_password
        if not expected or username != OFFLINE_ADMIN_USERNAME:
            return None
        if not hmac.compare_digest(password, expected):
            return None
        logger.warning("Đăng nhập bằng tài khoản admin offline")
        return User(user_id="offline-admin", email=OFFLINE_ADMIN_USERNAME, name="Administrator",
                    role=ROLE_ADMIN, department="Administration")

    def authenticate(self, email: str, password: str) -> User:
        """
        Xác thực người dùng.

        Args:
            email (str): Email (hoặc "admin" khi bật chế độ admin offline).
            password (str): Mật khẩu.

        Returns:
            User: Người dùng đã xác thực (kèm tên khoa).

        Raises:
            AuthenticationError: Sai email/mật khẩu.
            ConfigurationError, ApiError: Lỗi cấu hình / kết nối.
        """
        email = (email or "").strip()
        if not email or not password:
            raise AuthenticationError("Please fill in all fields")

        offline = self._offline_admin(email, password)
        if offline is not None:
            return offline

        logger.info(f"Đang xác thực người dùng: {email}")
        record = self.client.select_one("users", {"email": eq(email)})
        if record is None:
            logger.warning(f"Không tìm thấy người dùng: {email}")
            raise AuthenticationError()

        if not verify_password(password, record.get("password")):
            logger.warning(f"Sai mật khẩu cho người dùng: {email}")
            raise AuthenticationError()

        user = User.from_record(record)
        user.department = self._department_name(user.department_id)
        logger.info(f"Xác thực thành công: {user.email} ({user.role})")
        return user

    def _department_name(self, department_id: Optional[str]) -> str:
        if not department_id:
            return UNKNOWN_DEPARTMENT
        record = self.client.select_one("departments", {"department_id": eq(department_id)})
        if record and record.get("name"):
            return record["name"]
        return UNKNOWN_DEPARTMENT

    # ========== ĐĂNG KÝ ==========

    def register_user(self, name: str, email: str, password: str, role: str,
                      department_name: str, year: int = 0) -> User:
        """
        Tạo tài khoản mới.

        Args:
            name, email, password: Thông tin tài khoản.
            role (str): "faculty" hoặc "student" (hoặc "admin").
            department_name (str): Tên khoa (tra cứu ra department_id).
            year (int): Năm học (sinh viên).

        Returns:
            User: Người dùng vừa tạo.

        Raises:
            ValueError: Thiếu thông tin hoặc role không hợp lệ.
            DepartmentNotFoundError: Không có khoa với tên đã cho.
        """
        role = normalize_role(role)
        if not name or not email or not password:
            raise ValueError("Please fill in all fields")
        if role not in ROLES:
            raise ValueError(f"Invalid role: {role}")

        department = self.client.select_one("departments", {"name": eq(department_name)})
        if department is None:
            logger.error(f"Không tìm thấy khoa: {department_name}")
            raise DepartmentNotFoundError(department_name)
        department_id = department.get("department_id") or department.get("id")

        payload = {
            "name": name,
            "email": email.strip(),
            "password": make_password_record(password),
            "role": role,
            "department_id": department_id,
            "year": int(year or 0),
        }
        rows = self.client.insert("users", payload)
        record = rows[0] if rows else {k: v for k, v in payload.items() if k != "password"}
        user = User.from_record(record)
        user.department = department.get("name") or department_name
        logger.info(f"Đã đăng ký người dùng: {user.email} ({user.role})")
        return user

    def register_faculty(self, name: str, email: str, password: str, department_name: str,
                         profile: Optional[FacultyProfile] = None) -> User:
        """Đăng ký giảng viên rồi cập nhật bảng faculty với thông tin hồ sơ."""
        user = self.register_user(name, email, password, ROLE_FACULTY, department_name, 0)
        if profile is not None and user.user_id:
            self.client.update("faculty", {"faculty_id": eq(user.user_id)}, profile.to_record())
        return user

    def register_student(self, name: str, email: str, password: str, department_name: str,
                         year: int, profile: Optional[StudentProfile] = None) -> User:
        """Đăng ký sinh viên rồi cập nhật bảng students với thông tin hồ sơ."""
        user = self.register_user(name, email, password, ROLE_STUDENT, department_name, year)
        if profile is not None and user.user_id:
            self.client.update("students", {"student_id": eq(user.user_id)}, profile.to_record())
        return user
