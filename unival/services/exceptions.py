"""
Các exception của ứng dụng.

Tầng service raise các exception này; tầng UI bắt lại và hiển thị thông báo
(InfoBar / label trạng thái). Không retry, không xử lý lỗi một phần.
"""

from typing import Any, Optional


class UnivalError(Exception):
    """Exception gốc cho mọi lỗi của ứng dụng."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(UnivalError):
    """Thiếu hoặc sai cấu hình kết nối Supabase."""

    def __init__(self, message: str = "Supabase credentials not configured. Please check your configuration."):
        super().__init__(message)


class ApiError(UnivalError):
    """Request tới REST API thất bại (lỗi mạng hoặc status không phải 2xx)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message, details={"status_code": status_code, "body": body})

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class AuthenticationError(UnivalError):
    """Sai email/mật khẩu hoặc dữ liệu người dùng không hợp lệ."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class DepartmentNotFoundError(UnivalError):
    """Không tìm thấy khoa theo tên khi đăng ký."""

    def __init__(self, department: str):
        super().__init__(f"Department not found: {department}", details={"department": department})
