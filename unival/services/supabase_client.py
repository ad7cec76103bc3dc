"""
Client HTTP duy nhất cho REST API (PostgREST) của Supabase.

Mọi service dùng chung một SupabaseClient thay vì tự dựng request:
    - Header: apikey + Authorization: Bearer <key>
    - Ghi dữ liệu (POST/PATCH/DELETE) gửi `Prefer: return=representation`
    - Body JSON do requests serialize, response đọc bằng response.json()

Bộ lọc theo cú pháp PostgREST, ví dụ {"email": "eq.a@b.c"}.
Dùng các helper eq(), in_(), is_null() để tạo giá trị bộ lọc.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import requests

from unival.config import AppConfig
from unival.services.exceptions import ApiError, ConfigurationError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Filters = Dict[str, str]


def eq(value: Any) -> str:
    """Bộ lọc bằng: `eq.<value>`."""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"eq.{value}"


def in_(values: Iterable[Any]) -> str:
    """Bộ lọc thuộc tập: `in.(a,b,c)`."""
    return "in.(" + ",".join(str(v) for v in values) + ")"


def is_null() -> str:
    """Bộ lọc NULL: `is.null`."""
    return "is.null"


class SupabaseClient:
    """
    Client REST tối giản cho các bảng của Supabase.

    Attributes:
        config (AppConfig): Cấu hình chứa URL, key và timeout.
        session (requests.Session): Session HTTP dùng chung (có thể inject khi test).
    """

    def __init__(self, config: AppConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _base_url(self) -> str:
        if not self.config.has_credentials:
            raise ConfigurationError()
        return self.config.rest_url

    def _headers(self, write: bool = False) -> Dict[str, str]:
        key = self.config.supabase_key
        headers = {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        }
        if write:
            headers["Prefer"] = "return=representation"
        return headers

    def _request(self, method: str, table: str, params: Optional[Dict[str, str]] = None,
                 payload: Optional[Record] = None) -> Any:
        """
        Gửi một request tới `/rest/v1/<table>` và trả về JSON đã parse.

        Raises:
            ConfigurationError: Thiếu SUPABASE_URL/SUPABASE_KEY.
            ApiError: Lỗi mạng hoặc status không phải 2xx.
        """
        url = f"{self._base_url()}/{table}"
        write = method != "GET"
        logger.info(f"{method} {table} params={params or {}}")

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=self._headers(write=write),
                timeout=self.config.http_timeout,
            )
        except requests.RequestException as exc:
            logger.error(f"{method} {table} thất bại: {exc}")
            raise ApiError(f"Request to '{table}' failed: {exc}") from exc

        logger.info(f"{method} {table} -> {response.status_code}")

        if not response.ok:
            raise ApiError(
                f"Request to '{table}' was rejected",
                status_code=response.status_code,
                body=response.text,
            )

        if not response.content:
            return []
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"Invalid JSON returned by '{table}'", status_code=response.status_code,
                           body=response.text) from exc

    @staticmethod
    def _as_list(data: Any) -> List[Record]:
        if data is None:
            return []
        if isinstance(data, list):
            return data
        return [data]

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def select(self, table: str, filters: Optional[Filters] = None,
               order: Optional[str] = None) -> List[Record]:
        """
        Đọc các bản ghi của một bảng.

        Args:
            table (str): Tên bảng (ví dụ: "courses").
            filters (Optional[Filters]): Bộ lọc PostgREST.
            order (Optional[str]): Cột sắp xếp (ví dụ: "created_at" hoặc "date.asc").

        Returns:
            List[Record]: Danh sách bản ghi (rỗng nếu không có).
        """
        params = dict(filters or {})
        if order:
            params["order"] = order
        return self._as_list(self._request("GET", table, params=params))

    def select_one(self, table: str, filters: Filters) -> Optional[Record]:
        """Đọc bản ghi đầu tiên khớp bộ lọc, None nếu không có."""
        rows = self.select(table, filters)
        return rows[0] if rows else None

    def insert(self, table: str, payload: Record) -> List[Record]:
        """Thêm một bản ghi, trả về bản ghi đã tạo (return=representation)."""
        return self._as_list(self._request("POST", table, payload=payload))

    def update(self, table: str, filters: Filters, payload: Record) -> List[Record]:
        """Cập nhật (PATCH) các bản ghi khớp bộ lọc."""
        if not filters:
            raise ValueError("update() requires at least one filter")
        return self._as_list(self._request("PATCH", table, params=dict(filters), payload=payload))

    def delete(self, table: str, filters: Filters) -> List[Record]:
        """Xóa các bản ghi khớp bộ lọc."""
        if not filters:
            raise ValueError("delete() requires at least one filter")
        return self._as_list(self._request("DELETE", table, params=dict(filters)))
