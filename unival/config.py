"""
Cấu hình ứng dụng: thông tin kết nối Supabase, timeout HTTP và logging.

Đây là nơi DUY NHẤT đọc biến môi trường. File `.env` (nếu có) được nạp
bằng python-dotenv nhưng không ghi đè biến môi trường đã đặt sẵn.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 15.0
DEFAULT_LOG_DIR = "logs"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@dataclass(frozen=True)
class AppConfig:
    """
    Cấu hình đã được giải quyết của ứng dụng.

    Attributes:
        supabase_url (Optional[str]): URL project Supabase (https://<ref>.supabase.co).
        supabase_key (Optional[str]): API key dùng cho cả header `apikey` và Bearer token.
        http_timeout (float): Timeout (giây) cho mỗi request HTTP.
        log_dir (str): Thư mục chứa file log.
        log_level (str): Mức log (INFO, DEBUG, ...).
        offline_admin_password (Optional[str]): Mật khẩu đăng nhập admin offline.
            Nếu không đặt, chế độ admin offline bị tắt.
    """

    supabase_url: Optional[str]
    supabase_key: Optional[str]
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    log_dir: str = DEFAULT_LOG_DIR
    log_level: str = "INFO"
    offline_admin_password: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def rest_url(self) -> Optional[str]:
        """Gốc REST API của PostgREST (`<url>/rest/v1`)."""
        if not self.supabase_url:
            return None
        return self.supabase_url.rstrip("/") + "/rest/v1"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None:
        return DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"UNIVAL_HTTP_TIMEOUT không hợp lệ: {raw!r}, dùng mặc định {DEFAULT_HTTP_TIMEOUT}")
        return DEFAULT_HTTP_TIMEOUT
    return value if value > 0 else DEFAULT_HTTP_TIMEOUT


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """
    Đọc cấu hình từ biến môi trường (và file .env nếu có).

    Args:
        env_file (Optional[str]): Đường dẫn file .env cụ thể. None = tự tìm `.env`.

    Returns:
        AppConfig: Cấu hình đã giải quyết.
    """
    load_dotenv(dotenv_path=env_file, override=False)

    config = AppConfig(
        supabase_url=_getenv("SUPABASE_URL"),
        supabase_key=_getenv("SUPABASE_KEY"),
        http_timeout=_parse_timeout(_getenv("UNIVAL_HTTP_TIMEOUT")),
        log_dir=_getenv("UNIVAL_LOG_DIR", DEFAULT_LOG_DIR),
        log_level=(_getenv("UNIVAL_LOG_LEVEL", "INFO") or "INFO").upper(),
        offline_admin_password=_getenv("UNIVAL_OFFLINE_ADMIN_PASSWORD"),
    )

    if not config.has_credentials:
        logger.error(
            "Supabase credentials not found. Set SUPABASE_URL and SUPABASE_KEY "
            "in the environment or in a .env file."
        )
    return config


def configure_logging(config: AppConfig) -> Path:
    """
    Cấu hình logging ra file `<log_dir>/app.log` và console.

    Returns:
        Path: Đường dẫn file log.
    """
    logs_dir = Path(config.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "app.log"

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )
    return log_file
