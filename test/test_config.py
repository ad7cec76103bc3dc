"""Test đọc cấu hình từ biến môi trường."""

import logging

import pytest

from unival.config import DEFAULT_HTTP_TIMEOUT, AppConfig, configure_logging, load_config

ENV_VARS = ["SUPABASE_URL", "SUPABASE_KEY", "UNIVAL_HTTP_TIMEOUT", "UNIVAL_LOG_DIR",
            "UNIVAL_LOG_LEVEL", "UNIVAL_OFFLINE_ADMIN_PASSWORD"]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        # setenv trước để monkeypatch khôi phục cả biến do load_dotenv ghi vào
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Không để file .env của máy dev ảnh hưởng kết quả
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_load_config_from_environment(clean_env):
    clean_env.setenv("SUPABASE_URL", "https://demo.supabase.co/")
    clean_env.setenv("SUPABASE_KEY", " anon-key ")
    clean_env.setenv("UNIVAL_HTTP_TIMEOUT", "30")
    clean_env.setenv("UNIVAL_LOG_LEVEL", "debug")

    config = load_config(env_file=None)

    assert config.has_credentials
    assert config.supabase_key == "anon-key"
    assert config.rest_url == "https://demo.supabase.co/rest/v1"
    assert config.http_timeout == 30.0
    assert config.log_level == "DEBUG"
    assert config.offline_admin_password is None


def test_missing_credentials_logged(clean_env, caplog):
    caplog.set_level(logging.ERROR)
    config = load_config()
    assert not config.has_credentials
    assert config.rest_url is None
    assert "Supabase credentials not found" in caplog.text


def test_invalid_timeout_falls_back(clean_env):
    clean_env.setenv("UNIVAL_HTTP_TIMEOUT", "soon")
    assert load_config().http_timeout == DEFAULT_HTTP_TIMEOUT
    clean_env.setenv("UNIVAL_HTTP_TIMEOUT", "-1")
    assert load_config().http_timeout == DEFAULT_HTTP_TIMEOUT


def test_env_file_does_not_override_environment(clean_env, tmp_path):
    env_file = tmp_path / "custom.env"
    env_file.write_text("SUPABASE_URL=https://file.supabase.co\nSUPABASE_KEY=file-key\n", encoding="utf-8")
    clean_env.setenv("SUPABASE_KEY", "env-key")

    config = load_config(env_file=str(env_file))

    assert config.supabase_url == "https://file.supabase.co"
    assert config.supabase_key == "env-key"


def test_configure_logging_creates_log_dir(tmp_path):
    config = AppConfig(supabase_url=None, supabase_key=None, log_dir=str(tmp_path / "logs"))
    log_file = configure_logging(config)
    assert log_file.parent.is_dir()
    assert log_file.name == "app.log"
