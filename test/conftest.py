"""Fixture dùng chung: QApplication offscreen và FakeClient thay cho Supabase."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5.QtWidgets import QApplication

from unival.config import AppConfig
from unival.services.exceptions import ApiError


class FakeClient:
    """
    Client giả: ghi lại mọi lời gọi và trả về dữ liệu dựng sẵn theo bảng.

    `rows[table]` là danh sách bản ghi trả về cho select();
    `inserted[table]` là bản ghi trả về cho insert() (mặc định: payload kèm id).
    Bảng có trong `failing` làm select()/insert() raise ApiError.
    """

    def __init__(self, config=None):
        self.config = config or AppConfig(supabase_url="https://demo.supabase.co", supabase_key="key")
        self.rows = {}
        self.inserted = {}
        self.calls = []
        self.failing = set()

    def _check(self, table):
        if table in self.failing:
            raise ApiError(f"Request to {table} failed", status_code=500)

    def select(self, table, filters=None, order=None):
        self.calls.append(("select", table, dict(filters or {}), order))
        self._check(table)
        return list(self.rows.get(table, []))

    def select_one(self, table, filters):
        self.calls.append(("select_one", table, dict(filters or {}), None))
        rows = self.rows.get(table, [])
        return rows[0] if rows else None

    def insert(self, table, payload):
        self.calls.append(("insert", table, dict(payload), None))
        self._check(table)
        if table in self.inserted:
            return [self.inserted[table]]
        return [dict(payload, id=f"{table}-1")]

    def update(self, table, filters, payload):
        self.calls.append(("update", table, dict(filters), dict(payload)))
        return [dict(payload)]

    def delete(self, table, filters):
        self.calls.append(("delete", table, dict(filters), None))
        return []

    def calls_to(self, method, table):
        return [c for c in self.calls if c[0] == method and c[1] == table]


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def fake_client():
    return FakeClient()


class DeferredJobs:
    """
    Thay run_in_background: gom job lại để test tự chạy theo thứ tự mong muốn,
    mô phỏng request trả về muộn.
    """

    def __init__(self):
        self.jobs = []

    def __call__(self, owner, fn, on_result=None, on_error=None):
        self.jobs.append((fn, on_result, on_error))

    def run(self, index=0):
        fn, on_result, on_error = self.jobs.pop(index)
        try:
            result = fn()
        except Exception as exc:
            if on_error is not None:
                on_error(str(exc))
            return
        if on_result is not None:
            on_result(result)

    def run_all(self):
        while self.jobs:
            self.run()


@pytest.fixture
def deferred(monkeypatch):
    jobs = DeferredJobs()
    monkeypatch.setattr("unival.ui.interfaces.run_in_background", jobs)
    monkeypatch.setattr("unival.ui.widgets.comment_panel.run_in_background", jobs)
    return jobs
