"""Test ApiWorker / run_in_background với thread thật: signal, thông báo lỗi và dọn worker."""

import threading
import time

import pytest
from PyQt5.QtCore import QObject

from unival.core import workers
from unival.core.workers import run_in_background, stop_workers
from unival.services.exceptions import ApiError


def pump(qapp, done, timeout=5.0):
    """Chạy event loop tới khi `done()` đúng hoặc hết thời gian."""
    deadline = time.monotonic() + timeout
    while not done() and time.monotonic() < deadline:
        qapp.processEvents()
        time.sleep(0.01)
    qapp.processEvents()
    assert done()


@pytest.fixture
def owner(qapp):
    return QObject()


def test_result_ready_and_cleanup(qapp, owner):
    results, errors = [], []
    run_in_background(owner, lambda: 42, on_result=results.append, on_error=errors.append)
    assert len(owner._workers) == 1

    pump(qapp, lambda: not owner._workers)
    assert results == [42]
    assert errors == []


def test_unival_error_message(qapp, owner):
    def fail():
        raise ApiError("Request failed", status_code=503)

    errors = []
    run_in_background(owner, fail, on_result=lambda _r: errors.append("unexpected result"),
                      on_error=errors.append)
    pump(qapp, lambda: not owner._workers)
    assert errors == ["Request failed (HTTP 503)"]


def test_unexpected_error_message(qapp, owner):
    def fail():
        raise ValueError("boom")

    errors = []
    run_in_background(owner, fail, on_error=errors.append)
    pump(qapp, lambda: not owner._workers)
    assert errors == ["Unexpected error: boom"]


def test_several_workers_share_owner_list(qapp, owner):
    results = []
    for n in range(3):
        run_in_background(owner, lambda n=n: n * 10, on_result=results.append)
    pump(qapp, lambda: not owner._workers)
    assert sorted(results) == [0, 10, 20]


def test_stop_workers_disconnects_and_waits(qapp, owner):
    gate = threading.Event()
    results = []
    worker = run_in_background(owner, lambda: gate.wait(5) and "late", on_result=results.append)

    threading.Timer(0.05, gate.set).start()
    stop_workers(owner, timeout_ms=5000)

    assert worker.isFinished()
    pump(qapp, lambda: not owner._workers)
    assert results == []


def test_stop_workers_detaches_running_worker(qapp, owner):
    gate = threading.Event()
    results = []
    worker = run_in_background(owner, lambda: gate.wait(5), on_result=results.append)

    stop_workers(owner, timeout_ms=10)
    assert worker in workers._detached

    gate.set()
    pump(qapp, lambda: worker not in workers._detached)
    assert results == []


def test_stop_workers_without_workers(owner):
    stop_workers(owner)
