"""
Chạy các lời gọi REST API trên luồng riêng (QThread) để không làm đơ giao diện.
Kết quả / lỗi được gửi về luồng GUI qua signal.
"""

import logging
from typing import Any, Callable, List, Optional

from PyQt5.QtCore import QObject, QThread, pyqtSignal

from unival.services.exceptions import UnivalError

logger = logging.getLogger(__name__)


class ApiWorker(QThread):
    """
    Worker chạy một callable trên luồng riêng.

    Signals:
        result_ready(object): Phát khi callable trả về thành công.
        error_occurred(str): Phát khi callable raise exception (thông báo lỗi).
    """

    result_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(str)

    def __init__(self, fn: Callable[[], Any], parent: Optional[QObject] = None):
        super().__init__(parent)
        self.fn = fn
        self.error: Optional[BaseException] = None

    def run(self):
        try:
            result = self.fn()
        except UnivalError as exc:
            self.error = exc
            logger.error(f"Lỗi khi gọi API: {exc}")
            self.error_occurred.emit(str(exc))
        except Exception as exc:
            self.error = exc
            logger.exception("Lỗi không mong đợi trong worker")
            self.error_occurred.emit(f"Unexpected error: {exc}")
        else:
            self.result_ready.emit(result)


def run_in_background(owner: QObject, fn: Callable[[], Any],
                      on_result: Optional[Callable[[Any], None]] = None,
                      on_error: Optional[Callable[[str], None]] = None) -> ApiWorker:
    """
    Tạo và khởi động một ApiWorker.

    Worker được giữ trong `owner._workers` cho tới khi kết thúc, tránh bị
    garbage collect khi thread vẫn đang chạy.

    Args:
        owner (QObject): Widget sở hữu worker.
        fn: Callable không tham số chạy trên luồng riêng.
        on_result: Slot nhận kết quả.
        on_error: Slot nhận thông báo lỗi.

    Returns:
        ApiWorker: Worker đã start.
    """
    workers = getattr(owner, "_workers", None)
    if workers is None:
        workers = []
        setattr(owner, "_workers", workers)

    worker = ApiWorker(fn)
    if on_result is not None:
        worker.result_ready.connect(on_result)
    if on_error is not None:
        worker.error_occurred.connect(on_error)

    def _cleanup():
        if worker in workers:
            workers.remove(worker)
        worker.deleteLater()

    worker.finished.connect(_cleanup)
    workers.append(worker)
    worker.start()
    return worker


# Worker còn chạy sau khi owner đã đóng; giữ tham chiếu tới khi thread kết thúc
_detached: List[ApiWorker] = []


def stop_workers(owner: QObject, timeout_ms: int = 3000) -> None:
    """
    Ngắt các worker của `owner` khỏi slot của nó và chờ chúng kết thúc.

    Worker chưa xong sau `timeout_ms` được chuyển sang `_detached` để QThread
    không bị hủy khi đang chạy.
    """
    for worker in list(getattr(owner, "_workers", [])):
        for signal in (worker.result_ready, worker.error_occurred):
            try:
                signal.disconnect()
            except TypeError:
                # Signal chưa nối slot nào
                pass
        if worker.wait(timeout_ms):
            continue
        logger.warning(f"Worker vẫn đang chạy sau {timeout_ms} ms, tách khỏi {type(owner).__name__}")
        _detached.append(worker)
        worker.finished.connect(lambda w=worker: _detached.remove(w) if w in _detached else None)
