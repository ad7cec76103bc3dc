"""
Module kiểm tra ràng buộc khi thêm bài đánh giá vào lịch.

Ràng buộc (theo thứ tự kiểm tra):
    1. Không xếp vào thứ Bảy / Chủ nhật.
    2. Giờ kết thúc phải sau giờ bắt đầu.
    3. Tối đa MAX_EVALUATIONS_PER_DAY bài đánh giá trong một ngày.
    4. Không chồng lấn thời gian với bài đánh giá đã có.

Khoảng thời gian là nửa mở [start, end): hai khoảng chạm nhau (10:00-11:00 và
11:00-12:00) KHÔNG bị coi là chồng lấn.
"""

import logging
import re
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from unival.models.evaluation import Evaluation
from unival.services.exceptions import UnivalError

logger = logging.getLogger(__name__)

MAX_EVALUATIONS_PER_DAY = 2

_LOAD_SUFFIX = re.compile(r"\s*\(\d+/\d+\)$")


# ========== EXCEPTIONS ==========

class SchedulingError(UnivalError):
    """Bài đánh giá vi phạm ràng buộc lịch."""

    title = "Scheduling Error"


class WeekendNotAllowedError(SchedulingError):
    title = "Weekend Not Allowed"

    def __init__(self, day: Optional[date] = None):
        super().__init__("You cannot schedule evaluations on Saturdays or Sundays.",
                         details={"date": str(day) if day else None})


class InvalidIntervalError(SchedulingError):
    title = "Invalid Time"

    def __init__(self, message: str = "End time must be after start time."):
        super().__init__(message)


class DailyLimitReachedError(SchedulingError):
    title = "Maximum Evaluations Reached"

    def __init__(self, day: Optional[date] = None):
        super().__init__("You cannot add more than two evaluations on the same day.",
                         details={"date": str(day) if day else None})


class TimeConflictError(SchedulingError):
    title = "Scheduling Conflict"

    def __init__(self, conflicts: Optional[List[Evaluation]] = None):
        conflicts = conflicts or []
        super().__init__(
            "The selected time slot conflicts with an existing evaluation. Please choose a different time.",
            details={"conflicts": [str(e) for e in conflicts]},
        )
        self.conflicts = conflicts


# ========== HELPERS ==========

def time_options(start_hour: int = 8, end_hour: int = 17, step_minutes: int = 5) -> List[str]:
    """
    Danh sách giờ "HH:MM" cho combobox chọn giờ.

    Mặc định: 08:00, 08:05, ..., 17:55.
    """
    options = []
    for hour in range(start_hour, end_hour + 1):
        for minute in range(0, 60, step_minutes):
            options.append(f"{hour:02d}:{minute:02d}")
    return options


def intervals_overlap(a_start: datetime, a_end: datetime,
                      b_start: datetime, b_end: datetime) -> bool:
    """Hai khoảng [a_start, a_end) và [b_start, b_end) chồng lấn khi a_start < b_end AND a_end > b_start."""
    return a_start < b_end and a_end > b_start


def strip_load_suffix(title: str) -> str:
    """Bỏ hậu tố "(n/2)" khỏi tiêu đề."""
    return _LOAD_SUFFIX.sub("", title or "")


def week_start(day: date) -> date:
    """Thứ Hai của tuần chứa `day`."""
    return day - timedelta(days=day.weekday())


def evaluations_between(evaluations: Iterable[Evaluation], start: Optional[date] = None,
                        end: Optional[date] = None) -> List[Evaluation]:
    """Bài đánh giá có ngày nằm trong [start, end] (bỏ qua bản ghi sai định dạng ngày)."""
    result = []
    for evaluation in evaluations:
        try:
            day = evaluation.day
        except ValueError:
            continue
        if start and day < start:
            continue
        if end and day > end:
            continue
        result.append(evaluation)
    return result


# ========== CALENDAR ==========

class EvaluationCalendar:
    """
    Danh sách bài đánh giá trong bộ nhớ, đảm bảo các ràng buộc khi thêm mới.

    Mọi bài đánh giá được thêm qua add() đều thỏa mãn: không có 2 khoảng chồng
    lấn và không quá MAX_EVALUATIONS_PER_DAY bài trong một ngày.
    Dữ liệu nạp từ server qua load() không bị kiểm tra lại.
    """

    def __init__(self, evaluations: Optional[Iterable[Evaluation]] = None,
                 max_per_day: int = MAX_EVALUATIONS_PER_DAY):
        self.max_per_day = max_per_day
        self._evaluations: List[Evaluation] = []
        if evaluations:
            self.load(evaluations)

    def __len__(self) -> int:
        return len(self._evaluations)

    def __iter__(self):
        return iter(self._evaluations)

    @property
    def evaluations(self) -> List[Evaluation]:
        return list(self._evaluations)

    def load(self, evaluations: Iterable[Evaluation]) -> None:
        """Thay toàn bộ danh sách (dữ liệu từ server). Bỏ qua bản ghi sai định dạng ngày/giờ."""
        valid = []
        for evaluation in evaluations:
            try:
                _ = (evaluation.start, evaluation.end)
            except ValueError:
                logger.warning(f"Bỏ qua bài đánh giá sai định dạng ngày/giờ: {evaluation!r}")
                continue
            valid.append(evaluation)
        self._evaluations = sorted(valid, key=lambda e: e.start)

    def on_date(self, day: date) -> List[Evaluation]:
        return [e for e in self._evaluations if e.day == day]

    def count_on(self, day: date) -> int:
        return len(self.on_date(day))

    def conflicts_with(self, candidate: Evaluation) -> List[Evaluation]:
        """Các bài đánh giá có khoảng thời gian chồng lấn với `candidate`."""
        return [
            e for e in self._evaluations
            if e is not candidate and intervals_overlap(candidate.start, candidate.end, e.start, e.end)
        ]

    def validate(self, candidate: Evaluation) -> None:
        """
        Kiểm tra `candidate` trước khi thêm.

        Raises:
            WeekendNotAllowedError: Ngày rơi vào thứ Bảy / Chủ nhật.
            InvalidIntervalError: Ngày/giờ sai định dạng hoặc end <= start.
            DailyLimitReachedError: Đã đủ số bài đánh giá trong ngày.
            TimeConflictError: Chồng lấn với bài đánh giá đã có.
        """
        try:
            day = candidate.day
        except ValueError:
            raise InvalidIntervalError(f"Invalid date: {candidate.date!r}")

        if day.weekday() >= 5:
            raise WeekendNotAllowedError(day)

        try:
            start, end = candidate.start, candidate.end
        except ValueError:
            raise InvalidIntervalError(
                f"Invalid time: {candidate.start_time!r} - {candidate.end_time!r}")
        if end <= start:
            raise InvalidIntervalError()

        if self.count_on(day) >= self.max_per_day:
            raise DailyLimitReachedError(day)

        conflicts = self.conflicts_with(candidate)
        if conflicts:
            raise TimeConflictError(conflicts)

    def add(self, candidate: Evaluation) -> Evaluation:
        """Kiểm tra rồi thêm `candidate` vào lịch."""
        self.validate(candidate)
        self._evaluations.append(candidate)
        self._evaluations.sort(key=lambda e: e.start)
        logger.info(f"Đã thêm bài đánh giá: {candidate}")
        return candidate

    def remove(self, evaluation_id: str) -> bool:
        before = len(self._evaluations)
        self._evaluations = [e for e in self._evaluations if e.evaluation_id != evaluation_id]
        return len(self._evaluations) != before

    def discard(self, evaluation: Evaluation) -> bool:
        """Bỏ đúng đối tượng `evaluation` (dùng cho bài chưa có ID)."""
        before = len(self._evaluations)
        self._evaluations = [e for e in self._evaluations if e is not evaluation]
        return len(self._evaluations) != before

    def day_load(self, day: date) -> str:
        """Nhãn tải của ngày: "(n/2)"."""
        return f"({self.count_on(day)}/{self.max_per_day})"

    def load_label(self, evaluation: Evaluation) -> str:
        """Tiêu đề hiển thị kèm số bài đánh giá trong ngày, ví dụ "Quiz 1 (2/2)"."""
        return f"{strip_load_suffix(evaluation.title)} {self.day_load(evaluation.day)}"

    def by_week(self) -> Dict[date, List[Evaluation]]:
        """Nhóm bài đánh giá theo tuần (key = thứ Hai đầu tuần)."""
        weeks: Dict[date, List[Evaluation]] = defaultdict(list)
        for evaluation in self._evaluations:
            weeks[week_start(evaluation.day)].append(evaluation)
        return dict(weeks)

    def in_week(self, monday: date) -> List[Evaluation]:
        return self.by_week().get(week_start(monday), [])
