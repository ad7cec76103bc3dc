"""
Data class cho bình luận (dạng cây qua parent_comment_id) và reaction (emoji).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse timestamp ISO 8601 do Supabase trả về (có thể kết thúc bằng 'Z').

    Returns:
        Optional[datetime]: None nếu rỗng hoặc không parse được.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


@dataclass
class Comment:
    """
    Một bình luận của bài đánh giá.

    Attributes:
        comment_id (str): ID bình luận.
        evaluation_id (str): ID bài đánh giá.
        user_id (str): ID (hoặc tên) người viết.
        text (str): Nội dung.
        parent_comment_id (Optional[str]): ID bình luận cha (None = bình luận gốc).
        is_edited (bool): Đã sửa chưa.
        created_at, updated_at (Optional[datetime]): Thời điểm tạo / cập nhật.
        replies (List[Comment]): Các trả lời, được điền khi dựng cây (không lưu lên server).
    """

    comment_id: str
    evaluation_id: str
    user_id: str
    text: str
    parent_comment_id: Optional[str] = None
    is_edited: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    replies: List["Comment"] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Comment":
        parent = record.get("parent_comment_id")
        return cls(
            comment_id=str(record.get("comment_id") or record.get("id") or ""),
            evaluation_id=str(record.get("evaluation_id") or ""),
            user_id=str(record.get("user_id") or ""),
            text=record.get("text") or "",
            parent_comment_id=str(parent) if parent else None,
            is_edited=bool(record.get("is_edited", False)),
            created_at=parse_timestamp(record.get("created_at")),
            updated_at=parse_timestamp(record.get("updated_at")),
        )

    def header_text(self) -> str:
        """Dòng tiêu đề hiển thị: "<user> • <thời gian>"."""
        stamp = self.created_at.strftime("%Y-%m-%d %H:%M") if self.created_at else ""
        edited = " (edited)" if self.is_edited else ""
        return f"{self.user_id} • {stamp}{edited}".rstrip(" •")


@dataclass
class Reaction:
    """
    Một reaction (emoji) cho bài đánh giá hoặc cho một bình luận.

    Attributes:
        reaction_type (str): Emoji.
        evaluation_id (str): ID bài đánh giá.
        user_id (str): ID người react.
        comment_id (Optional[str]): None nếu reaction dành cho bài đánh giá.
        reaction_id (Optional[str]): ID bản ghi.
        created_at (Optional[datetime]): Thời điểm tạo.
    """

    reaction_type: str
    evaluation_id: str
    user_id: str
    comment_id: Optional[str] = None
    reaction_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Reaction":
        comment_id = record.get("comment_id")
        reaction_id = record.get("reaction_id") or record.get("id")
        return cls(
            reaction_type=record.get("reaction_type") or "",
            evaluation_id=str(record.get("evaluation_id") or ""),
            user_id=str(record.get("user_id") or ""),
            comment_id=str(comment_id) if comment_id else None,
            reaction_id=str(reaction_id) if reaction_id else None,
            created_at=parse_timestamp(record.get("created_at")),
        )
