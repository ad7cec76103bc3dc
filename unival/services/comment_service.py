"""
Service cho bình luận và reaction của bài đánh giá.
Sau mỗi lần ghi, giao diện tải lại toàn bộ danh sách (không cập nhật cục bộ).
"""

import logging
from typing import List, Optional

from unival.core.comment_tree import REACTION_TYPES
from unival.models.comment import Comment, Reaction
from unival.services.supabase_client import SupabaseClient, eq, is_null

logger = logging.getLogger(__name__)


class CommentService:
    """Đọc/ghi bảng comments và reactions."""

    def __init__(self, client: SupabaseClient):
        self.client = client

    def get_comments(self, evaluation_id: str) -> List[Comment]:
        """Bình luận của bài đánh giá, sắp xếp theo created_at."""
        rows = self.client.select("comments", {"evaluation_id": eq(evaluation_id)}, order="created_at")
        return [Comment.from_record(r) for r in rows]

    def add_comment(self, evaluation_id: str, user_id: str, text: str,
                    parent_comment_id: Optional[str] = None) -> Optional[Comment]:
        """
        Thêm bình luận (hoặc trả lời nếu có parent_comment_id).

        Raises:
            ValueError: Nội dung rỗng.
        """
        text = (text or "").strip()
        if not text:
            raise ValueError("Comment text cannot be empty")
        payload = {
            "evaluation_id": evaluation_id,
            "user_id": user_id,
            "text": text,
            "parent_comment_id": parent_comment_id,
        }
        rows = self.client.insert("comments", payload)
        kind = "trả lời" if parent_comment_id else "bình luận"
        logger.info(f"Đã thêm {kind} cho bài đánh giá {evaluation_id}")
        return Comment.from_record(rows[0]) if rows else None

    def get_evaluation_reactions(self, evaluation_id: str) -> List[Reaction]:
        """Reaction của bản thân bài đánh giá (comment_id IS NULL)."""
        rows = self.client.select("reactions", {"evaluation_id": eq(evaluation_id), "comment_id": is_null()})
        return [Reaction.from_record(r) for r in rows]

    def get_comment_reactions(self, comment_id: str) -> List[Reaction]:
        rows = self.client.select("reactions", {"comment_id": eq(comment_id)})
        return [Reaction.from_record(r) for r in rows]

    def get_all_reactions(self, evaluation_id: str) -> List[Reaction]:
        """Mọi reaction của bài đánh giá và các bình luận của nó (một request)."""
        rows = self.client.select("reactions", {"evaluation_id": eq(evaluation_id)})
        return [Reaction.from_record(r) for r in rows]

    def add_reaction(self, evaluation_id: str, user_id: str, reaction_type: str,
                     comment_id: Optional[str] = None) -> Optional[Reaction]:
        """
        Thêm reaction cho bài đánh giá hoặc cho một bình luận.

        Raises:
            ValueError: Emoji không thuộc REACTION_TYPES.
        """
        if reaction_type not in REACTION_TYPES:
            raise ValueError(f"Unsupported reaction: {reaction_type}")
        payload = {
            "evaluation_id": evaluation_id,
            "user_id": user_id,
            "reaction_type": reaction_type,
            "comment_id": comment_id,
        }
        rows = self.client.insert("reactions", payload)
        return Reaction.from_record(rows[0]) if rows else None
