"""
Dựng cây bình luận từ danh sách phẳng (liên kết qua parent_comment_id)
và đếm reaction theo loại emoji.
"""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from unival.models.comment import Comment, Reaction

logger = logging.getLogger(__name__)

REACTION_TYPES = ("✅", "😟", "🔁", "👍", "👎", "❤️")

_EPOCH = datetime.min


def _sort_key(comment: Comment):
    # Giờ có tzinfo quy về UTC trước khi bỏ tzinfo
    stamp = comment.created_at
    if stamp is None:
        return (_EPOCH, comment.comment_id)
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone(timezone.utc)
    return (stamp.replace(tzinfo=None), comment.comment_id)


def build_comment_tree(comments: Iterable[Comment]) -> List[Comment]:
    """
    Dựng cây bình luận.

    - Bình luận gốc: không có parent, hoặc parent không có trong danh sách.
    - Các trả lời được gắn vào `replies` của cha, mỗi cấp sắp xếp theo created_at.
    - Bình luận nằm trong vòng lặp parent (không tới được từ gốc nào) được đưa
      lên làm gốc và ghi log cảnh báo.

    Args:
        comments (Iterable[Comment]): Danh sách phẳng lấy từ server.

    Returns:
        List[Comment]: Các bình luận gốc (mỗi bình luận xuất hiện đúng một lần trong cây).
    """
    items = list(comments)
    by_id: Dict[str, Comment] = {}
    for comment in items:
        comment.replies = []
        by_id[comment.comment_id] = comment

    children: Dict[str, List[Comment]] = defaultdict(list)
    roots: List[Comment] = []
    for comment in items:
        parent = comment.parent_comment_id
        if parent and parent in by_id and parent != comment.comment_id:
            children[parent].append(comment)
        else:
            roots.append(comment)

    placed = set()

    def attach(node: Comment) -> None:
        placed.add(node.comment_id)
        node.replies = sorted(children.get(node.comment_id, []), key=_sort_key)
        for reply in node.replies:
            attach(reply)

    roots.sort(key=_sort_key)
    for root in roots:
        attach(root)

    orphans = [c for c in items if c.comment_id not in placed]
    for orphan in sorted(orphans, key=_sort_key):
        if orphan.comment_id in placed:
            continue
        logger.warning(f"Bình luận {orphan.comment_id} nằm trong vòng lặp parent, hiển thị như bình luận gốc")
        # Cắt liên kết tới cha để vòng lặp không quay lại chính nó
        children[orphan.parent_comment_id] = [
            c for c in children.get(orphan.parent_comment_id, []) if c is not orphan
        ]
        roots.append(orphan)
        attach(orphan)

    roots.sort(key=_sort_key)
    return roots


def flatten_tree(roots: Iterable[Comment], depth: int = 0) -> List[Tuple[Comment, int]]:
    """Duyệt cây theo thứ tự trước, trả về [(comment, độ sâu)] để hiển thị thụt lề."""
    rows: List[Tuple[Comment, int]] = []
    for comment in roots:
        rows.append((comment, depth))
        rows.extend(flatten_tree(comment.replies, depth + 1))
    return rows


def count_reactions(reactions: Iterable[Reaction],
                    comment_id: Optional[str] = None) -> Dict[str, int]:
    """
    Đếm reaction theo emoji.

    Args:
        reactions: Danh sách reaction.
        comment_id: None = chỉ đếm reaction của bài đánh giá (không gắn với bình luận nào).

    Returns:
        Dict[str, int]: {emoji: số lượng} cho đủ REACTION_TYPES (mặc định 0).
    """
    counts = {emoji: 0 for emoji in REACTION_TYPES}
    for reaction in reactions:
        if reaction.comment_id != comment_id:
            continue
        if reaction.reaction_type in counts:
            counts[reaction.reaction_type] += 1
    return counts
