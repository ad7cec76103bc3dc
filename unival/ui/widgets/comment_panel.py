"""
Widget bình luận của một bài đánh giá.

- Bình luận hiển thị dạng cây (trả lời thụt lề dưới bình luận cha).
- Thanh reaction cho bài đánh giá và cho bình luận đang chọn.
- Sau mỗi lần ghi (bình luận / trả lời / reaction) tải lại toàn bộ dữ liệu.
"""

import logging
from typing import Dict, List, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QHBoxLayout, QLabel, QLineEdit, QPushButton, QTreeWidget,
    QTreeWidgetItem, QVBoxLayout, QWidget
)
from qfluentwidgets import PrimaryPushButton, StrongBodyLabel

from unival.core.comment_tree import REACTION_TYPES, build_comment_tree, count_reactions
from unival.core.workers import run_in_background
from unival.models.comment import Comment, Reaction
from unival.models.evaluation import Evaluation
from unival.models.user import User

logger = logging.getLogger(__name__)

EMPTY_TEXT = "No comments yet. Be the first to comment!"
LOAD_FAILED = "Failed to load comments."
POST_FAILED = "Failed to post comment."
REPLY_FAILED = "Failed to post reply."
REACTION_FAILED = "Failed to add reaction."

COMMENT_ROLE = Qt.UserRole


class ReactionBar(QWidget):
    """Hàng nút emoji kèm số lượng. Gọi `on_react(emoji)` khi bấm."""

    def __init__(self, on_react, parent=None):
        super().__init__(parent)
        self.on_react = on_react
        self.buttons: Dict[str, QPushButton] = {}
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)
        for emoji in REACTION_TYPES:
            btn = QPushButton(f"{emoji} 0")
            btn.setFlat(True)
            btn.setStyleSheet("QPushButton { padding: 2px 6px; border: 1px solid #E0E0E0; border-radius: 10px; }")
            btn.clicked.connect(lambda _checked=False, e=emoji: self.on_react(e))
            layout.addWidget(btn)
            self.buttons[emoji] = btn
        layout.addStretch()

    def set_counts(self, counts: Dict[str, int]) -> None:
        for emoji, btn in self.buttons.items():
            btn.setText(f"{emoji} {counts.get(emoji, 0)}")

    def text_of(self, emoji: str) -> str:
        return self.buttons[emoji].text()


class CommentPanel(QWidget):
    """
    Panel bình luận + reaction cho bài đánh giá đang chọn.

    Attributes:
        comment_service: Service đọc/ghi bình luận (CommentService).
        user (User): Người dùng hiện tại.
        evaluation (Optional[Evaluation]): Bài đánh giá đang hiển thị.
        roots (List[Comment]): Cây bình luận hiện tại.
        reactions (List[Reaction]): Mọi reaction của bài đánh giá.
    """

    def __init__(self, comment_service, user: User, parent=None):
        super().__init__(parent)
        self.setObjectName("CommentPanel")
        self.comment_service = comment_service
        self.user = user
        self.evaluation: Optional[Evaluation] = None
        self.roots: List[Comment] = []
        self.reactions: List[Reaction] = []
        self.reply_to: Optional[Comment] = None

        self._init_ui()
        self.set_enabled_for_evaluation(False)

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(8)

        # ========== HEADER ==========
        self.title_label = StrongBodyLabel("Select an evaluation to see its comments")
        self.title_label.setWordWrap(True)
        layout.addWidget(self.title_label)

        self.evaluation_reactions = ReactionBar(self.react_to_evaluation)
        layout.addWidget(self.evaluation_reactions)

        # ========== COMMENTS ==========
        self.tree = QTreeWidget()
        self.tree.setHeaderHidden(True)
        self.tree.setColumnCount(2)
        self.tree.setIndentation(24)
        self.tree.setWordWrap(True)
        self.tree.setAlternatingRowColors(True)
        self.tree.currentItemChanged.connect(self._on_selection_changed)
        layout.addWidget(self.tree, 1)

        self.empty_label = QLabel(EMPTY_TEXT)
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setStyleSheet("color: #999; font-style: italic; padding: 12px;")
        layout.addWidget(self.empty_label)

        self.comment_reactions = ReactionBar(self.react_to_selected_comment)
        layout.addWidget(self.comment_reactions)

        # ========== INPUT ==========
        self.reply_label = QLabel("")
        self.reply_label.setStyleSheet("color: #1565C0;")
        layout.addWidget(self.reply_label)

        input_layout = QHBoxLayout()
        self.input_edit = QLineEdit()
        self.input_edit.setPlaceholderText("Write a comment...")
        self.input_edit.returnPressed.connect(self.post)
        input_layout.addWidget(self.input_edit, 1)

        self.reply_btn = QPushButton("Reply")
        self.reply_btn.clicked.connect(self.start_reply)
        input_layout.addWidget(self.reply_btn)

        self.cancel_reply_btn = QPushButton("Cancel Reply")
        self.cancel_reply_btn.clicked.connect(self.cancel_reply)
        self.cancel_reply_btn.hide()
        input_layout.addWidget(self.cancel_reply_btn)

        self.post_btn = PrimaryPushButton("Post")
        self.post_btn.clicked.connect(self.post)
        input_layout.addWidget(self.post_btn)
        layout.addLayout(input_layout)

        self.status_label = QLabel("")
        self.status_label.setStyleSheet("color: #D32F2F;")
        layout.addWidget(self.status_label)

    def set_enabled_for_evaluation(self, enabled: bool) -> None:
        for widget in (self.evaluation_reactions, self.comment_reactions, self.input_edit,
                       self.reply_btn, self.post_btn):
            widget.setEnabled(enabled)

    # ========== LOADING ==========

    def show_evaluation(self, evaluation: Evaluation) -> None:
        """Chuyển sang bài đánh giá khác và tải bình luận."""
        self.evaluation = evaluation
        self.cancel_reply()
        self.title_label.setText(f"💬 {evaluation}")
        self.set_enabled_for_evaluation(bool(evaluation.evaluation_id))
        self.reload()

    def reload(self) -> None:
        if self.evaluation is None or not self.evaluation.evaluation_id:
            self.render([], [])
            return
        evaluation_id = self.evaluation.evaluation_id
        service = self.comment_service

        def fetch():
            return evaluation_id, service.get_comments(evaluation_id), service.get_all_reactions(evaluation_id)

        run_in_background(self, fetch, on_result=self._on_loaded,
                          on_error=lambda message: self._on_load_failed(message, evaluation_id))

    def is_current(self, evaluation_id: Optional[str]) -> bool:
        """Kết quả của `evaluation_id` còn thuộc bài đánh giá đang hiển thị không."""
        return self.evaluation is not None and self.evaluation.evaluation_id == evaluation_id

    def _on_loaded(self, result) -> None:
        evaluation_id, comments, reactions = result
        if not self.is_current(evaluation_id):
            logger.debug(f"Bỏ kết quả bình luận cũ của bài đánh giá {evaluation_id}")
            return
        self.status_label.clear()
        self.render(comments, reactions)

    def _on_load_failed(self, message: str, evaluation_id: Optional[str] = None) -> None:
        logger.error(f"Không tải được bình luận: {message}")
        if evaluation_id is None or self.is_current(evaluation_id):
            self.status_label.setText(LOAD_FAILED)

    # ========== RENDERING ==========

    def render(self, comments: List[Comment], reactions: List[Reaction]) -> None:
        """Vẽ lại cây bình luận và các thanh reaction."""
        self.roots = build_comment_tree(comments)
        self.reactions = list(reactions)

        self.tree.clear()
        for root in self.roots:
            self.tree.addTopLevelItem(self._make_item(root))
        self.tree.expandAll()

        self.empty_label.setVisible(not self.roots)
        self.tree.setVisible(bool(self.roots))
        self.evaluation_reactions.set_counts(count_reactions(self.reactions))
        self._update_comment_reactions()

    def _make_item(self, comment: Comment) -> QTreeWidgetItem:
        item = QTreeWidgetItem([f"{comment.header_text()}\n{comment.text}", self._reaction_summary(comment)])
        item.setData(0, COMMENT_ROLE, comment.comment_id)
        for reply in comment.replies:
            item.addChild(self._make_item(reply))
        return item

    def _reaction_summary(self, comment: Comment) -> str:
        counts = count_reactions(self.reactions, comment.comment_id)
        return " ".join(f"{emoji}{n}" for emoji, n in counts.items() if n)

    def selected_comment(self) -> Optional[Comment]:
        item = self.tree.currentItem()
        if item is None:
            return None
        comment_id = item.data(0, COMMENT_ROLE)
        return self._find(self.roots, comment_id)

    def _find(self, nodes: List[Comment], comment_id: str) -> Optional[Comment]:
        for node in nodes:
            if node.comment_id == comment_id:
                return node
            found = self._find(node.replies, comment_id)
            if found is not None:
                return found
        return None

    def _on_selection_changed(self, *_args) -> None:
        self._update_comment_reactions()

    def _update_comment_reactions(self) -> None:
        comment = self.selected_comment()
        if comment is None:
            self.comment_reactions.set_counts({})
            self.comment_reactions.setEnabled(False)
            return
        self.comment_reactions.set_counts(count_reactions(self.reactions, comment.comment_id))
        self.comment_reactions.setEnabled(self.evaluation is not None)

    # ========== WRITING ==========

    def start_reply(self) -> None:
        comment = self.selected_comment()
        if comment is None:
            self.status_label.setText("Select a comment to reply to.")
            return
        self.reply_to = comment
        self.reply_label.setText(f"Replying to {comment.user_id}")
        self.cancel_reply_btn.show()
        self.input_edit.setFocus()

    def cancel_reply(self) -> None:
        self.reply_to = None
        self.reply_label.clear()
        self.cancel_reply_btn.hide()

    def post(self) -> None:
        """Gửi bình luận (hoặc trả lời) rồi tải lại."""
        text = self.input_edit.text().strip()
        if not text or self.evaluation is None or not self.evaluation.evaluation_id:
            return
        parent_id = self.reply_to.comment_id if self.reply_to else None
        failure = REPLY_FAILED if parent_id else POST_FAILED
        evaluation_id = self.evaluation.evaluation_id
        service, user_id = self.comment_service, self.user.user_id

        def on_posted(_result):
            if not self.is_current(evaluation_id):
                return
            self.input_edit.clear()
            self.cancel_reply()
            self.reload()

        def on_failed(message):
            logger.error(f"Gửi bình luận thất bại: {message}")
            if self.is_current(evaluation_id):
                self.status_label.setText(failure)

        run_in_background(
            self,
            lambda: service.add_comment(evaluation_id, user_id, text, parent_id),
            on_result=on_posted,
            on_error=on_failed,
        )

    def react_to_evaluation(self, emoji: str) -> None:
        self._react(emoji, None)

    def react_to_selected_comment(self, emoji: str) -> None:
        comment = self.selected_comment()
        if comment is not None:
            self._react(emoji, comment.comment_id)

    def _react(self, emoji: str, comment_id: Optional[str]) -> None:
        if self.evaluation is None or not self.evaluation.evaluation_id:
            return
        evaluation_id = self.evaluation.evaluation_id
        service, user_id = self.comment_service, self.user.user_id
        run_in_background(
            self,
            lambda: service.add_reaction(evaluation_id, user_id, emoji, comment_id),
            on_result=lambda _result: self._after_reaction(evaluation_id),
            on_error=lambda message: self._after_reaction(evaluation_id, message),
        )

    def _after_reaction(self, evaluation_id: str, error: Optional[str] = None) -> None:
        if error is not None:
            logger.error(f"Thêm reaction thất bại: {error}")
        if not self.is_current(evaluation_id):
            return
        if error is None:
            self.reload()
        else:
            self.status_label.setText(REACTION_FAILED)
