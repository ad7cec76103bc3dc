"""Test dựng cây bình luận và đếm reaction."""

import logging
from datetime import datetime, timedelta, timezone

from unival.core.comment_tree import REACTION_TYPES, build_comment_tree, count_reactions, flatten_tree
from unival.models.comment import Comment, Reaction, parse_timestamp


def c(comment_id, parent=None, minute=0):
    return Comment(comment_id=comment_id, evaluation_id="ev1", user_id="u1", text=f"text {comment_id}",
                   parent_comment_id=parent, created_at=datetime(2025, 3, 3, 9, minute))


def ids(rows):
    return [(comment.comment_id, depth) for comment, depth in rows]


def test_nested_replies_sorted_by_time():
    comments = [c("r2", "root", 5), c("root", None, 0), c("r1", "root", 2), c("r1a", "r1", 3)]
    roots = build_comment_tree(comments)
    assert [r.comment_id for r in roots] == ["root"]
    assert ids(flatten_tree(roots)) == [("root", 0), ("r1", 1), ("r1a", 2), ("r2", 1)]


def test_missing_parent_becomes_root():
    roots = build_comment_tree([c("a", None, 0), c("b", "deleted", 1)])
    assert [r.comment_id for r in roots] == ["a", "b"]


def test_self_parent_becomes_root():
    roots = build_comment_tree([c("a", "a", 0)])
    assert [r.comment_id for r in roots] == ["a"]
    assert roots[0].replies == []


def test_cycle_promoted_to_root_and_logged(caplog):
    caplog.set_level(logging.WARNING)
    roots = build_comment_tree([c("x", "y", 0), c("y", "x", 1)])
    flat = ids(flatten_tree(roots))
    # Mỗi bình luận xuất hiện đúng một lần
    assert sorted(cid for cid, _ in flat) == ["x", "y"]
    assert len(flat) == 2
    assert "vòng lặp" in caplog.text


def test_rebuild_resets_previous_replies():
    comments = [c("root"), c("child", "root", 1)]
    build_comment_tree(comments)
    roots = build_comment_tree(comments)
    assert len(roots[0].replies) == 1


def test_mixed_timezone_timestamps_sort():
    aware = Comment("a", "ev1", "u1", "a", created_at=datetime(2025, 3, 3, 10, tzinfo=timezone.utc))
    naive = Comment("b", "ev1", "u1", "b", created_at=datetime(2025, 3, 3, 9))
    missing = Comment("c", "ev1", "u1", "c")
    roots = build_comment_tree([aware, naive, missing])
    assert [r.comment_id for r in roots] == ["c", "b", "a"]


def test_count_reactions_separates_evaluation_and_comment():
    reactions = [
        Reaction("👍", "ev1", "u1"),
        Reaction("👍", "ev1", "u2"),
        Reaction("❤️", "ev1", "u1", comment_id="c1"),
        Reaction("🙃", "ev1", "u3"),
    ]
    evaluation_counts = count_reactions(reactions)
    assert set(evaluation_counts) == set(REACTION_TYPES)
    assert evaluation_counts["👍"] == 2
    assert evaluation_counts["❤️"] == 0
    assert count_reactions(reactions, "c1")["❤️"] == 1
    assert sum(count_reactions(reactions, "c2").values()) == 0


def test_parse_timestamp_variants():
    assert parse_timestamp("2025-03-03T09:00:00Z") == datetime(2025, 3, 3, 9, tzinfo=timezone.utc)
    assert parse_timestamp("2025-03-03T09:00:00") == datetime(2025, 3, 3, 9)
    assert parse_timestamp("not a date") is None
    assert parse_timestamp(None) is None


def test_comment_from_record_and_header():
    comment = Comment.from_record({
        "id": 7, "evaluation_id": 3, "user_id": "Alice", "text": "Hi",
        "parent_comment_id": None, "is_edited": True, "created_at": "2025-03-03T09:15:00Z",
    })
    assert comment.comment_id == "7"
    assert comment.parent_comment_id is None
    assert comment.header_text() == "Alice • 2025-03-03 09:15 (edited)"


def test_roots_sorted_across_utc_offsets():
    ist = timezone(timedelta(hours=5, minutes=30))
    # 09:00+05:30 là 03:30 UTC, trước 04:00 UTC
    later = Comment("later", "ev1", "u1", "b", created_at=datetime(2025, 3, 3, 4, 0, tzinfo=timezone.utc))
    earlier = Comment("earlier", "ev1", "u1", "a", created_at=datetime(2025, 3, 3, 9, 0, tzinfo=ist))
    roots = build_comment_tree([later, earlier])
    assert [r.comment_id for r in roots] == ["earlier", "later"]
