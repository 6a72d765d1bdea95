from datetime import datetime, timedelta, timezone

from novel_nest.domains.comments.schemas import CommentResponse
from novel_nest.domains.comments.threading import build_comment_tree
from novel_nest.domains.identity.schemas import UserSummary

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)
AUTHOR = UserSummary(user_id=1, username="ReaderJoe")


def comment(comment_id, parent=None, minutes=0, episode_id=10101):
    return CommentResponse(
        comment_id=comment_id,
        episode_id=episode_id,
        user=AUTHOR,
        content=f"comment {comment_id}",
        created_at=BASE + timedelta(minutes=minutes),
        parent_comment_id=parent,
    )


def test_single_reply_is_attached_to_its_root():
    tree = build_comment_tree([comment(1), comment(3, parent=1, minutes=5)])

    assert len(tree) == 1
    assert tree[0].comment_id == 1
    assert [reply.comment_id for reply in tree[0].replies] == [3]
    assert tree[0].replies[0].replies == []


def test_orphan_is_dropped_not_promoted():
    tree = build_comment_tree([comment(1), comment(7, parent=42, minutes=1)])

    assert [node.comment_id for node in tree] == [1]
    assert tree[0].replies == []


def test_orphan_subtree_is_dropped():
    tree = build_comment_tree([
        comment(1),
        comment(7, parent=42, minutes=1),
        comment(8, parent=7, minutes=2),
    ])

    assert [node.comment_id for node in tree] == [1]
    assert tree[0].replies == []


def test_nesting_of_arbitrary_depth():
    tree = build_comment_tree([
        comment(1),
        comment(2, parent=1, minutes=1),
        comment(3, parent=2, minutes=2),
        comment(4, parent=3, minutes=3),
    ])

    node = tree[0]
    depth = 1
    while node.replies:
        node = node.replies[0]
        depth += 1
    assert depth == 4
    assert node.comment_id == 4


def test_roots_and_replies_follow_creation_time():
    tree = build_comment_tree([
        comment(1, minutes=10),
        comment(2, minutes=0),
        comment(5, parent=1, minutes=30),
        comment(4, parent=1, minutes=20),
    ])

    assert [node.comment_id for node in tree] == [2, 1]
    assert [reply.comment_id for reply in tree[1].replies] == [4, 5]


def test_equal_timestamps_keep_source_order():
    tree = build_comment_tree([comment(9), comment(3), comment(6)])

    assert [node.comment_id for node in tree] == [9, 3, 6]


def test_transform_is_pure_and_repeatable():
    source = [comment(1), comment(3, parent=1, minutes=5), comment(2, minutes=1)]
    snapshot = [c.model_copy(deep=True) for c in source]

    first = build_comment_tree(source)
    second = build_comment_tree(source)

    assert first == second
    assert source == snapshot
    assert [c.comment_id for c in source] == [1, 3, 2]


def test_empty_input_gives_empty_forest():
    assert build_comment_tree([]) == []
