"""
Построение дерева ответов из плоского списка комментариев эпизода.

Преобразование чистое: входной список и его элементы не изменяются,
повторный вызов на тех же данных даёт структурно равное дерево.
"""
from collections import defaultdict
from typing import Dict, Iterable, List

from novel_nest.domains.comments.schemas import CommentNode, CommentResponse


def _by_created_at(comments: Iterable[CommentResponse]) -> List[CommentResponse]:
    # sorted стабилен: при равном времени сохраняется исходный порядок
    return sorted(comments, key=lambda c: c.created_at)


def build_comment_tree(comments: Iterable[CommentResponse]) -> List[CommentNode]:
    """Преобразование плоского списка в лес комментариев.

    Корни - комментарии без parent_comment_id. Дети присоединяются к
    родителю рекурсивно, на любую глубину. Сироты (родитель отсутствует
    во входных данных) и всё их поддерево не попадают в результат.
    """
    ordered = _by_created_at(comments)

    children: Dict[int, List[CommentResponse]] = defaultdict(list)
    roots: List[CommentResponse] = []
    for comment in ordered:
        if comment.parent_comment_id is None:
            roots.append(comment)
        else:
            children[comment.parent_comment_id].append(comment)

    def attach(comment: CommentResponse, ancestors: frozenset) -> CommentNode:
        replies = [
            attach(child, ancestors | {comment.comment_id})
            for child in children.get(comment.comment_id, [])
            if child.comment_id not in ancestors
        ]
        return CommentNode(**comment.model_dump(exclude={"replies"}), replies=replies)

    return [attach(root, frozenset()) for root in roots]