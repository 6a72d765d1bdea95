from novel_nest.domains.comments.schemas import CommentCreate, CommentResponse, CommentNode
from novel_nest.domains.comments.threading import build_comment_tree

__all__ = [
    "CommentCreate", "CommentResponse", "CommentNode",
    "build_comment_tree"
]
