from novel_nest.db.models.user import User
from novel_nest.db.models.novel import Novel, Episode, Review, Tag, novel_tags
from novel_nest.db.models.comment import Comment

__all__ = [
    "User",
    "Novel",
    "Episode",
    "Review",
    "Tag",
    "novel_tags",
    "Comment"
]
