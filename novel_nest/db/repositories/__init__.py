from novel_nest.db.repositories.user_repository import UserRepository
from novel_nest.db.repositories.novel_repository import NovelRepository
from novel_nest.db.repositories.episode_repository import EpisodeRepository
from novel_nest.db.repositories.review_repository import ReviewRepository
from novel_nest.db.repositories.comment_repository import CommentRepository

__all__ = [
    "UserRepository",
    "NovelRepository",
    "EpisodeRepository",
    "ReviewRepository",
    "CommentRepository"
]
