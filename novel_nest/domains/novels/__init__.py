from novel_nest.domains.novels.schemas import (
    NovelStatus, NovelBase, NovelCreate, NovelResponse,
    EpisodeCreate, EpisodeResponse, ReviewCreate, ReviewResponse
)

__all__ = [
    "NovelStatus", "NovelBase", "NovelCreate", "NovelResponse",
    "EpisodeCreate", "EpisodeResponse", "ReviewCreate", "ReviewResponse"
]
