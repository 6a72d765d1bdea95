"""
Детерминированные демо-данные.

Используются MockDataSource и для наполнения базы при SEED_DEMO_DATA.
Каждая функция возвращает новые объекты, поэтому вызывающий код может
изменять их, не затрагивая других.
"""
from datetime import datetime, timedelta, timezone
from typing import List

from novel_nest.domains.comments.schemas import CommentResponse
from novel_nest.domains.identity.schemas import Role, UserResponse, UserSummary
from novel_nest.domains.novels.schemas import (
    EpisodeResponse, NovelResponse, NovelStatus, ReviewResponse
)

FIXTURE_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
DEMO_PASSWORD = "novelnest123"

NOVEL_COUNT = 12
EPISODES_PER_NOVEL = 5

_CHAPTER_TITLES = [
    "The Discovery",
    "Ashes of the Archive",
    "A Cipher in Crimson",
    "The Locked Vault",
    "Dawn over the Spires",
]

_LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Quisque a libero "
    "sit amet tortor sagittis maximus nec eu felis. In hac habitasse platea "
    "dictumst. Sed vitae feugiat quam, id rhoncus ante."
)


def _avatar(seed: str) -> str:
    return f"https://picsum.photos/seed/{seed}/100/100"


def fixture_users() -> List[UserResponse]:
    return [
        UserResponse(user_id=1, username="ReaderJoe", email="reader@novelnest.io", role=Role.READER,
                     created_at=datetime(2023, 1, 15, 9, 30, tzinfo=timezone.utc),
                     profile_picture=_avatar("user1")),
        UserResponse(user_id=2, username="WriterJane", email="writer@novelnest.io", role=Role.WRITER,
                     created_at=datetime(2023, 2, 20, 14, 0, tzinfo=timezone.utc),
                     profile_picture=_avatar("user2"), bio="Avid writer of fantasy."),
        UserResponse(user_id=3, username="AdminAlex", email="admin@novelnest.io", role=Role.ADMIN,
                     created_at=datetime(2023, 1, 10, 8, 0, tzinfo=timezone.utc),
                     profile_picture=_avatar("user3")),
        UserResponse(user_id=4, username="DevSam", email="dev@novelnest.io", role=Role.DEVELOPER,
                     created_at=datetime(2023, 3, 5, 18, 45, tzinfo=timezone.utc),
                     profile_picture=_avatar("user4")),
        UserResponse(user_id=5, username="CriticCarl", email="carl@novelnest.io", role=Role.READER,
                     created_at=datetime(2023, 4, 1, 10, 0, tzinfo=timezone.utc),
                     profile_picture=_avatar("user5")),
        UserResponse(user_id=6, username="FanGirl", email="fangirl@novelnest.io", role=Role.READER,
                     created_at=datetime(2023, 4, 2, 11, 0, tzinfo=timezone.utc),
                     profile_picture=_avatar("user6")),
    ]


def _summary(user_id: int) -> UserSummary:
    user = next(u for u in fixture_users() if u.user_id == user_id)
    return UserSummary(user_id=user.user_id, username=user.username, profile_picture=user.profile_picture)


def fixture_novels() -> List[NovelResponse]:
    author = _summary(2)
    novels = []
    for i in range(NOVEL_COUNT):
        novels.append(NovelResponse(
            novel_id=101 + i,
            title=f"The Crimson Cipher {i + 1}",
            description=(
                "A thrilling adventure in a world of ancient magic and futuristic technology. "
                "A young hero must decode the secrets of a powerful artifact before it falls "
                "into the wrong hands."
            ),
            cover_image=f"https://picsum.photos/seed/novel{i}/400/600",
            # Каждая четвёртая новелла - не фэнтези
            tags=["Romance", "Drama"] if i % 4 == 3 else ["Fantasy", "Adventure", "Sci-Fi"],
            status=NovelStatus.COMPLETED if i % 3 == 0 else NovelStatus.ONGOING,
            last_update=FIXTURE_NOW - timedelta(days=i),
            views=16458 + i * 123,
            likes=2010 + ((i * 5) % NOVEL_COUNT) * 45,
            rating=round(4.5 - i * 0.1, 2),
            author=author,
        ))
    return novels


def fixture_episodes() -> List[EpisodeResponse]:
    episodes = []
    for novel in fixture_novels():
        for i in range(EPISODES_PER_NOVEL):
            episodes.append(EpisodeResponse(
                episode_id=novel.novel_id * 100 + i + 1,
                novel_id=novel.novel_id,
                title=f"Chapter {i + 1}: {_CHAPTER_TITLES[i]}",
                content=" ".join([_LOREM] * (i + 3)),
                is_locked=i > 2,
                price=10,
                release_date=FIXTURE_NOW - timedelta(weeks=EPISODES_PER_NOVEL - i),
            ))
    return episodes


def fixture_reviews() -> List[ReviewResponse]:
    return [
        ReviewResponse(review_id=1, novel_id=101, user=_summary(1), rating=5,
                       comment="Absolutely amazing! I couldn't put it down.",
                       created_at=datetime(2023, 10, 1, 12, 34, 56, tzinfo=timezone.utc)),
        ReviewResponse(review_id=2, novel_id=101, user=_summary(5), rating=4,
                       comment="A solid read with great world-building.",
                       created_at=datetime(2023, 10, 2, 15, 20, 11, tzinfo=timezone.utc)),
    ]


def fixture_comments() -> List[CommentResponse]:
    """Плоский список: ответ хранит ссылку на родителя, а не вложение"""
    return [
        CommentResponse(comment_id=1, episode_id=10101, user=_summary(1),
                        content="What a cliffhanger!",
                        created_at=FIXTURE_NOW - timedelta(days=2)),
        CommentResponse(comment_id=2, episode_id=10101, user=_summary(6),
                        content="I can't wait for the next chapter!",
                        created_at=FIXTURE_NOW - timedelta(days=3)),
        CommentResponse(comment_id=3, episode_id=10101, user=_summary(2),
                        content="Glad you enjoyed it!", parent_comment_id=1,
                        created_at=FIXTURE_NOW - timedelta(days=1)),
    ]
