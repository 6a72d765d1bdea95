import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from novel_nest.client.data_source import DEFAULT_PAGE_SIZE, FANTASY_TAG, DataSource
from novel_nest.client import fixtures
from novel_nest.core.errors import ConflictError, NotFoundError
from novel_nest.domains.comments.schemas import CommentResponse
from novel_nest.domains.identity.schemas import Role, UserResponse
from novel_nest.domains.novels.schemas import EpisodeResponse, NovelResponse, ReviewResponse

logger = logging.getLogger(__name__)

PasswordVerifier = Callable[[UserResponse, str], bool]


class MockDataSource(DataSource):
    """Источник данных в памяти поверх детерминированных фикстур.

    Проверка пароля - внешняя забота: без verify_password вход выполняется
    только по email. Все методы возвращают копии, изменение результата не
    затрагивает хранилище.
    """

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        delay: float = 0.0,
        verify_password: Optional[PasswordVerifier] = None,
        users: Optional[List[UserResponse]] = None,
        novels: Optional[List[NovelResponse]] = None,
        episodes: Optional[List[EpisodeResponse]] = None,
        reviews: Optional[List[ReviewResponse]] = None,
        comments: Optional[List[CommentResponse]] = None,
    ):
        super().__init__(page_size)
        self.delay = delay
        self._verify_password = verify_password
        self.users = users if users is not None else fixtures.fixture_users()
        self.novels = novels if novels is not None else fixtures.fixture_novels()
        self.episodes = episodes if episodes is not None else fixtures.fixture_episodes()
        self.reviews = reviews if reviews is not None else fixtures.fixture_reviews()
        self.comments = comments if comments is not None else fixtures.fixture_comments()

    async def _latency(self) -> None:
        # Имитация сетевой задержки; 0 всё равно отдаёт управление циклу
        await asyncio.sleep(self.delay)

    @staticmethod
    def _copies(items):
        return [item.model_copy(deep=True) for item in items]

    async def login(self, email: str, password: str) -> UserResponse:
        await self._latency()
        user = next((u for u in self.users if u.email.lower() == email.lower()), None)
        if user is None:
            raise NotFoundError("Invalid email or password")
        if self._verify_password is not None and not self._verify_password(user, password):
            raise NotFoundError("Invalid email or password")
        return user.model_copy(deep=True)

    async def signup(self, username: str, email: str, password: str) -> UserResponse:
        await self._latency()
        for user in self.users:
            if user.username == username or user.email.lower() == email.lower():
                raise ConflictError("Username or email already registered")

        new_user = UserResponse(
            user_id=max((u.user_id for u in self.users), default=0) + 1,
            username=username,
            email=email.lower(),
            role=Role.READER,
            created_at=datetime.now(timezone.utc),
        )
        self.users.append(new_user)
        logger.info(f"Mock signup created user {new_user.user_id}")
        return new_user.model_copy(deep=True)

    async def get_recommended_novels(self) -> List[NovelResponse]:
        await self._latency()
        ranked = sorted(self.novels, key=lambda n: (-n.likes, n.novel_id))
        return self._copies(ranked[:self.page_size])

    async def get_fantasy_novels(self) -> List[NovelResponse]:
        await self._latency()
        fantasy = [n for n in self.novels if FANTASY_TAG in n.tags]
        ranked = sorted(fantasy, key=lambda n: (-n.views, n.novel_id))
        return self._copies(ranked[:self.page_size])

    async def get_novel_by_id(self, novel_id: int) -> Optional[NovelResponse]:
        await self._latency()
        novel = next((n for n in self.novels if n.novel_id == novel_id), None)
        return novel.model_copy(deep=True) if novel else None

    async def get_episodes_by_novel_id(self, novel_id: int) -> List[EpisodeResponse]:
        await self._latency()
        episodes = [e for e in self.episodes if e.novel_id == novel_id]
        return self._copies(sorted(episodes, key=lambda e: (e.release_date, e.episode_id)))

    async def get_episode(self, novel_id: int, episode_id: int) -> Optional[EpisodeResponse]:
        await self._latency()
        episode = next(
            (e for e in self.episodes if e.episode_id == episode_id and e.novel_id == novel_id),
            None
        )
        return episode.model_copy(deep=True) if episode else None

    async def get_reviews_by_novel_id(self, novel_id: int) -> List[ReviewResponse]:
        await self._latency()
        reviews = [r for r in self.reviews if r.novel_id == novel_id]
        return self._copies(sorted(reviews, key=lambda r: (r.created_at, r.review_id), reverse=True))

    async def get_comments_by_episode_id(self, episode_id: int) -> List[CommentResponse]:
        await self._latency()
        comments = [c for c in self.comments if c.episode_id == episode_id]
        return self._copies(sorted(comments, key=lambda c: (c.created_at, c.comment_id)))

    async def get_writer_novels(self, writer_id: int) -> List[NovelResponse]:
        await self._latency()
        novels = [n for n in self.novels if n.author.user_id == writer_id]
        # Как на сервере: сначала недавно обновлённые
        return self._copies(sorted(novels, key=lambda n: (-n.last_update.timestamp(), n.novel_id)))
