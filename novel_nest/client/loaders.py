"""
Описания загрузки данных для каждого представления.

plan_view_data отвечает на вопрос "что загружать и с какими
параметрами" без отрисовки; ViewDataLoader выполняет план.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from novel_nest.client.data_source import DataSource
from novel_nest.client.navigation import ResolvedView, View
from novel_nest.core.errors import NovelNestError
from novel_nest.domains.comments.threading import build_comment_tree
from novel_nest.domains.identity.schemas import UserResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchDescriptor:
    key: str
    operation: str
    args: Tuple[Any, ...] = ()
    placeholder: Callable[[], Any] = list
    transform: Optional[Callable[[Any], Any]] = field(default=None, compare=False)


def _nothing() -> None:
    return None


def plan_view_data(resolved: ResolvedView, user: Optional[UserResponse]) -> List[FetchDescriptor]:
    """Список загрузок для представления"""
    params = resolved.params

    if resolved.view == View.HOME:
        return [
            FetchDescriptor("recommended", "get_recommended_novels"),
            FetchDescriptor("fantasy", "get_fantasy_novels"),
        ]

    if resolved.view == View.NOVEL_DETAIL:
        novel_id = params["novel_id"]
        return [
            FetchDescriptor("novel", "get_novel_by_id", (novel_id,), placeholder=_nothing),
            FetchDescriptor("episodes", "get_episodes_by_novel_id", (novel_id,)),
            FetchDescriptor("reviews", "get_reviews_by_novel_id", (novel_id,)),
        ]

    if resolved.view == View.READ_EPISODE:
        novel_id, episode_id = params["novel_id"], params["episode_id"]
        return [
            FetchDescriptor("episode", "get_episode", (novel_id, episode_id), placeholder=_nothing),
            FetchDescriptor("episodes", "get_episodes_by_novel_id", (novel_id,)),
            FetchDescriptor("comments", "get_comments_by_episode_id", (episode_id,),
                            transform=build_comment_tree),
        ]

    if resolved.view == View.WRITER_DASHBOARD and user is not None:
        return [FetchDescriptor("novels", "get_writer_novels", (user.user_id,))]

    return []


class ViewDataLoader:
    """Выполняет план загрузки активного представления.

    Загрузки независимы: каждая заполняет только свой ключ, сбой даёт
    заглушку. Результаты, пришедшие после смены представления или
    deactivate, отбрасываются.
    """

    def __init__(self, data_source: DataSource):
        self._data_source = data_source
        self._generation = 0
        self.data: Dict[str, Any] = {}

    @property
    def generation(self) -> int:
        return self._generation

    def deactivate(self) -> None:
        self._generation += 1
        self.data = {}

    async def load(
        self,
        resolved: ResolvedView,
        user: Optional[UserResponse]
    ) -> Optional[Dict[str, Any]]:
        """Загрузка данных; None, если представление успело смениться"""
        self._generation += 1
        generation = self._generation
        self.data = {}

        plan = plan_view_data(resolved, user)
        await asyncio.gather(*(self._fetch(generation, fetch) for fetch in plan))

        if generation != self._generation:
            return None
        return dict(self.data)

    async def _fetch(self, generation: int, fetch: FetchDescriptor) -> None:
        try:
            value = await getattr(self._data_source, fetch.operation)(*fetch.args)
        except NovelNestError as e:
            logger.warning(f"Fetch {fetch.key} ({fetch.operation}) failed: {type(e).__name__}: {e}")
            value = fetch.placeholder()
        else:
            if fetch.transform is not None and value is not None:
                value = fetch.transform(value)

        if generation != self._generation:
            logger.debug(f"Discarding stale result for {fetch.key}")
            return
        self.data[fetch.key] = value
