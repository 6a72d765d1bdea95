from abc import ABC, abstractmethod
from typing import List, Optional

from novel_nest.domains.comments.schemas import CommentResponse
from novel_nest.domains.identity.schemas import UserResponse
from novel_nest.domains.novels.schemas import EpisodeResponse, NovelResponse, ReviewResponse

DEFAULT_PAGE_SIZE = 12
MIN_PAGE_SIZE = 6
MAX_PAGE_SIZE = 12

FANTASY_TAG = "Fantasy"


def clamp_page_size(page_size: int) -> int:
    return max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, page_size))


class DataSource(ABC):
    """Единый асинхронный интерфейс доступа к данным.

    Реализации не выпускают наружу сырые ошибки транспорта: любой сбой
    приводится к NotFoundError, ConflictError, TransportError или
    AuthorizationError. Отсутствие сущности при чтении по ID - это None,
    а не ошибка.
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        self.page_size = clamp_page_size(page_size)

    @abstractmethod
    async def login(self, email: str, password: str) -> UserResponse:
        """Вход; NotFoundError, если пользователь не найден"""

    @abstractmethod
    async def signup(self, username: str, email: str, password: str) -> UserResponse:
        """Регистрация читателя; ConflictError при занятом username или email"""

    @abstractmethod
    async def get_recommended_novels(self) -> List[NovelResponse]:
        """Не более page_size новелл по убыванию лайков"""

    @abstractmethod
    async def get_fantasy_novels(self) -> List[NovelResponse]:
        """Не более page_size новелл с тегом Fantasy по убыванию просмотров"""

    @abstractmethod
    async def get_novel_by_id(self, novel_id: int) -> Optional[NovelResponse]:
        ...

    @abstractmethod
    async def get_episodes_by_novel_id(self, novel_id: int) -> List[EpisodeResponse]:
        """Эпизоды новеллы по возрастанию release_date"""

    @abstractmethod
    async def get_episode(self, novel_id: int, episode_id: int) -> Optional[EpisodeResponse]:
        """Эпизод, только если он принадлежит новелле novel_id"""

    @abstractmethod
    async def get_reviews_by_novel_id(self, novel_id: int) -> List[ReviewResponse]:
        ...

    @abstractmethod
    async def get_comments_by_episode_id(self, episode_id: int) -> List[CommentResponse]:
        """Плоский список; дерево строит build_comment_tree"""

    @abstractmethod
    async def get_writer_novels(self, writer_id: int) -> List[NovelResponse]:
        """Новеллы автора, сначала недавно обновлённые"""

    def clear_credentials(self) -> None:
        """Забыть учётные данные вошедшего пользователя"""

    async def aclose(self) -> None:
        """Освобождение ресурсов транспорта"""
