import logging
from typing import Any, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from novel_nest.client.data_source import DEFAULT_PAGE_SIZE, FANTASY_TAG, DataSource
from novel_nest.core.errors import (
    AuthorizationError, ConflictError, NotFoundError, NovelNestError, TransportError
)
from novel_nest.domains.comments.schemas import CommentResponse
from novel_nest.domains.identity.schemas import LoginResponse, UserResponse
from novel_nest.domains.novels.schemas import EpisodeResponse, NovelResponse, ReviewResponse

logger = logging.getLogger(__name__)

_novels = TypeAdapter(List[NovelResponse])
_episodes = TypeAdapter(List[EpisodeResponse])
_reviews = TypeAdapter(List[ReviewResponse])
_comments = TypeAdapter(List[CommentResponse])


def error_for_status(status_code: int, message: str) -> NovelNestError:
    """Отображение HTTP статуса в таксономию ошибок"""
    if status_code == 404:
        return NotFoundError(message)
    if status_code in (400, 409, 422):
        return ConflictError(message)
    if status_code in (401, 403):
        return AuthorizationError(message)
    return TransportError(message)


class RemoteDataSource(DataSource):
    """Источник данных поверх HTTP API Novel Nest"""

    def __init__(
        self,
        base_url: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        super().__init__(page_size)
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )
        self.access_token: Optional[str] = None

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        """Запрос к API; наружу выходят только ошибки таксономии"""
        if self.access_token:
            kwargs.setdefault("headers", {})["Authorization"] = f"Bearer {self.access_token}"

        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e!r}")
            raise TransportError(f"Backend unavailable: {e}") from e

        if not response.is_success:
            try:
                message = response.json().get("error")
            except (ValueError, AttributeError):
                message = None
            raise error_for_status(
                response.status_code,
                message or f"API call failed with status {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Malformed response from {url}") from e

    async def _get_optional(self, url: str) -> Optional[Any]:
        try:
            return await self._request("GET", url)
        except NotFoundError:
            return None

    @staticmethod
    def _parse(adapter, payload):
        try:
            return adapter.validate_python(payload)
        except ValidationError as e:
            raise TransportError("Unexpected response payload") from e

    async def login(self, email: str, password: str) -> UserResponse:
        payload = await self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        login = self._parse(TypeAdapter(LoginResponse), payload)
        self.access_token = login.access_token
        return login.user

    async def signup(self, username: str, email: str, password: str) -> UserResponse:
        payload = await self._request(
            "POST", "/api/auth/signup",
            json={"username": username, "email": email, "password": password}
        )
        return self._parse(TypeAdapter(UserResponse), payload)

    async def get_recommended_novels(self) -> List[NovelResponse]:
        payload = await self._request("GET", "/api/novels", params={"sort": "likes", "limit": self.page_size})
        return self._parse(_novels, payload)

    async def get_fantasy_novels(self) -> List[NovelResponse]:
        payload = await self._request(
            "GET", "/api/novels",
            params={"tag": FANTASY_TAG, "sort": "views", "limit": self.page_size}
        )
        return self._parse(_novels, payload)

    async def get_novel_by_id(self, novel_id: int) -> Optional[NovelResponse]:
        payload = await self._get_optional(f"/api/novels/{novel_id}")
        return self._parse(TypeAdapter(NovelResponse), payload) if payload is not None else None

    async def get_episodes_by_novel_id(self, novel_id: int) -> List[EpisodeResponse]:
        payload = await self._request("GET", f"/api/novels/{novel_id}/episodes")
        return self._parse(_episodes, payload)

    async def get_episode(self, novel_id: int, episode_id: int) -> Optional[EpisodeResponse]:
        payload = await self._get_optional(f"/api/novels/{novel_id}/episodes/{episode_id}")
        if payload is None:
            return None
        episode = self._parse(TypeAdapter(EpisodeResponse), payload)
        # Сервер не должен вернуть чужой эпизод, но проверяем принадлежность
        return episode if episode.novel_id == novel_id else None

    async def get_reviews_by_novel_id(self, novel_id: int) -> List[ReviewResponse]:
        payload = await self._request("GET", f"/api/novels/{novel_id}/reviews")
        return self._parse(_reviews, payload)

    async def get_comments_by_episode_id(self, episode_id: int) -> List[CommentResponse]:
        payload = await self._request("GET", f"/api/episodes/{episode_id}/comments")
        return self._parse(_comments, payload)

    async def get_writer_novels(self, writer_id: int) -> List[NovelResponse]:
        payload = await self._request("GET", f"/api/users/{writer_id}/novels")
        return self._parse(_novels, payload)

    def clear_credentials(self) -> None:
        self.access_token = None

    async def aclose(self) -> None:
        await self._client.aclose()
