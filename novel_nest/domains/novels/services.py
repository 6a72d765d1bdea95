import logging
from datetime import datetime, timezone
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from novel_nest.core.errors import AuthorizationError, NotFoundError
from novel_nest.db.repositories.novel_repository import NovelRepository
from novel_nest.db.repositories.episode_repository import EpisodeRepository
from novel_nest.db.repositories.review_repository import ReviewRepository
from novel_nest.domains.identity.entities import User
from novel_nest.domains.identity.schemas import Role
from novel_nest.domains.novels.schemas import (
    NovelCreate, NovelResponse, EpisodeCreate, EpisodeResponse,
    ReviewCreate, ReviewResponse
)

logger = logging.getLogger(__name__)


class NovelService:
    """Сервис для работы с новеллами, эпизодами и рецензиями"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.novel_repository = NovelRepository(session)
        self.episode_repository = EpisodeRepository(session)
        self.review_repository = ReviewRepository(session)
    
    async def list_novels(
        self,
        tag: Optional[str] = None,
        sort: str = "views",
        limit: int = 12
    ) -> List[NovelResponse]:
        """Ограниченная подборка новелл"""
        return await self.novel_repository.list_novels(tag=tag, sort=sort, limit=limit)
    
    async def get_novel(self, novel_id: int) -> Optional[NovelResponse]:
        return await self.novel_repository.get_by_id(novel_id)
    
    async def get_writer_novels(self, writer_id: int) -> List[NovelResponse]:
        return await self.novel_repository.get_by_author(writer_id)
    
    async def create_novel(self, novel_data: NovelCreate, author: User) -> NovelResponse:
        """Публикация новеллы писателем"""
        if not author.has_role(Role.WRITER):
            raise AuthorizationError("Only writers can publish novels")
        
        novel = await self.novel_repository.create(
            author_id=author.user_id,
            title=novel_data.title,
            description=novel_data.description,
            cover_image=novel_data.cover_image,
            status=novel_data.status.value,
            tags=novel_data.tags
        )
        logger.info(f"User {author.user_id} published novel {novel.novel_id}")
        return novel
    
    async def delete_novel(self, novel_id: int, user: User) -> None:
        """Удаление новеллы автором или администратором"""
        novel = await self._require_novel(novel_id)
        
        if novel.author.user_id != user.user_id and not user.has_role(Role.ADMIN):
            raise AuthorizationError("You don't have permission to delete this novel")
        
        await self.novel_repository.delete(novel_id)
        logger.info(f"User {user.user_id} deleted novel {novel_id}")
    
    async def like_novel(self, novel_id: int) -> NovelResponse:
        if not await self.novel_repository.increment_likes(novel_id):
            raise NotFoundError("Novel not found")
        return await self.novel_repository.get_by_id(novel_id)
    
    async def get_episodes(self, novel_id: int) -> List[EpisodeResponse]:
        """Эпизоды новеллы по возрастанию даты выхода"""
        return await self.episode_repository.get_by_novel(novel_id)
    
    async def get_episode(self, novel_id: int, episode_id: int) -> Optional[EpisodeResponse]:
        return await self.episode_repository.get_in_novel(novel_id, episode_id)
    
    async def publish_episode(
        self,
        novel_id: int,
        episode_data: EpisodeCreate,
        user: User
    ) -> EpisodeResponse:
        """Публикация эпизода автором новеллы"""
        novel = await self._require_novel(novel_id)
        
        if novel.author.user_id != user.user_id:
            raise AuthorizationError("Only the author can publish episodes")
        
        now = datetime.now(timezone.utc)
        episode = await self.episode_repository.create(
            novel_id=novel_id,
            title=episode_data.title,
            content=episode_data.content,
            is_locked=episode_data.is_locked,
            price=episode_data.price,
            release_date=episode_data.release_date or now
        )
        await self.novel_repository.touch(novel_id, now)
        return episode
    
    async def get_reviews(self, novel_id: int) -> List[ReviewResponse]:
        return await self.review_repository.get_by_novel(novel_id)
    
    async def add_review(self, novel_id: int, review_data: ReviewCreate, user: User) -> ReviewResponse:
        """Добавление рецензии с пересчётом рейтинга новеллы"""
        await self._require_novel(novel_id)
        
        review = await self.review_repository.create(
            novel_id=novel_id,
            user_id=user.user_id,
            rating=review_data.rating,
            comment=review_data.comment
        )
        rating = await self.novel_repository.recompute_rating(novel_id)
        logger.info(f"Novel {novel_id} rating recomputed to {rating}")
        return review
    
    async def _require_novel(self, novel_id: int) -> NovelResponse:
        novel = await self.novel_repository.get_by_id(novel_id)
        if novel is None:
            raise NotFoundError("Novel not found")
        return novel
