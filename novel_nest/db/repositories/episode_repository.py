from datetime import datetime
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from novel_nest.db.models.novel import Episode as EpisodeModel
from novel_nest.domains.novels.schemas import EpisodeResponse


class EpisodeRepository:
    """Репозиторий для работы с эпизодами"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def create(
        self,
        novel_id: int,
        title: str,
        content: str,
        is_locked: bool,
        price: int,
        release_date: datetime
    ) -> EpisodeResponse:
        """Публикация эпизода"""
        db_episode = EpisodeModel(
            novel_id=novel_id,
            title=title,
            content=content,
            is_locked=is_locked,
            price=price,
            release_date=release_date
        )
        self.session.add(db_episode)
        await self.session.commit()
        await self.session.refresh(db_episode)
        return self._to_domain(db_episode)
    
    async def get_by_novel(self, novel_id: int) -> List[EpisodeResponse]:
        """Эпизоды новеллы по возрастанию даты выхода"""
        result = await self.session.execute(
            select(EpisodeModel)
            .where(EpisodeModel.novel_id == novel_id)
            .order_by(EpisodeModel.release_date.asc(), EpisodeModel.episode_id.asc())
        )
        return [self._to_domain(episode) for episode in result.scalars().all()]
    
    async def get_in_novel(self, novel_id: int, episode_id: int) -> Optional[EpisodeResponse]:
        """Эпизод, только если он принадлежит указанной новелле"""
        result = await self.session.execute(
            select(EpisodeModel).where(
                EpisodeModel.episode_id == episode_id,
                EpisodeModel.novel_id == novel_id
            )
        )
        db_episode = result.scalar_one_or_none()
        return self._to_domain(db_episode) if db_episode else None
    
    async def exists(self, episode_id: int) -> bool:
        result = await self.session.execute(
            select(EpisodeModel.episode_id).where(EpisodeModel.episode_id == episode_id)
        )
        return result.scalar_one_or_none() is not None
    
    def _to_domain(self, db_episode: EpisodeModel) -> EpisodeResponse:
        return EpisodeResponse.model_validate(db_episode)
