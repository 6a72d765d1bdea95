from typing import Optional, List, Sequence
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, func

from novel_nest.db.models.novel import Novel as NovelModel, Tag as TagModel, Review as ReviewModel
from novel_nest.domains.identity.schemas import UserSummary
from novel_nest.domains.novels.schemas import NovelResponse

SORT_COLUMNS = {
    "views": NovelModel.views,
    "likes": NovelModel.likes,
    "last_update": NovelModel.last_update,
}


class NovelRepository:
    """Репозиторий для работы с новеллами"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def create(
        self,
        author_id: int,
        title: str,
        description: str,
        cover_image: Optional[str],
        status: str,
        tags: Sequence[str],
    ) -> NovelResponse:
        """Создание новой новеллы"""
        db_novel = NovelModel(
            author_id=author_id,
            title=title,
            description=description,
            cover_image=cover_image,
            status=status,
            tags=await self._get_or_create_tags(tags),
        )
        self.session.add(db_novel)
        await self.session.commit()
        return await self.get_by_id(db_novel.novel_id)
    
    async def get_by_id(self, novel_id: int) -> Optional[NovelResponse]:
        """Получение новеллы по ID"""
        result = await self.session.execute(
            select(NovelModel)
            .where(NovelModel.novel_id == novel_id)
            .execution_options(populate_existing=True)
        )
        db_novel = result.scalar_one_or_none()
        return self._to_domain(db_novel) if db_novel else None
    
    async def list_novels(
        self,
        tag: Optional[str] = None,
        sort: str = "views",
        limit: int = 12,
        offset: int = 0
    ) -> List[NovelResponse]:
        """Упорядоченная ограниченная выборка новелл"""
        query = select(NovelModel)
        
        if tag:
            query = query.where(NovelModel.tags.any(TagModel.name == tag))
        
        order_column = SORT_COLUMNS.get(sort, NovelModel.views)
        result = await self.session.execute(
            query
            .order_by(order_column.desc(), NovelModel.novel_id)
            .offset(offset)
            .limit(limit)
        )
        return [self._to_domain(novel) for novel in result.scalars().all()]
    
    async def get_by_author(self, author_id: int) -> List[NovelResponse]:
        """Все новеллы автора"""
        result = await self.session.execute(
            select(NovelModel)
            .where(NovelModel.author_id == author_id)
            .order_by(NovelModel.last_update.desc(), NovelModel.novel_id)
        )
        return [self._to_domain(novel) for novel in result.scalars().all()]
    
    async def increment_likes(self, novel_id: int) -> bool:
        result = await self.session.execute(
            update(NovelModel)
            .where(NovelModel.novel_id == novel_id)
            .values(likes=NovelModel.likes + 1)
        )
        await self.session.commit()
        return result.rowcount > 0
    
    async def touch(self, novel_id: int, when) -> None:
        """Обновление last_update при публикации эпизода"""
        await self.session.execute(
            update(NovelModel)
            .where(NovelModel.novel_id == novel_id)
            .values(last_update=when)
        )
        await self.session.commit()
    
    async def recompute_rating(self, novel_id: int) -> float:
        """Пересчёт рейтинга как среднего по рецензиям"""
        result = await self.session.execute(
            select(func.avg(ReviewModel.rating)).where(ReviewModel.novel_id == novel_id)
        )
        average = result.scalar()
        rating = round(float(average), 2) if average is not None else 0.0
        await self.session.execute(
            update(NovelModel)
            .where(NovelModel.novel_id == novel_id)
            .values(rating=rating)
        )
        await self.session.commit()
        return rating
    
    async def delete(self, novel_id: int) -> bool:
        """Удаление новеллы вместе с эпизодами, комментариями и рецензиями"""
        db_novel = await self.session.get(NovelModel, novel_id)
        if db_novel is None:
            return False
        await self.session.delete(db_novel)
        await self.session.commit()
        return True
    
    async def _get_or_create_tags(self, names: Sequence[str]) -> List[TagModel]:
        if not names:
            return []
        result = await self.session.execute(
            select(TagModel).where(TagModel.name.in_(names))
        )
        existing = {tag.name: tag for tag in result.scalars().all()}
        tags = []
        for name in names:
            tag = existing.get(name)
            if tag is None:
                tag = TagModel(name=name)
                self.session.add(tag)
                existing[name] = tag
            tags.append(tag)
        return tags
    
    def _to_domain(self, db_novel: NovelModel) -> NovelResponse:
        """Преобразование модели БД в схему ответа"""
        return NovelResponse(
            novel_id=db_novel.novel_id,
            title=db_novel.title,
            description=db_novel.description,
            cover_image=db_novel.cover_image,
            tags=[tag.name for tag in db_novel.tags],
            status=db_novel.status,
            last_update=db_novel.last_update,
            views=db_novel.views,
            likes=db_novel.likes,
            rating=db_novel.rating,
            author=UserSummary.model_validate(db_novel.author)
        )
