from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from novel_nest.db.models.novel import Review as ReviewModel
from novel_nest.domains.novels.schemas import ReviewResponse


class ReviewRepository:
    """Репозиторий для работы с рецензиями"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def create(self, novel_id: int, user_id: int, rating: int, comment: str) -> ReviewResponse:
        """Создание рецензии"""
        db_review = ReviewModel(
            novel_id=novel_id,
            user_id=user_id,
            rating=rating,
            comment=comment
        )
        self.session.add(db_review)
        await self.session.commit()
        return await self._reload(db_review.review_id)
    
    async def get_by_novel(self, novel_id: int) -> List[ReviewResponse]:
        """Рецензии новеллы, новые первыми"""
        result = await self.session.execute(
            select(ReviewModel)
            .where(ReviewModel.novel_id == novel_id)
            .order_by(ReviewModel.created_at.desc(), ReviewModel.review_id.desc())
        )
        return [self._to_domain(review) for review in result.scalars().all()]
    
    async def _reload(self, review_id: int) -> ReviewResponse:
        result = await self.session.execute(
            select(ReviewModel)
            .where(ReviewModel.review_id == review_id)
            .execution_options(populate_existing=True)
        )
        return self._to_domain(result.scalar_one())
    
    def _to_domain(self, db_review: ReviewModel) -> ReviewResponse:
        return ReviewResponse.model_validate(db_review)
