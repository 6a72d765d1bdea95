from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from novel_nest.db.models.comment import Comment as CommentModel
from novel_nest.domains.comments.schemas import CommentResponse


class CommentRepository:
    """Репозиторий для работы с комментариями"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def create(
        self,
        episode_id: int,
        user_id: int,
        content: str,
        parent_comment_id: Optional[int] = None
    ) -> CommentResponse:
        """Создание комментария или ответа"""
        db_comment = CommentModel(
            episode_id=episode_id,
            user_id=user_id,
            content=content,
            parent_comment_id=parent_comment_id
        )
        self.session.add(db_comment)
        await self.session.commit()
        result = await self.session.execute(
            select(CommentModel)
            .where(CommentModel.comment_id == db_comment.comment_id)
            .execution_options(populate_existing=True)
        )
        return self._to_domain(result.scalar_one())
    
    async def get_by_episode(self, episode_id: int) -> List[CommentResponse]:
        """Плоский список комментариев эпизода по возрастанию времени"""
        result = await self.session.execute(
            select(CommentModel)
            .where(CommentModel.episode_id == episode_id)
            .order_by(CommentModel.created_at.asc(), CommentModel.comment_id.asc())
        )
        return [self._to_domain(comment) for comment in result.scalars().all()]
    
    async def get_by_id(self, comment_id: int) -> Optional[CommentResponse]:
        db_comment = await self.session.get(CommentModel, comment_id)
        return self._to_domain(db_comment) if db_comment else None
    
    def _to_domain(self, db_comment: CommentModel) -> CommentResponse:
        return CommentResponse.model_validate(db_comment)
