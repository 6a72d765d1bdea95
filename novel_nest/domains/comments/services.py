from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from novel_nest.core.errors import NotFoundError
from novel_nest.db.repositories.comment_repository import CommentRepository
from novel_nest.db.repositories.episode_repository import EpisodeRepository
from novel_nest.domains.comments.schemas import CommentCreate, CommentNode, CommentResponse
from novel_nest.domains.comments.threading import build_comment_tree
from novel_nest.domains.identity.entities import User


class CommentService:
    """Сервис для работы с комментариями эпизодов"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.comment_repository = CommentRepository(session)
        self.episode_repository = EpisodeRepository(session)
    
    async def get_comments(self, episode_id: int) -> List[CommentResponse]:
        return await self.comment_repository.get_by_episode(episode_id)
    
    async def get_comment_tree(self, episode_id: int) -> List[CommentNode]:
        return build_comment_tree(await self.comment_repository.get_by_episode(episode_id))
    
    async def add_comment(self, episode_id: int, comment_data: CommentCreate, user: User) -> CommentResponse:
        """Добавление комментария; ответ допустим только внутри того же эпизода"""
        if not await self.episode_repository.exists(episode_id):
            raise NotFoundError("Episode not found")
        
        if comment_data.parent_comment_id is not None:
            parent = await self.comment_repository.get_by_id(comment_data.parent_comment_id)
            if parent is None or parent.episode_id != episode_id:
                raise NotFoundError("Parent comment not found")
        
        return await self.comment_repository.create(
            episode_id=episode_id,
            user_id=user.user_id,
            content=comment_data.content,
            parent_comment_id=comment_data.parent_comment_id
        )
