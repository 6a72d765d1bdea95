from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from novel_nest.api.http.params import EntityId
from novel_nest.core.auth import get_current_user
from novel_nest.core.db import get_db
from novel_nest.core.errors import NotFoundError
from novel_nest.domains.comments.schemas import CommentCreate, CommentNode, CommentResponse
from novel_nest.domains.comments.services import CommentService
from novel_nest.domains.identity.entities import User

router = APIRouter(prefix="/episodes", tags=["comments"])


@router.get("/{episode_id}/comments", response_model=List[CommentResponse])
async def get_comments(
    episode_id: EntityId,
    db: AsyncSession = Depends(get_db)
):
    """Плоский список комментариев эпизода"""
    comment_service = CommentService(db)
    return await comment_service.get_comments(episode_id)


@router.get("/{episode_id}/comments/tree", response_model=List[CommentNode])
async def get_comment_tree(
    episode_id: EntityId,
    db: AsyncSession = Depends(get_db)
):
    """Комментарии эпизода с вложенными ответами"""
    comment_service = CommentService(db)
    return await comment_service.get_comment_tree(episode_id)


@router.post("/{episode_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    episode_id: EntityId,
    comment_data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Комментарий или ответ на комментарий"""
    comment_service = CommentService(db)
    
    try:
        return await comment_service.add_comment(episode_id, comment_data, current_user)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
