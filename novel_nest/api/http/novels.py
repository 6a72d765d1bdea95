from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List, Literal

from novel_nest.api.http.params import EntityId
from novel_nest.core.auth import get_current_user, require_role
from novel_nest.core.config import settings
from novel_nest.core.db import get_db
from novel_nest.core.errors import AuthorizationError, NotFoundError
from novel_nest.domains.identity.entities import User
from novel_nest.domains.identity.schemas import Role
from novel_nest.domains.novels.schemas import (
    NovelCreate, NovelResponse, EpisodeCreate, EpisodeResponse,
    ReviewCreate, ReviewResponse
)
from novel_nest.domains.novels.services import NovelService

router = APIRouter(prefix="/novels", tags=["novels"])


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


@router.get("", response_model=List[NovelResponse])
async def list_novels(
    tag: Optional[str] = Query(None, max_length=64),
    sort: Literal["views", "likes", "last_update"] = "views",
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    """Подборка новелл: фильтр по тегу, сортировка по убыванию"""
    novel_service = NovelService(db)
    return await novel_service.list_novels(tag=tag, sort=sort, limit=limit or settings.page_size)


@router.post("", response_model=NovelResponse, status_code=status.HTTP_201_CREATED)
async def create_novel(
    novel_data: NovelCreate,
    current_user: User = Depends(require_role(Role.WRITER)),
    db: AsyncSession = Depends(get_db)
):
    """Публикация новеллы"""
    novel_service = NovelService(db)
    return await novel_service.create_novel(novel_data, current_user)


@router.get("/{novel_id}", response_model=NovelResponse)
async def get_novel(
    novel_id: EntityId,
    db: AsyncSession = Depends(get_db)
):
    """Получение новеллы по ID"""
    novel_service = NovelService(db)
    
    novel = await novel_service.get_novel(novel_id)
    
    if not novel:
        raise _not_found("Novel not found")
    
    return novel


@router.delete("/{novel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_novel(
    novel_id: EntityId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление новеллы со всеми эпизодами, комментариями и рецензиями"""
    novel_service = NovelService(db)
    
    try:
        await novel_service.delete_novel(novel_id, current_user)
    except NotFoundError as e:
        raise _not_found(str(e))
    except AuthorizationError as e:
        raise _forbidden(str(e))
    
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{novel_id}/like", response_model=NovelResponse)
async def like_novel(
    novel_id: EntityId,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    novel_service = NovelService(db)
    
    try:
        return await novel_service.like_novel(novel_id)
    except NotFoundError as e:
        raise _not_found(str(e))


@router.get("/{novel_id}/episodes", response_model=List[EpisodeResponse])
async def get_episodes(
    novel_id: EntityId,
    db: AsyncSession = Depends(get_db)
):
    """Эпизоды новеллы по возрастанию даты выхода"""
    novel_service = NovelService(db)
    return await novel_service.get_episodes(novel_id)


@router.post("/{novel_id}/episodes", response_model=EpisodeResponse, status_code=status.HTTP_201_CREATED)
async def publish_episode(
    novel_id: EntityId,
    episode_data: EpisodeCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Публикация эпизода автором"""
    novel_service = NovelService(db)
    
    try:
        return await novel_service.publish_episode(novel_id, episode_data, current_user)
    except NotFoundError as e:
        raise _not_found(str(e))
    except AuthorizationError as e:
        raise _forbidden(str(e))


@router.get("/{novel_id}/episodes/{episode_id}", response_model=EpisodeResponse)
async def get_episode(
    novel_id: EntityId,
    episode_id: EntityId,
    db: AsyncSession = Depends(get_db)
):
    """Эпизод, принадлежащий указанной новелле"""
    novel_service = NovelService(db)
    
    episode = await novel_service.get_episode(novel_id, episode_id)
    
    if not episode:
        raise _not_found("Episode not found")
    
    return episode


@router.get("/{novel_id}/reviews", response_model=List[ReviewResponse])
async def get_reviews(
    novel_id: EntityId,
    db: AsyncSession = Depends(get_db)
):
    novel_service = NovelService(db)
    return await novel_service.get_reviews(novel_id)


@router.post("/{novel_id}/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def add_review(
    novel_id: EntityId,
    review_data: ReviewCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Рецензия на новеллу; рейтинг новеллы пересчитывается"""
    novel_service = NovelService(db)
    
    try:
        return await novel_service.add_review(novel_id, review_data, current_user)
    except NotFoundError as e:
        raise _not_found(str(e))
