from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from novel_nest.api.http.params import EntityId
from novel_nest.core.db import get_db
from novel_nest.domains.identity.schemas import UserResponse
from novel_nest.domains.identity.services import IdentityService
from novel_nest.domains.novels.schemas import NovelResponse
from novel_nest.domains.novels.services import NovelService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: EntityId,
    db: AsyncSession = Depends(get_db)
):
    """Получение информации о пользователе"""
    identity_service = IdentityService(db)
    
    user = await identity_service.get_user(user_id)
    
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    
    return user.to_response()


@router.get("/{user_id}/novels", response_model=List[NovelResponse])
async def get_writer_novels(
    user_id: EntityId,
    db: AsyncSession = Depends(get_db)
):
    """Новеллы автора; пустой список, если их нет"""
    novel_service = NovelService(db)
    return await novel_service.get_writer_novels(user_id)
