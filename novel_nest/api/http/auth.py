import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from novel_nest.core.auth import get_current_user
from novel_nest.core.db import get_db
from novel_nest.core.errors import ConflictError, NotFoundError
from novel_nest.domains.identity.entities import User
from novel_nest.domains.identity.schemas import (
    UserCreate, UserLogin, UserResponse, LoginResponse
)
from novel_nest.domains.identity.services import IdentityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Регистрация нового читателя"""
    identity_service = IdentityService(db)
    
    try:
        user = await identity_service.register_user(user_data)
    except ConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    
    return user.to_response()


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Вход пользователя"""
    identity_service = IdentityService(db)
    
    try:
        user, token = await identity_service.login_user(login_data)
    except NotFoundError as e:
        logger.info(f"Failed login attempt for {login_data.email}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    
    return LoginResponse(user=user.to_response(), access_token=token)


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Данные текущего пользователя"""
    return current_user.to_response()
