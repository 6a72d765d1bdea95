import logging
from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from novel_nest.core.errors import ConflictError, NotFoundError
from novel_nest.core.security import create_access_token, verify_token
from novel_nest.db.repositories.user_repository import UserRepository
from novel_nest.domains.identity.entities import User
from novel_nest.domains.identity.schemas import UserCreate, UserLogin

logger = logging.getLogger(__name__)

# Одинаковое сообщение для неизвестного email и неверного пароля
LOGIN_FAILED = "Invalid email or password"


class IdentityService:
    """Сервис для работы с идентификацией и аутентификацией пользователей"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)
    
    async def register_user(self, user_data: UserCreate) -> User:
        """Регистрация нового читателя"""
        if await self.user_repository.exists(user_data.username, user_data.email):
            raise ConflictError("Username or email already registered")
        
        user = User.create_user(
            username=user_data.username,
            email=user_data.email,
            password=user_data.password
        )
        
        created = await self.user_repository.create(user)
        logger.info(f"Registered user {created.user_id} ({created.username})")
        return created
    
    async def authenticate_user(self, login_data: UserLogin) -> User:
        """Аутентификация пользователя"""
        user = await self.user_repository.get_by_email(login_data.email)
        
        if not user or not user.authenticate(login_data.password):
            raise NotFoundError(LOGIN_FAILED)
        
        return user
    
    async def login_user(self, login_data: UserLogin) -> Tuple[User, str]:
        """Вход пользователя и создание JWT токена"""
        user = await self.authenticate_user(login_data)
        
        token_data = {
            "sub": str(user.user_id),
            "role": str(getattr(user.role, "value", user.role))
        }
        
        return user, create_access_token(data=token_data)
    
    async def get_user(self, user_id: int) -> Optional[User]:
        """Получение пользователя по ID"""
        return await self.user_repository.get_by_id(user_id)
    
    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Получение текущего пользователя из JWT токена"""
        payload = verify_token(token)
        if not payload:
            return None
        
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            return None
        
        return await self.user_repository.get_by_id(user_id)
