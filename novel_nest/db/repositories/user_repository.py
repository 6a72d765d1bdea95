from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, func
from sqlalchemy.exc import IntegrityError

from novel_nest.core.errors import ConflictError
from novel_nest.db.models.user import User as UserModel
from novel_nest.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def create(self, user: User) -> User:
        """Создание нового пользователя"""
        db_user = UserModel(
            user_id=user.user_id,
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            role=str(getattr(user.role, "value", user.role)),
            created_at=user.created_at,
            profile_picture=user.profile_picture,
            bio=user.bio
        )
        
        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("User with this email or username already exists")
    
    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Получение пользователя по ID"""
        db_user = await self.session.get(UserModel, user_id)
        return self._to_domain(db_user) if db_user else None
    
    async def get_by_email(self, email: str) -> Optional[User]:
        """Получение пользователя по email"""
        result = await self.session.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None
    
    async def exists(self, username: str, email: str) -> bool:
        """Проверка занятости username или email"""
        result = await self.session.execute(
            select(UserModel.user_id).where(
                or_(UserModel.username == username, func.lower(UserModel.email) == email.lower())
            ).limit(1)
        )
        return result.scalar_one_or_none() is not None
    
    async def get_all(self, limit: int = 100, offset: int = 0) -> List[User]:
        """Получение списка пользователей"""
        result = await self.session.execute(
            select(UserModel).order_by(UserModel.user_id).offset(offset).limit(limit)
        )
        db_users = result.scalars().all()
        return [self._to_domain(user) for user in db_users]
    
    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            user_id=db_user.user_id,
            username=db_user.username,
            email=db_user.email,
            password_hash=db_user.password_hash,
            role=db_user.role,
            created_at=db_user.created_at,
            profile_picture=db_user.profile_picture,
            bio=db_user.bio
        )
