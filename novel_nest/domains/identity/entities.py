from datetime import datetime, timezone
from typing import Optional, Union

from novel_nest.core.security import get_password_hash, verify_password
from novel_nest.domains.identity.schemas import Role, UserResponse


class User:
    """Сущность пользователя домена Identity"""
    
    def __init__(
        self,
        user_id: Optional[int],
        username: str,
        email: str,
        password_hash: str,
        role: Union[Role, str] = Role.READER,
        created_at: Optional[datetime] = None,
        profile_picture: Optional[str] = None,
        bio: Optional[str] = None
    ):
        self.user_id = user_id
        self.username = username
        self.email = email
        self.password_hash = password_hash
        self.role = role
        self.created_at = created_at or datetime.now(timezone.utc)
        self.profile_picture = profile_picture
        self.bio = bio
    
    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)
    
    def has_role(self, *roles: Role) -> bool:
        return self.role in roles
    
    def to_response(self) -> UserResponse:
        return UserResponse(
            user_id=self.user_id,
            username=self.username,
            email=self.email,
            role=self.role,
            created_at=self.created_at,
            profile_picture=self.profile_picture,
            bio=self.bio
        )
    
    @classmethod
    def create_user(cls, username: str, email: str, password: str) -> "User":
        """Создание нового читателя с хешированием пароля"""
        return cls(
            user_id=None,
            username=username,
            email=email,
            password_hash=get_password_hash(password),
            role=Role.READER
        )
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.user_id == other.user_id
    
    def __repr__(self) -> str:
        return f"User(user_id={self.user_id}, email={self.email}, role={self.role})"
