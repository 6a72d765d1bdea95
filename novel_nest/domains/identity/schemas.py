from pydantic import BaseModel, EmailStr, Field, field_validator, ConfigDict
from typing import Optional, Union
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Роль пользователя; определяет стартовое представление"""
    READER = "Reader"
    WRITER = "Writer"
    ADMIN = "Admin"
    DEVELOPER = "Developer"


class UserSummary(BaseModel):
    """Краткие данные пользователя для вложения в новеллы, рецензии и комментарии"""
    user_id: int
    username: str
    profile_picture: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """Схема для ответа с данными пользователя"""
    user_id: int
    username: str
    email: str
    # Неизвестные роли сохраняются как строка, маршрутизатор обработает их сам
    role: Union[Role, str] = Role.READER
    created_at: datetime
    profile_picture: Optional[str] = None
    bio: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator('role', mode='before')
    @classmethod
    def coerce_role(cls, v):
        try:
            return Role(v)
        except ValueError:
            return v


class UserCreate(BaseModel):
    """Схема для регистрации пользователя"""
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    
    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        return v.lower()
    
    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        if not v.replace('_', '').replace('-', '').isalnum():
            raise ValueError('Username must contain only alphanumeric characters, underscores, and hyphens')
        return v
    
    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        if not any(c.isalpha() for c in v):
            raise ValueError('Password must contain at least one letter')
        if not any(c.isdigit() for c in v):
            raise ValueError('Password must contain at least one digit')
        return v


class UserLogin(BaseModel):
    """Схема для входа пользователя"""
    email: EmailStr
    password: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        # Email сравнивается без учёта регистра
        return v.lower()


class LoginResponse(BaseModel):
    """Ответ на успешный вход: пользователь и JWT токен"""
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    """Схема для данных из JWT токена"""
    user_id: Optional[int] = None
    role: Optional[str] = None
