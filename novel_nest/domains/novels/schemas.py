from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional, List
from datetime import datetime
from enum import Enum

from novel_nest.domains.identity.schemas import UserSummary


class NovelStatus(str, Enum):
    ONGOING = "Ongoing"
    COMPLETED = "Completed"


class NovelBase(BaseModel):
    """Базовая схема новеллы"""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=10000)
    cover_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    status: NovelStatus = NovelStatus.ONGOING
    
    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Title cannot be empty')
        return v.strip()
    
    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v):
        # Теги - множество: без пустых значений и повторов, порядок сохраняется
        seen = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class NovelCreate(NovelBase):
    """Схема для публикации новеллы"""
    pass


class NovelResponse(NovelBase):
    """Схема для ответа с данными новеллы"""
    novel_id: int
    last_update: datetime
    views: int = Field(0, ge=0)
    likes: int = Field(0, ge=0)
    rating: float = Field(0.0, ge=0, le=5)
    author: UserSummary
    
    model_config = ConfigDict(from_attributes=True)


class EpisodeCreate(BaseModel):
    """Схема для публикации эпизода"""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(default="")
    is_locked: bool = False
    price: int = Field(0, ge=0)
    release_date: Optional[datetime] = None


class EpisodeResponse(BaseModel):
    """Схема для ответа с данными эпизода"""
    episode_id: int
    novel_id: int
    title: str
    content: str
    is_locked: bool = False
    price: int = Field(0, ge=0)
    release_date: datetime
    
    model_config = ConfigDict(from_attributes=True)


class ReviewCreate(BaseModel):
    """Схема для создания рецензии"""
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(default="", max_length=5000)


class ReviewResponse(BaseModel):
    """Схема для ответа с данными рецензии"""
    review_id: int
    novel_id: int
    user: UserSummary
    rating: int = Field(..., ge=1, le=5)
    comment: str
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)
