from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime

from novel_nest.domains.identity.schemas import UserSummary


class CommentCreate(BaseModel):
    """Схема для создания комментария или ответа"""
    content: str = Field(..., min_length=1, max_length=5000)
    parent_comment_id: Optional[int] = None


class CommentResponse(BaseModel):
    """Плоский комментарий эпизода"""
    comment_id: int
    episode_id: int
    user: UserSummary
    content: str
    created_at: datetime
    parent_comment_id: Optional[int] = None
    
    model_config = ConfigDict(from_attributes=True)


class CommentNode(CommentResponse):
    """Комментарий с вложенными ответами"""
    replies: List["CommentNode"] = Field(default_factory=list)


CommentNode.model_rebuild()
