from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from novel_nest.core.db import Base
from novel_nest.db.models.user import utcnow


class Comment(Base):
    __tablename__ = "comments"
    
    comment_id = Column(Integer, primary_key=True)
    episode_id = Column(Integer, ForeignKey("episodes.episode_id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    # Ответы образуют дерево; replies вычисляется, а не хранится
    parent_comment_id = Column(Integer, ForeignKey("comments.comment_id", ondelete="CASCADE"), nullable=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    
    # Relationships
    episode = relationship("Episode", back_populates="comments")
    user = relationship("User", back_populates="comments", lazy="selectin")
