from sqlalchemy import Column, Integer, String, Text, Boolean, Float, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship

from novel_nest.core.db import Base
from novel_nest.db.models.user import utcnow


novel_tags = Table(
    "novel_tags",
    Base.metadata,
    Column("novel_id", Integer, ForeignKey("novels.novel_id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.tag_id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    __tablename__ = "tags"
    
    tag_id = Column(Integer, primary_key=True)
    name = Column(String(64), unique=True, nullable=False)


class Novel(Base):
    __tablename__ = "novels"
    
    novel_id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    cover_image = Column(String(512), nullable=True)
    status = Column(String(32), nullable=False, default="Ongoing")
    last_update = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    views = Column(Integer, nullable=False, default=0)
    likes = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0.0)
    author_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    
    # Relationships
    author = relationship("User", back_populates="novels", lazy="selectin")
    tags = relationship("Tag", secondary=novel_tags, lazy="selectin", order_by=Tag.name)
    episodes = relationship("Episode", back_populates="novel", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="novel", cascade="all, delete-orphan")


class Episode(Base):
    __tablename__ = "episodes"
    
    episode_id = Column(Integer, primary_key=True)
    novel_id = Column(Integer, ForeignKey("novels.novel_id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    is_locked = Column(Boolean, nullable=False, default=False)
    price = Column(Integer, nullable=False, default=0)
    release_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    
    # Relationships
    novel = relationship("Novel", back_populates="episodes")
    comments = relationship("Comment", back_populates="episode", cascade="all, delete-orphan")


class Review(Base):
    __tablename__ = "reviews"
    
    review_id = Column(Integer, primary_key=True)
    novel_id = Column(Integer, ForeignKey("novels.novel_id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    
    # Relationships
    novel = relationship("Novel", back_populates="reviews")
    user = relationship("User", back_populates="reviews", lazy="selectin")
