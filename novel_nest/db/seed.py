import logging
from typing import Dict

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from novel_nest.client import fixtures
from novel_nest.core.security import get_password_hash
from novel_nest.db.models import Comment, Episode, Novel, Review, Tag, User

logger = logging.getLogger(__name__)

# Таблицы с явными ID из фикстур; последовательности PostgreSQL нужно догнать
_SERIAL_COLUMNS = (
    ("users", "user_id"),
    ("novels", "novel_id"),
    ("episodes", "episode_id"),
    ("reviews", "review_id"),
    ("comments", "comment_id"),
)


async def seed_demo_data(session: AsyncSession, password: str = fixtures.DEMO_PASSWORD) -> bool:
    """Наполнение пустой базы демо-данными; False, если данные уже есть"""
    if await session.scalar(select(func.count()).select_from(User)):
        logger.info("Database already contains users, skipping demo seed")
        return False

    password_hash = get_password_hash(password)
    for user in fixtures.fixture_users():
        session.add(User(
            user_id=user.user_id,
            username=user.username,
            email=user.email,
            password_hash=password_hash,
            role=user.role.value,
            created_at=user.created_at,
            profile_picture=user.profile_picture,
            bio=user.bio
        ))

    tags: Dict[str, Tag] = {}
    for novel in fixtures.fixture_novels():
        novel_tags = []
        for name in novel.tags:
            if name not in tags:
                tags[name] = Tag(name=name)
            novel_tags.append(tags[name])
        session.add(Novel(
            novel_id=novel.novel_id,
            title=novel.title,
            description=novel.description,
            cover_image=novel.cover_image,
            status=novel.status.value,
            last_update=novel.last_update,
            views=novel.views,
            likes=novel.likes,
            rating=novel.rating,
            author_id=novel.author.user_id,
            tags=novel_tags
        ))

    for episode in fixtures.fixture_episodes():
        session.add(Episode(**episode.model_dump()))

    for review in fixtures.fixture_reviews():
        session.add(Review(
            review_id=review.review_id,
            novel_id=review.novel_id,
            user_id=review.user.user_id,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at
        ))

    for comment in sorted(fixtures.fixture_comments(), key=lambda c: c.comment_id):
        session.add(Comment(
            comment_id=comment.comment_id,
            episode_id=comment.episode_id,
            user_id=comment.user.user_id,
            parent_comment_id=comment.parent_comment_id,
            content=comment.content,
            created_at=comment.created_at
        ))

    await session.commit()

    connection = await session.connection()
    if connection.dialect.name == "postgresql":
        for table, column in _SERIAL_COLUMNS:
            await session.execute(text(
                f"SELECT setval(pg_get_serial_sequence('{table}', '{column}'), "
                f"(SELECT MAX({column}) FROM {table}))"
            ))
        await session.commit()

    logger.info("Demo data seeded")
    return True
