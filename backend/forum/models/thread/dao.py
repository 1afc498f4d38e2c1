"""Thread queries and moderation operations."""

from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from forum.core.config import settings
from forum.core.logging import logger
from forum.models.base import utcnow
from forum.models.dao.base import BaseDao
from forum.models.pagination import Page, paginate
from forum.models.post.models import Post
from forum.models.thread.models import Thread
from forum.models.thread_read.models import ThreadRead
from forum.models.user.models import User
from forum.services import database


def _live_posts(thread_id: int):
    return select(Post).where(Post.thread_id == thread_id, Post.deleted_at.is_(None))


class ThreadDAO(BaseDao):
    model = Thread

    @classmethod
    async def find_all(cls, with_trashed: bool = False, **filter_by):
        """Threads matching `filter_by`; soft-deleted threads are skipped unless `with_trashed`."""
        async with database.async_session_maker() as session:
            query = select(Thread).filter_by(**filter_by).order_by(Thread.id)
            if not with_trashed:
                query = query.where(Thread.deleted_at.is_(None))
            result = await session.execute(query)
            return result.unique().scalars().all()

    @classmethod
    async def find_recent(cls, since: datetime | None) -> list[Thread]:
        """
        Threads updated after `since`, newest first.

        Arguments:
            since: Lower bound (exclusive) on updated_at; None returns every live thread.

        Returns:
            List of threads with category and author loaded.
        """
        async with database.async_session_maker() as session:
            query = select(Thread).where(Thread.deleted_at.is_(None))
            if since is not None:
                query = query.where(Thread.updated_at > since)
            result = await session.execute(query.order_by(Thread.updated_at.desc(), Thread.id.desc()))
            return result.unique().scalars().all()

    @classmethod
    async def paginate_in_category(cls, category_id: int, page: int = 1) -> Page[Thread]:
        """Live threads of a category, pinned first then most recently updated."""
        async with database.async_session_maker() as session:
            query = (
                select(Thread)
                .where(Thread.category_id == category_id, Thread.deleted_at.is_(None))
                .order_by(Thread.pinned.desc(), Thread.updated_at.desc(), Thread.id.desc())
            )
            return await paginate(session, query, page, settings.THREADS_PER_PAGE)

    # Posts

    @classmethod
    async def paginate_posts(cls, thread_id: int, page: int = 1) -> Page[Post]:
        async with database.async_session_maker() as session:
            query = _live_posts(thread_id).order_by(Post.created_at, Post.id)
            return await paginate(session, query, page, settings.POSTS_PER_PAGE)

    @classmethod
    async def post_count(cls, thread_id: int) -> int:
        async with database.async_session_maker() as session:
            count = await session.scalar(
                select(func.count(Post.id)).where(Post.thread_id == thread_id, Post.deleted_at.is_(None))
            )
            return count or 0

    @classmethod
    async def reply_count(cls, thread_id: int) -> int:
        """Live posts minus the opening post, never negative."""
        return max(await cls.post_count(thread_id) - 1, 0)

    @classmethod
    async def last_page(cls, thread_id: int) -> int:
        count = await cls.post_count(thread_id)
        return Page(total=count, per_page=settings.POSTS_PER_PAGE).last_page

    @classmethod
    async def last_post(cls, thread_id: int) -> Post | None:
        async with database.async_session_maker() as session:
            query = _live_posts(thread_id).order_by(Post.created_at.desc(), Post.id.desc()).limit(1)
            result = await session.execute(query)
            return result.unique().scalar_one_or_none()

    @classmethod
    async def last_post_time(cls, thread_id: int) -> datetime | None:
        post = await cls.last_post(thread_id)
        return post.created_at if post else None

    @classmethod
    async def last_post_url(cls, thread: Thread) -> str | None:
        """URL of the newest post: thread route, its last page and the post anchor."""
        post = await cls.last_post(thread.id)
        if post is None:
            return None
        return thread.last_post_url_for(await cls.last_page(thread.id), post.id)

    @classmethod
    async def readers(cls, thread_id: int) -> list[User]:
        """Users holding a read marker on the thread."""
        async with database.async_session_maker() as session:
            query = select(Thread).options(selectinload(Thread.readers)).where(Thread.id == thread_id)
            thread = (await session.execute(query)).unique().scalar_one_or_none()
            return sorted(thread.readers, key=lambda user: user.id) if thread else []

    # Editing and moderation

    @classmethod
    async def rename(cls, thread_id: int, title: str) -> int:
        """Change the title; counts as thread activity and bumps updated_at."""
        logger.info("thread_renamed", thread_id=thread_id)
        return await cls.update({"id": thread_id}, title=title)

    @classmethod
    async def set_locked(cls, thread_id: int, locked: bool) -> int:
        logger.info("thread_lock_changed", thread_id=thread_id, locked=locked)
        return await cls._moderate(thread_id, locked=locked)

    @classmethod
    async def set_pinned(cls, thread_id: int, pinned: bool) -> int:
        logger.info("thread_pin_changed", thread_id=thread_id, pinned=pinned)
        return await cls._moderate(thread_id, pinned=pinned)

    @classmethod
    async def soft_delete(cls, thread_id: int) -> int:
        logger.info("thread_soft_deleted", thread_id=thread_id)
        return await cls._moderate(thread_id, deleted_at=utcnow())

    @classmethod
    async def restore(cls, thread_id: int) -> int:
        logger.info("thread_restored", thread_id=thread_id)
        return await cls._moderate(thread_id, deleted_at=None)

    @classmethod
    async def _moderate(cls, thread_id: int, **values) -> int:
        # Moderation is not reader-visible activity: updated_at keeps its value.
        async with database.async_session_maker() as session:
            query = (
                update(Thread)
                .where(Thread.id == thread_id)
                .values(updated_at=Thread.updated_at, **values)
                .execution_options(synchronize_session=False)
            )
            try:
                result = await session.execute(query)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("thread_moderation_failed", thread_id=thread_id, error=str(e))
                raise
            return result.rowcount

    @classmethod
    async def force_delete(cls, thread_id: int) -> int:
        """Remove the thread with its posts and read markers."""
        async with database.async_session_maker() as session:
            try:
                await session.execute(delete(ThreadRead).where(ThreadRead.thread_id == thread_id))
                await session.execute(delete(Post).where(Post.thread_id == thread_id))
                result = await session.execute(delete(Thread).where(Thread.id == thread_id))
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("thread_force_delete_failed", thread_id=thread_id, error=str(e))
                raise
        logger.info("thread_force_deleted", thread_id=thread_id)
        return result.rowcount
