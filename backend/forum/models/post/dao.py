from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from forum.core.logging import logger
from forum.models.base import utcnow
from forum.models.dao.base import BaseDao
from forum.models.post.models import Post
from forum.models.thread.models import Thread
from forum.services import database


class PostDAO(BaseDao):
    model = Post

    @classmethod
    async def add_reply(cls, thread_id: int, author_id: int, content: str, at=None) -> Post:
        """
        Adds a post to a thread and bumps the thread's updated_at in one transaction.

        Arguments:
            thread_id: Thread receiving the reply.
            author_id: Author of the post.
            content: Post body.
            at: Post time, defaults to now (UTC).

        Returns:
            Created post.
        """
        at = at or utcnow()
        async with database.async_session_maker() as session:
            post = Post(thread_id=thread_id, author_id=author_id, content=content, created_at=at, updated_at=at)
            session.add(post)
            try:
                await session.execute(
                    update(Thread)
                    .where(Thread.id == thread_id)
                    .values(updated_at=at)
                    .execution_options(synchronize_session=False)
                )
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("post_reply_failed", thread_id=thread_id, author_id=author_id, error=str(e))
                raise
            await session.refresh(post)
        logger.info("post_reply_added", thread_id=thread_id, post_id=post.id, author_id=author_id)
        return post
