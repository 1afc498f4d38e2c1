"""Builds thread listing rows for a reader."""

from typing import Iterable, Optional

from forum.core.exceptions import StoreUnavailable
from forum.core.logging import logger
from forum.models.thread.dao import ThreadDAO
from forum.models.thread.models import Thread
from forum.models.thread.schemas import SThreadListing
from forum.models.user.models import User
from forum.services.read_tracker import ThreadReadTracker


async def thread_listing(
    tracker: ThreadReadTracker, threads: Iterable[Thread], user: Optional[User]
) -> list[SThreadListing]:
    """Listing rows with read status, reply count and last post link.

    `read_status` is a ReadStatus, including NONE for threads with nothing new.
    A failing read-marker store leaves it as None for that row (status
    unknown) instead of failing the whole listing.
    """
    rows = []
    for thread in threads:
        try:
            read_status = await tracker.read_status(thread, user)
        except StoreUnavailable as e:
            logger.warning("thread_read_status_unknown", thread_id=thread.id, operation=e.operation)
            read_status = None

        row = SThreadListing.model_validate(thread).model_copy(
            update={
                "read_status": read_status,
                "reply_count": await ThreadDAO.reply_count(thread.id),
                "last_post_url": await ThreadDAO.last_post_url(thread),
            }
        )
        rows.append(row)
    return rows
